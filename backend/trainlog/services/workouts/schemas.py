"""
Write-side workout shapes shared by the store and the API.
"""
from datetime import date as Date
from typing import Optional

from pydantic import BaseModel, Field

from trainlog.models.workout import ActivityType, Status


class ExerciseData(BaseModel):
    """Exercise line to create or replace."""
    id: Optional[str] = Field(None, description="Ignored on write; rows are recreated")
    name: str = Field(..., min_length=1, max_length=120)
    sets: str = Field(..., min_length=1, max_length=60)


class WorkoutData(BaseModel):
    """Fields needed to create or update a workout."""
    date: Date
    activityType: ActivityType
    status: Status = Status.PENDING
    description: Optional[str] = None

    plannedDistanceKm: Optional[float] = Field(None, ge=0)
    actualDistanceKm: Optional[float] = Field(None, ge=0)
    plannedTimeMin: Optional[int] = Field(None, ge=0)
    actualTimeMin: Optional[int] = Field(None, ge=0)
    plannedPace: Optional[str] = Field(None, max_length=20)
    actualPace: Optional[str] = Field(None, max_length=20)

    # Only meaningful for WEIGHT_TRAINING; None leaves existing rows untouched on update
    exercises: Optional[list[ExerciseData]] = None


class WorkoutFilter(BaseModel):
    """Optional list filters."""
    year: Optional[int] = None
    month: Optional[int] = Field(None, ge=1, le=12)
    activityType: Optional[ActivityType] = None
    status: Optional[Status] = None
    limit: Optional[int] = Field(None, ge=1)
