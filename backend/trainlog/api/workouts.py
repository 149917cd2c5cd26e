"""
Workouts API endpoints.
"""
from typing import Any, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from trainlog.core.context import AppContext, get_context
from trainlog.core.database import get_db
from trainlog.core.exceptions import FormValidationError, WorkoutNotFoundError
from trainlog.core.logging import get_logger
from trainlog.models.workout import ActivityType, Status
from trainlog.services.timeline.dates import normalize_date
from trainlog.services.workouts import (
    StoreResult,
    WorkoutData,
    WorkoutFilter,
    WorkoutFormData,
    WorkoutStore,
    default_form_state,
    to_form_state,
    to_persisted_shape,
    validate,
)

logger = get_logger(__name__)
router = APIRouter()


# ========================================
# Response Schemas
# ========================================

class ExerciseResponse(BaseModel):
    id: str
    name: str
    sets: str


class WorkoutResponse(BaseModel):
    """Workout record response."""
    id: str
    date: str
    activityType: ActivityType
    status: Status
    plannedDistanceKm: float | None
    actualDistanceKm: float | None
    plannedTimeMin: int | None
    actualTimeMin: int | None
    plannedPace: str | None
    actualPace: str | None
    description: str | None
    exercises: list[ExerciseResponse]


class DeleteWorkoutResponse(BaseModel):
    message: str
    workout: WorkoutResponse


def get_store(db: AsyncSession = Depends(get_db)) -> WorkoutStore:
    return WorkoutStore(db)


def _to_response(result: StoreResult, workout_id: Any = None) -> WorkoutResponse:
    """Unwrap a store result or raise the matching HTTP error."""
    if not result.success:
        if result.not_found:
            raise WorkoutNotFoundError(workout_id)
        raise HTTPException(status_code=400, detail=result.error)
    return WorkoutResponse(**result.data.to_dict())


def _form_to_data(form: WorkoutFormData) -> WorkoutData:
    error = validate(form)
    if error:
        raise FormValidationError(error)
    return to_persisted_shape(form)


# ========================================
# API Endpoints
# ========================================

@router.post("", response_model=WorkoutResponse, status_code=201)
async def create_workout(
    request: WorkoutData,
    store: WorkoutStore = Depends(get_store),
):
    """
    Create a new workout.
    """
    logger.info("Creating workout", activity_type=request.activityType.value)
    return _to_response(await store.create(request))


@router.get("", response_model=list[WorkoutResponse])
async def list_workouts(
    year: Optional[int] = Query(None),
    month: Optional[int] = Query(None, ge=1, le=12),
    activity_type: Optional[ActivityType] = Query(None, alias="type"),
    status: Optional[Status] = Query(None),
    limit: Optional[int] = Query(None, ge=1),
    store: WorkoutStore = Depends(get_store),
):
    """
    Get workouts, most recent first.
    """
    records = await store.list(WorkoutFilter(
        year=year,
        month=month,
        activityType=activity_type,
        status=status,
        limit=limit,
    ))
    return [WorkoutResponse(**record.to_dict()) for record in records]


@router.get("/form/new", response_model=WorkoutFormData)
async def new_workout_form(context: AppContext = Depends(get_context)):
    """
    Blank form state for a new workout dated today (UTC).
    """
    return default_form_state(normalize_date(context.clock()))


@router.post("/form", response_model=WorkoutResponse, status_code=201)
async def create_workout_from_form(
    form: WorkoutFormData,
    store: WorkoutStore = Depends(get_store),
):
    """
    Validate form state and create the workout it describes.
    """
    return _to_response(await store.create(_form_to_data(form)))


@router.get("/{workout_id}", response_model=WorkoutResponse)
async def get_workout(
    workout_id: UUID,
    store: WorkoutStore = Depends(get_store),
):
    """
    Get a specific workout by ID.
    """
    record = await store.get(workout_id)
    if record is None:
        raise WorkoutNotFoundError(workout_id)
    return WorkoutResponse(**record.to_dict())


@router.put("/{workout_id}", response_model=WorkoutResponse)
async def update_workout(
    workout_id: UUID,
    request: WorkoutData,
    store: WorkoutStore = Depends(get_store),
):
    """
    Update a workout.
    """
    return _to_response(await store.update(workout_id, request), workout_id)


@router.delete("/{workout_id}", response_model=DeleteWorkoutResponse)
async def delete_workout(
    workout_id: UUID,
    store: WorkoutStore = Depends(get_store),
):
    """
    Delete a workout and its exercises.
    """
    workout = _to_response(await store.delete(workout_id), workout_id)
    return DeleteWorkoutResponse(message="Treino excluído com sucesso.", workout=workout)


@router.get("/{workout_id}/form", response_model=WorkoutFormData)
async def get_workout_form(
    workout_id: UUID,
    store: WorkoutStore = Depends(get_store),
):
    """
    Form state for editing an existing workout.
    """
    record = await store.get(workout_id)
    if record is None:
        raise WorkoutNotFoundError(workout_id)
    return to_form_state(record)


@router.put("/{workout_id}/form", response_model=WorkoutResponse)
async def update_workout_from_form(
    workout_id: UUID,
    form: WorkoutFormData,
    store: WorkoutStore = Depends(get_store),
):
    """
    Validate edited form state and save it.
    """
    return _to_response(await store.update(workout_id, _form_to_data(form)), workout_id)
