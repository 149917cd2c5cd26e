"""
Immutable workout snapshots.

The grouping and aggregation engines only ever see these, never live ORM rows.
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional, Tuple, Union


@dataclass(frozen=True)
class ExerciseEntry:
    """Single exercise line (weight training)."""
    id: Any
    name: str
    sets: str

    def to_dict(self) -> dict:
        return {
            "id": str(self.id) if self.id is not None else "",
            "name": self.name,
            "sets": self.sets,
        }


@dataclass(frozen=True)
class WorkoutRecord:
    """
    Read-only view of a persisted workout.

    Type-specific fields may hold stale values when a workout's type was
    changed after creation; consumers must not rely on exclusivity.
    """
    id: Any
    # date, datetime or ISO string; normalized to a UTC calendar date by consumers
    date: Union[date, datetime, str, None]
    activity_type: str
    status: str

    planned_distance_km: Optional[float] = None
    actual_distance_km: Optional[float] = None
    planned_time_min: Optional[int] = None
    actual_time_min: Optional[int] = None
    planned_pace: Optional[str] = None
    actual_pace: Optional[str] = None
    description: Optional[str] = None

    exercises: Tuple[ExerciseEntry, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        day = self.date
        if isinstance(day, (date, datetime)):
            day = day.isoformat()
        return {
            "id": str(self.id),
            "date": day,
            "activityType": _enum_value(self.activity_type),
            "status": _enum_value(self.status),
            "plannedDistanceKm": self.planned_distance_km,
            "actualDistanceKm": self.actual_distance_km,
            "plannedTimeMin": self.planned_time_min,
            "actualTimeMin": self.actual_time_min,
            "plannedPace": self.planned_pace,
            "actualPace": self.actual_pace,
            "description": self.description,
            "exercises": [ex.to_dict() for ex in self.exercises],
        }


def _enum_value(value: Any) -> Any:
    return getattr(value, "value", value)
