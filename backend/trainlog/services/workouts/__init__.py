"""
Workouts module - Persistence and form handling for workout records.
"""
from trainlog.services.workouts.forms import (
    ExerciseRow,
    WorkoutFormData,
    add_exercise,
    change_type,
    default_form_state,
    remove_exercise,
    to_form_state,
    to_persisted_shape,
    update_exercise,
    validate,
)
from trainlog.services.workouts.schemas import ExerciseData, WorkoutData, WorkoutFilter
from trainlog.services.workouts.store import StoreResult, WorkoutStore

__all__ = [
    # Shapes
    "ExerciseData",
    "WorkoutData",
    "WorkoutFilter",
    # Store
    "StoreResult",
    "WorkoutStore",
    # Forms
    "ExerciseRow",
    "WorkoutFormData",
    "add_exercise",
    "change_type",
    "default_form_state",
    "remove_exercise",
    "to_form_state",
    "to_persisted_shape",
    "update_exercise",
    "validate",
]
