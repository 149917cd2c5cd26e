from trainlog.models.record import ExerciseEntry, WorkoutRecord
from trainlog.models.workout import ActivityType, Exercise, Status, Workout

__all__ = [
    "ActivityType",
    "Exercise",
    "ExerciseEntry",
    "Status",
    "Workout",
    "WorkoutRecord",
]
