"""
Services module - Application business logic layer.

Modules:
- timeline: date grouping and dashboard aggregation
- workouts: workout persistence and form reconciliation
"""
from trainlog.services.timeline import AggregationEngine, GroupingEngine
from trainlog.services.workouts import WorkoutStore

__all__ = [
    "AggregationEngine",
    "GroupingEngine",
    "WorkoutStore",
]
