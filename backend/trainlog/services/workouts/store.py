"""
Workout Store - Database operations for workouts and their exercises.
"""
import uuid
from dataclasses import dataclass
from datetime import date
from typing import Any, List, Optional

from sqlalchemy import extract, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from trainlog.core.logging import get_logger, track_operation
from trainlog.models.record import WorkoutRecord
from trainlog.models.workout import ActivityType, Exercise, Workout
from trainlog.services.workouts.schemas import ExerciseData, WorkoutData, WorkoutFilter

logger = get_logger(__name__)


@dataclass(frozen=True)
class StoreResult:
    """Outcome of a mutating store call."""
    success: bool
    data: Optional[WorkoutRecord] = None
    error: Optional[str] = None
    not_found: bool = False

    @classmethod
    def ok(cls, data: WorkoutRecord) -> "StoreResult":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str, not_found: bool = False) -> "StoreResult":
        return cls(success=False, error=error, not_found=not_found)


NOT_FOUND_MESSAGE = "Treino não encontrado."


class WorkoutStore:
    """
    Database store for workouts.

    Mutations run in a single transaction each and report failures as
    StoreResult instead of raising.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    @staticmethod
    def _parse_id(workout_id: Any) -> Optional[uuid.UUID]:
        if isinstance(workout_id, uuid.UUID):
            return workout_id
        try:
            return uuid.UUID(str(workout_id))
        except ValueError:
            logger.warning("Invalid workout_id format", workout_id=str(workout_id))
            return None

    async def _load(self, workout_id: Any) -> Optional[Workout]:
        workout_uuid = self._parse_id(workout_id)
        if workout_uuid is None:
            return None
        result = await self.db.execute(
            select(Workout).where(Workout.id == workout_uuid)
        )
        return result.scalar_one_or_none()

    @staticmethod
    def _build_exercises(exercises: List[ExerciseData]) -> List[Exercise]:
        return [
            Exercise(position=i, name=ex.name, sets=ex.sets)
            for i, ex in enumerate(exercises)
        ]

    async def create(self, data: WorkoutData) -> StoreResult:
        """
        Create a workout.

        Run fields are kept only for RUN and exercises only for
        WEIGHT_TRAINING; exercises are inserted in the same transaction.
        """
        with track_operation(
            logger,
            "workout.create",
            activity_type=data.activityType.value,
        ) as op:
            workout = Workout(
                date=data.date,
                activity_type=data.activityType,
                status=data.status,
                description=data.description,
                exercises=[],
            )

            if data.activityType is ActivityType.RUN:
                workout.planned_distance_km = data.plannedDistanceKm
                workout.actual_distance_km = data.actualDistanceKm
                workout.planned_time_min = data.plannedTimeMin
                workout.actual_time_min = data.actualTimeMin
                workout.planned_pace = data.plannedPace
                workout.actual_pace = data.actualPace

            if data.activityType is ActivityType.WEIGHT_TRAINING and data.exercises:
                workout.exercises = self._build_exercises(data.exercises)

            try:
                self.db.add(workout)
                await self.db.commit()
            except SQLAlchemyError as e:
                await self.db.rollback()
                op.fail(type(e).__name__, str(e))
                return StoreResult.fail("Erro ao salvar o treino.")

            op.bind(workout_id=str(workout.id), exercise_count=len(workout.exercises))
            return StoreResult.ok(workout.to_record())

    async def get(self, workout_id: Any) -> Optional[WorkoutRecord]:
        """
        Get a workout by ID.

        Returns:
            WorkoutRecord or None if not found
        """
        workout = await self._load(workout_id)
        return workout.to_record() if workout else None

    async def update(self, workout_id: Any, data: WorkoutData) -> StoreResult:
        """
        Update a workout.

        The exercise list is replaced as a whole when the workout stays or
        becomes WEIGHT_TRAINING and ``data.exercises`` is given, and cleared
        when the type moves away from WEIGHT_TRAINING. Run fields are written
        as given.
        """
        with track_operation(logger, "workout.update", workout_id=str(workout_id)) as op:
            try:
                workout = await self._load(workout_id)
            except SQLAlchemyError as e:
                await self.db.rollback()
                op.fail(type(e).__name__, str(e))
                return StoreResult.fail("Erro ao atualizar o treino.")

            if workout is None:
                op.not_found()
                return StoreResult.fail(NOT_FOUND_MESSAGE, not_found=True)

            previous_type = workout.activity_type

            workout.date = data.date
            workout.activity_type = data.activityType
            workout.status = data.status
            workout.description = data.description
            workout.planned_distance_km = data.plannedDistanceKm
            workout.actual_distance_km = data.actualDistanceKm
            workout.planned_time_min = data.plannedTimeMin
            workout.actual_time_min = data.actualTimeMin
            workout.planned_pace = data.plannedPace
            workout.actual_pace = data.actualPace

            if data.activityType is ActivityType.WEIGHT_TRAINING:
                if data.exercises is not None:
                    # delete-orphan cascade removes the old rows in the same flush
                    workout.exercises = self._build_exercises(data.exercises)
            elif workout.exercises:
                workout.exercises = []

            try:
                await self.db.commit()
            except SQLAlchemyError as e:
                await self.db.rollback()
                op.fail(type(e).__name__, str(e))
                return StoreResult.fail("Erro ao atualizar o treino.")

            op.bind(
                previous_type=previous_type.value,
                activity_type=data.activityType.value,
                exercise_count=len(workout.exercises),
            )
            return StoreResult.ok(workout.to_record())

    async def delete(self, workout_id: Any) -> StoreResult:
        """
        Delete a workout and its exercises.

        Returns:
            StoreResult holding the deleted snapshot
        """
        with track_operation(logger, "workout.delete", workout_id=str(workout_id)) as op:
            try:
                workout = await self._load(workout_id)
                if workout is None:
                    op.not_found()
                    return StoreResult.fail(NOT_FOUND_MESSAGE, not_found=True)

                record = workout.to_record()
                await self.db.delete(workout)
                await self.db.commit()
            except SQLAlchemyError as e:
                await self.db.rollback()
                op.fail(type(e).__name__, str(e))
                return StoreResult.fail("Erro ao excluir o treino.")

            return StoreResult.ok(record)

    async def list(self, filter: Optional[WorkoutFilter] = None) -> List[WorkoutRecord]:
        """
        List workouts, most recent date first.

        Args:
            filter: Optional year / month / type / status / limit filter
        """
        stmt = select(Workout).order_by(Workout.date.desc(), Workout.created_at.desc())

        if filter is not None:
            if filter.year is not None:
                if filter.month is not None:
                    first = date(filter.year, filter.month, 1)
                    after = (
                        date(filter.year + 1, 1, 1)
                        if filter.month == 12
                        else date(filter.year, filter.month + 1, 1)
                    )
                else:
                    first = date(filter.year, 1, 1)
                    after = date(filter.year + 1, 1, 1)
                stmt = stmt.where(Workout.date >= first, Workout.date < after)
            elif filter.month is not None:
                stmt = stmt.where(extract("month", Workout.date) == filter.month)

            if filter.activityType is not None:
                stmt = stmt.where(Workout.activity_type == filter.activityType)
            if filter.status is not None:
                stmt = stmt.where(Workout.status == filter.status)
            if filter.limit is not None:
                stmt = stmt.limit(filter.limit)

        result = await self.db.execute(stmt)
        records = [workout.to_record() for workout in result.scalars().all()]

        logger.debug("Listed workouts", count=len(records))
        return records
