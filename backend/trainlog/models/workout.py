"""
Workout database models.
"""
import enum
import uuid
from datetime import date, datetime, timezone
from typing import List

from sqlalchemy import (
    Date,
    DateTime,
    Enum as SAEnum,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from trainlog.core.database import Base
from trainlog.models.record import ExerciseEntry, WorkoutRecord


class ActivityType(str, enum.Enum):
    RUN = "RUN"
    WEIGHT_TRAINING = "WEIGHT_TRAINING"
    REST = "REST"


class Status(str, enum.Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Workout(Base):
    """A single training day stored in the database."""

    __tablename__ = "workouts"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4
    )
    # Calendar date, no time-of-day
    date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    activity_type: Mapped[ActivityType] = mapped_column(
        SAEnum(ActivityType, name="activity_type"),
        nullable=False
    )
    status: Mapped[Status] = mapped_column(
        SAEnum(Status, name="workout_status"),
        nullable=False,
        default=Status.PENDING,
        index=True
    )

    # Running
    planned_distance_km: Mapped[float | None] = mapped_column(Float, nullable=True)
    actual_distance_km: Mapped[float | None] = mapped_column(Float, nullable=True)
    planned_time_min: Mapped[int | None] = mapped_column(Integer, nullable=True)
    actual_time_min: Mapped[int | None] = mapped_column(Integer, nullable=True)
    planned_pace: Mapped[str | None] = mapped_column(String(20), nullable=True)
    actual_pace: Mapped[str | None] = mapped_column(String(20), nullable=True)

    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=_utcnow,
        onupdate=_utcnow
    )

    # Weight training
    exercises: Mapped[List["Exercise"]] = relationship(
        back_populates="workout",
        cascade="all, delete-orphan",
        order_by="Exercise.position",
        lazy="selectin",
    )

    def to_record(self) -> WorkoutRecord:
        """Detach an immutable snapshot from the session."""
        return WorkoutRecord(
            id=self.id,
            date=self.date,
            activity_type=self.activity_type,
            status=self.status,
            planned_distance_km=self.planned_distance_km,
            actual_distance_km=self.actual_distance_km,
            planned_time_min=self.planned_time_min,
            actual_time_min=self.actual_time_min,
            planned_pace=self.planned_pace,
            actual_pace=self.actual_pace,
            description=self.description,
            exercises=tuple(
                ExerciseEntry(id=ex.id, name=ex.name, sets=ex.sets)
                for ex in self.exercises
            ),
        )


class Exercise(Base):
    """One exercise line of a weight-training workout."""

    __tablename__ = "workout_exercises"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4
    )
    workout_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("workouts.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    sets: Mapped[str] = mapped_column(String(60), nullable=False)

    workout: Mapped[Workout] = relationship(back_populates="exercises")
