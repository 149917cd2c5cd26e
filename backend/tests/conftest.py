"""Shared fixtures.

Database-backed tests run against a throwaway SQLite file per test, through
the same AppContext the application builds at startup.
"""
import uuid
from datetime import datetime, timezone

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from trainlog.core.config import Settings
from trainlog.core.context import AppContext
from trainlog.main import create_app
from trainlog.models import ActivityType, ExerciseEntry, Status, WorkoutRecord

# A Wednesday; its Sunday-start week is 2025-11-30 .. 2025-12-06
FIXED_NOW = datetime(2025, 12, 3, 15, 30, tzinfo=timezone.utc)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'trainlog.db'}",
        LOG_FORMAT="console",
        LOG_LEVEL="WARNING",
        DISPLAY_LOCALE="pt-BR",
    )


@pytest_asyncio.fixture
async def context(settings):
    ctx = AppContext.create(settings, clock=lambda: FIXED_NOW)
    await ctx.start()
    yield ctx
    await ctx.close()


@pytest_asyncio.fixture
async def db(context):
    async with context.session_factory() as session:
        yield session


@pytest.fixture
def client(settings):
    app = create_app(context=AppContext.create(settings, clock=lambda: FIXED_NOW))
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_record():
    """Factory for in-memory workout snapshots."""

    def _make(
        day,
        activity_type=ActivityType.RUN,
        status=Status.COMPLETED,
        actual_distance_km=None,
        exercises=(),
        **fields,
    ) -> WorkoutRecord:
        return WorkoutRecord(
            id=fields.pop("id", uuid.uuid4()),
            date=day,
            activity_type=activity_type,
            status=status,
            actual_distance_km=actual_distance_km,
            exercises=tuple(
                ExerciseEntry(id=uuid.uuid4(), name=name, sets=sets)
                for name, sets in exercises
            ),
            **fields,
        )

    return _make


@pytest.fixture
def example_records(make_record):
    """Two completed runs in the week of 2025-12-01 and a pending lifting day on 2025-12-08."""
    return [
        make_record("2025-12-01", actual_distance_km=5.0),
        make_record("2025-12-03", actual_distance_km=7.5),
        make_record(
            "2025-12-08",
            activity_type=ActivityType.WEIGHT_TRAINING,
            status=Status.PENDING,
            exercises=[("Squat", "3x10")],
        ),
    ]


class RecordingLogger:
    """Stands in for a structlog logger and keeps (level, event, fields)."""

    def __init__(self):
        self.calls = []

    def _record(self, level, event, **fields):
        self.calls.append((level, event, fields))

    def debug(self, event, **fields):
        self._record("debug", event, **fields)

    def info(self, event, **fields):
        self._record("info", event, **fields)

    def warning(self, event, **fields):
        self._record("warning", event, **fields)

    def error(self, event, **fields):
        self._record("error", event, **fields)


@pytest.fixture
def log_recorder():
    return RecordingLogger()
