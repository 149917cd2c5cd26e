"""
Timeline API endpoint.
"""
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from trainlog.api.workouts import get_store
from trainlog.core.context import AppContext, get_context
from trainlog.core.logging import get_logger
from trainlog.services.timeline import (
    GroupingEngine,
    available_years,
    count_workouts,
    filter_by_period,
)
from trainlog.services.workouts import WorkoutStore

logger = get_logger(__name__)
router = APIRouter()


class TimelineResponse(BaseModel):
    """Grouped workout history."""
    years: list[int]
    totalWorkouts: int
    months: list[dict[str, Any]]


@router.get("", response_model=TimelineResponse)
async def get_timeline(
    year: Optional[int] = Query(None),
    month: Optional[int] = Query(None, ge=1, le=12),
    store: WorkoutStore = Depends(get_store),
    context: AppContext = Depends(get_context),
):
    """
    Workouts grouped by month and week, optionally narrowed to a year/month.

    ``years`` always lists every year with workouts so the client can build
    its filter options.
    """
    records = await store.list()
    selected = filter_by_period(records, year=year, month=month)

    engine = GroupingEngine(formatter=context.formatter)
    months = engine.group(selected)

    logger.info(
        "Timeline built",
        year=year,
        month=month,
        workout_count=len(selected),
        month_count=len(months),
    )

    return TimelineResponse(
        years=available_years(records),
        totalWorkouts=count_workouts(months),
        months=[m.to_dict() for m in months],
    )
