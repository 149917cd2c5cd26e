"""
Dashboard API endpoints.
"""
from typing import Union

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from trainlog.api.workouts import get_store
from trainlog.core.context import AppContext, get_context
from trainlog.models.workout import Status
from trainlog.services.timeline import AggregationEngine, Metric, Timeframe
from trainlog.services.workouts import WorkoutFilter, WorkoutStore

router = APIRouter()


class SummaryResponse(BaseModel):
    """One KPI card."""
    timeframe: Timeframe
    metric: Metric
    value: Union[int, float]
    displayValue: str
    unit: str
    subtitle: str


class CardResponse(SummaryResponse):
    title: str


# Cards shown on the dashboard, in display order
DEFAULT_CARDS = [
    ("Treinos Concluídos", Timeframe.ALL, Metric.COUNT_COMPLETED),
    ("Distância no Ano", Timeframe.YEAR, Metric.SUM_DISTANCE),
    ("Distância no Mês", Timeframe.MONTH, Metric.SUM_DISTANCE),
    ("Distância na Semana", Timeframe.WEEK, Metric.SUM_DISTANCE),
]


@router.get("/summary", response_model=SummaryResponse)
async def get_summary(
    timeframe: str = Query("ALL", description="ALL, YEAR, MONTH or WEEK"),
    metric: str = Query("COUNT_COMPLETED", description="COUNT_COMPLETED or SUM_DISTANCE"),
    store: WorkoutStore = Depends(get_store),
    context: AppContext = Depends(get_context),
):
    """
    Aggregate completed workouts for one timeframe/metric pair.
    """
    records = await store.list(WorkoutFilter(status=Status.COMPLETED))
    engine = AggregationEngine(clock=context.clock)
    return SummaryResponse(**engine.summary(records, timeframe, metric))


@router.get("/cards", response_model=list[CardResponse])
async def get_cards(
    store: WorkoutStore = Depends(get_store),
    context: AppContext = Depends(get_context),
):
    """
    All dashboard cards computed against the same instant.
    """
    records = await store.list(WorkoutFilter(status=Status.COMPLETED))
    engine = AggregationEngine(clock=context.clock)
    now = context.clock()
    return [
        CardResponse(title=title, **engine.summary(records, timeframe, metric, now=now))
        for title, timeframe, metric in DEFAULT_CARDS
    ]
