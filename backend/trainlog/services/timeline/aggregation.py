"""
Aggregation Engine - Dashboard KPIs over a relative time window.

Weeks here run Sunday to Saturday, unlike the Monday-start weeks of the
timeline grouping. Both conventions are kept on purpose.
"""
import enum
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Callable, Dict, Optional, Sequence, Union

from trainlog.core.exceptions import InvalidParameterError
from trainlog.core.logging import get_logger
from trainlog.models.workout import Status
from trainlog.services.timeline.dates import (
    last_day_of_month,
    normalize_date,
    sunday_week_start,
)

logger = get_logger(__name__)

END_OF_DAY = time(23, 59, 59, 999000)


class Timeframe(str, enum.Enum):
    ALL = "ALL"
    YEAR = "YEAR"
    MONTH = "MONTH"
    WEEK = "WEEK"


class Metric(str, enum.Enum):
    COUNT_COMPLETED = "COUNT_COMPLETED"
    SUM_DISTANCE = "SUM_DISTANCE"


# Names used by the dashboard cards of the web client
_TIMEFRAME_ALIASES = {"TOTAL": Timeframe.ALL}
_METRIC_ALIASES = {
    "WORKOUTS": Metric.COUNT_COMPLETED,
    "DISTANCE": Metric.SUM_DISTANCE,
}


def parse_timeframe(value: Union[Timeframe, str]) -> Timeframe:
    """
    Raises:
        InvalidParameterError: for unknown values
    """
    if isinstance(value, Timeframe):
        return value
    if isinstance(value, str):
        key = value.strip().upper()
        if key in _TIMEFRAME_ALIASES:
            return _TIMEFRAME_ALIASES[key]
        try:
            return Timeframe(key)
        except ValueError:
            pass
    raise InvalidParameterError(f"Unknown timeframe: {value!r}")


def parse_metric(value: Union[Metric, str]) -> Metric:
    """
    Raises:
        InvalidParameterError: for unknown values
    """
    if isinstance(value, Metric):
        return value
    if isinstance(value, str):
        key = value.strip().upper()
        if key in _METRIC_ALIASES:
            return _METRIC_ALIASES[key]
        try:
            return Metric(key)
        except ValueError:
            pass
    raise InvalidParameterError(f"Unknown metric: {value!r}")


@dataclass(frozen=True)
class TimeWindow:
    """Inclusive UTC window; both bounds are None when unbounded."""
    start: Optional[datetime] = None
    end: Optional[datetime] = None

    @property
    def bounded(self) -> bool:
        return self.start is not None and self.end is not None

    def contains(self, day: date) -> bool:
        if not self.bounded:
            return True
        moment = datetime.combine(day, time.min, tzinfo=timezone.utc)
        return self.start <= moment <= self.end


def _window(first: date, last: date) -> TimeWindow:
    return TimeWindow(
        start=datetime.combine(first, time.min, tzinfo=timezone.utc),
        end=datetime.combine(last, END_OF_DAY, tzinfo=timezone.utc),
    )


def resolve_window(timeframe: Union[Timeframe, str], now: datetime) -> TimeWindow:
    """
    Resolve ``timeframe`` into a UTC window around ``now``.

    Naive ``now`` values are taken as UTC.
    """
    timeframe = parse_timeframe(timeframe)
    today = normalize_date(now)

    if timeframe is Timeframe.ALL:
        return TimeWindow()
    if timeframe is Timeframe.YEAR:
        return _window(date(today.year, 1, 1), date(today.year, 12, 31))
    if timeframe is Timeframe.MONTH:
        return _window(
            date(today.year, today.month, 1),
            last_day_of_month(today.year, today.month),
        )
    # WEEK: Sunday through Saturday
    first = sunday_week_start(today)
    return _window(first, first + timedelta(days=6))


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AggregationEngine:
    """
    Computes scalar KPIs over completed workouts.

    Usage:
        engine = AggregationEngine(clock=context.clock)
        km = engine.aggregate(records, Timeframe.MONTH, Metric.SUM_DISTANCE)
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self.clock = clock or _utc_now

    def aggregate(
        self,
        workouts: Sequence[Any],
        timeframe: Union[Timeframe, str],
        metric: Union[Metric, str],
        now: Optional[datetime] = None,
    ) -> Union[int, float]:
        """
        Aggregate ``metric`` over COMPLETED workouts inside ``timeframe``.

        Args:
            workouts: Records exposing ``date``, ``status`` and ``actual_distance_km``
            timeframe: ALL, YEAR, MONTH or WEEK
            metric: COUNT_COMPLETED or SUM_DISTANCE
            now: Reference instant; defaults to the engine clock

        Returns:
            int count or float distance in km

        Raises:
            InvalidParameterError: for unknown timeframe or metric
            InvalidRecordError: for a record with an invalid date in a bounded window
        """
        timeframe = parse_timeframe(timeframe)
        metric = parse_metric(metric)
        window = resolve_window(timeframe, now or self.clock())

        selected = [
            w for w in workouts
            if _is_completed(w) and (
                not window.bounded
                or window.contains(normalize_date(getattr(w, "date", None), getattr(w, "id", None)))
            )
        ]

        if metric is Metric.COUNT_COMPLETED:
            value: Union[int, float] = len(selected)
        else:
            # Missing distance counts as zero for summation only
            value = float(sum(
                w.actual_distance_km
                for w in selected
                if getattr(w, "actual_distance_km", None) is not None
            ))

        logger.debug(
            "Aggregated workouts",
            timeframe=timeframe.value,
            metric=metric.value,
            matched=len(selected),
            value=value,
        )
        return value

    def summary(
        self,
        workouts: Sequence[Any],
        timeframe: Union[Timeframe, str],
        metric: Union[Metric, str],
        now: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        """Aggregate plus the display strings a dashboard card needs."""
        now = now or self.clock()
        timeframe = parse_timeframe(timeframe)
        metric = parse_metric(metric)
        value = self.aggregate(workouts, timeframe, metric, now=now)
        return {
            "timeframe": timeframe.value,
            "metric": metric.value,
            "value": value,
            "displayValue": format_metric(value, metric),
            "unit": METRIC_UNITS[metric],
            "subtitle": summary_subtitle(timeframe, now),
        }


def _is_completed(workout: Any) -> bool:
    status = getattr(workout, "status", None)
    return getattr(status, "value", status) == Status.COMPLETED.value


METRIC_UNITS = {
    Metric.COUNT_COMPLETED: "treinos",
    Metric.SUM_DISTANCE: "km",
}


def format_metric(value: Union[int, float], metric: Union[Metric, str]) -> str:
    """Distances with one decimal place, counts as integers."""
    if parse_metric(metric) is Metric.SUM_DISTANCE:
        return f"{value:.1f}"
    return str(int(value))


def summary_subtitle(timeframe: Union[Timeframe, str], now: datetime) -> str:
    timeframe = parse_timeframe(timeframe)
    if timeframe is Timeframe.YEAR:
        return f"Acumulado em {normalize_date(now).year}"
    return {
        Timeframe.ALL: "Total acumulado",
        Timeframe.MONTH: "No mês atual",
        Timeframe.WEEK: "Na semana atual",
    }[timeframe]
