"""
Grouping Engine - Organizes workouts into a month -> week timeline.

Months are keyed by UTC ``YYYY-MM`` and weeks start on Monday. The output is
recomputed from scratch on every call and never mutates its input.
"""
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Sequence

from trainlog.core.exceptions import InvalidParameterError
from trainlog.core.logging import get_logger
from trainlog.services.timeline.dates import (
    iso_week_number,
    month_key,
    normalize_date,
    week_start,
)
from trainlog.services.timeline.locale import (
    DateFormatter,
    format_optional,
    get_formatter,
)

logger = get_logger(__name__)


@dataclass
class WeekBucket:
    """Workouts of one Monday-to-Sunday week."""
    week_start_date: date
    week_start: str  # Display label, e.g. "seg., 1 de dezembro"
    week_number: int
    workouts: List[Any] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "weekStartDate": self.week_start_date.isoformat(),
            "weekStart": self.week_start,
            "weekNumber": self.week_number,
            "workouts": [_workout_to_dict(w) for w in self.workouts],
        }


@dataclass
class MonthBucket:
    """Weeks of one calendar month, most recent week first."""
    month_key: str
    month_name: str
    weeks: List[WeekBucket] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "monthKey": self.month_key,
            "monthName": self.month_name,
            "weeks": [week.to_dict() for week in self.weeks],
        }


class GroupingEngine:
    """
    Groups a flat list of workouts into MonthBucket -> WeekBucket.

    Usage:
        engine = GroupingEngine(locale="pt-BR")
        months = engine.group(records)
    """

    def __init__(self, locale: str = "pt-BR", formatter: Optional[DateFormatter] = None):
        self.formatter = formatter or get_formatter(locale)

    def group(self, workouts: Sequence[Any]) -> List[MonthBucket]:
        """
        Group workouts by UTC month, then by Monday-start week.

        Args:
            workouts: Records exposing at least ``id`` and ``date``

        Returns:
            Months ordered by key descending, weeks most recent first,
            workouts ascending by date inside each week

        Raises:
            InvalidRecordError: if any record has a missing or invalid date
        """
        months: Dict[str, MonthBucket] = {}
        weeks: Dict[str, Dict[date, WeekBucket]] = {}
        days: Dict[int, date] = {}

        for workout in workouts:
            day = normalize_date(getattr(workout, "date", None), getattr(workout, "id", None))
            days[id(workout)] = day

            key = month_key(day)
            start = week_start(day)

            if key not in months:
                months[key] = MonthBucket(
                    month_key=key,
                    month_name=self.formatter.month_name(day),
                )
                weeks[key] = {}

            month_weeks = weeks[key]
            if start not in month_weeks:
                month_weeks[start] = WeekBucket(
                    week_start_date=start,
                    week_start=self.formatter.week_label(start),
                    week_number=iso_week_number(day),
                )

            month_weeks[start].workouts.append(workout)

        result: List[MonthBucket] = []
        for key in sorted(months, reverse=True):
            month = months[key]
            # Weeks are disjoint, so ordering by start date orders by any member date
            month.weeks = sorted(
                weeks[key].values(),
                key=lambda week: week.week_start_date,
                reverse=True,
            )
            for week in month.weeks:
                # Stable sort keeps input order for same-day workouts
                week.workouts.sort(key=lambda w: days[id(w)])
            result.append(month)

        logger.debug(
            "Grouped workouts",
            workout_count=len(days),
            month_count=len(result),
        )
        return result


def group_workouts_by_month_and_week(
    workouts: Sequence[Any],
    locale: str = "pt-BR",
) -> List[MonthBucket]:
    """Convenience wrapper around GroupingEngine.group."""
    return GroupingEngine(locale=locale).group(workouts)


def available_years(workouts: Iterable[Any]) -> List[int]:
    """Distinct UTC years present in ``workouts``, most recent first."""
    years = {
        normalize_date(getattr(w, "date", None), getattr(w, "id", None)).year
        for w in workouts
    }
    return sorted(years, reverse=True)


def filter_by_period(
    workouts: Iterable[Any],
    year: Optional[int] = None,
    month: Optional[int] = None,
) -> List[Any]:
    """
    Keep workouts whose UTC date falls in ``year`` and/or ``month``.

    Raises:
        InvalidParameterError: if ``month`` is outside 1..12
    """
    if month is not None and not 1 <= month <= 12:
        raise InvalidParameterError(f"Invalid month: {month}")

    selected = []
    for workout in workouts:
        day = normalize_date(getattr(workout, "date", None), getattr(workout, "id", None))
        if year is not None and day.year != year:
            continue
        if month is not None and day.month != month:
            continue
        selected.append(workout)
    return selected


def count_workouts(months: Iterable[MonthBucket]) -> int:
    return sum(len(week.workouts) for m in months for week in m.weeks)


def _workout_to_dict(workout: Any) -> dict:
    if hasattr(workout, "to_dict"):
        data = workout.to_dict()
    else:
        data = {"id": str(getattr(workout, "id", "")), "date": str(getattr(workout, "date", ""))}
    data["display"] = {
        "distance": format_optional(getattr(workout, "actual_distance_km", None), "km"),
        "time": format_optional(getattr(workout, "actual_time_min", None), "min"),
        "pace": format_optional(getattr(workout, "actual_pace", None)),
    }
    return data
