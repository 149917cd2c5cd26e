"""
Timeline module - Date grouping and KPI aggregation over workout snapshots.

This module provides:
- UTC calendar-date helpers (month keys, week starts, ISO week numbers)
- The grouping engine building the month -> week timeline
- The aggregation engine behind the dashboard cards
- Locale-aware labels for both
"""
from trainlog.services.timeline.aggregation import (
    AggregationEngine,
    Metric,
    Timeframe,
    TimeWindow,
    format_metric,
    parse_metric,
    parse_timeframe,
    resolve_window,
    summary_subtitle,
)
from trainlog.services.timeline.dates import (
    iso_week_number,
    month_key,
    normalize_date,
    week_start,
)
from trainlog.services.timeline.grouping import (
    GroupingEngine,
    MonthBucket,
    WeekBucket,
    available_years,
    count_workouts,
    filter_by_period,
    group_workouts_by_month_and_week,
)
from trainlog.services.timeline.locale import DateFormatter, format_optional, get_formatter

__all__ = [
    # Dates
    "normalize_date",
    "month_key",
    "week_start",
    "iso_week_number",
    # Grouping
    "GroupingEngine",
    "MonthBucket",
    "WeekBucket",
    "available_years",
    "count_workouts",
    "filter_by_period",
    "group_workouts_by_month_and_week",
    # Aggregation
    "AggregationEngine",
    "Metric",
    "Timeframe",
    "TimeWindow",
    "format_metric",
    "parse_metric",
    "parse_timeframe",
    "resolve_window",
    "summary_subtitle",
    # Labels
    "DateFormatter",
    "format_optional",
    "get_formatter",
]
