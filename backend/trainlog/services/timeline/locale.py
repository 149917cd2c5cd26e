"""
Locale-aware labels for timeline buckets.

Labels follow the browser ``toLocaleDateString`` output the web client used
to render, e.g. ``Dezembro de 2025`` and ``seg., 1 de dezembro`` for pt-BR.
"""
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Tuple

from trainlog.core.exceptions import InvalidParameterError

MISSING_PLACEHOLDER = "-"


@dataclass(frozen=True)
class DateFormatter:
    """Month and weekday names plus the patterns that combine them."""
    locale: str
    months: Tuple[str, ...]
    # Monday first, matching date.weekday()
    weekdays_short: Tuple[str, ...]
    month_year_pattern: str
    week_label_pattern: str

    def month_name(self, day: date) -> str:
        """Capitalized month and year, e.g. ``Dezembro de 2025``."""
        label = self.month_year_pattern.format(
            month=self.months[day.month - 1],
            year=day.year,
        )
        return label[:1].upper() + label[1:]

    def week_label(self, day: date) -> str:
        """Short weekday, day and long month, e.g. ``seg., 1 de dezembro``."""
        return self.week_label_pattern.format(
            weekday=self.weekdays_short[day.weekday()],
            day=day.day,
            month=self.months[day.month - 1],
        )


_FORMATTERS: Dict[str, DateFormatter] = {
    "pt-BR": DateFormatter(
        locale="pt-BR",
        months=(
            "janeiro", "fevereiro", "março", "abril", "maio", "junho",
            "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
        ),
        weekdays_short=("seg.", "ter.", "qua.", "qui.", "sex.", "sáb.", "dom."),
        month_year_pattern="{month} de {year}",
        week_label_pattern="{weekday}, {day} de {month}",
    ),
    "en-US": DateFormatter(
        locale="en-US",
        months=(
            "January", "February", "March", "April", "May", "June",
            "July", "August", "September", "October", "November", "December",
        ),
        weekdays_short=("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"),
        month_year_pattern="{month} {year}",
        week_label_pattern="{weekday}, {month} {day}",
    ),
}


def get_formatter(locale: str) -> DateFormatter:
    """
    Look up the formatter for a locale tag (``pt-BR``, ``pt_br`` and ``en-us``
    are all accepted).

    Raises:
        InvalidParameterError: for locales without month/weekday tables
    """
    normalized = locale.replace("_", "-").lower()
    for tag, formatter in _FORMATTERS.items():
        if tag.lower() == normalized:
            return formatter
    raise InvalidParameterError(
        f"Unsupported locale {locale!r}; expected one of {sorted(_FORMATTERS)}"
    )


def format_optional(value: Any, unit: str = "") -> str:
    """
    Render an optional measurement for display.

    Missing values show a placeholder instead of zero.
    """
    if value is None or value == "":
        return MISSING_PLACEHOLDER
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return f"{value} {unit}".strip()
