"""Locale formatting used for captions and weekday headers."""

from __future__ import annotations

import calendar as _cal
from datetime import date
from typing import Protocol

# Index 0 is Sunday, matching calendar_logic.day_of_week
WEEKDAYS_LONG = [_cal.day_name[(i - 1) % 7] for i in range(7)]
WEEKDAYS_SHORT = [name[:2] for name in WEEKDAYS_LONG]
MONTHS = [_cal.month_name[i] for i in range(1, 13)]


class LocaleProvider(Protocol):
    def format_month_title(self, month: date, locale: str = "en") -> str: ...

    def format_weekday_short(self, index: int, locale: str = "en") -> str: ...

    def format_weekday_long(self, index: int, locale: str = "en") -> str: ...

    def get_first_day_of_week(self, locale: str = "en") -> int: ...

    def get_months(self, locale: str = "en") -> list[str]: ...


class LocaleUtils:
    """English defaults; weeks start on Sunday whatever the locale."""

    def format_month_title(self, month: date, locale: str = "en") -> str:
        return f"{MONTHS[month.month - 1]} {month.year}"

    def format_weekday_short(self, index: int, locale: str = "en") -> str:
        return WEEKDAYS_SHORT[index % 7]

    def format_weekday_long(self, index: int, locale: str = "en") -> str:
        return WEEKDAYS_LONG[index % 7]

    def get_first_day_of_week(self, locale: str = "en") -> int:
        return 0

    def get_months(self, locale: str = "en") -> list[str]:
        return list(MONTHS)


def weekday_headers(provider: LocaleProvider, locale: str = "en") -> list[tuple[str, str]]:
    """Return (short, long) weekday names in grid column order."""
    first = provider.get_first_day_of_week(locale)
    return [
        (provider.format_weekday_short((first + i) % 7, locale),
         provider.format_weekday_long((first + i) % 7, locale))
        for i in range(7)
    ]
