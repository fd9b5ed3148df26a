"""Pure calendar calculations, no UI dependencies."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import NamedTuple

ONE_DAY = timedelta(days=1)


class GridDay(NamedTuple):
    """A single grid slot: the calendar day and whether it lies outside the month."""

    day: date
    outside: bool


class DayRange(NamedTuple):
    start: date | None = None
    end: date | None = None


def as_date(d: date) -> date:
    if isinstance(d, datetime):
        return d.date()
    return d


def start_of_month(d: date) -> date:
    """Normalize any day (or datetime) to the first day of its month."""
    return date(d.year, d.month, 1)


def add_months(month: date, n: int) -> date:
    """Return the month *n* calendar months away from *month* (day set to 1)."""
    year, index = divmod(month.year * 12 + month.month - 1 + n, 12)
    return date(year, index + 1, 1)


def months_diff(a: date, b: date) -> int:
    """Whole months from *a* to *b*; negative when *b* is earlier."""
    return (b.year - a.year) * 12 + b.month - a.month


def is_same_day(a: date | None, b: date | None) -> bool:
    if a is None or b is None:
        return False
    return (a.year, a.month, a.day) == (b.year, b.month, b.day)


def day_of_week(d: date) -> int:
    """Return 0 for Sunday through 6 for Saturday."""
    return (d.weekday() + 1) % 7


def last_day_of_month(month: date) -> date:
    return add_months(month, 1) - ONE_DAY


def month_grid(month: date, first_day_of_week: int = 0) -> list[list[GridDay]]:
    """Return the weeks covering *month*, each exactly 7 contiguous days.

    The first week starts on *first_day_of_week* (0 = Sunday) on or before
    the 1st; the last week ends on or after the last day of the month.
    Lead and trail days from the adjacent months are tagged ``outside``.
    Only as many weeks as needed are produced (4–6).
    """
    first = start_of_month(month)
    last = last_day_of_month(first)
    lead = (day_of_week(first) - first_day_of_week) % 7
    trail = (first_day_of_week + 6 - day_of_week(last)) % 7

    d = first - timedelta(days=lead)
    end = last + timedelta(days=trail)

    grid: list[list[GridDay]] = []
    week: list[GridDay] = []
    while d <= end:
        week.append(GridDay(d, d.month != first.month))
        if len(week) == 7:
            grid.append(week)
            week = []
        d += ONE_DAY
    return grid


def iso_week_numbers(grid: list[list[GridDay]]) -> list[str]:
    """Return the ISO week number of each grid row, taken from its first in-month day."""
    weeks: list[str] = []
    for row in grid:
        day = next((g.day for g in row if not g.outside), row[0].day)
        weeks.append(str(day.isocalendar()[1]))
    return weeks


# ------------------------------------------------------------------
# Day and range helpers
# ------------------------------------------------------------------

def is_past_day(d: date, today: date | None = None) -> bool:
    """True if *d* is strictly before today."""
    today = today or date.today()
    return as_date(d) < as_date(today)


def is_day_between(d: date, a: date, b: date) -> bool:
    """True if *d* lies strictly between *a* and *b* (in either order)."""
    d, a, b = as_date(d), as_date(a), as_date(b)
    lo, hi = min(a, b), max(a, b)
    return lo < d < hi


def add_day_to_range(d: date, day_range: DayRange | None = None) -> DayRange:
    """Extend *day_range* with *d*, the way a click-click range selection does.

    Clicking the single selected day again clears the range; clicking
    before the start moves the start; clicking the end collapses to it.
    """
    start, end = day_range or DayRange()
    if start is None:
        return DayRange(d, None)
    if end is not None and is_same_day(start, end) and is_same_day(d, start):
        return DayRange()
    if end is not None and as_date(d) < as_date(start):
        return DayRange(d, end)
    if end is not None and is_same_day(d, end):
        return DayRange(d, d)
    if as_date(d) < as_date(start):
        return DayRange(d, start)
    return DayRange(start, d)


def is_day_in_range(d: date, day_range: DayRange) -> bool:
    start, end = day_range
    return (
        is_same_day(d, start)
        or is_same_day(d, end)
        or (start is not None and end is not None and is_day_between(d, start, end))
    )


def range_length(day_range: DayRange) -> int:
    """Number of days covered by the range, counting both ends."""
    start, end = day_range
    if start is None:
        return 0
    if end is None:
        return 1
    return abs((as_date(end) - as_date(start)).days) + 1
