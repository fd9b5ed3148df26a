"""Navigation state, month bounds and the month navigator."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date

from calendar_logic import add_months, months_diff, start_of_month

logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """Raised for picker options that cannot describe a navigable window."""


@dataclass(frozen=True)
class NavigationState:
    """Immutable snapshot of the picker's visible month and focused day."""

    current_month: date
    focused_day: date | None = None


@dataclass(frozen=True)
class Bounds:
    from_month: date | None = None
    to_month: date | None = None
    number_of_months: int = 1

    def __post_init__(self) -> None:
        if not isinstance(self.number_of_months, int) or self.number_of_months < 1:
            raise ConfigurationError(
                f"number_of_months must be a positive integer, got {self.number_of_months!r}")
        if self.from_month is not None:
            object.__setattr__(self, "from_month", start_of_month(self.from_month))
        if self.to_month is not None:
            object.__setattr__(self, "to_month", start_of_month(self.to_month))
        if (self.from_month is not None and self.to_month is not None
                and months_diff(self.from_month, self.to_month) < 0):
            raise ConfigurationError(
                f"from_month {self.from_month:%Y-%m} is after to_month {self.to_month:%Y-%m}")


# ------------------------------------------------------------------
# Bounds checks
# ------------------------------------------------------------------

def allow_previous(current_month: date, from_month: date | None) -> bool:
    """True if the window can still move back without passing *from_month*."""
    if from_month is None:
        return True
    return months_diff(current_month, from_month) < 0


def allow_next(current_month: date, to_month: date | None, number_of_months: int = 1) -> bool:
    """True if enough months remain ahead to advance without passing *to_month*."""
    if to_month is None:
        return True
    return months_diff(current_month, to_month) >= number_of_months


def allow_month(candidate: date, from_month: date | None, to_month: date | None) -> bool:
    if from_month is not None and months_diff(from_month, candidate) < 0:
        return False
    if to_month is not None and months_diff(to_month, candidate) > 0:
        return False
    return True


class MonthNavigator:
    """Pure transitions of ``current_month``, always checked against the bounds."""

    def __init__(self, bounds: Bounds | None = None) -> None:
        self.bounds = bounds or Bounds()

    @property
    def number_of_months(self) -> int:
        return self.bounds.number_of_months

    def window(self, state: NavigationState) -> list[date]:
        """The consecutive months shown, starting at ``current_month``."""
        return [add_months(state.current_month, i) for i in range(self.number_of_months)]

    def allow_previous(self, state: NavigationState) -> bool:
        return allow_previous(state.current_month, self.bounds.from_month)

    def allow_next(self, state: NavigationState) -> bool:
        return allow_next(state.current_month, self.bounds.to_month, self.number_of_months)

    def allow_month(self, d: date) -> bool:
        return allow_month(d, self.bounds.from_month, self.bounds.to_month)

    def show_month(self, state: NavigationState, d: date) -> NavigationState:
        if not self.allow_month(d):
            logger.debug("show_month(%s) ignored: outside bounds", d)
            return state
        return replace(state, current_month=start_of_month(d))

    def show_next_month(self, state: NavigationState) -> NavigationState:
        if not self.allow_next(state):
            logger.debug("show_next_month ignored at %s", state.current_month)
            return state
        return replace(state, current_month=add_months(state.current_month, 1))

    def show_previous_month(self, state: NavigationState) -> NavigationState:
        if not self.allow_previous(state):
            logger.debug("show_previous_month ignored at %s", state.current_month)
            return state
        return replace(state, current_month=add_months(state.current_month, -1))

    def shift_window(self, state: NavigationState, target: date, direction: int) -> NavigationState:
        """Move the whole window one page towards *target* so that it becomes visible.

        The new anchor is ``current_month ± number_of_months``, clamped so the
        window stays inside the bounds. Nothing moves when *target* itself is
        out of bounds.
        """
        if not self.allow_month(target):
            logger.debug("shift_window towards %s ignored: outside bounds", target)
            return state
        step = self.number_of_months if direction > 0 else -self.number_of_months
        anchor = add_months(state.current_month, step)
        to_month, from_month = self.bounds.to_month, self.bounds.from_month
        if to_month is not None:
            latest = add_months(to_month, 1 - self.number_of_months)
            if months_diff(latest, anchor) > 0:
                anchor = latest
        if from_month is not None and months_diff(from_month, anchor) < 0:
            anchor = from_month
        return replace(state, current_month=anchor)

    def shift_for_outside_day(self, state: NavigationState, day: date) -> NavigationState:
        """Take one single-month step towards an activated outside *day*, if needed."""
        diff = months_diff(state.current_month, day)
        if diff > 0 and diff >= self.number_of_months:
            return self.show_next_month(state)
        if diff < 0:
            return self.show_previous_month(state)
        return state
