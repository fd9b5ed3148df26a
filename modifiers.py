"""Per-day modifier evaluation and tab-navigability policy."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable, Mapping, Union

from calendar_logic import is_same_day

Predicate = Callable[[date], bool]
ModifierMap = Mapping[str, Union[Predicate, bool]]

TODAY = "today"
OUTSIDE = "outside"


@dataclass(frozen=True)
class DayCell:
    """A classified grid slot, ready for presentation.

    ``interactive`` is False for suppressed outside days, which render as
    inert placeholders. ``tab_index`` is 0 for the single tab stop, -1 for
    days focusable only programmatically, and None when not focusable.
    """

    day: date
    month: date
    modifiers: frozenset[str]
    outside: bool
    interactive: bool
    tab_index: int | None
    focused: bool = False

    @property
    def focusable(self) -> bool:
        return self.interactive and self.tab_index is not None


def _constant(value: bool) -> Predicate:
    return lambda _day: value


def merge_modifiers(
    month: date, today: date, user: ModifierMap | None = None,
) -> list[tuple[str, Predicate]]:
    """Return the ordered (name, predicate) list: built-ins first, user entries after.

    A user entry named like a built-in replaces it in place.
    """
    merged: list[tuple[str, Predicate]] = [
        (TODAY, lambda d: is_same_day(d, today)),
        (OUTSIDE, lambda d: d.month != month.month or d.year != month.year),
    ]
    positions = {name: i for i, (name, _fn) in enumerate(merged)}
    for name, check in (user or {}).items():
        fn = check if callable(check) else _constant(bool(check))
        if name in positions:
            merged[positions[name]] = (name, fn)
        else:
            positions[name] = len(merged)
            merged.append((name, fn))
    return merged


def active_modifiers(
    day: date, merged: list[tuple[str, Predicate]],
) -> frozenset[str]:
    """Evaluate every predicate for *day*; exceptions propagate to the caller."""
    return frozenset(name for name, fn in merged if fn(day))


def classify(
    day: date,
    month: date,
    modifiers: ModifierMap | None = None,
    is_focused: bool = False,
    *,
    enable_outside_days: bool = False,
    interactive: bool = True,
    today: date | None = None,
    merged: list[tuple[str, Predicate]] | None = None,
) -> DayCell:
    """Classify *day* as shown in the grid of *month*.

    *interactive* tells whether the host has an activation handler at all;
    without one no day is focusable. *merged* may be passed in to reuse one
    merged predicate list across a whole grid.
    """
    if merged is None:
        merged = merge_modifiers(month, today or date.today(), modifiers)
    names = active_modifiers(day, merged)
    outside = day.month != month.month or day.year != month.year

    if outside and not enable_outside_days:
        return DayCell(day, month, names, outside, False, None, is_focused)

    if not interactive:
        tab_index = None
    elif day.day == 1 and not outside:
        tab_index = 0
    else:
        tab_index = -1
    return DayCell(day, month, names, outside, True, tab_index, is_focused)
