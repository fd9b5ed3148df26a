"""Input events understood by the picker, decoded once from raw key names."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class ArrowLeft:
    pass


@dataclass(frozen=True)
class ArrowRight:
    pass


@dataclass(frozen=True)
class Activate:
    pass


@dataclass(frozen=True)
class FocusGained:
    day: date


@dataclass(frozen=True)
class FocusLost:
    pass


@dataclass(frozen=True)
class PreviousMonth:
    pass


@dataclass(frozen=True)
class NextMonth:
    pass


DayEvent = ArrowLeft | ArrowRight | Activate | FocusGained | FocusLost
Event = DayEvent | PreviousMonth | NextMonth

# Tk keysyms
_DAY_KEYS: dict[str, Event] = {
    "Left": ArrowLeft(),
    "Right": ArrowRight(),
    "Return": Activate(),
    "KP_Enter": Activate(),
    "space": Activate(),
}

_CONTAINER_KEYS: dict[str, Event] = {
    "Left": PreviousMonth(),
    "Right": NextMonth(),
}


def decode_key(keysym: str, on_day: bool = True) -> Event | None:
    """Map a key name to an event; None for keys the picker does not handle.

    Keys pressed on a day cell drive focus traversal and activation, keys
    pressed on the widget itself page through months.
    """
    table = _DAY_KEYS if on_day else _CONTAINER_KEYS
    return table.get(keysym)
