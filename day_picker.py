"""The date-picker core: owns the navigation state and dispatches input events."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, Iterable

from calendar_logic import as_date, month_grid, start_of_month
from events import (
    Activate,
    ArrowLeft,
    ArrowRight,
    Event,
    FocusGained,
    FocusLost,
    NextMonth,
    PreviousMonth,
)
from focus import FocusTraversal
from locale_utils import LocaleProvider, LocaleUtils
from modifiers import OUTSIDE, DayCell, ModifierMap, classify, merge_modifiers
from navigation import Bounds, MonthNavigator, NavigationState

logger = logging.getLogger(__name__)

DayCallback = Callable[[date, frozenset[str]], None]


@dataclass(frozen=True)
class MonthView:
    """One visible month and its classified weeks."""

    month: date
    weeks: list[list[DayCell]]

    def cells(self) -> Iterable[DayCell]:
        for week in self.weeks:
            yield from week


class DayPicker:
    """Calendar navigation engine behind a date-picker widget.

    All state changes go through ``_commit``, which replaces the
    ``NavigationState`` snapshot and only then notifies ``on_month_change``
    and ``on_focus_change`` (in that order).
    """

    def __init__(
        self,
        initial_month: date | None = None,
        *,
        number_of_months: int = 1,
        from_month: date | None = None,
        to_month: date | None = None,
        modifiers: ModifierMap | None = None,
        locale: str = "en",
        locale_utils: LocaleProvider | None = None,
        enable_outside_days: bool = False,
        can_change_month: bool = True,
        on_day_activate: DayCallback | None = None,
        on_month_change: Callable[[date], None] | None = None,
        on_focus_change: Callable[[date | None], None] | None = None,
        on_day_mouse_enter: DayCallback | None = None,
        on_day_mouse_leave: DayCallback | None = None,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self.navigator = MonthNavigator(Bounds(from_month, to_month, number_of_months))
        self.traversal = FocusTraversal(self.navigator, self._cell_index)
        self.modifiers: ModifierMap = dict(modifiers or {})
        self.locale = locale
        self.locale_utils: LocaleProvider = locale_utils or LocaleUtils()
        self.enable_outside_days = enable_outside_days
        self.can_change_month = can_change_month
        self.on_day_activate = on_day_activate
        self.on_month_change = on_month_change
        self.on_focus_change = on_focus_change
        self.on_day_mouse_enter = on_day_mouse_enter
        self.on_day_mouse_leave = on_day_mouse_leave
        self.clock = clock
        self._state = NavigationState(start_of_month(initial_month or clock()))

    # ------------------------------------------------------------------
    # Exposed surface
    # ------------------------------------------------------------------
    @property
    def state(self) -> NavigationState:
        return self._state

    @property
    def number_of_months(self) -> int:
        return self.navigator.number_of_months

    @property
    def first_day_of_week(self) -> int:
        return self.locale_utils.get_first_day_of_week(self.locale)

    def current_month(self) -> date:
        return self._state.current_month

    def focused_day(self) -> date | None:
        return self._state.focused_day

    def visible_months(self) -> list[date]:
        return self.navigator.window(self._state)

    def is_month_navigable_backward(self) -> bool:
        return self.can_change_month and self.navigator.allow_previous(self._state)

    def is_month_navigable_forward(self) -> bool:
        return self.can_change_month and self.navigator.allow_next(self._state)

    def current_grid(self) -> list[list[DayCell]]:
        """Weeks of the primary (first) visible month."""
        return self._build_view(self._state, self._state.current_month).weeks

    def visible_grids(self) -> list[MonthView]:
        return [self._build_view(self._state, m) for m in self.visible_months()]

    def cell_for(self, day: date) -> DayCell | None:
        """The cell showing *day* in the current window, preferring its in-month cell."""
        return self._cell_index(self._state).get(as_date(day))

    # ------------------------------------------------------------------
    # Month navigation
    # ------------------------------------------------------------------
    def show_month(self, d: date) -> None:
        """Jump to the month of *d* if it is within the bounds.

        A successful jump notifies ``on_month_change`` even though the host
        asked for it, like any other committed month change.
        """
        self._commit(self.navigator.show_month(self._state, d))

    def show_next_month(self) -> None:
        self._commit(self.navigator.show_next_month(self._state))

    def show_previous_month(self) -> None:
        self._commit(self.navigator.show_previous_month(self._state))

    def reset(self, initial_month: date) -> None:
        """Replace the initial month, as a host does when its input changes.

        Bounds are not checked; a month change is notified as in ``show_month``.
        """
        self._commit(NavigationState(start_of_month(initial_month)))

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def handle(self, event: Event) -> None:
        state = self._state
        if isinstance(event, ArrowLeft):
            self._commit(self.traversal.previous_day(state))
        elif isinstance(event, ArrowRight):
            self._commit(self.traversal.next_day(state))
        elif isinstance(event, Activate):
            cell = self.traversal.focused_cell(state)
            if cell is not None:
                self.handle_day_activation(cell.day, cell.modifiers)
        elif isinstance(event, FocusGained):
            self._commit(self.traversal.focus(state, event.day))
        elif isinstance(event, FocusLost):
            self._commit(self.traversal.blur(state))
        elif isinstance(event, PreviousMonth):
            if self.can_change_month:
                self.show_previous_month()
        elif isinstance(event, NextMonth):
            if self.can_change_month:
                self.show_next_month()
        else:
            raise TypeError(f"Unsupported event: {event!r}")

    def handle_day_activation(self, day: date, modifiers: Iterable[str]) -> None:
        """Bring an activated outside day into view, then forward the activation."""
        day = as_date(day)
        names = frozenset(modifiers)
        if OUTSIDE in names:
            self._commit(self.navigator.shift_for_outside_day(self._state, day))
        if self.on_day_activate is not None:
            self.on_day_activate(day, names)

    def handle_day_hover(self, day: date, modifiers: Iterable[str], entered: bool) -> None:
        callback = self.on_day_mouse_enter if entered else self.on_day_mouse_leave
        if callback is not None:
            callback(day, frozenset(modifiers))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _commit(self, new_state: NavigationState) -> None:
        old, self._state = self._state, new_state
        if new_state == old:
            return
        logger.debug("navigation %s -> %s", old, new_state)
        if new_state.current_month != old.current_month and self.on_month_change:
            self.on_month_change(new_state.current_month)
        if new_state.focused_day != old.focused_day and self.on_focus_change:
            self.on_focus_change(new_state.focused_day)

    def _build_view(self, state: NavigationState, month: date) -> MonthView:
        merged = merge_modifiers(month, self.clock(), self.modifiers)
        interactive = self.on_day_activate is not None
        weeks = [
            [
                classify(
                    g.day, month,
                    is_focused=g.day == state.focused_day,
                    enable_outside_days=self.enable_outside_days,
                    interactive=interactive,
                    merged=merged,
                )
                for g in week
            ]
            for week in month_grid(month, self.first_day_of_week)
        ]
        return MonthView(month, weeks)

    def _cell_index(self, state: NavigationState) -> dict[date, DayCell]:
        index: dict[date, DayCell] = {}
        for month in self.navigator.window(state):
            for cell in self._build_view(state, month).cells():
                known = index.get(cell.day)
                if known is None or (known.outside and not cell.outside):
                    index[cell.day] = cell
        return index
