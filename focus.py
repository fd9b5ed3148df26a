"""Keyboard focus traversal across days and month boundaries."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, timedelta
from typing import Callable, Mapping

from calendar_logic import as_date
from modifiers import DayCell
from navigation import MonthNavigator, NavigationState

logger = logging.getLogger(__name__)

CellIndex = Callable[[NavigationState], Mapping[date, DayCell]]


class FocusTraversal:
    """Moves ``focused_day`` one calendar day at a time.

    *cells* builds the date-keyed index of the grid shown for a given
    state. Targets are looked up in that index, never in rendered output,
    so a month-crossing step can shift the window first and then resolve
    the target against the grid of the shifted window.
    """

    def __init__(self, navigator: MonthNavigator, cells: CellIndex) -> None:
        self.navigator = navigator
        self.cells = cells

    def focus(self, state: NavigationState, day: date) -> NavigationState:
        return replace(state, focused_day=as_date(day))

    def blur(self, state: NavigationState) -> NavigationState:
        return replace(state, focused_day=None)

    def focused_cell(self, state: NavigationState) -> DayCell | None:
        if state.focused_day is None:
            return None
        return self.cells(state).get(state.focused_day)

    def step(self, state: NavigationState, delta: int) -> NavigationState:
        """Move focus *delta* days; returns *state* unchanged if the move is dropped."""
        if state.focused_day is None:
            return state
        target = state.focused_day + timedelta(days=delta)

        cell = self.cells(state).get(target)
        if cell is not None and cell.focusable:
            return replace(state, focused_day=target)

        shifted = self.navigator.shift_window(state, target, delta)
        if shifted.current_month == state.current_month:
            logger.debug("focus step to %s dropped: window cannot move", target)
            return state
        cell = self.cells(shifted).get(target)
        if cell is None or not cell.focusable:
            logger.debug("focus step to %s dropped: not focusable after shift", target)
            return state
        return replace(shifted, focused_day=target)

    def previous_day(self, state: NavigationState) -> NavigationState:
        return self.step(state, -1)

    def next_day(self, state: NavigationState) -> NavigationState:
        return self.step(state, 1)
