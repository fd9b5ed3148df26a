from datetime import date, datetime

import pytest

from day_picker import DayPicker
from events import Activate, ArrowLeft, ArrowRight, FocusGained, FocusLost
from navigation import NavigationState


class Recorder:
    def __init__(self):
        self.calls = []

    def month(self, m):
        self.calls.append(("month", m))

    def focus(self, d):
        self.calls.append(("focus", d))

    def activate(self, d, modifiers):
        self.calls.append(("activate", d, modifiers))


@pytest.fixture
def rec():
    return Recorder()


def make_picker(rec, initial=date(2024, 3, 1), **kwargs):
    return DayPicker(
        initial,
        on_day_activate=rec.activate,
        on_month_change=rec.month,
        on_focus_change=rec.focus,
        clock=lambda: date(2024, 3, 15),
        **kwargs,
    )


def focus_on(picker, rec, day):
    picker.handle(FocusGained(day))
    rec.calls.clear()


def test_initial_state_has_no_focus(rec):
    picker = make_picker(rec)
    assert picker.state == NavigationState(date(2024, 3, 1), None)


def test_arrows_without_focus_are_ignored(rec):
    picker = make_picker(rec)
    picker.handle(ArrowRight())
    picker.handle(ArrowLeft())
    assert picker.focused_day() is None
    assert rec.calls == []


def test_arrow_within_month_moves_focus_only(rec):
    picker = make_picker(rec)
    focus_on(picker, rec, date(2024, 3, 14))
    picker.handle(ArrowRight())
    picker.handle(ArrowLeft())
    picker.handle(ArrowLeft())
    assert picker.focused_day() == date(2024, 3, 13)
    assert picker.current_month() == date(2024, 3, 1)
    assert [c[0] for c in rec.calls] == ["focus", "focus", "focus"]


def test_arrow_right_from_month_end_crosses_into_next_month(rec):
    picker = make_picker(rec)
    focus_on(picker, rec, date(2024, 3, 31))
    picker.handle(ArrowRight())
    assert picker.current_month() == date(2024, 4, 1)
    assert picker.focused_day() == date(2024, 4, 1)
    assert rec.calls == [("month", date(2024, 4, 1)), ("focus", date(2024, 4, 1))]


def test_arrow_left_from_month_start_crosses_into_previous_month(rec):
    picker = make_picker(rec)
    focus_on(picker, rec, date(2024, 3, 1))
    picker.handle(ArrowLeft())
    assert picker.state == NavigationState(date(2024, 2, 1), date(2024, 2, 29))


def test_suppressed_outside_days_are_not_traversal_targets(rec):
    picker = make_picker(rec)
    cell = picker.cell_for(date(2024, 4, 1))
    assert not cell.interactive and cell.tab_index is None
    focus_on(picker, rec, date(2024, 3, 31))
    picker.handle(ArrowRight())
    # Reached only by moving the window, never on the March placeholder
    assert picker.current_month() == date(2024, 4, 1)


def test_enabled_outside_day_is_reached_without_month_change(rec):
    picker = make_picker(rec, enable_outside_days=True)
    focus_on(picker, rec, date(2024, 3, 31))
    picker.handle(ArrowRight())
    assert picker.state == NavigationState(date(2024, 3, 1), date(2024, 4, 1))
    assert rec.calls == [("focus", date(2024, 4, 1))]


def test_multi_month_window_moves_focus_across_panels(rec):
    picker = make_picker(rec, number_of_months=2)
    focus_on(picker, rec, date(2024, 3, 31))
    picker.handle(ArrowRight())
    assert picker.state == NavigationState(date(2024, 3, 1), date(2024, 4, 1))


def test_multi_month_window_shifts_by_a_page(rec):
    picker = make_picker(rec, number_of_months=2)
    focus_on(picker, rec, date(2024, 3, 1))
    picker.handle(ArrowLeft())
    assert picker.state == NavigationState(date(2024, 1, 1), date(2024, 2, 29))
    assert rec.calls[0] == ("month", date(2024, 1, 1))


def test_traversal_past_to_month_is_dropped(rec):
    picker = make_picker(rec, to_month=date(2024, 3, 1))
    focus_on(picker, rec, date(2024, 3, 31))
    picker.handle(ArrowRight())
    assert picker.state == NavigationState(date(2024, 3, 1), date(2024, 3, 31))
    assert rec.calls == []


def test_traversal_before_from_month_is_dropped(rec):
    picker = make_picker(rec, from_month=date(2024, 3, 1))
    focus_on(picker, rec, date(2024, 3, 1))
    picker.handle(ArrowLeft())
    assert picker.focused_day() == date(2024, 3, 1)
    assert rec.calls == []


def test_observers_see_the_completed_transition(rec):
    seen = []
    picker = make_picker(rec)
    picker.on_month_change = lambda m: seen.append(picker.state)
    focus_on(picker, rec, date(2024, 3, 31))
    picker.handle(ArrowRight())
    assert seen == [NavigationState(date(2024, 4, 1), date(2024, 4, 1))]


def test_datetime_focus_is_compared_by_calendar_date(rec):
    picker = make_picker(rec)
    picker.handle(FocusGained(datetime(2024, 3, 14, 10, 30)))
    assert picker.focused_day() == date(2024, 3, 14)
    assert [c.day for week in picker.current_grid() for c in week if c.focused] == [
        date(2024, 3, 14)]

    picker.handle(ArrowRight())
    assert picker.focused_day() == date(2024, 3, 15)
    rec.calls.clear()
    picker.handle(Activate())
    assert rec.calls == [("activate", date(2024, 3, 15), frozenset({"today"}))]


def test_datetime_activation_and_lookup_use_calendar_date(rec):
    picker = make_picker(rec)
    moment = datetime(2024, 4, 2, 18, 0)
    cell = picker.cell_for(moment)
    assert cell.day == date(2024, 4, 2)
    rec.calls.clear()
    picker.handle_day_activation(moment, cell.modifiers)
    assert rec.calls == [("month", date(2024, 4, 1)), ("activate", date(2024, 4, 2), cell.modifiers)]


def test_focus_lost_clears_focus(rec):
    picker = make_picker(rec)
    focus_on(picker, rec, date(2024, 3, 10))
    picker.handle(FocusLost())
    assert picker.focused_day() is None
    assert rec.calls == [("focus", None)]


def test_nothing_is_traversable_without_activation_handler():
    picker = DayPicker(date(2024, 3, 1), clock=lambda: date(2024, 3, 15))
    picker.handle(FocusGained(date(2024, 3, 10)))
    picker.handle(ArrowRight())
    assert picker.state == NavigationState(date(2024, 3, 1), date(2024, 3, 10))
