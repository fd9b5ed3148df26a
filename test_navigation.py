from datetime import date

import pytest

from calendar_logic import add_months
from navigation import (
    Bounds,
    ConfigurationError,
    MonthNavigator,
    NavigationState,
    allow_month,
    allow_next,
    allow_previous,
)

JAN, DEC = date(2024, 1, 1), date(2024, 12, 1)


def test_allow_previous_and_next_within_a_year():
    for i in range(12):
        current = add_months(JAN, i)
        assert allow_previous(current, JAN) == (current != JAN)
        assert allow_next(current, DEC, 1) == (current != DEC)


def test_unset_bounds_always_allow():
    assert allow_previous(JAN, None)
    assert allow_next(JAN, None, 5)
    assert allow_month(date(1900, 1, 1), None, None)


def test_allow_next_accounts_for_window_size():
    assert allow_next(date(2024, 9, 1), DEC, 3)
    assert not allow_next(date(2024, 10, 1), DEC, 3)


def test_allow_month_is_inclusive_at_month_granularity():
    assert allow_month(date(2024, 1, 31), JAN, DEC)
    assert allow_month(date(2024, 12, 31), JAN, DEC)
    assert not allow_month(date(2023, 12, 31), JAN, DEC)
    assert not allow_month(date(2025, 1, 1), JAN, DEC)


def test_bounds_are_normalized():
    bounds = Bounds(date(2024, 1, 20), date(2024, 12, 31), 2)
    assert bounds.from_month == JAN
    assert bounds.to_month == DEC


@pytest.mark.parametrize("n", [0, -1])
def test_bounds_reject_empty_window(n):
    with pytest.raises(ConfigurationError):
        Bounds(number_of_months=n)


def test_bounds_reject_inverted_range():
    with pytest.raises(ConfigurationError):
        Bounds(DEC, JAN)
    assert isinstance(ConfigurationError("x"), ValueError)


def test_show_month_respects_bounds():
    nav = MonthNavigator(Bounds(JAN, DEC))
    state = NavigationState(date(2024, 5, 1))
    assert nav.show_month(state, date(2024, 8, 17)).current_month == date(2024, 8, 1)
    assert nav.show_month(state, date(2025, 1, 1)) is state


def test_single_steps_stop_at_the_bounds():
    nav = MonthNavigator(Bounds(JAN, DEC))
    first = NavigationState(JAN, date(2024, 1, 5))
    assert nav.show_previous_month(first) is first
    moved = nav.show_next_month(first)
    assert moved == NavigationState(date(2024, 2, 1), date(2024, 1, 5))
    last = NavigationState(DEC)
    assert nav.show_next_month(last) is last


def test_window_lists_consecutive_months():
    nav = MonthNavigator(Bounds(number_of_months=3))
    assert nav.window(NavigationState(date(2024, 11, 1))) == [
        date(2024, 11, 1), date(2024, 12, 1), date(2025, 1, 1)]


def test_shift_window_moves_a_full_page():
    nav = MonthNavigator(Bounds(number_of_months=2))
    state = NavigationState(date(2024, 3, 1))
    assert nav.shift_window(state, date(2024, 5, 1), 1).current_month == date(2024, 5, 1)
    assert nav.shift_window(state, date(2024, 2, 29), -1).current_month == date(2024, 1, 1)


def test_shift_window_clamps_into_bounds():
    nav = MonthNavigator(Bounds(JAN, date(2024, 3, 1), 2))
    back = NavigationState(date(2024, 2, 1))
    assert nav.shift_window(back, date(2024, 1, 31), -1).current_month == JAN
    ahead = NavigationState(JAN)
    assert nav.shift_window(ahead, date(2024, 3, 1), 1).current_month == date(2024, 2, 1)


def test_shift_window_refuses_out_of_bounds_target():
    nav = MonthNavigator(Bounds(JAN, DEC))
    state = NavigationState(DEC)
    assert nav.shift_window(state, date(2025, 1, 1), 1) is state


def test_outside_day_shift_takes_one_step():
    nav = MonthNavigator()
    march = NavigationState(date(2024, 3, 1))
    assert nav.shift_for_outside_day(march, date(2024, 4, 2)).current_month == date(2024, 4, 1)
    assert nav.shift_for_outside_day(march, date(2024, 2, 27)).current_month == date(2024, 2, 1)
    assert nav.shift_for_outside_day(march, date(2024, 3, 9)) is march


def test_outside_day_inside_multi_month_window_does_not_shift():
    nav = MonthNavigator(Bounds(number_of_months=2))
    march = NavigationState(date(2024, 3, 1))
    assert nav.shift_for_outside_day(march, date(2024, 4, 2)) is march
    assert nav.shift_for_outside_day(march, date(2024, 5, 1)).current_month == date(2024, 4, 1)
