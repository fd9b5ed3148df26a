from datetime import date

from day_picker import DayPicker
from holidays import (
    COUNTRIES,
    easter_sunday,
    holiday_modifiers,
    holiday_names,
    holidays_by_country,
    holidays_for_year,
)


def test_easter_sunday():
    assert easter_sunday(2024) == date(2024, 3, 31)
    assert easter_sunday(2025) == date(2025, 4, 20)
    assert easter_sunday(2026) == date(2026, 4, 5)


def test_every_country_has_holidays():
    for code, _name in COUNTRIES:
        assert holidays_by_country(code)


def test_holidays_for_year_only_lists_enabled_keys():
    table = holidays_for_year(2024, {"ch_national_day", "de_whit_monday"})
    assert table == {
        date(2024, 8, 1): [("Bundesfeier", "CH")],
        date(2024, 5, 20): [("Pfingstmontag", "DE")],
    }


def test_shared_dates_collect_every_country():
    names = holiday_names(date(2024, 12, 25), {"ch_christmas", "de_christmas"})
    assert sorted(names) == [("1. Weihnachtstag", "DE"), ("Weihnachten", "CH")]
    assert holiday_names(date(2024, 12, 24), {"ch_christmas"}) == []


def test_holiday_names_read_the_year_table():
    keys = {"ch_christmas", "de_christmas", "de_easter_monday"}
    table = holidays_for_year(2025, keys)
    for day, entries in table.items():
        assert holiday_names(day, keys) == entries

    names = holiday_names(date(2025, 4, 21), keys)
    names.append(("edited", "XX"))
    assert holiday_names(date(2025, 4, 21), keys) == [("Ostermontag", "DE")]


def test_holiday_modifiers():
    mods = holiday_modifiers({"ch_national_day"})
    assert mods["holiday"](date(2024, 8, 1))
    assert mods["holiday-ch"](date(2024, 8, 1))
    assert not mods["holiday-de"](date(2024, 8, 1))
    assert not mods["holiday"](date(2024, 8, 2))


def test_holidays_as_picker_modifiers():
    picker = DayPicker(date(2024, 10, 1), modifiers=holiday_modifiers({"de_unity_day"}),
                       clock=lambda: date(2024, 10, 1))
    cell = picker.cell_for(date(2024, 10, 3))
    assert {"holiday", "holiday-de"} <= cell.modifiers
    assert "holiday" not in picker.cell_for(date(2024, 10, 4)).modifiers
