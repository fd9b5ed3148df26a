"""Public holidays for Switzerland and Germany, exposed as day modifiers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from functools import lru_cache
from typing import Callable, Iterable

from modifiers import Predicate


def easter_sunday(year: int) -> date:
    """Gregorian Easter Sunday (Meeus/Jones/Butcher)."""
    golden = year % 19
    century, year_of_century = divmod(year, 100)
    leap_c, rem_c = divmod(century, 4)
    correction = (century + 8) // 25
    moon = (century - correction + 1) // 3
    epact = (19 * golden + century - leap_c - moon + 15) % 30
    leap_y, rem_y = divmod(year_of_century, 4)
    weekday = (32 + 2 * rem_c + 2 * leap_y - epact - rem_y) % 7
    shift = (golden + 11 * epact + 22 * weekday) // 451
    month, day = divmod(epact + weekday - 7 * shift + 114, 31)
    return date(year, month, day + 1)


DatesFn = Callable[[int], list[date]]


def _fixed(month: int, day: int) -> DatesFn:
    return lambda year: [date(year, month, day)]


def _after_easter(days: int) -> DatesFn:
    return lambda year: [easter_sunday(year) + timedelta(days=days)]


@dataclass(frozen=True)
class Holiday:
    key: str
    name: str
    country: str
    dates: DatesFn


HOLIDAYS: list[Holiday] = [
    Holiday("ch_new_year", "Neujahr", "CH", _fixed(1, 1)),
    Holiday("ch_berchtold", "Berchtoldstag", "CH", _fixed(1, 2)),
    Holiday("ch_good_friday", "Karfreitag", "CH", _after_easter(-2)),
    Holiday("ch_easter_monday", "Ostermontag", "CH", _after_easter(1)),
    Holiday("ch_ascension", "Auffahrt", "CH", _after_easter(39)),
    Holiday("ch_whit_monday", "Pfingstmontag", "CH", _after_easter(50)),
    Holiday("ch_national_day", "Bundesfeier", "CH", _fixed(8, 1)),
    Holiday("ch_christmas", "Weihnachten", "CH", _fixed(12, 25)),
    Holiday("ch_st_stephen", "Stephanstag", "CH", _fixed(12, 26)),
    Holiday("de_new_year", "Neujahr", "DE", _fixed(1, 1)),
    Holiday("de_good_friday", "Karfreitag", "DE", _after_easter(-2)),
    Holiday("de_easter_monday", "Ostermontag", "DE", _after_easter(1)),
    Holiday("de_labour_day", "Tag der Arbeit", "DE", _fixed(5, 1)),
    Holiday("de_ascension", "Christi Himmelfahrt", "DE", _after_easter(39)),
    Holiday("de_whit_monday", "Pfingstmontag", "DE", _after_easter(50)),
    Holiday("de_unity_day", "Tag der Deutschen Einheit", "DE", _fixed(10, 3)),
    Holiday("de_christmas", "1. Weihnachtstag", "DE", _fixed(12, 25)),
    Holiday("de_boxing_day", "2. Weihnachtstag", "DE", _fixed(12, 26)),
]

_BY_KEY = {h.key: h for h in HOLIDAYS}

COUNTRIES: list[tuple[str, str]] = [
    ("CH", "Switzerland"),
    ("DE", "Germany"),
]


def holidays_by_country(country: str) -> list[tuple[str, str]]:
    """Return [(key, name), ...] for the given country code."""
    return [(h.key, h.name) for h in HOLIDAYS if h.country == country]


@lru_cache(maxsize=64)
def _year_table(year: int, enabled: frozenset[str]) -> dict[date, tuple[tuple[str, str], ...]]:
    table: dict[date, list[tuple[str, str]]] = {}
    for key in sorted(enabled):
        holiday = _BY_KEY.get(key)
        if holiday is None:
            continue
        for d in holiday.dates(year):
            table.setdefault(d, []).append((holiday.name, holiday.country))
    return {d: tuple(entries) for d, entries in table.items()}


def holidays_for_year(year: int, enabled_keys: Iterable[str]) -> dict[date, list[tuple[str, str]]]:
    """Return {date: [(name, country), ...]} for all enabled holidays in a year."""
    table = _year_table(year, frozenset(enabled_keys))
    return {d: list(entries) for d, entries in table.items()}


def holiday_names(day: date, enabled_keys: Iterable[str]) -> list[tuple[str, str]]:
    """Tooltip entries for *day*, looked up in its year's holiday table."""
    return holidays_for_year(day.year, enabled_keys).get(day, [])


def holiday_modifiers(enabled_keys: Iterable[str]) -> dict[str, Predicate]:
    """Modifier predicates: ``holiday`` plus ``holiday-<country>`` per country."""
    enabled = frozenset(enabled_keys)

    def on_holiday(day: date) -> bool:
        return day in _year_table(day.year, enabled)

    def for_country(country: str) -> Predicate:
        return lambda day: any(
            c == country for _name, c in _year_table(day.year, enabled).get(day, ()))

    modifiers: dict[str, Predicate] = {"holiday": on_holiday}
    for code, _name in COUNTRIES:
        modifiers[f"holiday-{code.lower()}"] = for_country(code)
    return modifiers
