"""Settings survive a save/load cycle and feed the picker's options."""

import json
import logging
from datetime import date

import pytest

from day_picker import DayPicker
from navigation import ConfigurationError
from settings import (
    ENV_VAR,
    format_month,
    load_settings,
    parse_month,
    picker_options,
    save_settings,
)


@pytest.fixture
def path(tmp_path):
    return str(tmp_path / "settings.json")


def test_missing_file_yields_defaults(path):
    settings = load_settings(path)
    assert settings["number_of_months"] == 1
    assert settings["enable_outside_days"] is False
    assert settings["from_month"] is None
    assert settings["holidays"] == []


def test_settings_survive_restart(path):
    settings = load_settings(path)
    settings["number_of_months"] = 3
    settings["from_month"] = "2024-01"
    settings["holidays"] = ["ch_national_day"]
    save_settings(settings, path)

    restored = load_settings(path)
    assert restored["number_of_months"] == 3
    assert restored["from_month"] == "2024-01"
    assert restored["holidays"] == ["ch_national_day"]


def test_invalid_values_are_ignored_per_key(path):
    with open(path, "w", encoding="utf-8") as f:
        json.dump({"number_of_months": 0, "enable_outside_days": "yes",
                   "can_change_month": False, "holidays": ["de_christmas", 7]}, f)
    settings = load_settings(path)
    assert settings["number_of_months"] == 1
    assert settings["enable_outside_days"] is False
    assert settings["can_change_month"] is False
    assert settings["holidays"] == ["de_christmas"]


def test_corrupt_file_falls_back_with_warning(path, caplog):
    with open(path, "w", encoding="utf-8") as f:
        f.write("{not json")
    with caplog.at_level(logging.WARNING, logger="settings"):
        settings = load_settings(path)
    assert settings["number_of_months"] == 1
    assert "unreadable settings" in caplog.text


def test_environment_variable_selects_file(path, monkeypatch):
    monkeypatch.setenv(ENV_VAR, path)
    save_settings({"number_of_months": 2})
    assert load_settings()["number_of_months"] == 2


def test_month_strings():
    assert parse_month("2024-03") == date(2024, 3, 1)
    assert parse_month(None) is None
    assert format_month(date(2024, 3, 9)) == "2024-03"
    with pytest.raises(ConfigurationError):
        parse_month("March")
    with pytest.raises(ConfigurationError):
        parse_month("2024-13")


def test_picker_options_build_a_picker(path):
    settings = load_settings(path)
    settings.update(number_of_months=2, from_month="2024-01", to_month="2024-06",
                    enable_outside_days=True)
    options = picker_options(settings)
    assert options["from_month"] == date(2024, 1, 1)
    picker = DayPicker(date(2024, 5, 1), clock=lambda: date(2024, 5, 1), **options)
    assert picker.visible_months() == [date(2024, 5, 1), date(2024, 6, 1)]
    assert not picker.is_month_navigable_forward()


def test_picker_options_reject_inverted_bounds(path):
    settings = load_settings(path)
    settings.update(from_month="2024-06", to_month="2024-01")
    with pytest.raises(ConfigurationError):
        picker_options(settings)
