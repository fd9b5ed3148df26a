"""JSON-based settings persistence for the date picker."""

from __future__ import annotations

import json
import logging
import os
from datetime import date
from typing import Any

from navigation import Bounds, ConfigurationError

logger = logging.getLogger(__name__)

ENV_VAR = "MINI_DAYPICKER_SETTINGS"
_DEFAULT_PATH = os.path.join(os.path.expanduser("~"), ".mini-daypicker-settings.json")

_DEFAULTS: dict[str, Any] = {
    "number_of_months": 1,
    "locale": "en",
    "enable_outside_days": False,
    "can_change_month": True,
    "disable_past_days": False,
    "from_month": None,
    "to_month": None,
    "holidays": [],
    "holiday_colors": {"CH": "#FF0000", "DE": "#FFD700"},
}

_BOOL_KEYS = ("enable_outside_days", "can_change_month", "disable_past_days")
_MONTH_KEYS = ("from_month", "to_month")


def settings_path(path: str | None = None) -> str:
    return path or os.environ.get(ENV_VAR) or _DEFAULT_PATH


def parse_month(value: str | None) -> date | None:
    """Parse ``"YYYY-MM"`` into the first day of that month."""
    if value is None:
        return None
    try:
        year, month = value.split("-")
        return date(int(year), int(month), 1)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid month {value!r}, expected YYYY-MM") from exc


def format_month(value: date | None) -> str | None:
    return None if value is None else f"{value.year:04d}-{value.month:02d}"


def load_settings(path: str | None = None) -> dict:
    """Load settings from disk, returning defaults for missing or invalid keys."""
    settings = dict(_DEFAULTS)
    settings["holidays"] = list(_DEFAULTS["holidays"])
    settings["holiday_colors"] = dict(_DEFAULTS["holiday_colors"])
    target = settings_path(path)
    try:
        with open(target, "r", encoding="utf-8") as f:
            stored = json.load(f)
    except FileNotFoundError:
        return settings
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", target, exc)
        return settings
    if not isinstance(stored, dict):
        logger.warning("Ignoring settings file %s: not a JSON object", target)
        return settings

    n = stored.get("number_of_months")
    if isinstance(n, int) and not isinstance(n, bool) and n >= 1:
        settings["number_of_months"] = n
    if isinstance(stored.get("locale"), str):
        settings["locale"] = stored["locale"]
    for key in _BOOL_KEYS:
        if isinstance(stored.get(key), bool):
            settings[key] = stored[key]
    for key in _MONTH_KEYS:
        value = stored.get(key)
        if value is None or isinstance(value, str):
            settings[key] = value
    if isinstance(stored.get("holidays"), list):
        settings["holidays"] = [k for k in stored["holidays"] if isinstance(k, str)]
    if isinstance(stored.get("holiday_colors"), dict):
        settings["holiday_colors"] = dict(stored["holiday_colors"])
    return settings


def save_settings(settings: dict, path: str | None = None) -> None:
    """Persist settings to disk."""
    with open(settings_path(path), "w", encoding="utf-8") as f:
        json.dump(settings, f, indent=2)


def picker_options(settings: dict) -> dict[str, Any]:
    """DayPicker keyword arguments for *settings*.

    Raises ConfigurationError when the stored bounds cannot be used.
    """
    bounds = Bounds(
        parse_month(settings.get("from_month")),
        parse_month(settings.get("to_month")),
        settings.get("number_of_months", 1),
    )
    return {
        "number_of_months": bounds.number_of_months,
        "from_month": bounds.from_month,
        "to_month": bounds.to_month,
        "locale": settings.get("locale", "en"),
        "enable_outside_days": settings.get("enable_outside_days", False),
        "can_change_month": settings.get("can_change_month", True),
    }
