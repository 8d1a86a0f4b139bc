"""Configuration loading for the planner (YAML or JSON)."""

from __future__ import annotations

import calendar
import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict

import yaml


VIEWS = ("month", "week", "day")

WEEKDAY_NAMES = {name.lower(): idx for idx, name in enumerate(calendar.day_name)}


@dataclass
class CalendarSettings:
    time_slot_height: float = 60.0
    day_column_width: float = 200.0
    grid_start_hour: int = 5
    min_job_height: float = 40.0
    column_padding: float = 8.0
    week_starts_on: int = calendar.SUNDAY
    initial_view: str = "week"
    refresh_interval_seconds: float = 60.0
    double_click_threshold_ms: float = 300.0


@dataclass
class AssignmentWeights:
    distance: float = 2.0
    workload: float = 5.0
    travel_time: float = 0.5
    same_zone_bonus: float = 10.0
    outside_shift_penalty: float = 20.0
    average_speed_kmh: float = 40.0


@dataclass
class PlannerConfig:
    calendar: CalendarSettings = field(default_factory=CalendarSettings)
    assignment: AssignmentWeights = field(default_factory=AssignmentWeights)
    database_url: str = "sqlite:///fieldplanner.db"


def _read_raw(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in (".yaml", ".yml"):
        data = yaml.safe_load(text)
    else:
        data = json.loads(text)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config root must be a mapping, got {type(data).__name__}")
    return data


def _build_section(cls, raw: Any, section: str):
    if raw is None:
        return cls()
    if not isinstance(raw, dict):
        raise ValueError(f"Config section '{section}' must be a mapping")
    known = {f.name for f in fields(cls)}
    unknown = set(raw) - known
    if unknown:
        raise ValueError(f"Unknown keys in '{section}': {sorted(unknown)}")
    return cls(**raw)


def _parse_week_start(value: Any) -> int:
    if isinstance(value, str):
        key = value.strip().lower()
        if key not in WEEKDAY_NAMES:
            raise ValueError(f"Unknown week_starts_on day: {value!r}")
        return WEEKDAY_NAMES[key]
    try:
        day = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Unknown week_starts_on day: {value!r}") from None
    if not 0 <= day <= 6:
        raise ValueError(f"week_starts_on must be 0-6 (Monday=0), got {day}")
    return day


def _coerce(section: str, name: str, value: Any, cast=float):
    try:
        return cast(value)
    except (TypeError, ValueError):
        raise ValueError(f"{section}.{name} must be a number, got {value!r}") from None


def validate_config(cfg: PlannerConfig) -> PlannerConfig:
    """Coerce numeric settings and check value ranges; raises ValueError on the first bad setting."""
    cal = cfg.calendar
    cal.grid_start_hour = _coerce("calendar", "grid_start_hour", cal.grid_start_hour, int)
    for name in ("refresh_interval_seconds", "double_click_threshold_ms"):
        setattr(cal, name, _coerce("calendar", name, getattr(cal, name)))

    if cal.initial_view not in VIEWS:
        raise ValueError(f"initial_view must be one of {VIEWS}, got {cal.initial_view!r}")
    if not 0 <= cal.grid_start_hour <= 23:
        raise ValueError(f"grid_start_hour out of range: {cal.grid_start_hour}")
    if cal.refresh_interval_seconds <= 0:
        raise ValueError("refresh_interval_seconds must be positive")
    if cal.double_click_threshold_ms <= 0:
        raise ValueError("double_click_threshold_ms must be positive")

    for f in fields(AssignmentWeights):
        value = _coerce("assignment", f.name, getattr(cfg.assignment, f.name))
        setattr(cfg.assignment, f.name, value)
        if value < 0:
            raise ValueError(f"assignment.{f.name} must not be negative, got {value}")
    if cfg.assignment.average_speed_kmh == 0:
        raise ValueError("assignment.average_speed_kmh must be positive")
    return cfg


def load_config(path: str | Path | None = None) -> PlannerConfig:
    """
    Load planner configuration.

    Args:
        path: YAML (.yaml/.yml) or JSON file. None returns the defaults.

    Returns:
        Validated PlannerConfig
    """
    if path is None:
        return PlannerConfig()

    raw = _read_raw(Path(path))
    calendar_raw = raw.get("calendar")
    if isinstance(calendar_raw, dict) and "week_starts_on" in calendar_raw:
        calendar_raw = dict(calendar_raw)
        calendar_raw["week_starts_on"] = _parse_week_start(calendar_raw["week_starts_on"])

    cfg = PlannerConfig(
        calendar=_build_section(CalendarSettings, calendar_raw, "calendar"),
        assignment=_build_section(AssignmentWeights, raw.get("assignment"), "assignment"),
        database_url=str(raw.get("database_url", PlannerConfig.database_url)),
    )
    return validate_config(cfg)
