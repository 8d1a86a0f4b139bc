"""Tests for configuration loading."""

import calendar
import json

import pytest

from fieldplanner.config import AssignmentWeights, CalendarSettings, PlannerConfig, load_config


def test_repository_config_matches_defaults(config_path):
    """Test that the shipped config file matches the built-in defaults."""
    cfg = load_config(config_path)
    assert cfg.calendar == CalendarSettings()
    assert cfg.assignment == AssignmentWeights()
    assert cfg.database_url == "sqlite:///fieldplanner.db"


def test_no_path_gives_defaults():
    """Test that no path returns the defaults."""
    assert load_config() == PlannerConfig()
    assert load_config(None).calendar.week_starts_on == calendar.SUNDAY


def test_json_config(tmp_path):
    """Test loading a partial JSON config over the defaults."""
    path = tmp_path / "planner.json"
    path.write_text(json.dumps({
        "calendar": {"time_slot_height": 80, "week_starts_on": "Monday"},
        "assignment": {"same_zone_bonus": 25},
        "database_url": "sqlite:///:memory:",
    }))
    cfg = load_config(path)
    assert cfg.calendar.time_slot_height == 80
    assert cfg.calendar.week_starts_on == calendar.MONDAY
    assert cfg.calendar.day_column_width == 200
    assert cfg.assignment.same_zone_bonus == 25
    assert cfg.assignment.distance == 2.0
    assert cfg.database_url == "sqlite:///:memory:"


def test_empty_yaml_gives_defaults(tmp_path):
    """Test that an empty YAML file gives the defaults."""
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(path) == PlannerConfig()


def test_numeric_strings_are_coerced(tmp_path):
    """Test that quoted numbers are converted to numbers."""
    path = tmp_path / "quoted.yaml"
    path.write_text("assignment:\n  distance: '3.5'\ncalendar:\n  grid_start_hour: '6'\n")
    cfg = load_config(path)
    assert cfg.assignment.distance == 3.5
    assert cfg.calendar.grid_start_hour == 6


@pytest.mark.parametrize(
    "content",
    [
        "calendar:\n  initial_view: year\n",
        "calendar:\n  week_starts_on: someday\n",
        "calendar:\n  week_starts_on: 9\n",
        "calendar:\n  refresh_interval_seconds: 0\n",
        "calendar:\n  colour: blue\n",
        "calendar: [1, 2]\n",
        "assignment:\n  distance: -1\n",
        "assignment:\n  average_speed_kmh: 0\n",
        "assignment:\n  distance: abc\n",
        "assignment:\n  workload: [1, 2]\n",
        "calendar:\n  grid_start_hour: noon\n",
        "calendar:\n  double_click_threshold_ms: fast\n",
        "- just\n- a list\n",
    ],
)
def test_invalid_config_raises(tmp_path, content):
    """Test that bad values, types and keys raise ValueError."""
    path = tmp_path / "bad.yaml"
    path.write_text(content)
    with pytest.raises(ValueError):
        load_config(path)
