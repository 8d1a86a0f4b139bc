"""Job categories and the per-category duration and workload estimates."""

from __future__ import annotations

from enum import Enum
from typing import Dict


class JobCategory(str, Enum):
    GEYSER_ASSESSMENT = "Geyser Assessment"
    GEYSER_REPLACEMENT = "Geyser Replacement"
    LEAK_DETECTION = "Leak Detection"
    DRAIN_BLOCKAGE = "Drain Blockage"
    CAMERA_INSPECTION = "Camera Inspection"
    TOILET_SHOWER = "Toilet/Shower"
    OTHER = "Other"


DEFAULT_DURATION_MINUTES = 120
DEFAULT_WORKLOAD_HOURS = 2.5

# Calendar block length when a job has no usable start/end time
DURATION_MINUTES: Dict[JobCategory, int] = {
    JobCategory.GEYSER_ASSESSMENT: 60,
    JobCategory.GEYSER_REPLACEMENT: 180,
    JobCategory.LEAK_DETECTION: 60,
    JobCategory.DRAIN_BLOCKAGE: 120,
    JobCategory.CAMERA_INSPECTION: 90,
    JobCategory.TOILET_SHOWER: 120,
    JobCategory.OTHER: DEFAULT_DURATION_MINUTES,
}

# Remaining effort used for staff workload
WORKLOAD_HOURS: Dict[JobCategory, float] = {
    JobCategory.GEYSER_ASSESSMENT: 2.0,
    JobCategory.GEYSER_REPLACEMENT: 4.0,
    JobCategory.LEAK_DETECTION: 3.0,
    JobCategory.DRAIN_BLOCKAGE: 2.0,
    JobCategory.CAMERA_INSPECTION: 1.5,
    JobCategory.TOILET_SHOWER: 2.0,
    JobCategory.OTHER: DEFAULT_WORKLOAD_HOURS,
}


def parse_category(value) -> JobCategory | None:
    """Map a stored category string to a JobCategory, None if unknown."""
    if value is None:
        return None
    if isinstance(value, JobCategory):
        return value
    try:
        return JobCategory(str(value).strip())
    except ValueError:
        return None


def category_duration_minutes(value) -> int:
    category = parse_category(value)
    if category is None:
        return DEFAULT_DURATION_MINUTES
    return DURATION_MINUTES[category]


def category_workload_hours(value) -> float:
    category = parse_category(value)
    if category is None:
        return DEFAULT_WORKLOAD_HOURS
    return WORKLOAD_HOURS[category]
