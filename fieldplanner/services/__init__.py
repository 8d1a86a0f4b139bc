"""Services shared by the calendar and assignment engines."""

from .categories import JobCategory, category_duration_minutes, category_workload_hours
from .geo import ZONES, haversine_km, travel_minutes, zone_for
from .timeplan import parse_time_string, to_date
from .workload import StaffWorkload, calculate_staff_workload

__all__ = [
    "JobCategory",
    "category_duration_minutes",
    "category_workload_hours",
    "ZONES",
    "haversine_km",
    "travel_minutes",
    "zone_for",
    "parse_time_string",
    "to_date",
    "StaffWorkload",
    "calculate_staff_workload",
]
