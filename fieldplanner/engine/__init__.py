"""Calendar layout and assignment engines."""

from .assignment import JobSuggestion, assign_best_staff, get_best_staff_suggestion, get_smart_job_suggestions
from .calendar import (
    CalendarView,
    JobPosition,
    TimelineData,
    calculate_job_positions,
    calculate_timeline,
    visible_days,
)
from .clicks import ClickDispatcher
from .controller import CalendarController, CalendarState
from .routing import calculate_optimal_route, format_travel_time, is_staff_available
from .ticker import CurrentTimeTicker

__all__ = [
    "CalendarController",
    "CalendarState",
    "CalendarView",
    "ClickDispatcher",
    "CurrentTimeTicker",
    "JobPosition",
    "JobSuggestion",
    "TimelineData",
    "assign_best_staff",
    "calculate_job_positions",
    "calculate_optimal_route",
    "calculate_timeline",
    "format_travel_time",
    "get_best_staff_suggestion",
    "get_smart_job_suggestions",
    "is_staff_available",
    "visible_days",
]
