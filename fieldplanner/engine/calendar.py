"""Calendar layout: visible days, job rectangles and the current-time line."""

from __future__ import annotations

import calendar as _calendar
import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Iterable, List, Optional

from fieldplanner.config import CalendarSettings
from fieldplanner.domain.models import Job
from fieldplanner.services.categories import DEFAULT_DURATION_MINUTES, category_duration_minutes
from fieldplanner.services.timeplan import combine, fractional_hour, to_date

logger = logging.getLogger(__name__)

DEFAULT_TIME_SLOT_HEIGHT = 60.0
DEFAULT_DAY_COLUMN_WIDTH = 200.0
MIN_TIME_SLOT_HEIGHT = 20.0
MIN_DAY_COLUMN_WIDTH = 100.0

LAST_VISIBLE_HOUR = 23


class CalendarView(str, Enum):
    MONTH = "month"
    WEEK = "week"
    DAY = "day"


@dataclass(frozen=True)
class JobPosition:
    job: Job
    start: datetime
    end: datetime
    duration: float  # minutes
    top: float
    height: float
    left: float
    width: float
    day_index: int


@dataclass(frozen=True)
class TimelineData:
    current_time_top: float
    current_time_left: float
    is_current_time_visible: bool
    time_slot_height: float
    day_column_width: float


def _is_valid_positive(value) -> bool:
    if isinstance(value, bool):
        return False
    try:
        number = float(value)
    except (TypeError, ValueError):
        return False
    return math.isfinite(number) and number > 0


def sanitize_dimension(value, default: float, minimum: float) -> float:
    """Replace a non-finite or non-positive size with the default, then clamp."""
    number = float(value) if _is_valid_positive(value) else default
    return max(number, minimum)


def start_of_week(day: date, week_starts_on: int = _calendar.SUNDAY) -> date:
    """Week start containing day; week_starts_on uses Monday=0 numbering."""
    offset = (day.weekday() - week_starts_on) % 7
    return day - timedelta(days=offset)


def end_of_week(day: date, week_starts_on: int = _calendar.SUNDAY) -> date:
    return start_of_week(day, week_starts_on) + timedelta(days=6)


def visible_days(
    anchor: date,
    view: CalendarView | str,
    week_starts_on: int = _calendar.SUNDAY,
) -> List[date]:
    """
    Days rendered for a view.

    Month view covers whole weeks from the week holding the 1st to the
    week holding the last day of the month.
    """
    if isinstance(anchor, datetime):
        anchor = anchor.date()
    view = CalendarView(view)

    if view is CalendarView.MONTH:
        first = anchor.replace(day=1)
        last = anchor.replace(day=_calendar.monthrange(anchor.year, anchor.month)[1])
        start = start_of_week(first, week_starts_on)
        stop = end_of_week(last, week_starts_on)
        return [start + timedelta(days=i) for i in range((stop - start).days + 1)]

    if view is CalendarView.WEEK:
        start = start_of_week(anchor, week_starts_on)
        return [start + timedelta(days=i) for i in range(7)]

    return [anchor]


def job_duration_minutes(job: Job, start: Optional[datetime], day: date) -> float:
    """
    Block length for a job.

    Uses end - start when both times are present and give a positive finite
    span, then the category table, then the default.
    """
    duration: float | None = None
    if job.start_time and job.end_time and start is not None:
        end = combine(day, job.end_time)
        if end is not None:
            minutes = (end - start).total_seconds() / 60
            if math.isfinite(minutes) and minutes > 0:
                duration = minutes

    if duration is None:
        if job.category:
            duration = category_duration_minutes(job.category)
        else:
            duration = DEFAULT_DURATION_MINUTES

    if not (math.isfinite(duration) and duration > 0):
        duration = DEFAULT_DURATION_MINUTES
    return duration


def _geometry_is_finite(*values: float) -> bool:
    return all(math.isfinite(v) for v in values)


def position_job(
    job: Job,
    day: date,
    day_index: int,
    time_slot_height: float,
    day_column_width: float,
    settings: CalendarSettings,
) -> Optional[JobPosition]:
    """Place one job on its day column; None when the geometry is unusable."""
    grid_start = settings.grid_start_hour
    if job.start_time:
        start = combine(day, job.start_time)
    else:
        start = datetime.combine(day, datetime.min.time()) + timedelta(hours=grid_start)

    duration = job_duration_minutes(job, start, day)

    top = (fractional_hour(start) - grid_start) * time_slot_height if start is not None else math.nan
    height = max((duration / 60) * time_slot_height, settings.min_job_height)
    left = day_index * day_column_width
    width = day_column_width - settings.column_padding

    if start is None or not _geometry_is_finite(top, height, left, width):
        logger.warning("Skipping job %s: cannot compute calendar geometry", job.id)
        return None

    return JobPosition(
        job=job,
        start=start,
        end=start + timedelta(minutes=duration),
        duration=duration,
        top=top,
        height=height,
        left=left,
        width=width,
        day_index=day_index,
    )


def calculate_job_positions(
    jobs: Iterable[Job],
    days: List[date],
    time_slot_height: float = DEFAULT_TIME_SLOT_HEIGHT,
    day_column_width: float = DEFAULT_DAY_COLUMN_WIDTH,
    settings: CalendarSettings | None = None,
) -> List[JobPosition]:
    """
    Compute a JobPosition for every job scheduled on one of the visible days.

    Jobs whose geometry cannot be computed are omitted, never raised.
    """
    settings = settings or CalendarSettings()
    slot = sanitize_dimension(time_slot_height, DEFAULT_TIME_SLOT_HEIGHT, MIN_TIME_SLOT_HEIGHT)
    column = sanitize_dimension(day_column_width, DEFAULT_DAY_COLUMN_WIDTH, MIN_DAY_COLUMN_WIDTH)

    jobs = list(jobs)
    job_dates = [to_date(job.scheduled_date) for job in jobs]

    positions: List[JobPosition] = []
    for day_index, day in enumerate(days):
        for job, job_date in zip(jobs, job_dates):
            if job_date is None or job_date != day:
                continue
            position = position_job(job, day, day_index, slot, column, settings)
            if position is not None:
                positions.append(position)
    return positions


def calculate_timeline(
    now: datetime,
    days: List[date],
    time_slot_height: float = DEFAULT_TIME_SLOT_HEIGHT,
    day_column_width: float = DEFAULT_DAY_COLUMN_WIDTH,
    settings: CalendarSettings | None = None,
) -> TimelineData:
    """Locate the current-time line; left is -1 when today is not shown."""
    settings = settings or CalendarSettings()
    slot = sanitize_dimension(time_slot_height, DEFAULT_TIME_SLOT_HEIGHT, MIN_TIME_SLOT_HEIGHT)
    column = sanitize_dimension(day_column_width, DEFAULT_DAY_COLUMN_WIDTH, MIN_DAY_COLUMN_WIDTH)

    hour = fractional_hour(now)
    today = now.date()
    today_index = days.index(today) if today in days else -1

    return TimelineData(
        current_time_top=(hour - settings.grid_start_hour) * slot,
        current_time_left=today_index * column if today_index >= 0 else -1,
        is_current_time_visible=(
            today_index >= 0 and settings.grid_start_hour <= hour <= LAST_VISIBLE_HOUR
        ),
        time_slot_height=slot,
        day_column_width=column,
    )


def view_title(anchor: date, view: CalendarView | str, week_starts_on: int = _calendar.SUNDAY) -> str:
    view = CalendarView(view)
    if view is CalendarView.MONTH:
        return anchor.strftime("%B %Y")
    if view is CalendarView.WEEK:
        start = start_of_week(anchor, week_starts_on)
        end = end_of_week(anchor, week_starts_on)
        return f"Week of {start.strftime('%b')} {start.day} - {end.strftime('%b')} {end.day}, {end.year}"
    return f"{anchor.strftime('%A, %B')} {anchor.day}, {anchor.year}"


def shift_anchor(anchor: date, view: CalendarView | str, step: int) -> date:
    """Move the anchor one view-length forwards (step=1) or backwards (step=-1)."""
    view = CalendarView(view)
    if view is CalendarView.MONTH:
        month_index = anchor.year * 12 + (anchor.month - 1) + step
        return date(month_index // 12, month_index % 12 + 1, 1)
    if view is CalendarView.WEEK:
        return anchor + timedelta(days=7 * step)
    return anchor + timedelta(days=step)
