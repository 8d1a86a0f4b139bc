"""Stateful calendar view: navigation, derived layout and job activation."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Callable, List, Optional, Sequence

from fieldplanner.config import CalendarSettings
from fieldplanner.domain.models import Job

from .calendar import (
    CalendarView,
    JobPosition,
    TimelineData,
    calculate_job_positions,
    calculate_timeline,
    shift_anchor,
    view_title,
    visible_days,
)
from .clicks import ClickDispatcher
from .ticker import CurrentTimeTicker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalendarState:
    current_date: date
    view: CalendarView
    selected_date: Optional[date]
    current_time: datetime


class CalendarController:
    """
    One mounted calendar view.

    Holds the CalendarState, exposes the navigation actions, and derives
    visible days, job positions and the timeline from the current state.
    mount() starts the 60-second current-time refresh and unmount() stops it.
    A single job click is delivered once the double-click window closes.
    """

    def __init__(
        self,
        jobs: Sequence[Job] = (),
        settings: CalendarSettings | None = None,
        initial_view: CalendarView | str | None = None,
        on_job_click: Optional[Callable[[Job], None]] = None,
        on_job_double_click: Optional[Callable[[Job], None]] = None,
        now: Callable[[], datetime] = datetime.now,
        click_clock: Optional[Callable[[], float]] = None,
    ):
        self.settings = settings or CalendarSettings()
        self.jobs: List[Job] = list(jobs)
        self._now = now
        self._lock = threading.Lock()

        started = now()
        self._state = CalendarState(
            current_date=started.date(),
            view=CalendarView(initial_view or self.settings.initial_view),
            selected_date=None,
            current_time=started,
        )

        click_kwargs = {"clock": click_clock} if click_clock is not None else {}
        self.clicks: ClickDispatcher[Job] = ClickDispatcher(
            on_click=on_job_click,
            on_double_click=on_job_double_click,
            threshold_ms=self.settings.double_click_threshold_ms,
            auto_resolve=True,
            **click_kwargs,
        )
        self._ticker = CurrentTimeTicker(self.refresh_time, interval=self.settings.refresh_interval_seconds)

    # -- lifecycle -------------------------------------------------------

    def mount(self) -> "CalendarController":
        self.refresh_time()
        self._ticker.start()
        return self

    def unmount(self) -> None:
        self._ticker.stop()
        self.clicks.flush()

    @property
    def is_mounted(self) -> bool:
        return self._ticker.running

    def __enter__(self) -> "CalendarController":
        return self.mount()

    def __exit__(self, *exc) -> None:
        self.unmount()

    # -- state -----------------------------------------------------------

    @property
    def state(self) -> CalendarState:
        return self._state

    def _update(self, **changes) -> None:
        with self._lock:
            self._state = replace(self._state, **changes)

    def refresh_time(self) -> None:
        self._update(current_time=self._now())

    def set_jobs(self, jobs: Sequence[Job]) -> None:
        self.jobs = list(jobs)

    # -- actions ---------------------------------------------------------

    def set_current_date(self, day: date) -> None:
        self._update(current_date=day)

    def set_view(self, view: CalendarView | str) -> None:
        self._update(view=CalendarView(view))

    def set_selected_date(self, day: Optional[date]) -> None:
        self._update(selected_date=day)

    def navigate_previous(self) -> None:
        state = self._state
        self._update(current_date=shift_anchor(state.current_date, state.view, -1))

    def navigate_next(self) -> None:
        state = self._state
        self._update(current_date=shift_anchor(state.current_date, state.view, 1))

    def go_to_today(self) -> None:
        today = self._now().date()
        self._update(current_date=today, selected_date=today)

    def select_day_and_zoom_to_week(self, day: date) -> None:
        self._update(selected_date=day, current_date=day, view=CalendarView.WEEK)

    # -- derived ---------------------------------------------------------

    @property
    def visible_days(self) -> List[date]:
        state = self._state
        return visible_days(state.current_date, state.view, self.settings.week_starts_on)

    @property
    def job_positions(self) -> List[JobPosition]:
        return calculate_job_positions(
            self.jobs,
            self.visible_days,
            self.settings.time_slot_height,
            self.settings.day_column_width,
            self.settings,
        )

    @property
    def timeline(self) -> TimelineData:
        return calculate_timeline(
            self._state.current_time,
            self.visible_days,
            self.settings.time_slot_height,
            self.settings.day_column_width,
            self.settings,
        )

    @property
    def title(self) -> str:
        state = self._state
        return view_title(state.current_date, state.view, self.settings.week_starts_on)

    def handle_job_click(self, job: Job, at: float | None = None) -> None:
        self.clicks.activate(job, at=at)
