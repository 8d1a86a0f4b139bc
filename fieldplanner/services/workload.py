"""Staff workload derived from assigned, unfinished jobs."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable

from fieldplanner.domain.models import Job

from .categories import category_workload_hours


@dataclass(frozen=True)
class StaffWorkload:
    staff_id: str
    current_jobs: int
    hours_remaining: float
    next_available: datetime


def calculate_staff_workload(staff_id: str, jobs: Iterable[Job], now: datetime) -> StaffWorkload:
    """
    Count a staff member's non-completed jobs and estimate when they free up.

    Args:
        staff_id: StaffMember.id
        jobs: All jobs (filtered here by assignee)
        now: Reference instant for next_available

    Returns:
        StaffWorkload snapshot
    """
    active = [job for job in jobs if job.assigned_to == staff_id and job.status != "completed"]
    hours = sum(category_workload_hours(job.category) for job in active)
    return StaffWorkload(
        staff_id=staff_id,
        current_jobs=len(active),
        hours_remaining=hours,
        next_available=now + timedelta(hours=hours),
    )
