"""Rank field staff for a job location (smart job assignment)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy.orm import Session

from fieldplanner.config import AssignmentWeights
from fieldplanner.domain.models import FIELD_ROLE, Job, StaffMember
from fieldplanner.domain.repositories import JobRepository, StaffRepository
from fieldplanner.services.geo import Coordinate, haversine_km, travel_minutes, zone_for
from fieldplanner.services.timeplan import parse_hour
from fieldplanner.services.workload import StaffWorkload, calculate_staff_workload

logger = logging.getLogger(__name__)

DEFAULT_SHIFT_START_HOUR = 5
DEFAULT_SHIFT_END_HOUR = 17
LATE_SHIFT_END_HOUR = 19


@dataclass(frozen=True)
class JobSuggestion:
    staff_member: StaffMember
    distance: float  # km
    workload: StaffWorkload
    travel_time: float  # minutes
    priority: float  # lower is better
    reason: str


def shift_hours(member: StaffMember) -> tuple[int, int]:
    """(start, end) hours of a staff member's shift, with normal/late defaults."""
    default_end = LATE_SHIFT_END_HOUR if member.working_late_shift else DEFAULT_SHIFT_END_HOUR
    start = parse_hour(member.shift_start_time, DEFAULT_SHIFT_START_HOUR)
    end = parse_hour(member.shift_end_time, default_end)
    return start, end


def is_outside_shift(member: StaffMember, now: datetime) -> bool:
    start, end = shift_hours(member)
    return now.hour < start or now.hour >= end


def is_eligible(member: StaffMember) -> bool:
    return member.role == FIELD_ROLE and member.coordinates is not None


def build_reason(distance: float, travel: float, outside_shift: bool, workload: StaffWorkload) -> str:
    reason = f"Distance: {distance:.1f}km, Travel: {travel:.0f}min"
    if outside_shift:
        reason += " (Outside shift hours)"
    if workload.current_jobs == 0:
        reason += " - Available now"
    else:
        reason += (
            f" - {workload.current_jobs} active jobs, "
            f"next available: {workload.next_available.strftime('%H:%M')}"
        )
    return reason


def score_staff_member(
    job_location: Coordinate,
    member: StaffMember,
    jobs: Sequence[Job],
    now: datetime,
    weights: AssignmentWeights,
) -> JobSuggestion:
    """Priority score and reason for one eligible staff member."""
    home = member.coordinates
    distance = haversine_km(job_location, home)
    travel = travel_minutes(distance, weights.average_speed_kmh)
    workload = calculate_staff_workload(member.id, jobs, now)

    priority = (
        distance * weights.distance
        + workload.current_jobs * weights.workload
        + travel * weights.travel_time
    )
    if zone_for(home).key == zone_for(job_location).key:
        priority -= weights.same_zone_bonus

    outside = is_outside_shift(member, now)
    if outside:
        priority += weights.outside_shift_penalty

    return JobSuggestion(
        staff_member=member,
        distance=distance,
        workload=workload,
        travel_time=travel,
        priority=priority,
        reason=build_reason(distance, travel, outside, workload),
    )


def get_smart_job_suggestions(
    job_location: Coordinate,
    staff: Sequence[StaffMember],
    jobs: Sequence[Job],
    now: datetime | None = None,
    weights: AssignmentWeights | None = None,
) -> List[JobSuggestion]:
    """
    Rank eligible staff for a job location.

    Only field staff (role "staff") with known coordinates are scored.
    The result is sorted by ascending priority; ties keep roster order.

    Args:
        job_location: (lat, lng) of the job
        staff: Full roster
        jobs: All jobs, used to derive each member's workload
        now: Reference instant (defaults to local now)
        weights: Priority weights (defaults to AssignmentWeights())

    Returns:
        List of JobSuggestion, best first
    """
    now = now or datetime.now()
    weights = weights or AssignmentWeights()

    suggestions = [
        score_staff_member(job_location, member, jobs, now, weights)
        for member in staff
        if is_eligible(member)
    ]
    # sorted() is stable, so equal priorities keep roster order
    return sorted(suggestions, key=lambda s: s.priority)


def get_best_staff_suggestion(
    job_location: Coordinate,
    staff: Sequence[StaffMember],
    jobs: Sequence[Job],
    now: datetime | None = None,
    weights: AssignmentWeights | None = None,
) -> Optional[JobSuggestion]:
    """Top-ranked suggestion, or None when nobody is eligible."""
    suggestions = get_smart_job_suggestions(job_location, staff, jobs, now, weights)
    return suggestions[0] if suggestions else None


def assign_best_staff(
    session: Session,
    job_id: str,
    now: datetime | None = None,
    weights: AssignmentWeights | None = None,
    assigned_by: str | None = None,
) -> Optional[JobSuggestion]:
    """
    Score the roster for a stored job and persist the best candidate.

    Returns:
        The winning suggestion, or None when the job has no coordinates or
        nobody is eligible.

    Raises:
        LookupError: If the job does not exist
    """
    job = JobRepository.get_by_id(session, job_id)
    if job is None:
        raise LookupError(f"Job {job_id!r} not found")
    if job.coordinates is None:
        logger.warning("Job %s has no coordinates; cannot suggest staff", job_id)
        return None

    staff = StaffRepository.get_all(session)
    other_jobs = [j for j in JobRepository.get_all(session) if j.id != job_id]
    best = get_best_staff_suggestion(job.coordinates, staff, other_jobs, now, weights)
    if best is None:
        logger.warning("No eligible staff for job %s", job_id)
        return None

    JobRepository.assign(session, job_id, best.staff_member.id, assigned_by=assigned_by)
    return best
