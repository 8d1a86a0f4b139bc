"""Repository classes for data access."""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from .models import Job, StaffMember

logger = logging.getLogger(__name__)


class StaffRepository:
    """Repository for staff data access."""

    @staticmethod
    def get_all(session: Session) -> List[StaffMember]:
        """Get all staff members."""
        return session.query(StaffMember).all()

    @staticmethod
    def get_by_id(session: Session, staff_id: str) -> Optional[StaffMember]:
        """Get staff member by ID."""
        return session.query(StaffMember).filter(StaffMember.id == staff_id).first()

    @staticmethod
    def get_by_role(session: Session, role: str) -> List[StaffMember]:
        """Get all staff members with a specific role."""
        return (
            session.query(StaffMember)
            .filter(StaffMember.role == role.lower())
            .all()
        )

    @staticmethod
    def create(session: Session, member: StaffMember) -> StaffMember:
        """Create a new staff member."""
        session.add(member)
        session.commit()
        session.refresh(member)
        return member

    @staticmethod
    def bulk_create(session: Session, members: List[StaffMember]) -> None:
        """Create multiple staff members."""
        session.add_all(members)
        session.commit()


class JobRepository:
    """Repository for job data access."""

    @staticmethod
    def get_all(session: Session) -> List[Job]:
        """Get all jobs."""
        return session.query(Job).order_by(Job.scheduled_date, Job.start_time, Job.id).all()

    @staticmethod
    def get_by_id(session: Session, job_id: str) -> Optional[Job]:
        """Get job by ID."""
        return session.query(Job).filter(Job.id == job_id).first()

    @staticmethod
    def get_by_date(session: Session, start: date, end: date | None = None) -> List[Job]:
        """Get jobs scheduled between start and end (inclusive)."""
        end = end or start
        return (
            session.query(Job)
            .filter(Job.scheduled_date >= start, Job.scheduled_date <= end)
            .order_by(Job.scheduled_date, Job.start_time, Job.id)
            .all()
        )

    @staticmethod
    def get_by_assignee(session: Session, staff_id: str) -> List[Job]:
        """Get all jobs assigned to a staff member."""
        return session.query(Job).filter(Job.assigned_to == staff_id).all()

    @staticmethod
    def create(session: Session, job: Job) -> Job:
        """Create a new job."""
        session.add(job)
        session.commit()
        session.refresh(job)
        return job

    @staticmethod
    def bulk_create(session: Session, jobs: List[Job]) -> None:
        """Create multiple jobs."""
        session.add_all(jobs)
        session.commit()

    @staticmethod
    def assign(session: Session, job_id: str, staff_id: str, assigned_by: str | None = None) -> Job:
        """
        Persist an assignment decision.

        Raises:
            LookupError: If the job does not exist
        """
        job = JobRepository.get_by_id(session, job_id)
        if job is None:
            raise LookupError(f"Job {job_id!r} not found")

        previous = job.assigned_to
        job.assigned_to = staff_id
        if assigned_by is not None:
            job.assigned_by = assigned_by
        session.commit()
        logger.info("Job %s assigned to %s (was %s)", job_id, staff_id, previous)
        return job
