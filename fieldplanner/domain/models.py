"""SQLAlchemy models for field-service jobs and staff."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, Column, Date, DateTime, Float, String, Text
from sqlalchemy.orm import DeclarativeBase


ROLES = ("admin", "staff", "supervisor")
FIELD_ROLE = "staff"

JOB_STATUSES = (
    "pending",
    "in_progress",
    "completed",
    "cancelled",
    "postponed",
    "comeback_scheduled",
    "repair_scheduled",
)


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class StaffMember(Base):
    """Staff member (user) with home coordinates and shift schedule."""

    __tablename__ = "staff"

    id = Column(String(64), primary_key=True)
    username = Column(String(100), nullable=False)
    name = Column(String(200), nullable=False)
    role = Column(String(20), nullable=False, default=FIELD_ROLE)  # admin, staff, supervisor
    email = Column(String(200), nullable=True)

    # Location
    city = Column(String(50), nullable=True)  # Johannesburg, Cape Town
    address = Column(String(300), nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)

    # Schedule (HH:MM strings, defaults applied by the scorer)
    working_late_shift = Column(Boolean, nullable=False, default=False)
    shift_start_time = Column(String(8), nullable=True)
    shift_end_time = Column(String(8), nullable=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    @property
    def coordinates(self) -> tuple[float, float] | None:
        if self.latitude is None or self.longitude is None:
            return None
        return (self.latitude, self.longitude)

    def __repr__(self) -> str:
        return f"<StaffMember(id={self.id!r}, name='{self.name}', role='{self.role}')>"


class Job(Base):
    """A scheduled field-service job."""

    __tablename__ = "jobs"

    id = Column(String(64), primary_key=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(30), nullable=False, default="pending")
    priority = Column(String(10), nullable=False, default="medium")  # low, medium, high
    category = Column(String(50), nullable=True)

    assigned_to = Column(String(64), nullable=True)  # StaffMember.id
    assigned_by = Column(String(64), nullable=True)

    # Scheduling: local date plus HH:MM time-of-day strings
    scheduled_date = Column(Date, nullable=True)
    start_time = Column(String(8), nullable=True)
    end_time = Column(String(8), nullable=True)

    # Resolved location of the risk address
    risk_address = Column(String(300), nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    @property
    def coordinates(self) -> tuple[float, float] | None:
        if self.latitude is None or self.longitude is None:
            return None
        return (self.latitude, self.longitude)

    def __repr__(self) -> str:
        return f"<Job(id={self.id!r}, category='{self.category}', status='{self.status}', date={self.scheduled_date})>"
