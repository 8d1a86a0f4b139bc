"""Domain models and data access layer."""

from .models import Base, Job, StaffMember
from .repositories import JobRepository, StaffRepository

__all__ = [
    "Base",
    "Job",
    "StaffMember",
    "JobRepository",
    "StaffRepository",
]
