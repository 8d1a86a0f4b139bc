"""Pytest configuration and shared fixtures."""

from datetime import date, datetime
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from fieldplanner.domain.models import Base, Job, StaffMember

REPO_ROOT = Path(__file__).resolve().parent.parent


def pytest_configure(config):
    """Configure pytest."""
    # Add custom markers
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (deselect with '-m \"not integration\"')"
    )
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


@pytest.fixture
def db_session():
    """Create in-memory database session for testing."""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def config_path():
    return REPO_ROOT / "planner_config.yaml"


@pytest.fixture
def wednesday():
    """2025-09-03, a Wednesday; its Sunday-start week is Aug 31 - Sep 6."""
    return date(2025, 9, 3)


@pytest.fixture
def morning():
    return datetime(2025, 9, 3, 10, 0)


def make_job(job_id, **kwargs):
    kwargs.setdefault("title", f"Job {job_id}")
    kwargs.setdefault("status", "pending")
    return Job(id=job_id, **kwargs)


def make_staff(staff_id, lat=None, lng=None, **kwargs):
    kwargs.setdefault("username", staff_id)
    kwargs.setdefault("name", staff_id.title())
    kwargs.setdefault("role", "staff")
    kwargs.setdefault("working_late_shift", False)
    return StaffMember(id=staff_id, latitude=lat, longitude=lng, **kwargs)
