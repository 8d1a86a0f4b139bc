"""CSV import utilities to load jobs and staff into the database."""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd
from sqlalchemy.orm import Session

from fieldplanner.domain.models import FIELD_ROLE, JOB_STATUSES, ROLES, Job, StaffMember

logger = logging.getLogger(__name__)

TRUE_VALUES = {"TRUE", "T", "1", "YES", "Y"}


def _text(row: pd.Series, column: str, default: str | None = None) -> str | None:
    value = row.get(column)
    if value is None or pd.isna(value):
        return default
    value = str(value).strip()
    return value or default


def _number(row: pd.Series, column: str) -> float | None:
    raw = _text(row, column)
    if raw is None:
        return None
    value = pd.to_numeric(raw, errors="coerce")
    return float(value) if pd.notna(value) else None


def _choice(row: pd.Series, column: str, default: str, allowed: tuple, csv_path) -> str:
    value = _text(row, column, default).lower()
    if value not in allowed:
        raise ValueError(f"{csv_path}: row {row.get('id')!r} has unknown {column} {value!r}; expected one of {allowed}")
    return value


def _read(csv_path: str | Path) -> pd.DataFrame:
    df = pd.read_csv(csv_path, dtype=str)
    # Normalize column names
    df.columns = df.columns.str.lower().str.strip()
    if "id" not in df.columns:
        raise ValueError(f"{csv_path}: missing required 'id' column")
    return df


def import_staff_csv(session: Session, csv_path: str | Path) -> int:
    """
    Import staff members from CSV into database.

    An unknown role rejects the whole file.

    Args:
        session: Database session
        csv_path: Path to staff CSV

    Returns:
        Number of staff members imported
    """
    df = _read(csv_path)

    members = []
    for _, row in df.iterrows():
        member = StaffMember(
            id=_text(row, "id"),
            username=_text(row, "username", _text(row, "id")),
            name=_text(row, "name", _text(row, "username", _text(row, "id"))),
            role=_choice(row, "role", FIELD_ROLE, ROLES, csv_path),
            email=_text(row, "email"),
            city=_text(row, "city"),
            address=_text(row, "address"),
            latitude=_number(row, "latitude"),
            longitude=_number(row, "longitude"),
            working_late_shift=(_text(row, "working_late_shift", "FALSE")).upper() in TRUE_VALUES,
            shift_start_time=_text(row, "shift_start_time"),
            shift_end_time=_text(row, "shift_end_time"),
        )
        members.append(member)

    session.add_all(members)
    session.commit()

    logger.info("Imported %d staff members from %s", len(members), csv_path)
    return len(members)


def import_jobs_csv(session: Session, csv_path: str | Path) -> int:
    """
    Import jobs from CSV into database.

    Rows with an unparseable scheduled_date are kept unscheduled.
    An unknown status rejects the whole file.

    Args:
        session: Database session
        csv_path: Path to jobs CSV

    Returns:
        Number of jobs imported
    """
    df = _read(csv_path)

    if "scheduled_date" in df.columns:
        df["scheduled_date"] = pd.to_datetime(df["scheduled_date"], errors="coerce").dt.date
    else:
        df["scheduled_date"] = None

    jobs = []
    for _, row in df.iterrows():
        scheduled = row["scheduled_date"]
        job = Job(
            id=_text(row, "id"),
            title=_text(row, "title", _text(row, "id")),
            description=_text(row, "description"),
            status=_choice(row, "status", "pending", JOB_STATUSES, csv_path),
            priority=(_text(row, "priority", "medium")).lower(),
            category=_text(row, "category"),
            assigned_to=_text(row, "assigned_to"),
            assigned_by=_text(row, "assigned_by"),
            scheduled_date=scheduled if pd.notna(scheduled) else None,
            start_time=_text(row, "start_time"),
            end_time=_text(row, "end_time"),
            risk_address=_text(row, "risk_address"),
            latitude=_number(row, "latitude"),
            longitude=_number(row, "longitude"),
        )
        jobs.append(job)

    session.add_all(jobs)
    session.commit()

    logger.info("Imported %d jobs from %s", len(jobs), csv_path)
    return len(jobs)
