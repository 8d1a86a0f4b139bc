"""Command-line interface for the field-service planner."""

from __future__ import annotations

import argparse
import logging
from datetime import date

from fieldplanner.config import VIEWS, load_config
from fieldplanner.domain.db import DEFAULT_DB_URL, get_session, init_database
from fieldplanner.domain.repositories import JobRepository, StaffRepository
from fieldplanner.engine.assignment import assign_best_staff, get_smart_job_suggestions
from fieldplanner.engine.calendar import calculate_job_positions, view_title, visible_days
from fieldplanner.io.export_csv import (
    export_job_positions_csv,
    export_suggestions_csv,
    positions_frame,
    suggestions_frame,
)
from fieldplanner.io.import_csv import import_jobs_csv, import_staff_csv


def _db_url(args: argparse.Namespace) -> str:
    if args.db:
        return args.db
    if getattr(args, "config", None):
        return load_config(args.config).database_url
    return DEFAULT_DB_URL


def _cmd_init_db(args: argparse.Namespace) -> None:
    """Initialize the database."""
    db_url = _db_url(args)
    init_database(db_url)
    print(f"[OK] Database initialized: {db_url}")


def _cmd_import_csv(args: argparse.Namespace) -> None:
    """Import CSV data into database."""
    if not (args.staff or args.jobs):
        raise SystemExit("import-csv: pass --staff and/or --jobs")

    session = get_session(_db_url(args))
    try:
        if args.staff:
            count = import_staff_csv(session, args.staff)
            print(f"[OK] Imported {count} staff members")

        if args.jobs:
            count = import_jobs_csv(session, args.jobs)
            print(f"[OK] Imported {count} jobs")

        print("[OK] CSV import complete")
    except Exception as e:
        session.rollback()
        print(f"[ERROR] Import failed: {e}")
        raise
    finally:
        session.close()


def _cmd_layout(args: argparse.Namespace) -> None:
    """Print or export the calendar layout around a date."""
    cfg = load_config(args.config)
    anchor = date.fromisoformat(args.date) if args.date else date.today()
    days = visible_days(anchor, args.view, cfg.calendar.week_starts_on)

    session = get_session(_db_url(args))
    try:
        jobs = JobRepository.get_by_date(session, days[0], days[-1])
        positions = calculate_job_positions(
            jobs,
            days,
            cfg.calendar.time_slot_height,
            cfg.calendar.day_column_width,
            cfg.calendar,
        )

        print(f"[INFO] {view_title(anchor, args.view, cfg.calendar.week_starts_on)}")
        if args.out:
            count = export_job_positions_csv(positions, args.out)
            print(f"[OK] Exported {count} job positions to {args.out}")
        else:
            print(positions_frame(positions).to_string(index=False))
    finally:
        session.close()


def _cmd_suggest(args: argparse.Namespace) -> None:
    """Rank staff for a stored job."""
    cfg = load_config(args.config)
    session = get_session(_db_url(args))
    try:
        job = JobRepository.get_by_id(session, args.job)
        if job is None:
            raise SystemExit(f"Job {args.job} not found")
        if job.coordinates is None:
            raise SystemExit(f"Job {args.job} has no coordinates")

        staff = StaffRepository.get_all(session)
        jobs = [j for j in JobRepository.get_all(session) if j.id != job.id]
        suggestions = get_smart_job_suggestions(job.coordinates, staff, jobs, weights=cfg.assignment)

        if args.out:
            count = export_suggestions_csv(suggestions, args.out)
            print(f"[OK] Exported {count} suggestions to {args.out}")
        elif suggestions:
            print(suggestions_frame(suggestions).to_string(index=False))
        else:
            print("[WARN] No eligible staff")
    finally:
        session.close()


def _cmd_assign(args: argparse.Namespace) -> None:
    """Assign the best-ranked staff member to a job."""
    cfg = load_config(args.config)
    session = get_session(_db_url(args))
    try:
        best = assign_best_staff(session, args.job, weights=cfg.assignment, assigned_by=args.by)
        if best is None:
            print(f"[WARN] No assignment made for job {args.job}")
        else:
            print(f"[OK] Job {args.job} assigned to {best.staff_member.name}: {best.reason}")
    except Exception as e:
        session.rollback()
        print(f"[ERROR] Assignment failed: {e}")
        raise
    finally:
        session.close()


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="fieldplanner",
        description="Field-service job calendar and staff assignment",
    )

    # Global options
    parser.add_argument("--db", help=f"Database URL (default: {DEFAULT_DB_URL})")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at INFO level")

    sub = parser.add_subparsers(dest="command", required=True)

    # init-db command
    init = sub.add_parser("init-db", help="Initialize database")
    init.add_argument("--config", help="Path to config YAML/JSON")
    init.set_defaults(func=_cmd_init_db)

    # import-csv command
    imp = sub.add_parser("import-csv", help="Import CSV data into database")
    imp.add_argument("--staff", help="Path to staff CSV")
    imp.add_argument("--jobs", help="Path to jobs CSV")
    imp.set_defaults(func=_cmd_import_csv)

    # layout command
    lay = sub.add_parser("layout", help="Compute calendar job positions")
    lay.add_argument("--date", help="Anchor date YYYY-MM-DD (default: today)")
    lay.add_argument("--view", choices=VIEWS, default="week")
    lay.add_argument("--config", help="Path to config YAML/JSON")
    lay.add_argument("--out", help="Optional: export positions to CSV")
    lay.set_defaults(func=_cmd_layout)

    # suggest command
    sug = sub.add_parser("suggest", help="Rank staff for a job")
    sug.add_argument("--job", required=True, help="Job ID")
    sug.add_argument("--config", help="Path to config YAML/JSON")
    sug.add_argument("--out", help="Optional: export suggestions to CSV")
    sug.set_defaults(func=_cmd_suggest)

    # assign command
    asg = sub.add_parser("assign", help="Assign the best staff member to a job")
    asg.add_argument("--job", required=True, help="Job ID")
    asg.add_argument("--by", help="ID of the admin making the assignment")
    asg.add_argument("--config", help="Path to config YAML/JSON")
    asg.set_defaults(func=_cmd_assign)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
    )
    args.func(args)


if __name__ == "__main__":
    main()
