"""CSV export of computed calendar positions and assignment suggestions."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

import pandas as pd

from fieldplanner.engine.assignment import JobSuggestion
from fieldplanner.engine.calendar import JobPosition

logger = logging.getLogger(__name__)

POSITION_COLUMNS = [
    "job_id", "day_index", "start", "end", "duration", "top", "height", "left", "width",
]
SUGGESTION_COLUMNS = [
    "rank", "staff_id", "name", "distance_km", "travel_min", "active_jobs",
    "hours_remaining", "priority", "reason",
]


def positions_frame(positions: Sequence[JobPosition]) -> pd.DataFrame:
    rows = [
        {
            "job_id": p.job.id,
            "day_index": p.day_index,
            "start": p.start.isoformat(),
            "end": p.end.isoformat(),
            "duration": p.duration,
            "top": p.top,
            "height": p.height,
            "left": p.left,
            "width": p.width,
        }
        for p in positions
    ]
    return pd.DataFrame(rows, columns=POSITION_COLUMNS)


def suggestions_frame(suggestions: Sequence[JobSuggestion]) -> pd.DataFrame:
    rows = [
        {
            "rank": rank,
            "staff_id": s.staff_member.id,
            "name": s.staff_member.name,
            "distance_km": round(s.distance, 3),
            "travel_min": round(s.travel_time, 1),
            "active_jobs": s.workload.current_jobs,
            "hours_remaining": s.workload.hours_remaining,
            "priority": round(s.priority, 3),
            "reason": s.reason,
        }
        for rank, s in enumerate(suggestions, start=1)
    ]
    return pd.DataFrame(rows, columns=SUGGESTION_COLUMNS)


def export_job_positions_csv(positions: Sequence[JobPosition], csv_path: str | Path) -> int:
    """Write job positions to CSV. Returns number of rows written."""
    df = positions_frame(positions)
    df.to_csv(csv_path, index=False)
    logger.info("Exported %d job positions to %s", len(df), csv_path)
    return len(df)


def export_suggestions_csv(suggestions: Sequence[JobSuggestion], csv_path: str | Path) -> int:
    """Write ranked suggestions to CSV. Returns number of rows written."""
    df = suggestions_frame(suggestions)
    df.to_csv(csv_path, index=False)
    logger.info("Exported %d suggestions to %s", len(df), csv_path)
    return len(df)
