"""I/O utilities for CSV import/export."""

from .export_csv import export_job_positions_csv, export_suggestions_csv
from .import_csv import import_jobs_csv, import_staff_csv

__all__ = [
    "import_jobs_csv",
    "import_staff_csv",
    "export_job_positions_csv",
    "export_suggestions_csv",
]
