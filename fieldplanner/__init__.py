"""Field-service job planner: calendar layout and staff assignment.

Modules:
- config: load and validate configuration (YAML or JSON)
- domain: SQLAlchemy models and repositories for jobs and staff
- services: job categories, time parsing, geography and workload
- engine: calendar layout, click handling, current-time ticker, assignment scoring, routing
- io: CSV import/export
- cli: command-line interface entrypoints
"""

__all__ = [
    "config",
    "domain",
    "services",
    "engine",
    "io",
    "cli",
]
