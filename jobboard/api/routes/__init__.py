"""HTTP route modules."""

from . import applied_jobs, candidates, dashboard, health, jobs, saved_jobs

__all__ = [
    "applied_jobs",
    "candidates",
    "dashboard",
    "health",
    "jobs",
    "saved_jobs",
]
