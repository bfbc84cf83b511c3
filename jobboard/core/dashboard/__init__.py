"""Candidate dashboard statistics."""

from .dashboard_service import (
    CandidateStats,
    DashboardService,
    get_dashboard_service,
    month_windows,
    percentage_change_label,
)

__all__ = [
    "CandidateStats",
    "DashboardService",
    "get_dashboard_service",
    "month_windows",
    "percentage_change_label",
]
