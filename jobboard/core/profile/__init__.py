"""Candidate profile completeness."""

from .task_checklist import (
    PROFILE_TASKS,
    ProfileTask,
    ProfileTaskReport,
    ProfileTaskStatus,
    evaluate_profile_tasks,
    percentage,
    profile_strength,
)

__all__ = [
    "PROFILE_TASKS",
    "ProfileTask",
    "ProfileTaskReport",
    "ProfileTaskStatus",
    "evaluate_profile_tasks",
    "percentage",
    "profile_strength",
]
