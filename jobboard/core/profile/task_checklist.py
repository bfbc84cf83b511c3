"""
Profile-completeness checklist.

Evaluates a fixed, ordered list of profile tasks against a candidate and
reports which are done. Results are recomputed on every call and never
stored.
"""

import math
from dataclasses import dataclass
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from jobboard.data.models import Candidate


@dataclass(frozen=True)
class ProfileTask:
    """A single checklist item."""

    id: int
    task: str
    check: Callable[[Candidate], bool]


def _has_text(value: Any) -> bool:
    return bool(value and str(value).strip())


# Ordered checklist shown on the dashboard; ids are stable
PROFILE_TASKS: tuple[ProfileTask, ...] = (
    ProfileTask(1, "Upload resume", lambda c: _has_text(c.resume_url)),
    ProfileTask(2, "Add work experience", lambda c: len(c.experience) > 0),
    ProfileTask(3, "Add education", lambda c: len(c.education) > 0),
    ProfileTask(4, "Add skills", lambda c: len(c.skills) > 0),
    ProfileTask(5, "Complete about section", lambda c: _has_text(c.about)),
    ProfileTask(6, "Add profile picture", lambda c: _has_text(c.profile_image)),
    ProfileTask(7, "Add projects", lambda c: len(c.projects) > 0),
)


class ProfileTaskStatus(BaseModel):
    """Completion state of one checklist item."""

    id: int
    task: str
    completed: bool


class ProfileTaskReport(BaseModel):
    """Checklist results plus aggregate completion."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    profile_tasks: list[ProfileTaskStatus]
    completed_tasks: int
    total_tasks: int
    completion_percentage: int


def percentage(part: int, whole: int) -> int:
    """Integer percentage rounded half up."""
    if whole <= 0:
        return 0
    return math.floor(100 * part / whole + 0.5)


def evaluate_profile_tasks(candidate: Candidate) -> ProfileTaskReport:
    """Run every checklist predicate against the candidate."""
    statuses = [
        ProfileTaskStatus(id=task.id, task=task.task, completed=task.check(candidate))
        for task in PROFILE_TASKS
    ]
    completed = sum(1 for status in statuses if status.completed)
    return ProfileTaskReport(
        profile_tasks=statuses,
        completed_tasks=completed,
        total_tasks=len(statuses),
        completion_percentage=percentage(completed, len(statuses)),
    )


def profile_strength(candidate: Candidate) -> int:
    """Share of the twelve core profile fields that are filled in, as a percentage."""
    fields = [
        _has_text(candidate.full_name),
        _has_text(candidate.email),
        _has_text(candidate.phone),
        len(candidate.education) > 0,
        len(candidate.experience) > 0,
        len(candidate.skills) > 0,
        _has_text(candidate.expected_salary),
        _has_text(candidate.preferred_job_type),
        _has_text(candidate.preferred_location),
        _has_text(candidate.resume_url),
        _has_text(candidate.total_experience),
        _has_text(candidate.notice_period),
    ]
    return percentage(sum(fields), len(fields))
