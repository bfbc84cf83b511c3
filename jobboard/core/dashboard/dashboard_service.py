"""
Candidate dashboard statistics.

Month-over-month application and save counters, profile strength and
the profile-completeness checklist.
"""

from datetime import datetime, timedelta
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from jobboard.core.errors import NotFoundError
from jobboard.core.listing.query_builder import validate_object_id
from jobboard.core.profile import ProfileTaskReport, evaluate_profile_tasks, profile_strength
from jobboard.data.models import Candidate
from jobboard.data.models.base import utcnow
from jobboard.data.repositories import (
    AppliedJobRepository,
    CandidateRepository,
    SavedJobRepository,
    get_applied_job_repository,
    get_candidate_repository,
    get_saved_job_repository,
)
from jobboard.utils.logger import LoggerMixin


class CandidateStats(BaseModel):
    """Dashboard header counters."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    jobs_applied: int
    saved_jobs: int
    profile_strength: int
    jobs_applied_percentage_change: str
    saved_jobs_percentage_change: str


def month_windows(now: datetime) -> tuple[datetime, datetime, datetime]:
    """
    Start of this month, start of last month and the last instant of last month.

    Stored timestamps have millisecond precision.
    """
    current_start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    previous_end = current_start - timedelta(milliseconds=1)
    previous_start = previous_end.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    return current_start, previous_start, previous_end


def percentage_change_label(current: int, previous: int) -> str:
    """Render a month-over-month change, e.g. "+50.00% from last month"."""
    if previous == 0 and current == 0:
        return "+0% from last month"
    if previous == 0:
        return "+100% from last month"
    if current == 0:
        return "-100% from last month"

    change = (current - previous) / previous * 100
    prefix = "+" if change >= 0 else "-"
    return f"{prefix}{abs(change):.2f}% from last month"


class DashboardService(LoggerMixin):
    """Read-only candidate dashboard views."""

    def __init__(
        self,
        candidate_repository: Optional[CandidateRepository] = None,
        saved_job_repository: Optional[SavedJobRepository] = None,
        applied_job_repository: Optional[AppliedJobRepository] = None,
    ):
        self._candidates = candidate_repository or get_candidate_repository()
        self._saved = saved_job_repository or get_saved_job_repository()
        self._applied = applied_job_repository or get_applied_job_repository()

    async def _get_candidate(self, candidate_id: str) -> Candidate:
        candidate_oid = validate_object_id(candidate_id, "candidateId")
        candidate = await self._candidates.get_by_id_async(candidate_oid)
        if candidate is None:
            raise NotFoundError("Candidate not found", details=str(candidate_oid))
        return candidate

    async def profile_tasks(self, candidate_id: str) -> ProfileTaskReport:
        """Evaluate the profile checklist for a candidate."""
        candidate = await self._get_candidate(candidate_id)
        return evaluate_profile_tasks(candidate)

    async def candidate_stats(self, candidate_id: str, now: Optional[datetime] = None) -> CandidateStats:
        """
        Counters for the dashboard header.

        Args:
            candidate_id: Candidate id
            now: Reference time, defaults to the current UTC time

        Returns:
            CandidateStats for the current calendar month with changes
            relative to the previous month
        """
        candidate = await self._get_candidate(candidate_id)
        now = now or utcnow()
        current_start, previous_start, previous_end = month_windows(now)

        applied_current = await self._applied.count_created_between_async(candidate.id, current_start, now)
        applied_previous = await self._applied.count_created_between_async(
            candidate.id, previous_start, previous_end
        )
        saved_current = await self._saved.count_created_between_async(candidate.id, current_start, now)
        saved_previous = await self._saved.count_created_between_async(
            candidate.id, previous_start, previous_end
        )

        self.logger.debug(
            f"Stats for {candidate.id}: applied {applied_current}/{applied_previous}, "
            f"saved {saved_current}/{saved_previous}"
        )
        return CandidateStats(
            jobs_applied=applied_current,
            saved_jobs=saved_current,
            profile_strength=profile_strength(candidate),
            jobs_applied_percentage_change=percentage_change_label(applied_current, applied_previous),
            saved_jobs_percentage_change=percentage_change_label(saved_current, saved_previous),
        )


# Singleton instance
_dashboard_service: Optional[DashboardService] = None


def get_dashboard_service() -> DashboardService:
    """Get the dashboard service singleton instance."""
    global _dashboard_service
    if _dashboard_service is None:
        _dashboard_service = DashboardService()
    return _dashboard_service
