"""
Candidate job listings.

Builds the recommended, saved and applied job lists shown on the
candidate dashboard, optionally narrowed by a search term. Each request
loads the candidate, loads one storage-level page of jobs, scores every
job against the candidate and formats the page.

Pagination counters always describe the page of stored jobs before the
recommended-mode match filter runs, so a recommended page may hold fewer
than ``limit`` items while more pages are still reported.
"""

from typing import Optional, Union

from bson import ObjectId

from jobboard.core.errors import NotFoundError
from jobboard.core.matching import MatchScorer, get_match_scorer
from jobboard.data.models import Candidate
from jobboard.data.repositories import (
    AppliedJobRepository,
    CandidateRepository,
    JobRepository,
    SavedJobRepository,
    get_applied_job_repository,
    get_candidate_repository,
    get_job_repository,
    get_saved_job_repository,
)
from jobboard.utils.constants import MIN_RECOMMENDED_MATCH_COUNT, ListingMode
from jobboard.utils.logger import LoggerMixin

from .formatting import JobListPage, JobSummary, summarize_job
from .query_builder import ListingQuery, RawInt, build_listing_query, validate_object_id


class ListingService(LoggerMixin):
    """Scored, paginated job listings for one candidate."""

    def __init__(
        self,
        job_repository: Optional[JobRepository] = None,
        candidate_repository: Optional[CandidateRepository] = None,
        saved_job_repository: Optional[SavedJobRepository] = None,
        applied_job_repository: Optional[AppliedJobRepository] = None,
        scorer: Optional[MatchScorer] = None,
    ):
        self._jobs = job_repository or get_job_repository()
        self._candidates = candidate_repository or get_candidate_repository()
        self._saved = saved_job_repository or get_saved_job_repository()
        self._applied = applied_job_repository or get_applied_job_repository()
        self._scorer = scorer or get_match_scorer()

    async def list_jobs(
        self,
        candidate_id: Union[str, ObjectId, None],
        mode: Union[ListingMode, str, None],
        search: Optional[str] = None,
        page: RawInt = None,
        limit: RawInt = None,
    ) -> JobListPage:
        """
        List jobs for a candidate.

        Args:
            candidate_id: Candidate id
            mode: recommended, saved or applied
            search: Optional free-text term over title, company and location
            page: 1-based page number (default 1)
            limit: Page size (default 9)

        Returns:
            JobListPage with formatted items and pagination counters

        Raises:
            InvalidArgumentError: Malformed id, mode, page or limit
            NotFoundError: Candidate does not exist
            TransientError: Store unavailable
        """
        # Validate everything before the first store call
        candidate_oid = validate_object_id(candidate_id, "candidateId")
        query = build_listing_query(mode, search, page, limit)

        candidate = await self._candidates.get_by_id_async(candidate_oid)
        if candidate is None:
            raise NotFoundError("Candidate not found", details=str(candidate_oid))

        if query.mode == ListingMode.RECOMMENDED:
            items, total = await self._recommended_items(candidate, query)
        else:
            items, total = await self._related_items(candidate_oid, candidate, query)

        self.logger.debug(
            f"Listed {len(items)} {query.mode.value} jobs for candidate {candidate_oid} "
            f"(page {query.page}, total {total})"
        )
        return JobListPage(
            jobs=items,
            total_jobs=total,
            current_page=query.page,
            total_pages=query.total_pages(total),
        )

    async def _recommended_items(
        self, candidate: Candidate, query: ListingQuery
    ) -> tuple[list[JobSummary], int]:
        """Score a page of active jobs, keep good matches, best first."""
        jobs, total = await self._jobs.find_active_async(query.job_filter(), query.skip, query.limit)

        scored = self._scorer.score_all(jobs, jobs, candidate)
        kept = [s for s in scored if s.match_count >= MIN_RECOMMENDED_MATCH_COUNT]
        ranked = self._scorer.rank(kept)
        return [summarize_job(s.item, s.result) for s in ranked], total

    async def _related_items(
        self, candidate_oid: ObjectId, candidate: Candidate, query: ListingQuery
    ) -> tuple[list[JobSummary], int]:
        """Score a page of saved or applied jobs, keeping relation order."""
        is_saved = query.mode == ListingMode.SAVED
        repository = self._saved if is_saved else self._applied
        related, total = await repository.find_by_candidate_async(
            candidate_oid, query.job_filter(), query.skip, query.limit
        )

        items = []
        for s in self._scorer.score_all(related, [r.job for r in related], candidate):
            created_at = s.item.relation.created_at
            items.append(
                summarize_job(
                    s.item.job,
                    s.result,
                    include_match_count=True,
                    saved_at=created_at if is_saved else None,
                    applied_at=None if is_saved else created_at,
                )
            )
        return items, total

    # -------------------------------------------------------------------------
    # Convenience wrappers
    # -------------------------------------------------------------------------

    async def recommended(self, candidate_id: str, page: RawInt = None, limit: RawInt = None) -> JobListPage:
        return await self.list_jobs(candidate_id, ListingMode.RECOMMENDED, page=page, limit=limit)

    async def saved(self, candidate_id: str, page: RawInt = None, limit: RawInt = None) -> JobListPage:
        return await self.list_jobs(candidate_id, ListingMode.SAVED, page=page, limit=limit)

    async def applied(self, candidate_id: str, page: RawInt = None, limit: RawInt = None) -> JobListPage:
        return await self.list_jobs(candidate_id, ListingMode.APPLIED, page=page, limit=limit)

    async def search(
        self,
        candidate_id: str,
        mode: Union[ListingMode, str, None],
        search: Optional[str] = None,
        page: RawInt = None,
        limit: RawInt = None,
    ) -> JobListPage:
        """Search within one listing mode."""
        return await self.list_jobs(candidate_id, mode, search=search, page=page, limit=limit)


# Singleton instance
_listing_service: Optional[ListingService] = None


def get_listing_service() -> ListingService:
    """Get the listing service singleton instance."""
    global _listing_service
    if _listing_service is None:
        _listing_service = ListingService()
    return _listing_service
