"""Candidate profile reads and updates, and the recruiter candidate list."""

import math
from typing import Optional

from jobboard.core.errors import NotFoundError
from jobboard.core.listing.formatting import CandidatePage, CandidatePagination, public_document
from jobboard.core.listing.query_builder import (
    CandidateBrowseFilters,
    RawInt,
    build_candidate_filter,
    parse_page_window,
    validate_object_id,
)
from jobboard.data.models import Candidate, CandidateUpdate
from jobboard.data.repositories import CandidateRepository, get_candidate_repository
from jobboard.utils.constants import CANDIDATE_PAGE_SIZE, AuditAction, CandidateStatus
from jobboard.utils.logger import LoggerMixin, audit_log


class CandidateService(LoggerMixin):
    """Operations on candidate profiles."""

    def __init__(self, candidate_repository: Optional[CandidateRepository] = None):
        self._candidates = candidate_repository or get_candidate_repository()

    async def get(self, candidate_id: str) -> Candidate:
        candidate = await self._candidates.get_by_id_async(validate_object_id(candidate_id, "candidateId"))
        if candidate is None:
            raise NotFoundError("Candidate not found", details=candidate_id)
        return candidate

    async def browse(
        self,
        filters: Optional[CandidateBrowseFilters] = None,
        page: RawInt = None,
        limit: RawInt = None,
    ) -> CandidatePage:
        """
        Page through candidates matching the recruiter filters.

        Active candidates come newest first; In-Active ones most recently
        changed first.
        """
        filters = filters or CandidateBrowseFilters()
        page_number, page_size = parse_page_window(page, limit, CANDIDATE_PAGE_SIZE)
        sort_by = "created_at" if filters.status == CandidateStatus.ACTIVE else "updated_at"

        candidates, total = await self._candidates.find_page_async(
            build_candidate_filter(filters),
            (page_number - 1) * page_size,
            page_size,
            sort_by=sort_by,
        )
        return CandidatePage(
            candidates=[public_document(candidate) for candidate in candidates],
            pagination=CandidatePagination(
                current_page=page_number,
                total_pages=math.ceil(total / page_size),
                total_candidates=total,
                candidates_per_page=page_size,
            ),
        )

    async def update_profile(self, candidate_id: str, data: CandidateUpdate) -> Candidate:
        """
        Apply a partial profile update.

        Only fields present in the request change; email is not editable
        through this path.
        """
        candidate_oid = validate_object_id(candidate_id, "candidateId")
        candidate = await self._candidates.update_from_schema_async(candidate_oid, data)
        if candidate is None:
            raise NotFoundError("Candidate not found", details=candidate_id)

        audit_log(
            AuditAction.CANDIDATE_UPDATED.value,
            {"candidate_id": str(candidate_oid), "fields": sorted(data.to_update())},
        )
        return candidate

    async def set_status(self, candidate_id: str, status: CandidateStatus) -> Candidate:
        """Activate or deactivate a candidate account."""
        candidate_oid = validate_object_id(candidate_id, "candidateId")
        status = CandidateStatus(status)
        candidate = await self._candidates.update_status_async(candidate_oid, status)
        if candidate is None:
            raise NotFoundError("Candidate not found", details=candidate_id)

        audit_log(
            AuditAction.CANDIDATE_STATUS_CHANGED.value,
            {"candidate_id": str(candidate_oid), "status": status.value},
        )
        return candidate


# Singleton instance
_candidate_service: Optional[CandidateService] = None


def get_candidate_service() -> CandidateService:
    """Get the candidate service singleton instance."""
    global _candidate_service
    if _candidate_service is None:
        _candidate_service = CandidateService()
    return _candidate_service
