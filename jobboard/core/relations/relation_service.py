"""
Saved-job and applied-job actions, plus the admin applications listing.

Uniqueness of (candidate, job) pairs is enforced by the store's unique
indexes. Save and apply insert directly and let a duplicate-key error
surface as ``ConflictError``; there is no lookup before the insert.
"""

import math
from typing import Optional

from bson import ObjectId

from jobboard.core.errors import NotFoundError
from jobboard.core.listing.formatting import ApplicationPage, summarize_application
from jobboard.core.listing.query_builder import RawInt, parse_page_window, validate_object_id
from jobboard.data.models import AppliedJob, SavedJob
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
from jobboard.utils.constants import APPLICATIONS_PAGE_SIZE, ApplicationStatus, AuditAction
from jobboard.utils.logger import LoggerMixin, audit_log


class RelationService(LoggerMixin):
    """Save, unsave and apply actions plus their status checks."""

    def __init__(
        self,
        job_repository: Optional[JobRepository] = None,
        candidate_repository: Optional[CandidateRepository] = None,
        saved_job_repository: Optional[SavedJobRepository] = None,
        applied_job_repository: Optional[AppliedJobRepository] = None,
    ):
        self._jobs = job_repository or get_job_repository()
        self._candidates = candidate_repository or get_candidate_repository()
        self._saved = saved_job_repository or get_saved_job_repository()
        self._applied = applied_job_repository or get_applied_job_repository()

    @staticmethod
    def _ids(candidate_id: str, job_id: str) -> tuple[ObjectId, ObjectId]:
        return validate_object_id(candidate_id, "candidateId"), validate_object_id(job_id, "jobId")

    async def _require_pair(self, candidate_id: ObjectId, job_id: ObjectId) -> None:
        """Both the candidate and the job must exist."""
        candidate = await self._candidates.get_by_id_async(candidate_id)
        job = await self._jobs.get_by_id_async(job_id)
        if candidate is None or job is None:
            raise NotFoundError(
                "Candidate or Job not found",
                details={"candidateId": str(candidate_id), "jobId": str(job_id)},
            )

    # -------------------------------------------------------------------------
    # Saved jobs
    # -------------------------------------------------------------------------

    async def save_job(self, candidate_id: str, job_id: str) -> SavedJob:
        """
        Bookmark a job.

        Raises:
            NotFoundError: Candidate or job missing
            ConflictError: Job already saved
        """
        candidate_oid, job_oid = self._ids(candidate_id, job_id)
        await self._require_pair(candidate_oid, job_oid)

        saved = await self._saved.create_for_async(candidate_oid, job_oid)
        audit_log(
            AuditAction.JOB_SAVED.value,
            {"candidate_id": str(candidate_oid), "job_id": str(job_oid)},
            audit_type="ACCESS",
        )
        return saved

    async def unsave_job(self, candidate_id: str, job_id: str) -> None:
        """
        Remove a bookmark.

        Raises:
            NotFoundError: Candidate, job or bookmark missing
        """
        candidate_oid, job_oid = self._ids(candidate_id, job_id)
        await self._require_pair(candidate_oid, job_oid)

        if not await self._saved.delete_for_async(candidate_oid, job_oid):
            raise NotFoundError("Job not found in saved jobs")
        audit_log(
            AuditAction.JOB_UNSAVED.value,
            {"candidate_id": str(candidate_oid), "job_id": str(job_oid)},
            audit_type="ACCESS",
        )

    async def is_saved(self, candidate_id: str, job_id: str) -> bool:
        candidate_oid, job_oid = self._ids(candidate_id, job_id)
        return await self._saved.exists_for_async(candidate_oid, job_oid)

    # -------------------------------------------------------------------------
    # Applications
    # -------------------------------------------------------------------------

    async def apply_job(self, candidate_id: str, job_id: str) -> AppliedJob:
        """
        Apply to a job. New applications start in status ``new``.

        Raises:
            NotFoundError: Candidate or job missing
            ConflictError: Already applied
        """
        candidate_oid, job_oid = self._ids(candidate_id, job_id)
        await self._require_pair(candidate_oid, job_oid)

        applied = await self._applied.create_for_async(candidate_oid, job_oid)
        audit_log(
            AuditAction.JOB_APPLIED.value,
            {"candidate_id": str(candidate_oid), "job_id": str(job_oid)},
            audit_type="ACCESS",
        )
        return applied

    async def is_applied(self, candidate_id: str, job_id: str) -> bool:
        candidate_oid, job_oid = self._ids(candidate_id, job_id)
        return await self._applied.exists_for_async(candidate_oid, job_oid)

    async def update_application_status(
        self,
        candidate_id: str,
        job_id: str,
        status: ApplicationStatus,
    ) -> AppliedJob:
        """
        Move an application to a new status, overwriting the old one.

        Raises:
            NotFoundError: No application for this pair
        """
        candidate_oid, job_oid = self._ids(candidate_id, job_id)
        status = ApplicationStatus(status)

        updated = await self._applied.update_status_async(candidate_oid, job_oid, status)
        if updated is None:
            raise NotFoundError("Application not found")

        audit_log(
            AuditAction.APPLICATION_STATUS_CHANGED.value,
            {
                "candidate_id": str(candidate_oid),
                "job_id": str(job_oid),
                "status": status.value,
            },
        )
        return updated

    async def applications(self, page: RawInt = None, limit: RawInt = None) -> ApplicationPage:
        """
        Page through every application, newest first, with the applicant
        and the job joined in.
        """
        page_number, page_size = parse_page_window(page, limit, APPLICATIONS_PAGE_SIZE)
        details, total = await self._applied.find_applications_async((page_number - 1) * page_size, page_size)
        rows = [summarize_application(item) for item in details]
        return ApplicationPage(
            total_applications=total,
            total_pages=math.ceil(total / page_size),
            current_page=page_number,
            count=len(rows),
            applications=rows,
        )


# Singleton instance
_relation_service: Optional[RelationService] = None


def get_relation_service() -> RelationService:
    """Get the relation service singleton instance."""
    global _relation_service
    if _relation_service is None:
        _relation_service = RelationService()
    return _relation_service
