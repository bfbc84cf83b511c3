"""
Job posting management.

Public browsing with query-string filters and filter facets, the admin
panels and industry counts, and the create/update/status operations used
by employers and admins.
"""

import math
from typing import Any, Optional

from jobboard.core.errors import NotFoundError
from jobboard.core.listing.formatting import JobBrowsePage, JobPanelChunk, public_job
from jobboard.core.listing.query_builder import (
    JobBrowseFilters,
    RawInt,
    build_browse_filter,
    build_status_filter,
    parse_offset_window,
    parse_page_window,
    validate_object_id,
)
from jobboard.data.models import Job, JobCreate, JobUpdate
from jobboard.data.models.base import utcnow
from jobboard.data.repositories import JobRepository, get_job_repository
from jobboard.utils.constants import ADMIN_PAGE_SIZE, AuditAction, JobStatus
from jobboard.utils.logger import LoggerMixin, audit_log

from .text_format import capitalize_sentence_case, capitalize_title

# Fields normalized on create
TITLE_CASE_FIELDS = ("title", "company_name", "location", "job_type", "industry_type")
SENTENCE_CASE_FIELDS = ("description", "company_description")


class JobService(LoggerMixin):
    """Operations on job postings."""

    def __init__(self, job_repository: Optional[JobRepository] = None):
        self._jobs = job_repository or get_job_repository()

    async def browse(
        self,
        filters: Optional[JobBrowseFilters] = None,
        page: RawInt = None,
        limit: RawInt = None,
    ) -> JobBrowsePage:
        """
        Page through active jobs matching the browse filters.

        Most recently updated postings come first; ``posted`` is relative
        ("3 days ago").
        """
        page_number, page_size = parse_page_window(page, limit)
        job_filter = build_browse_filter(filters or JobBrowseFilters())

        jobs, total = await self._jobs.find_active_async(
            job_filter,
            (page_number - 1) * page_size,
            page_size,
            sort_by="updated_at",
        )
        now = utcnow()
        return JobBrowsePage(
            jobs=[public_job(job, now) for job in jobs],
            total_jobs=total,
            current_page=page_number,
            total_pages=math.ceil(total / page_size),
        )

    async def filter_options(self) -> dict[str, list[dict[str, Any]]]:
        """Active-job counts by location, job type and industry."""
        return await self._jobs.facet_counts_async()

    async def admin_panel(
        self,
        status: JobStatus | str = JobStatus.ACTIVE,
        offset: RawInt = None,
        limit: RawInt = None,
    ) -> JobPanelChunk:
        """
        One infinite-scroll chunk of the admin job panel for ``status``.

        Active postings come newest first; In-Active ones most recently
        changed first.
        """
        job_filter = build_status_filter(status)
        start, size = parse_offset_window(offset, limit, ADMIN_PAGE_SIZE)
        sort_by = "created_at" if job_filter["status"] == JobStatus.ACTIVE.value else "updated_at"

        jobs, total = await self._jobs.find_page_async(job_filter, start, size, sort_by=sort_by)
        now = utcnow()
        return JobPanelChunk(jobs=[public_job(job, now) for job in jobs], total_jobs=total)

    async def industry_stats(self) -> list[dict[str, Any]]:
        """Posting counts per industry across every status, largest first."""
        return await self._jobs.industry_stats_async()

    async def get(self, job_id: str) -> Job:
        job = await self._jobs.get_by_id_async(validate_object_id(job_id, "jobId"))
        if job is None:
            raise NotFoundError("Job not found", details=job_id)
        return job

    async def create(self, data: JobCreate) -> Job:
        """Create an active posting with normalized casing."""
        changes: dict[str, Any] = {}
        for name in TITLE_CASE_FIELDS:
            changes[name] = capitalize_title(getattr(data, name))
        for name in SENTENCE_CASE_FIELDS:
            changes[name] = capitalize_sentence_case(getattr(data, name))
        if data.posted_by:
            validate_object_id(data.posted_by, "postedBy")

        job = await self._jobs.create_from_schema_async(data.model_copy(update=changes))
        audit_log(
            AuditAction.JOB_CREATED.value,
            {"job_id": str(job.id), "title": job.title, "company_name": job.company_name},
        )
        return job

    async def update(self, job_id: str, data: JobUpdate) -> Job:
        """Apply a partial update to a posting."""
        job_oid = validate_object_id(job_id, "jobId")
        job = await self._jobs.update_from_schema_async(job_oid, data)
        if job is None:
            raise NotFoundError("Job not found", details=job_id)
        self.logger.info(f"Updated job {job_oid}: {sorted(data.to_update())}")
        return job

    async def set_status(self, job_id: str, status: JobStatus) -> Job:
        """Activate or deactivate a posting."""
        job_oid = validate_object_id(job_id, "jobId")
        status = JobStatus(status)
        job = await self._jobs.update_status_async(job_oid, status)
        if job is None:
            raise NotFoundError("Job not found", details=job_id)

        audit_log(
            AuditAction.JOB_STATUS_CHANGED.value,
            {"job_id": str(job_oid), "status": status.value},
        )
        return job

    async def deactivate(self, job_id: str) -> Job:
        """Soft delete: the posting stays stored but leaves every listing."""
        return await self.set_status(job_id, JobStatus.INACTIVE)


# Singleton instance
_job_service: Optional[JobService] = None


def get_job_service() -> JobService:
    """Get the job service singleton instance."""
    global _job_service
    if _job_service is None:
        _job_service = JobService()
    return _job_service
