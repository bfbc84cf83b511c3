"""
Job repository.

Provides data access operations for job posting documents, including
paged active-job reads for listings and facet counts for filters.
"""

from typing import Any, Optional

from bson import ObjectId

from jobboard.data.database import JOBS_COLLECTION
from jobboard.data.models.job import Job, JobCreate, JobUpdate
from jobboard.utils.constants import JobStatus
from jobboard.utils.logger import get_logger

from .base import BaseRepository, translate_store_errors

logger = get_logger(__name__)

# Job fields that get a distinct-value facet on the browse page
FACET_FIELDS: dict[str, str] = {
    "locations": "location",
    "job_types": "job_type",
    "industry_types": "industry_type",
}


class JobRepository(BaseRepository[Job]):
    """Repository for job posting document operations."""

    @property
    def collection_name(self) -> str:
        return JOBS_COLLECTION

    @property
    def model_class(self) -> type[Job]:
        return Job

    # -------------------------------------------------------------------------
    # Create / Update Operations
    # -------------------------------------------------------------------------

    async def create_from_schema_async(self, data: JobCreate) -> Job:
        """Create an active job from a create schema."""
        fields = data.model_dump(exclude_none=True)
        posted_by = fields.pop("posted_by", None)
        job = Job(**fields, posted_by=self._to_object_id(posted_by, "postedBy") if posted_by else None)
        return await self.create_async(job)

    async def update_from_schema_async(
        self, id_value: str | ObjectId, data: JobUpdate
    ) -> Optional[Job]:
        """Update a job from an update schema."""
        update_data = data.to_update()
        if not update_data:
            return await self.get_by_id_async(id_value)
        return await self.update_async(id_value, update_data)

    async def update_status_async(
        self, id_value: str | ObjectId, status: JobStatus
    ) -> Optional[Job]:
        """Update job status."""
        return await self.update_async(id_value, {"status": JobStatus(status).value})

    # -------------------------------------------------------------------------
    # Query Operations
    # -------------------------------------------------------------------------

    def get_by_status(
        self,
        status: JobStatus,
        skip: int = 0,
        limit: int = 100,
    ) -> list[Job]:
        """Get jobs by status, newest first."""
        return self.find({"status": JobStatus(status).value}, skip=skip, limit=limit)

    @translate_store_errors
    async def find_active_async(
        self,
        job_filter: dict[str, Any],
        skip: int,
        limit: int,
        sort_by: str = "created_at",
    ) -> tuple[list[Job], int]:
        """
        Read one page of jobs matching ``job_filter``.

        Returns the page and the total number of matching jobs. The filter
        is expected to pin ``status`` to Active.
        """
        return await self.find_page_async(job_filter, skip, limit, sort_by=sort_by)

    @translate_store_errors
    async def facet_counts_async(self) -> dict[str, list[dict[str, Any]]]:
        """Count active jobs per location, job type and industry, largest first."""
        facets: dict[str, list[dict[str, Any]]] = {}
        for key, field in FACET_FIELDS.items():
            rows = await self.aggregate_async(
                [
                    {"$match": {"status": JobStatus.ACTIVE.value}},
                    {"$group": {"_id": f"${field}", "count": {"$sum": 1}}},
                    {"$sort": {"count": -1}},
                ]
            )
            facets[key] = [{"value": row["_id"], "count": row["count"]} for row in rows]
        return facets

    @translate_store_errors
    async def industry_stats_async(self) -> list[dict[str, Any]]:
        """Count postings of every status per industry, largest first."""
        return await self.aggregate_async(
            [
                {"$group": {"_id": "$industry_type", "count": {"$sum": 1}}},
                {"$project": {"_id": 0, "industry_type": "$_id", "count": 1}},
                {"$sort": {"count": -1, "industry_type": 1}},
            ]
        )


# Singleton instance
_job_repository: Optional[JobRepository] = None


def get_job_repository() -> JobRepository:
    """Get the job repository singleton instance."""
    global _job_repository
    if _job_repository is None:
        _job_repository = JobRepository()
    return _job_repository
