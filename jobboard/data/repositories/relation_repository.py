"""
Saved-job and applied-job repositories.

Relation rows are unique per (candidate_id, job_id). Inserts rely on the
unique index and report duplicates as ``ConflictError`` instead of
checking for an existing row first.
"""

from datetime import datetime
from typing import Any, Generic, Optional, TypeVar

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from jobboard.core.errors import ConflictError
from jobboard.data.database import (
    APPLIED_JOBS_COLLECTION,
    CANDIDATES_COLLECTION,
    JOBS_COLLECTION,
    SAVED_JOBS_COLLECTION,
)
from jobboard.data.models.base import utcnow
from jobboard.data.models.candidate import Candidate
from jobboard.data.models.job import Job
from jobboard.data.models.relation import ApplicationDetails, AppliedJob, JobRelation, RelatedJob, SavedJob
from jobboard.utils.constants import ApplicationStatus
from jobboard.utils.logger import get_logger

from .base import BaseRepository, translate_store_errors

logger = get_logger(__name__)

RelationT = TypeVar("RelationT", bound=JobRelation)


def build_joined_jobs_pipeline(
    candidate_id: ObjectId,
    job_filter: dict[str, Any],
    skip: int,
    limit: int,
) -> list[dict[str, Any]]:
    """
    Aggregation joining a candidate's relation rows to matching jobs.

    Rows come back newest first; rows whose job fails ``job_filter`` are
    dropped before paging so the total counts only visible jobs.
    """
    return [
        {"$match": {"candidate_id": candidate_id}},
        {"$sort": {"created_at": -1, "_id": -1}},
        {
            "$lookup": {
                "from": JOBS_COLLECTION,
                "let": {"job_id": "$job_id"},
                "pipeline": [
                    {"$match": {"$and": [{"$expr": {"$eq": ["$_id", "$$job_id"]}}, job_filter]}},
                ],
                "as": "job",
            }
        },
        {"$unwind": "$job"},
        {
            "$facet": {
                "rows": [{"$skip": skip}, {"$limit": limit}],
                "total": [{"$count": "count"}],
            }
        },
    ]


def build_applications_pipeline(skip: int, limit: int) -> list[dict[str, Any]]:
    """
    Aggregation paging through every application, newest first.

    Each row carries its candidate and job; either is null when the
    referenced document no longer exists.
    """
    return [
        {"$sort": {"created_at": -1, "_id": -1}},
        {
            "$facet": {
                "rows": [
                    {"$skip": skip},
                    {"$limit": limit},
                    {
                        "$lookup": {
                            "from": CANDIDATES_COLLECTION,
                            "localField": "candidate_id",
                            "foreignField": "_id",
                            "as": "candidate",
                        }
                    },
                    {
                        "$lookup": {
                            "from": JOBS_COLLECTION,
                            "localField": "job_id",
                            "foreignField": "_id",
                            "as": "job",
                        }
                    },
                ],
                "total": [{"$count": "count"}],
            }
        },
    ]


class RelationRepository(BaseRepository[RelationT], Generic[RelationT]):
    """Common operations for candidate-job relation collections."""

    duplicate_message: str = "Relation already exists"

    def _pair_query(self, candidate_id: str | ObjectId, job_id: str | ObjectId) -> dict[str, Any]:
        return {
            "candidate_id": self._to_object_id(candidate_id, "candidateId"),
            "job_id": self._to_object_id(job_id, "jobId"),
        }

    async def exists_for_async(self, candidate_id: str | ObjectId, job_id: str | ObjectId) -> bool:
        """Check whether the candidate has this relation to the job."""
        return await self.exists_async(self._pair_query(candidate_id, job_id))

    async def get_for_async(
        self, candidate_id: str | ObjectId, job_id: str | ObjectId
    ) -> Optional[RelationT]:
        """Fetch the relation row for a candidate-job pair."""
        return await self.find_one_async(self._pair_query(candidate_id, job_id))

    @translate_store_errors
    async def create_for_async(self, candidate_id: str | ObjectId, job_id: str | ObjectId) -> RelationT:
        """
        Insert a relation row.

        Raises:
            ConflictError: the pair already exists.
        """
        relation = self.model_class(**self._pair_query(candidate_id, job_id))
        try:
            return await self.create_async(relation)
        except DuplicateKeyError as e:
            logger.info(f"Duplicate {self.collection_name} insert for candidate {candidate_id}, job {job_id}")
            raise ConflictError(self.duplicate_message) from e

    async def delete_for_async(self, candidate_id: str | ObjectId, job_id: str | ObjectId) -> bool:
        """Delete the relation row for a pair. Returns False if there was none."""
        return await self.delete_one_async(self._pair_query(candidate_id, job_id))

    @translate_store_errors
    async def find_by_candidate_async(
        self,
        candidate_id: str | ObjectId,
        job_filter: dict[str, Any],
        skip: int,
        limit: int,
    ) -> tuple[list[RelatedJob], int]:
        """
        Read one page of the candidate's relations joined to their jobs.

        Returns the page (newest relation first) and the total number of
        relations whose job matches ``job_filter``.
        """
        pipeline = build_joined_jobs_pipeline(
            self._to_object_id(candidate_id, "candidateId"), job_filter, skip, limit
        )
        results = await self.aggregate_async(pipeline)
        if not results:
            return [], 0

        facet = results[0]
        total = facet["total"][0]["count"] if facet.get("total") else 0
        related = []
        for row in facet.get("rows", []):
            job = Job.model_validate(row.pop("job"))
            related.append(RelatedJob(relation=self._to_model(row), job=job))
        return related, total

    async def count_created_between_async(
        self,
        candidate_id: str | ObjectId,
        start: datetime,
        end: datetime,
    ) -> int:
        """Count the candidate's relations created in ``[start, end]``."""
        return await self.count_async(
            {
                "candidate_id": self._to_object_id(candidate_id, "candidateId"),
                "created_at": {"$gte": start, "$lte": end},
            }
        )


class SavedJobRepository(RelationRepository[SavedJob]):
    """Repository for saved (bookmarked) jobs."""

    duplicate_message = "You have already saved this job"

    @property
    def collection_name(self) -> str:
        return SAVED_JOBS_COLLECTION

    @property
    def model_class(self) -> type[SavedJob]:
        return SavedJob


class AppliedJobRepository(RelationRepository[AppliedJob]):
    """Repository for job applications."""

    duplicate_message = "You have already applied for this job"

    @property
    def collection_name(self) -> str:
        return APPLIED_JOBS_COLLECTION

    @property
    def model_class(self) -> type[AppliedJob]:
        return AppliedJob

    @translate_store_errors
    async def update_status_async(
        self,
        candidate_id: str | ObjectId,
        job_id: str | ObjectId,
        status: ApplicationStatus,
    ) -> Optional[AppliedJob]:
        """Overwrite the application status. Returns None if no application exists."""
        collection = self._get_async_collection()
        document = await collection.find_one_and_update(
            self._pair_query(candidate_id, job_id),
            {"$set": {"status": ApplicationStatus(status).value, "updated_at": utcnow()}},
            return_document=ReturnDocument.AFTER,
        )
        return self._to_model(document)

    @translate_store_errors
    async def find_applications_async(self, skip: int, limit: int) -> tuple[list[ApplicationDetails], int]:
        """Read one page of all applications with their candidates and jobs."""
        results = await self.aggregate_async(build_applications_pipeline(skip, limit))
        if not results:
            return [], 0

        facet = results[0]
        total = facet["total"][0]["count"] if facet.get("total") else 0
        details = []
        for row in facet.get("rows", []):
            candidates = row.pop("candidate", [])
            jobs = row.pop("job", [])
            details.append(
                ApplicationDetails(
                    application=self._to_model(row),
                    candidate=Candidate.model_validate(candidates[0]) if candidates else None,
                    job=Job.model_validate(jobs[0]) if jobs else None,
                )
            )
        return details, total


# Singleton instances
_saved_job_repository: Optional[SavedJobRepository] = None
_applied_job_repository: Optional[AppliedJobRepository] = None


def get_saved_job_repository() -> SavedJobRepository:
    """Get the saved-job repository singleton instance."""
    global _saved_job_repository
    if _saved_job_repository is None:
        _saved_job_repository = SavedJobRepository()
    return _saved_job_repository


def get_applied_job_repository() -> AppliedJobRepository:
    """Get the applied-job repository singleton instance."""
    global _applied_job_repository
    if _applied_job_repository is None:
        _applied_job_repository = AppliedJobRepository()
    return _applied_job_repository
