"""
Shared test fixtures for the jobboard test suite.

Sets environment variables before any jobboard imports to prevent config
failures, then provides factory fixtures for jobs and candidates plus
in-memory async stand-ins for the job, candidate and relation stores.
"""

import os

# === Set environment BEFORE any jobboard imports ===
os.environ.setdefault("APP_ENVIRONMENT", "testing")
os.environ.setdefault("DB_NAME", "jobboard_test")
os.environ.setdefault("LOG_FILE_OUTPUT", "false")

import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Optional

import pytest
from bson import ObjectId

from jobboard.core.candidates import CandidateService
from jobboard.core.dashboard import DashboardService
from jobboard.core.errors import ConflictError
from jobboard.core.jobs import JobService
from jobboard.core.listing import ListingService
from jobboard.core.matching import MatchScorer
from jobboard.core.relations import RelationService
from jobboard.data.models import (
    ApplicationDetails,
    AppliedJob,
    Candidate,
    CandidateUpdate,
    Job,
    JobCreate,
    JobUpdate,
    RelatedJob,
    SavedJob,
    utcnow,
)
from jobboard.utils.constants import ApplicationStatus, CandidateStatus, JobStatus


# ---------------------------------------------------------------------------
# Minimal evaluator for the Mongo filters the services build
# ---------------------------------------------------------------------------


def _matches_value(value: Any, condition: Any) -> bool:
    if isinstance(condition, dict) and any(str(k).startswith("$") for k in condition):
        for op, arg in condition.items():
            if op == "$options":
                continue
            if op == "$regex":
                flags = re.IGNORECASE if "i" in condition.get("$options", "") else 0
                values = value if isinstance(value, list) else [value]
                if not any(v is not None and re.search(arg, str(v), flags) for v in values):
                    return False
            elif op == "$in":
                values = value if isinstance(value, list) else [value]
                if not any(v in arg for v in values):
                    return False
            elif op == "$all":
                values = value if isinstance(value, list) else [value]
                if not all(item in values for item in arg):
                    return False
            elif op == "$lte":
                if value is None or not value <= arg:
                    return False
            elif op == "$gte":
                if value is None or not value >= arg:
                    return False
            else:
                raise NotImplementedError(f"Unsupported operator in fake store: {op}")
        return True
    if isinstance(value, list):
        return condition in value
    return value == condition


def matches_filter(document: dict[str, Any], query: dict[str, Any]) -> bool:
    """Evaluate a Mongo-style filter against a plain dict."""
    for key, condition in query.items():
        if key == "$or":
            if not any(matches_filter(document, clause) for clause in condition):
                return False
        elif key == "$and":
            if not all(matches_filter(document, clause) for clause in condition):
                return False
        elif not _matches_value(document.get(key), condition):
            return False
    return True


# ---------------------------------------------------------------------------
# In-memory stores
# ---------------------------------------------------------------------------


def page_of(
    documents: list[Any], query: dict[str, Any], skip: int, limit: int, sort_by: Optional[str]
) -> tuple[list[Any], int]:
    """Filter, sort newest first with an id tiebreak, and slice like the store."""
    field = sort_by or "created_at"
    matching = [d for d in documents if matches_filter(d.model_dump(), query)]
    matching.sort(key=lambda d: (getattr(d, field), d.id), reverse=True)
    return matching[skip : skip + limit], len(matching)



class FakeJobRepository:
    """Async job store backed by a dict."""

    def __init__(self) -> None:
        self.jobs: dict[ObjectId, Job] = {}
        self.calls: list[str] = []

    def add(self, job: Job) -> Job:
        if job.id is None:
            job.id = ObjectId()
        self.jobs[job.id] = job
        return job

    async def get_by_id_async(self, id_value: Any) -> Optional[Job]:
        self.calls.append("get_by_id_async")
        return self.jobs.get(ObjectId(id_value))

    async def find_active_async(
        self, job_filter: dict[str, Any], skip: int, limit: int, sort_by: str = "created_at"
    ) -> tuple[list[Job], int]:
        self.calls.append("find_active_async")
        matching = [j for j in self.jobs.values() if matches_filter(j.model_dump(), job_filter)]
        matching.sort(key=lambda j: (getattr(j, sort_by), j.id), reverse=True)
        return matching[skip : skip + limit], len(matching)

    async def find_page_async(
        self, job_filter: dict[str, Any], skip: int, limit: int, sort_by: Optional[str] = None
    ) -> tuple[list[Job], int]:
        self.calls.append(f"find_page_async:{sort_by}")
        return page_of(list(self.jobs.values()), job_filter, skip, limit, sort_by)

    async def industry_stats_async(self) -> list[dict[str, Any]]:
        counts: dict[Any, int] = {}
        for job in self.jobs.values():
            counts[job.industry_type] = counts.get(job.industry_type, 0) + 1
        ordered = sorted(counts.items(), key=lambda item: (-item[1], str(item[0])))
        return [{"industry_type": value, "count": count} for value, count in ordered]

    async def facet_counts_async(self) -> dict[str, list[dict[str, Any]]]:
        facets = {}
        for key, field in (("locations", "location"), ("job_types", "job_type"), ("industry_types", "industry_type")):
            counts: dict[Any, int] = {}
            for job in self.jobs.values():
                if job.status == JobStatus.ACTIVE.value:
                    value = getattr(job, field)
                    counts[value] = counts.get(value, 0) + 1
            ordered = sorted(counts.items(), key=lambda item: item[1], reverse=True)
            facets[key] = [{"value": value, "count": count} for value, count in ordered]
        return facets

    async def create_from_schema_async(self, data: JobCreate) -> Job:
        fields = data.model_dump(exclude_none=True)
        fields.pop("posted_by", None)
        return self.add(Job(**fields))

    async def update_from_schema_async(self, id_value: Any, data: JobUpdate) -> Optional[Job]:
        job = self.jobs.get(ObjectId(id_value))
        if job is None:
            return None
        updated = job.model_copy(update=data.to_update())
        self.jobs[job.id] = updated
        return updated

    async def update_status_async(self, id_value: Any, status: JobStatus) -> Optional[Job]:
        job = self.jobs.get(ObjectId(id_value))
        if job is None:
            return None
        updated = job.model_copy(update={"status": JobStatus(status).value})
        self.jobs[job.id] = updated
        return updated


class FakeCandidateRepository:
    """Async candidate store backed by a dict."""

    def __init__(self) -> None:
        self.candidates: dict[ObjectId, Candidate] = {}
        self.calls: list[str] = []

    def add(self, candidate: Candidate) -> Candidate:
        if candidate.id is None:
            candidate.id = ObjectId()
        self.candidates[candidate.id] = candidate
        return candidate

    async def get_by_id_async(self, id_value: Any) -> Optional[Candidate]:
        self.calls.append("get_by_id_async")
        return self.candidates.get(ObjectId(id_value))

    async def update_from_schema_async(self, id_value: Any, data: CandidateUpdate) -> Optional[Candidate]:
        candidate = self.candidates.get(ObjectId(id_value))
        if candidate is None:
            return None
        updated = Candidate.model_validate({**candidate.model_dump(), **data.to_update()})
        self.candidates[candidate.id] = updated
        return updated

    async def update_status_async(self, id_value: Any, status: CandidateStatus) -> Optional[Candidate]:
        candidate = self.candidates.get(ObjectId(id_value))
        if candidate is None:
            return None
        updated = candidate.model_copy(update={"status": CandidateStatus(status).value})
        self.candidates[candidate.id] = updated
        return updated

    async def find_page_async(
        self, query: dict[str, Any], skip: int, limit: int, sort_by: Optional[str] = None
    ) -> tuple[list[Candidate], int]:
        self.calls.append(f"find_page_async:{sort_by}")
        return page_of(list(self.candidates.values()), query, skip, limit, sort_by)


class FakeRelationRepository:
    """
    Async relation store joined against a FakeJobRepository.

    Enforces (candidate_id, job_id) uniqueness the way the unique index does.
    """

    def __init__(
        self,
        model_class: type,
        jobs: FakeJobRepository,
        duplicate_message: str,
        candidates: Optional[FakeCandidateRepository] = None,
    ) -> None:
        self.model_class = model_class
        self.job_store = jobs
        self.candidate_store = candidates
        self.duplicate_message = duplicate_message
        self.rows: list[Any] = []

    def _find(self, candidate_id: Any, job_id: Any) -> Optional[Any]:
        for row in self.rows:
            if row.candidate_id == ObjectId(candidate_id) and row.job_id == ObjectId(job_id):
                return row
        return None

    def add(self, candidate_id: Any, job_id: Any, created_at: Optional[datetime] = None, **fields: Any) -> Any:
        """Seed a row directly, bypassing the uniqueness check."""
        stamp = created_at or utcnow()
        row = self.model_class(
            id=ObjectId(),
            candidate_id=ObjectId(candidate_id),
            job_id=ObjectId(job_id),
            created_at=stamp,
            updated_at=stamp,
            **fields,
        )
        self.rows.append(row)
        return row

    async def create_for_async(self, candidate_id: Any, job_id: Any) -> Any:
        if self._find(candidate_id, job_id) is not None:
            raise ConflictError(self.duplicate_message)
        return self.add(candidate_id, job_id)

    async def delete_for_async(self, candidate_id: Any, job_id: Any) -> bool:
        row = self._find(candidate_id, job_id)
        if row is None:
            return False
        self.rows.remove(row)
        return True

    async def exists_for_async(self, candidate_id: Any, job_id: Any) -> bool:
        return self._find(candidate_id, job_id) is not None

    async def find_by_candidate_async(
        self, candidate_id: Any, job_filter: dict[str, Any], skip: int, limit: int
    ) -> tuple[list[RelatedJob], int]:
        rows = [r for r in self.rows if r.candidate_id == ObjectId(candidate_id)]
        rows.sort(key=lambda r: (r.created_at, r.id), reverse=True)
        joined = []
        for row in rows:
            job = self.job_store.jobs.get(row.job_id)
            if job is not None and matches_filter(job.model_dump(), job_filter):
                joined.append(RelatedJob(relation=row, job=job))
        return joined[skip : skip + limit], len(joined)

    async def count_created_between_async(self, candidate_id: Any, start: datetime, end: datetime) -> int:
        return sum(
            1 for r in self.rows if r.candidate_id == ObjectId(candidate_id) and start <= r.created_at <= end
        )

    async def update_status_async(self, candidate_id: Any, job_id: Any, status: ApplicationStatus) -> Optional[Any]:
        row = self._find(candidate_id, job_id)
        if row is None:
            return None
        row.status = ApplicationStatus(status).value
        return row

    async def find_applications_async(self, skip: int, limit: int) -> tuple[list[ApplicationDetails], int]:
        rows = sorted(self.rows, key=lambda r: (r.created_at, r.id), reverse=True)
        details = [
            ApplicationDetails(
                application=row,
                candidate=self.candidate_store.candidates.get(row.candidate_id) if self.candidate_store else None,
                job=self.job_store.jobs.get(row.job_id),
            )
            for row in rows[skip : skip + limit]
        ]
        return details, len(rows)


@dataclass
class Stores:
    """The in-memory stores plus services wired to them."""

    jobs: FakeJobRepository
    candidates: FakeCandidateRepository
    saved: FakeRelationRepository
    applied: FakeRelationRepository

    def listing_service(self) -> ListingService:
        return ListingService(
            job_repository=self.jobs,
            candidate_repository=self.candidates,
            saved_job_repository=self.saved,
            applied_job_repository=self.applied,
            scorer=MatchScorer(),
        )

    def relation_service(self) -> RelationService:
        return RelationService(
            job_repository=self.jobs,
            candidate_repository=self.candidates,
            saved_job_repository=self.saved,
            applied_job_repository=self.applied,
        )

    def dashboard_service(self) -> DashboardService:
        return DashboardService(
            candidate_repository=self.candidates,
            saved_job_repository=self.saved,
            applied_job_repository=self.applied,
        )

    def job_service(self) -> JobService:
        return JobService(job_repository=self.jobs)

    def candidate_service(self) -> CandidateService:
        return CandidateService(candidate_repository=self.candidates)


@pytest.fixture
def stores() -> Stores:
    jobs = FakeJobRepository()
    candidates = FakeCandidateRepository()
    return Stores(
        jobs=jobs,
        candidates=candidates,
        saved=FakeRelationRepository(SavedJob, jobs, "You have already saved this job"),
        applied=FakeRelationRepository(AppliedJob, jobs, "You have already applied for this job", candidates),
    )


# ---------------------------------------------------------------------------
# Factory fixtures for documents
# ---------------------------------------------------------------------------


@pytest.fixture
def make_job():
    """Factory that returns a callable to build Job documents."""
    counter = {"n": 0}

    def _factory(
        title: str = "Backend Engineer",
        company_name: str = "Acme",
        location: str = "Remote",
        key_skills: Optional[list[str]] = None,
        min_exp: Optional[int] = 2,
        max_exp: Optional[int] = 5,
        salary_range: str = "500000-800000",
        job_type: Optional[str] = "Full-time",
        status: JobStatus = JobStatus.ACTIVE,
        created_at: Optional[datetime] = None,
        **kwargs: Any,
    ) -> Job:
        # Later jobs are newer unless told otherwise
        counter["n"] += 1
        stamp = created_at or datetime(2024, 1, 1) + timedelta(minutes=counter["n"])
        return Job(
            id=ObjectId(),
            title=title,
            company_name=company_name,
            location=location,
            key_skills=key_skills if key_skills is not None else ["java", "sql"],
            min_exp=min_exp,
            max_exp=max_exp,
            salary_range=salary_range,
            job_type=job_type,
            status=status,
            posted_at=stamp,
            created_at=stamp,
            updated_at=stamp,
            **kwargs,
        )

    return _factory


@pytest.fixture
def make_candidate():
    """Factory that returns a callable to build Candidate documents."""

    def _factory(
        full_name: str = "Asha Rao",
        skills: Optional[list[str]] = None,
        preferred_location: Optional[str] = "Delhi",
        total_experience: Optional[str] = "3",
        expected_salary: Optional[str] = "6",
        preferred_job_type: Optional[str] = "Full-time",
        **kwargs: Any,
    ) -> Candidate:
        return Candidate(
            id=ObjectId(),
            full_name=full_name,
            skills=skills if skills is not None else ["Java", "Python"],
            preferred_location=preferred_location,
            total_experience=total_experience,
            expected_salary=expected_salary,
            preferred_job_type=preferred_job_type,
            **kwargs,
        )

    return _factory


@pytest.fixture
def scorer() -> MatchScorer:
    return MatchScorer()
