"""
Output shapes for job, candidate and application listings.

Listing items and page envelopes are pydantic models serialized with
camelCase aliases, e.g. ``matchScore`` and ``totalJobs``.
"""

from datetime import datetime
from typing import Any, Optional

import humanize
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from jobboard.core.matching import MatchResult
from jobboard.data.models import ApplicationDetails, Job
from jobboard.data.models.base import BaseDocument, utcnow
from jobboard.utils.constants import ApplicationStatus


class OutputModel(BaseModel):
    """Base for response bodies: camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_response(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class JobSummary(OutputModel):
    """One job in a candidate listing."""

    id: str
    title: str
    company: str
    location: str
    salary: str
    posted: str
    tags: list[str] = Field(default_factory=list)
    match_score: int
    match_count: Optional[int] = None
    saved_at: Optional[str] = None
    applied_at: Optional[str] = None


class PageEnvelope(OutputModel):
    """Pagination counters shared by every paged response."""

    total_jobs: int
    current_page: int
    total_pages: int


class JobListPage(PageEnvelope):
    """A page of scored listing items."""

    jobs: list[JobSummary] = Field(default_factory=list)


class JobBrowsePage(PageEnvelope):
    """A page of full job postings from the browse endpoint."""

    jobs: list[dict[str, Any]] = Field(default_factory=list)


class JobPanelChunk(OutputModel):
    """One infinite-scroll chunk of an admin job panel."""

    jobs: list[dict[str, Any]] = Field(default_factory=list)
    total_jobs: int


class CandidatePagination(OutputModel):
    current_page: int
    total_pages: int
    total_candidates: int
    candidates_per_page: int


class CandidatePage(OutputModel):
    """A page of the recruiter candidate list."""

    candidates: list[dict[str, Any]] = Field(default_factory=list)
    pagination: CandidatePagination


class ApplicationView(OutputModel):
    """One application as shown on the admin applications table."""

    application_id: str
    status: str
    applied_at: str
    updated_at: str
    candidate: Optional[dict[str, Any]] = None
    job: Optional[dict[str, Any]] = None


class ApplicationPage(OutputModel):
    total_applications: int
    total_pages: int
    current_page: int
    count: int
    applications: list[ApplicationView] = Field(default_factory=list)


def format_local_date(moment: Optional[datetime]) -> str:
    """Short date as M/D/YYYY, e.g. ``3/7/2024``."""
    if moment is None:
        return ""
    return f"{moment.month}/{moment.day}/{moment.year}"


def format_long_date(moment: Optional[datetime]) -> str:
    """Long date as D Month YYYY, e.g. ``7 March 2024``."""
    if moment is None:
        return ""
    return f"{moment.day} {moment.strftime('%B')} {moment.year}"


def humanize_since(moment: Optional[datetime], now: Optional[datetime] = None) -> str:
    """
    Relative time from ``moment`` to ``now``, e.g. "3 days ago".

    Moments later than ``now`` render as "now".
    """
    if moment is None:
        return ""
    now = now or utcnow()
    return humanize.naturaltime(min(moment, now), when=now)


def summarize_job(
    job: Job,
    result: MatchResult,
    *,
    include_match_count: bool = False,
    saved_at: Optional[datetime] = None,
    applied_at: Optional[datetime] = None,
) -> JobSummary:
    """Build the listing item for a scored job."""
    return JobSummary(
        id=str(job.id),
        title=job.title,
        company=job.company_name,
        location=job.location,
        salary=job.salary_range,
        posted=format_local_date(job.posted_at),
        tags=list(job.key_skills),
        match_score=result.score,
        match_count=result.match_count if include_match_count else None,
        saved_at=format_local_date(saved_at) if saved_at else None,
        applied_at=format_local_date(applied_at) if applied_at else None,
    )


def camel_keys(data: Any) -> Any:
    """Recursively rename dict keys from snake_case to camelCase."""
    if isinstance(data, dict):
        return {to_camel(str(key)): camel_keys(value) for key, value in data.items()}
    if isinstance(data, list):
        return [camel_keys(item) for item in data]
    return data


def public_document(document: BaseDocument) -> dict[str, Any]:
    """JSON-ready document with a string ``id`` and camelCase keys."""
    return camel_keys(document.model_dump_public())


def public_job(job: Job, now: Optional[datetime] = None) -> dict[str, Any]:
    """Full posting with camelCase keys and a relative ``posted`` time."""
    body = public_document(job)
    body["posted"] = humanize_since(job.created_at, now)
    return body


# Candidate fields shown next to an application
APPLICANT_FIELDS = ("full_name", "email", "phone", "resume_url", "total_experience", "city")


def summarize_application(details: ApplicationDetails) -> ApplicationView:
    """Build the applications-table row for a joined application."""
    application = details.application
    candidate = None
    if details.candidate is not None:
        candidate = {"id": str(details.candidate.id)}
        candidate.update(camel_keys({name: getattr(details.candidate, name) for name in APPLICANT_FIELDS}))
    job = None
    if details.job is not None:
        job = public_document(details.job)
        job["postedAt"] = format_long_date(details.job.posted_at)
    return ApplicationView(
        application_id=str(application.id),
        status=ApplicationStatus(application.status).value,
        applied_at=format_long_date(application.created_at),
        updated_at=format_long_date(application.updated_at),
        candidate=candidate,
        job=job,
    )
