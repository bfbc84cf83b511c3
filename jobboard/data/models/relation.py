"""
Candidate-job relation models.

Saved and applied jobs are join documents keyed by (candidate_id, job_id).
The pair is unique per collection; see ``DatabaseManager.ensure_indexes``.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from jobboard.utils.constants import ApplicationStatus

from .base import BaseDocument, PyObjectId, RequestModel
from .candidate import Candidate
from .job import Job


class JobRelation(BaseDocument):
    """Common fields of a candidate-job relation row."""

    candidate_id: PyObjectId
    job_id: PyObjectId


class SavedJob(JobRelation):
    """A job bookmarked by a candidate."""

    class Settings:
        name = "saved_jobs"


class AppliedJob(JobRelation):
    """A job application. Status changes overwrite in place."""

    status: ApplicationStatus = ApplicationStatus.NEW

    class Settings:
        name = "applied_jobs"


class RelatedJob(BaseModel):
    """A relation row joined with its (active) job."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    relation: JobRelation
    job: Job


class ApplicationDetails(BaseModel):
    """An application joined with its candidate and job, either of which may be gone."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    application: AppliedJob
    candidate: Optional[Candidate] = None
    job: Optional[Job] = None


class RelationRequest(RequestModel):
    """Body of save-job and apply-job requests."""

    candidate_id: str = Field(..., min_length=1)
    job_id: str = Field(..., min_length=1)


class ApplicationStatusUpdate(RequestModel):
    """Body of an application status change."""

    status: ApplicationStatus
