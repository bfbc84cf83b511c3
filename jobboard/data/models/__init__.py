"""
Pydantic data models and schemas for the jobboard service.

This module provides all data models used throughout the application,
including database documents, embedded models, and request schemas.
"""

# Base models
from .base import BaseDocument, EmbeddedModel, PyObjectId, RequestModel, TimestampMixin, utcnow

# Job models
from .job import Job, JobCreate, JobStatusUpdate, JobUpdate, clean_string_list

# Candidate models
from .candidate import (
    Candidate,
    CandidateStatusUpdate,
    CandidateUpdate,
    EducationEntry,
    ExperienceEntry,
    ProjectEntry,
)

# Relation models
from .relation import (
    AppliedJob,
    ApplicationDetails,
    ApplicationStatusUpdate,
    JobRelation,
    RelatedJob,
    RelationRequest,
    SavedJob,
)

__all__ = [
    # Base
    "BaseDocument",
    "EmbeddedModel",
    "PyObjectId",
    "RequestModel",
    "TimestampMixin",
    "utcnow",
    # Job
    "Job",
    "JobCreate",
    "JobStatusUpdate",
    "JobUpdate",
    "clean_string_list",
    # Candidate
    "Candidate",
    "CandidateStatusUpdate",
    "CandidateUpdate",
    "EducationEntry",
    "ExperienceEntry",
    "ProjectEntry",
    # Relation
    "AppliedJob",
    "ApplicationDetails",
    "ApplicationStatusUpdate",
    "JobRelation",
    "RelatedJob",
    "RelationRequest",
    "SavedJob",
]
