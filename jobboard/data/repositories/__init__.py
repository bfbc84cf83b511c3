"""
Database repositories for jobboard data access.

This module provides repository classes for all database collections,
implementing the repository pattern for clean data access.
"""

# Base repository
from .base import BaseRepository, sort_spec, to_object_id, translate_store_errors

# Entity repositories
from .candidate_repository import CandidateRepository, get_candidate_repository
from .job_repository import JobRepository, get_job_repository
from .relation_repository import (
    AppliedJobRepository,
    RelationRepository,
    SavedJobRepository,
    build_applications_pipeline,
    build_joined_jobs_pipeline,
    get_applied_job_repository,
    get_saved_job_repository,
)

__all__ = [
    # Base
    "BaseRepository",
    "sort_spec",
    "to_object_id",
    "translate_store_errors",
    # Candidate
    "CandidateRepository",
    "get_candidate_repository",
    # Job
    "JobRepository",
    "get_job_repository",
    # Relations
    "RelationRepository",
    "SavedJobRepository",
    "AppliedJobRepository",
    "build_joined_jobs_pipeline",
    "build_applications_pipeline",
    "get_saved_job_repository",
    "get_applied_job_repository",
]
