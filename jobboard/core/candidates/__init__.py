"""Candidate profiles, directory browsing and status management."""

from .candidate_service import CandidateService, get_candidate_service

__all__ = [
    "CandidateService",
    "get_candidate_service",
]
