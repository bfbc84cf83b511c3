"""Job posting management."""

from .job_service import JobService, get_job_service
from .text_format import capitalize_sentence_case, capitalize_title

__all__ = [
    "JobService",
    "get_job_service",
    "capitalize_title",
    "capitalize_sentence_case",
]
