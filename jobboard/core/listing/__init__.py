"""Candidate job listings: query building, scoring and formatting."""

from .formatting import (
    ApplicationPage,
    ApplicationView,
    CandidatePage,
    CandidatePagination,
    JobBrowsePage,
    JobListPage,
    JobPanelChunk,
    JobSummary,
    camel_keys,
    format_local_date,
    format_long_date,
    humanize_since,
    public_document,
    public_job,
    summarize_application,
    summarize_job,
)
from .listing_service import ListingService, get_listing_service
from .query_builder import (
    CandidateBrowseFilters,
    JobBrowseFilters,
    ListingQuery,
    build_browse_filter,
    build_candidate_filter,
    build_listing_query,
    build_status_filter,
    escape_regex,
    parse_offset_window,
    parse_page_window,
    parse_positive_int,
    validate_object_id,
)

__all__ = [
    # Query building
    "ListingQuery",
    "build_listing_query",
    "parse_positive_int",
    "parse_page_window",
    "parse_offset_window",
    "validate_object_id",
    "escape_regex",
    "JobBrowseFilters",
    "build_browse_filter",
    "CandidateBrowseFilters",
    "build_candidate_filter",
    "build_status_filter",
    # Formatting
    "JobSummary",
    "JobListPage",
    "JobBrowsePage",
    "JobPanelChunk",
    "CandidatePage",
    "CandidatePagination",
    "ApplicationView",
    "ApplicationPage",
    "format_local_date",
    "format_long_date",
    "humanize_since",
    "camel_keys",
    "public_document",
    "public_job",
    "summarize_job",
    "summarize_application",
    # Service
    "ListingService",
    "get_listing_service",
]
