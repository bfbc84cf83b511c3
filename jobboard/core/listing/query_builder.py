"""
Listing query construction.

Pure functions that validate raw listing inputs (mode, search text,
page, limit) and turn them into immutable query descriptions. Nothing
here touches the store, so validation failures surface before any I/O.
"""

import math
import re
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from bson import ObjectId

from jobboard.core.errors import InvalidArgumentError
from jobboard.data.repositories.base import to_object_id
from jobboard.utils.constants import (
    CANDIDATE_SEARCH_FIELDS,
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    EXPERIENCE_BANDS,
    MAX_PAGE_SIZE,
    SALARY_BANDS,
    SEARCH_FIELDS,
    CandidateStatus,
    JobStatus,
    ListingMode,
)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

RawInt = Union[int, str, None]

# Largest skip the store accepts (a signed 64-bit integer)
MAX_SKIP = 2**63 - 1


def escape_regex(text: str) -> str:
    """Escape regex metacharacters so user text matches literally."""
    return re.escape(text)


def contains_pattern(text: str) -> dict[str, str]:
    """Case-insensitive substring match on a single field."""
    return {"$regex": escape_regex(text), "$options": "i"}


def _parse_int(value: Union[int, str], message: str) -> int:
    if isinstance(value, bool):
        raise InvalidArgumentError(message, details=value)
    if isinstance(value, int):
        return value
    match = _LEADING_INT.match(str(value))
    if not match:
        raise InvalidArgumentError(message, details=value)
    return int(match.group(1))


def parse_positive_int(value: RawInt, default: int, message: str = "Invalid page or limit") -> int:
    """
    Parse a page or limit value.

    Accepts ints and strings with a leading integer ("2", "2abc").
    Missing values fall back to ``default``.

    Raises:
        InvalidArgumentError: value is non-numeric or less than 1.
    """
    if value is None or value == "":
        return default
    number = _parse_int(value, message)
    if number < 1:
        raise InvalidArgumentError(message, details=value)
    return number


def parse_page_window(
    page: RawInt, limit: RawInt, default_size: int = DEFAULT_PAGE_SIZE
) -> tuple[int, int]:
    """
    Parse a page and page size pair.

    Raises:
        InvalidArgumentError: either value is invalid, the page size is
            above ``MAX_PAGE_SIZE``, or the page starts beyond ``MAX_SKIP``.
    """
    page_number = parse_positive_int(page, DEFAULT_PAGE)
    page_size = parse_positive_int(limit, default_size)
    if page_size > MAX_PAGE_SIZE:
        raise InvalidArgumentError("Invalid page or limit", details=limit)
    if (page_number - 1) * page_size > MAX_SKIP:
        raise InvalidArgumentError("Invalid page or limit", details=page)
    return page_number, page_size


def parse_offset_window(offset: RawInt, limit: RawInt, default_size: int) -> tuple[int, int]:
    """
    Parse an offset and chunk size pair for infinite-scroll panels.

    A missing offset starts at 0.

    Raises:
        InvalidArgumentError: the offset is negative or non-numeric, or the
            chunk size is invalid.
    """
    message = "Invalid offset or limit"
    start = 0 if offset is None or offset == "" else _parse_int(offset, message)
    if start < 0 or start > MAX_SKIP:
        raise InvalidArgumentError(message, details=offset)
    size = parse_positive_int(limit, default_size, message)
    if size > MAX_PAGE_SIZE:
        raise InvalidArgumentError(message, details=limit)
    return start, size


def validate_object_id(value: Optional[Union[str, ObjectId]], label: str = "id") -> ObjectId:
    """Convert an id string to ``ObjectId`` or raise ``InvalidArgumentError``."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidArgumentError(f"Invalid {label}")
    return to_object_id(value.strip() if isinstance(value, str) else value, label)


def parse_mode(mode: Union[ListingMode, str, None]) -> ListingMode:
    """Resolve a listing type name."""
    if mode is None or mode == "":
        raise InvalidArgumentError("candidateId and type are required")
    try:
        return ListingMode(mode)
    except ValueError as e:
        raise InvalidArgumentError("Invalid type", details=mode) from e


@dataclass(frozen=True)
class ListingQuery:
    """
    Immutable description of one candidate listing request.

    Attributes:
        mode: Which job subset to list
        search: Stripped free-text search term, None when absent
        page: 1-based page number
        page_size: Jobs per page
    """

    mode: ListingMode
    search: Optional[str] = None
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size

    def job_filter(self) -> dict[str, Any]:
        """
        Store filter selecting the jobs this listing may show.

        Always restricted to active jobs. A search term matches title,
        company or location as a case-insensitive literal substring.
        Returns a new dict on every call.
        """
        job_filter: dict[str, Any] = {"status": JobStatus.ACTIVE.value}
        if self.search:
            job_filter["$or"] = [{name: contains_pattern(self.search)} for name in SEARCH_FIELDS]
        return job_filter

    def total_pages(self, total: int) -> int:
        """Page count for ``total`` jobs."""
        return math.ceil(total / self.page_size)


def build_listing_query(
    mode: Union[ListingMode, str, None],
    search: Optional[str] = None,
    page: RawInt = None,
    limit: RawInt = None,
) -> ListingQuery:
    """
    Validate raw listing inputs and build a ``ListingQuery``.

    Raises:
        InvalidArgumentError: unknown mode, or a bad page/limit.
    """
    listing_mode = parse_mode(mode)
    term = (search or "").strip() or None
    page_number, page_size = parse_page_window(page, limit)
    return ListingQuery(mode=listing_mode, search=term, page=page_number, page_size=page_size)


# =============================================================================
# Job browse filters
# =============================================================================


@dataclass(frozen=True)
class JobBrowseFilters:
    """Query-string filters of the public job browse page."""

    title: Optional[str] = None
    company_name: Optional[str] = None
    location: Optional[str] = None
    industry_type: Optional[str] = None
    category: Optional[str] = None
    job_type: Optional[str] = None
    max_exp: Optional[int] = None
    key_skills: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_params(
        cls,
        title: Optional[str] = None,
        company_name: Optional[str] = None,
        location: Optional[str] = None,
        industry_type: Optional[str] = None,
        category: Optional[str] = None,
        job_type: Optional[str] = None,
        min_max_exp: Optional[str] = None,
        key_skills: Optional[str] = None,
    ) -> "JobBrowseFilters":
        """Build filters from raw query-string values."""

        def clean(value: Optional[str]) -> Optional[str]:
            return (value or "").strip() or None

        max_exp = None
        if clean(min_max_exp):
            match = _LEADING_INT.match(min_max_exp)
            if not match:
                raise InvalidArgumentError("Invalid experience filter", details=min_max_exp)
            max_exp = int(match.group(1))

        skills = tuple(s.strip() for s in (key_skills or "").split(",") if s.strip())
        return cls(
            title=clean(title),
            company_name=clean(company_name),
            location=clean(location),
            industry_type=clean(industry_type),
            category=clean(category),
            job_type=clean(job_type),
            max_exp=max_exp,
            key_skills=skills,
        )


def build_browse_filter(filters: JobBrowseFilters) -> dict[str, Any]:
    """
    Store filter for the job browse page.

    Title and location combine with AND. Company only applies when no
    title is given. The experience filter keeps jobs whose whole band
    lies at or below the requested years.
    """
    job_filter: dict[str, Any] = {"status": JobStatus.ACTIVE.value}
    clauses: list[dict[str, Any]] = []

    if filters.title:
        clauses.append({"title": contains_pattern(filters.title)})
    if filters.location:
        clauses.append({"location": contains_pattern(filters.location)})
    if filters.company_name and not filters.title:
        job_filter["company_name"] = contains_pattern(filters.company_name)

    for name in ("industry_type", "category", "job_type"):
        value = getattr(filters, name)
        if value:
            job_filter[name] = contains_pattern(value)

    if filters.max_exp is not None:
        clauses.append({"min_exp": {"$lte": filters.max_exp}})
        clauses.append({"max_exp": {"$lte": filters.max_exp}})

    if filters.key_skills:
        job_filter["key_skills"] = {"$in": list(filters.key_skills)}

    if clauses:
        job_filter["$and"] = clauses
    return job_filter


def build_status_filter(status: Union[JobStatus, str]) -> dict[str, Any]:
    """Store filter for one admin job panel (Active or In-Active postings)."""
    try:
        return {"status": JobStatus(status).value}
    except ValueError as e:
        raise InvalidArgumentError("Invalid status", details=status) from e


# =============================================================================
# Candidate browse filters
# =============================================================================


def _clean_values(values: Optional[Union[str, list[str]]]) -> tuple[str, ...]:
    """Query values as a tuple; a single string may be comma-separated."""
    if values is None:
        return ()
    if isinstance(values, str):
        values = values.split(",")
    return tuple(v.strip() for v in values if v and v.strip())


def _band_labels(labels: tuple[str, ...], bands: dict[str, Any], message: str) -> tuple[str, ...]:
    unknown = [label for label in labels if label not in bands]
    if unknown:
        raise InvalidArgumentError(message, details=unknown)
    return labels


@dataclass(frozen=True)
class CandidateBrowseFilters:
    """Query-string filters of the recruiter candidate list."""

    search: Optional[str] = None
    skills: tuple[str, ...] = field(default_factory=tuple)
    cities: tuple[str, ...] = field(default_factory=tuple)
    states: tuple[str, ...] = field(default_factory=tuple)
    job_types: tuple[str, ...] = field(default_factory=tuple)
    experience: tuple[str, ...] = field(default_factory=tuple)
    salary: tuple[str, ...] = field(default_factory=tuple)
    status: CandidateStatus = CandidateStatus.ACTIVE

    @classmethod
    def from_params(
        cls,
        search: Optional[str] = None,
        skills: Optional[Union[str, list[str]]] = None,
        city: Optional[Union[str, list[str]]] = None,
        state: Optional[Union[str, list[str]]] = None,
        job_type: Optional[Union[str, list[str]]] = None,
        experience: Optional[Union[str, list[str]]] = None,
        salary: Optional[Union[str, list[str]]] = None,
        status: Optional[str] = None,
    ) -> "CandidateBrowseFilters":
        """
        Build filters from raw query-string values.

        Experience and salary take band labels such as ``"2-5 Years"`` or
        ``"10-20 LPA"``; repeated values select several bands.

        Raises:
            InvalidArgumentError: unknown band label or status.
        """
        try:
            candidate_status = CandidateStatus(status) if status else CandidateStatus.ACTIVE
        except ValueError as e:
            raise InvalidArgumentError("Invalid status", details=status) from e

        return cls(
            search=(search or "").strip() or None,
            skills=_clean_values(skills),
            cities=_clean_values(city),
            states=_clean_values(state),
            job_types=_clean_values(job_type),
            experience=_band_labels(_clean_values(experience), EXPERIENCE_BANDS, "Invalid experience filter"),
            salary=_band_labels(_clean_values(salary), SALARY_BANDS, "Invalid salary filter"),
            status=candidate_status,
        )


def _one_or_any(values: tuple[str, ...]) -> Any:
    return values[0] if len(values) == 1 else {"$in": list(values)}


def numeric_prefix(field_name: str, suffix: str) -> dict[str, Any]:
    """
    Aggregation expression reading a free-text number such as "3 years".

    Strips ``suffix`` and converts the rest to a double; unparseable or
    missing values become null and therefore fall outside every band.
    """
    return {
        "$convert": {
            "input": {
                "$trim": {
                    "input": {"$replaceAll": {"input": f"${field_name}", "find": suffix, "replacement": ""}}
                }
            },
            "to": "double",
            "onError": None,
            "onNull": None,
        }
    }


def band_condition(field_name: str, suffix: str, low: int, high: Optional[int]) -> dict[str, Any]:
    """Match documents whose numeric prefix lies in ``[low, high]``."""
    value = numeric_prefix(field_name, suffix)
    bounds: list[dict[str, Any]] = [{"$gte": [value, low]}]
    if high is not None:
        bounds.append({"$lte": [value, high]})
    return {"$expr": {"$and": bounds}}


def build_candidate_filter(filters: CandidateBrowseFilters) -> dict[str, Any]:
    """
    Store filter for the recruiter candidate list.

    Search matches name, skills or about text. Listed skills must all be
    present. City, state and preferred job type accept one value or any
    of several. Experience and salary bands OR within a group and AND
    across groups.
    """
    candidate_filter: dict[str, Any] = {"status": filters.status.value}

    if filters.search:
        candidate_filter["$or"] = [{name: contains_pattern(filters.search)} for name in CANDIDATE_SEARCH_FIELDS]
    if filters.skills:
        candidate_filter["skills"] = {"$all": list(filters.skills)}
    if filters.cities:
        candidate_filter["city"] = _one_or_any(filters.cities)
    if filters.states:
        candidate_filter["state"] = _one_or_any(filters.states)
    if filters.job_types:
        candidate_filter["preferred_job_type"] = _one_or_any(filters.job_types)

    groups: list[dict[str, Any]] = []
    if filters.experience:
        groups.append(
            {"$or": [band_condition("total_experience", " years", *EXPERIENCE_BANDS[b]) for b in filters.experience]}
        )
    if filters.salary:
        groups.append(
            {"$or": [band_condition("expected_salary", " LPA", *SALARY_BANDS[b]) for b in filters.salary]}
        )
    if groups:
        candidate_filter["$and"] = groups
    return candidate_filter
