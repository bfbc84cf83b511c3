"""
Application-wide constants for the jobboard service.

Scoring weights, paging defaults and the enums shared between the
data models, the listing service and the HTTP layer.
"""

from enum import Enum
from typing import Final, Optional


# =============================================================================
# Application Constants
# =============================================================================

APP_NAME: Final[str] = "jobboard"
APP_DISPLAY_NAME: Final[str] = "Job Board Backend"
VERSION: Final[str] = "0.1.0"


# =============================================================================
# Scoring Constants
# =============================================================================

# Points added per satisfied criterion; skills are per overlapping skill
SKILL_MATCH_POINTS: Final[int] = 20
EXACT_LOCATION_POINTS: Final[int] = 20
REMOTE_LOCATION_POINTS: Final[int] = 10
EXPERIENCE_MATCH_POINTS: Final[int] = 15
SALARY_MATCH_POINTS: Final[int] = 15
JOB_TYPE_MATCH_POINTS: Final[int] = 10

MIN_SCORE: Final[int] = 0
MAX_SCORE: Final[int] = 100
MAX_MATCH_COUNT: Final[int] = 5

# Expected salary is entered in lakhs
SALARY_UNIT_MULTIPLIER: Final[int] = 100_000

REMOTE_LOCATION: Final[str] = "remote"


# =============================================================================
# Listing Constants
# =============================================================================

DEFAULT_PAGE: Final[int] = 1
DEFAULT_PAGE_SIZE: Final[int] = 9
MAX_PAGE_SIZE: Final[int] = 100
CANDIDATE_PAGE_SIZE: Final[int] = 10
ADMIN_PAGE_SIZE: Final[int] = 10
APPLICATIONS_PAGE_SIZE: Final[int] = 10
MIN_RECOMMENDED_MATCH_COUNT: Final[int] = 2

# Fields matched by the free-text search box
SEARCH_FIELDS: Final[tuple[str, ...]] = ("title", "company_name", "location")

# Fields matched by the candidate search box
CANDIDATE_SEARCH_FIELDS: Final[tuple[str, ...]] = ("full_name", "skills", "about")

# Candidate filter bands as (min, max); None means no upper bound
EXPERIENCE_BANDS: Final[dict[str, tuple[int, Optional[int]]]] = {
    "0-2 Years": (0, 2),
    "2-5 Years": (2, 5),
    "5-10 Years": (5, 10),
    "10+ Years": (10, None),
}
SALARY_BANDS: Final[dict[str, tuple[int, Optional[int]]]] = {
    "0-5 LPA": (0, 5),
    "5-10 LPA": (5, 10),
    "10-20 LPA": (10, 20),
    "20+ LPA": (20, None),
}


# =============================================================================
# Enums
# =============================================================================


class JobStatus(str, Enum):
    """Status of a job posting."""

    ACTIVE = "Active"
    INACTIVE = "In-Active"


class ListingMode(str, Enum):
    """Which subset of jobs a candidate listing draws from."""

    RECOMMENDED = "recommended"
    SAVED = "saved"
    APPLIED = "applied"


class ApplicationStatus(str, Enum):
    """Status of a job application in the hiring pipeline."""

    NEW = "new"
    SHORTLISTED = "shortlisted"
    INTERVIEW = "interview"
    HIRED = "hired"
    REJECTED = "rejected"


class CandidateStatus(str, Enum):
    """Account status of a candidate."""

    ACTIVE = "Active"
    INACTIVE = "In-Active"


class AuditAction(str, Enum):
    """Types of actions that can be audited."""

    JOB_SAVED = "job_saved"
    JOB_UNSAVED = "job_unsaved"
    JOB_APPLIED = "job_applied"
    APPLICATION_STATUS_CHANGED = "application_status_changed"
    JOB_CREATED = "job_created"
    JOB_STATUS_CHANGED = "job_status_changed"
    CANDIDATE_UPDATED = "candidate_updated"
    CANDIDATE_STATUS_CHANGED = "candidate_status_changed"
