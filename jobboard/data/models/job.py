"""
Job posting data models.

Defines the stored job document plus the typed request bodies used to
create and update postings.
"""

import re
from datetime import datetime
from typing import Any, Optional

from pydantic import Field, field_validator, model_validator

from jobboard.utils.constants import JobStatus

from .base import BaseDocument, PyObjectId, RequestModel, utcnow

# Leftovers from form posts that stored JSON-encoded arrays as strings
_ARRAY_NOISE = re.compile(r'[\[\]"]+')


def clean_string_list(value: Any) -> list[str]:
    """
    Normalize a list field that may arrive as a list, a JSON-ish string
    or a comma separated string.
    """
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    items: list[str] = []
    for item in value:
        for part in _ARRAY_NOISE.sub("", str(item)).split(","):
            part = part.strip()
            if part:
                items.append(part)
    return items


class Job(BaseDocument):
    """
    Job posting as stored in the jobs collection.

    Only ``Active`` postings appear in candidate-facing listings.
    """

    # Basic Information
    title: str = Field(..., min_length=1, max_length=200)
    company_name: str
    location: str
    salary_range: str = ""  # e.g. "500000-800000"
    job_type: Optional[str] = None  # e.g. "Full-time"

    # Requirements
    min_exp: Optional[int] = None
    max_exp: Optional[int] = None
    key_skills: list[str] = Field(default_factory=list)

    # Classification
    industry_type: Optional[str] = None
    category: Optional[str] = None

    # Dates & openings
    posted_at: datetime = Field(default_factory=utcnow)
    apply_by: Optional[datetime] = None
    openings: Optional[int] = None

    # Description
    description: Optional[str] = None
    responsibilities: list[str] = Field(default_factory=list)
    qualifications: list[str] = Field(default_factory=list)
    benefits: list[str] = Field(default_factory=list)
    company_description: Optional[str] = None
    company_logo: Optional[str] = None

    # Status & ownership
    status: JobStatus = JobStatus.ACTIVE
    posted_by: Optional[PyObjectId] = None
    posted_by_model: Optional[str] = None  # "admin" or "employer"

    @field_validator("key_skills", "responsibilities", "qualifications", "benefits", mode="before")
    @classmethod
    def normalize_lists(cls, v: Any) -> list[str]:
        """Strip stringified-array noise from list fields."""
        return clean_string_list(v)

    @property
    def is_active(self) -> bool:
        """Check if the posting is visible to candidates."""
        return self.status == JobStatus.ACTIVE.value

    class Settings:
        """MongoDB collection settings."""

        name = "jobs"
        indexes = [
            "status",
            "company_name",
            "location",
            "job_type",
            "industry_type",
            "key_skills",
            "updated_at",
            "created_at",
        ]


class JobCreate(RequestModel):
    """Schema for creating a new job posting."""

    title: str = Field(..., min_length=1, max_length=200)
    company_name: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    salary_range: str
    job_type: Optional[str] = None
    min_exp: int = Field(..., ge=0)
    max_exp: int = Field(..., ge=0)
    key_skills: list[str] = Field(default_factory=list)
    industry_type: str = Field(..., min_length=1)
    category: Optional[str] = None
    apply_by: Optional[datetime] = None
    openings: Optional[int] = Field(None, ge=0)
    description: Optional[str] = None
    responsibilities: list[str] = Field(default_factory=list)
    qualifications: list[str] = Field(default_factory=list)
    benefits: list[str] = Field(default_factory=list)
    company_description: Optional[str] = None
    company_logo: Optional[str] = None
    posted_by: Optional[str] = None
    posted_by_model: Optional[str] = None

    @field_validator("key_skills", "responsibilities", "qualifications", "benefits", mode="before")
    @classmethod
    def normalize_lists(cls, v: Any) -> list[str]:
        return clean_string_list(v)

    @model_validator(mode="after")
    def check_experience_band(self) -> "JobCreate":
        if self.max_exp < self.min_exp:
            raise ValueError("max_exp must not be less than min_exp")
        return self


class JobUpdate(RequestModel):
    """Schema for updating an existing job posting. Every field is optional."""

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    company_name: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = Field(None, min_length=1)
    salary_range: Optional[str] = None
    job_type: Optional[str] = None
    min_exp: Optional[int] = Field(None, ge=0)
    max_exp: Optional[int] = Field(None, ge=0)
    key_skills: Optional[list[str]] = None
    industry_type: Optional[str] = None
    category: Optional[str] = None
    apply_by: Optional[datetime] = None
    openings: Optional[int] = Field(None, ge=0)
    description: Optional[str] = None
    responsibilities: Optional[list[str]] = None
    qualifications: Optional[list[str]] = None
    benefits: Optional[list[str]] = None
    company_description: Optional[str] = None
    company_logo: Optional[str] = None

    @field_validator("key_skills", "responsibilities", "qualifications", "benefits", mode="before")
    @classmethod
    def normalize_lists(cls, v: Any) -> Optional[list[str]]:
        if v is None:
            return None
        return clean_string_list(v)

    @model_validator(mode="after")
    def check_experience_band(self) -> "JobUpdate":
        if self.min_exp is not None and self.max_exp is not None and self.max_exp < self.min_exp:
            raise ValueError("max_exp must not be less than min_exp")
        return self


class JobStatusUpdate(RequestModel):
    """Schema for activating or deactivating a posting."""

    status: JobStatus
