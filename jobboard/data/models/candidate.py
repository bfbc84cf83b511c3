"""
Candidate data models.

Defines the candidate profile document, its embedded education,
experience and project entries, and the typed profile update request.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from jobboard.utils.constants import CandidateStatus

from .base import BaseDocument, EmbeddedModel, RequestModel


class EducationEntry(EmbeddedModel):
    """A single degree."""

    degree: Optional[str] = None
    stream: Optional[str] = None
    institute: Optional[str] = None
    passing_year: Optional[int] = None
    score: Optional[str] = None  # CGPA or percentage


class ExperienceEntry(EmbeddedModel):
    """A single job held by the candidate."""

    company_name: Optional[str] = None
    job_title: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    currently_working: bool = False
    description: Optional[str] = None


class ProjectEntry(EmbeddedModel):
    """A portfolio project."""

    project_name: Optional[str] = None
    description: Optional[str] = None
    technologies: list[str] = Field(default_factory=list)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    ongoing: bool = False
    link: Optional[str] = None


class Candidate(BaseDocument):
    """
    Candidate profile as stored in the candidates collection.

    Preference fields are free text as entered in the profile form, e.g.
    ``total_experience="2 years"`` or ``expected_salary="5 LPA"``.
    """

    # Personal Information
    full_name: str = Field(..., min_length=1, max_length=200)
    email: Optional[str] = None  # free text, not validated on read
    phone: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None
    about: Optional[str] = None
    profile_image: Optional[str] = None

    # Qualifications
    education: list[EducationEntry] = Field(default_factory=list)
    experience: list[ExperienceEntry] = Field(default_factory=list)
    total_experience: Optional[str] = None
    skills: list[str] = Field(default_factory=list)
    projects: list[ProjectEntry] = Field(default_factory=list)

    # Resume
    resume_url: Optional[str] = None

    # Job Preferences
    preferred_job_type: Optional[str] = None
    preferred_location: Optional[str] = None
    expected_salary: Optional[str] = None
    notice_period: Optional[str] = None

    status: CandidateStatus = CandidateStatus.ACTIVE

    @field_validator("skills", mode="before")
    @classmethod
    def drop_blank_skills(cls, v: Optional[list[str]]) -> list[str]:
        if not v:
            return []
        return [s.strip() for s in v if s and s.strip()]

    class Settings:
        """MongoDB collection settings."""

        name = "candidates"
        indexes = [
            "email",
            "phone",
            "status",
        ]


class CandidateUpdate(RequestModel):
    """Schema for updating a candidate profile. Every field is optional."""

    full_name: Optional[str] = Field(None, min_length=1, max_length=200)
    phone: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None
    about: Optional[str] = None
    profile_image: Optional[str] = None
    education: Optional[list[EducationEntry]] = None
    experience: Optional[list[ExperienceEntry]] = None
    total_experience: Optional[str] = None
    skills: Optional[list[str]] = None
    projects: Optional[list[ProjectEntry]] = None
    resume_url: Optional[str] = None
    preferred_job_type: Optional[str] = None
    preferred_location: Optional[str] = None
    expected_salary: Optional[str] = None
    notice_period: Optional[str] = None


class CandidateStatusUpdate(RequestModel):
    """Schema for activating or deactivating a candidate account."""

    status: CandidateStatus
