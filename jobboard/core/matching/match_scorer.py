"""
Candidate-job match scorer.

Scores one job against one candidate using five independent criteria:
skills overlap, location, experience band, salary band and job type.
Each satisfied criterion adds one to the match count and a fixed number
of points to the score; the score saturates at 100.
"""

import re
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from jobboard.data.models import Candidate, Job
from jobboard.utils.constants import (
    EXACT_LOCATION_POINTS,
    EXPERIENCE_MATCH_POINTS,
    JOB_TYPE_MATCH_POINTS,
    MAX_MATCH_COUNT,
    MAX_SCORE,
    MIN_SCORE,
    REMOTE_LOCATION,
    REMOTE_LOCATION_POINTS,
    SALARY_MATCH_POINTS,
    SALARY_UNIT_MULTIPLIER,
    SKILL_MATCH_POINTS,
)
from jobboard.utils.logger import get_logger

logger = get_logger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_NON_DIGITS = re.compile(r"\D")

ItemT = TypeVar("ItemT")


def parse_leading_int(value: Optional[str]) -> Optional[int]:
    """
    Parse the integer prefix of a string ("3 years" -> 3).

    Returns None when the string does not start with a number.
    """
    if value is None:
        return None
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else None


def parse_salary_range(salary_range: Optional[str]) -> tuple[int, Optional[int]]:
    """
    Split a "min-max" salary range into its bounds.

    Non-numeric halves count as 0. A range without a second half has no
    upper bound and therefore never matches.
    """
    parts = (salary_range or "").split("-")
    low = parse_leading_int(parts[0]) or 0
    if len(parts) < 2:
        return low, None
    return low, parse_leading_int(parts[1]) or 0


def parse_expected_salary(expected_salary: Optional[str]) -> int:
    """Expected salary in currency units; the profile stores it in lakhs."""
    digits = _NON_DIGITS.sub("", expected_salary or "")
    if not digits:
        return 0
    return int(digits) * SALARY_UNIT_MULTIPLIER


@dataclass(frozen=True)
class MatchResult:
    """Compatibility of one job with one candidate."""

    match_count: int = 0
    score: int = 0

    @property
    def is_full_match(self) -> bool:
        """True when every criterion is satisfied."""
        return self.match_count == MAX_MATCH_COUNT


@dataclass(frozen=True)
class ScoredJob(Generic[ItemT]):
    """A listing item paired with its match result."""

    item: ItemT
    result: MatchResult

    @property
    def score(self) -> int:
        return self.result.score

    @property
    def match_count(self) -> int:
        return self.result.match_count


class MatchScorer:
    """
    Deterministic job/candidate compatibility scorer.

    The scorer holds no state and never mutates its inputs. Criteria are
    evaluated independently:
    - Skills: +20 per overlapping skill (case-insensitive)
    - Location: +20 exact, +10 when the job is remote
    - Experience: +15 when total experience lies within the job's band
    - Salary: +15 when expected salary lies within the job's range
    - Job type: +10 on a case-insensitive match
    """

    def score(self, job: Job, candidate: Candidate) -> MatchResult:
        """
        Score a job against a candidate.

        Args:
            job: Job posting
            candidate: Candidate profile

        Returns:
            MatchResult with match count in [0, MAX_MATCH_COUNT] and score
            in [MIN_SCORE, MAX_SCORE]
        """
        criteria = (
            self._match_skills(job, candidate),
            self._match_location(job, candidate),
            self._match_experience(job, candidate),
            self._match_salary(job, candidate),
            self._match_job_type(job, candidate),
        )

        match_count = sum(1 for matched, _ in criteria if matched)
        raw_score = sum(points for matched, points in criteria if matched)
        return MatchResult(
            match_count=match_count,
            score=max(MIN_SCORE, min(raw_score, MAX_SCORE)),
        )

    def _match_skills(self, job: Job, candidate: Candidate) -> tuple[bool, int]:
        """Count job key skills the candidate has."""
        job_skills = {skill.lower() for skill in job.key_skills}
        candidate_skills = {skill.lower() for skill in candidate.skills}
        overlap = len(job_skills & candidate_skills)
        return overlap > 0, overlap * SKILL_MATCH_POINTS

    def _match_location(self, job: Job, candidate: Candidate) -> tuple[bool, int]:
        """Exact location beats a remote posting."""
        preferred = (candidate.preferred_location or "").lower()
        if not preferred:
            return False, 0

        job_location = (job.location or "").lower()
        if job_location == preferred:
            return True, EXACT_LOCATION_POINTS
        if job_location == REMOTE_LOCATION:
            return True, REMOTE_LOCATION_POINTS
        return False, 0

    def _match_experience(self, job: Job, candidate: Candidate) -> tuple[bool, int]:
        """Candidate experience must fall inside [min_exp, max_exp]."""
        if job.min_exp is None or job.max_exp is None:
            return False, 0
        years = parse_leading_int(candidate.total_experience) or 0
        matched = job.min_exp <= years <= job.max_exp
        return matched, EXPERIENCE_MATCH_POINTS if matched else 0

    def _match_salary(self, job: Job, candidate: Candidate) -> tuple[bool, int]:
        """Expected salary must fall inside the job's salary range."""
        low, high = parse_salary_range(job.salary_range)
        if high is None:
            return False, 0
        expected = parse_expected_salary(candidate.expected_salary)
        matched = low <= expected <= high
        return matched, SALARY_MATCH_POINTS if matched else 0

    def _match_job_type(self, job: Job, candidate: Candidate) -> tuple[bool, int]:
        job_type = (job.job_type or "").lower()
        preferred = (candidate.preferred_job_type or "").lower()
        matched = bool(job_type) and job_type == preferred
        return matched, JOB_TYPE_MATCH_POINTS if matched else 0

    def score_all(
        self,
        items: list[ItemT],
        jobs: list[Job],
        candidate: Candidate,
    ) -> list[ScoredJob[ItemT]]:
        """Pair each item with the score of its job, preserving order."""
        return [
            ScoredJob(item=item, result=self.score(job, candidate))
            for item, job in zip(items, jobs)
        ]

    def rank(self, scored: list[ScoredJob[ItemT]]) -> list[ScoredJob[ItemT]]:
        """
        Rank scored jobs by score, highest first.

        Ties keep their incoming order.
        """
        return sorted(scored, key=lambda s: s.score, reverse=True)


# Singleton instance
_match_scorer: Optional[MatchScorer] = None


def get_match_scorer() -> MatchScorer:
    """Get the match scorer singleton instance."""
    global _match_scorer
    if _match_scorer is None:
        _match_scorer = MatchScorer()
    return _match_scorer
