"""Candidate-job match scorer module."""

from .match_scorer import (
    MatchResult,
    MatchScorer,
    ScoredJob,
    get_match_scorer,
    parse_leading_int,
    parse_expected_salary,
    parse_salary_range,
)

__all__ = [
    "MatchResult",
    "MatchScorer",
    "ScoredJob",
    "get_match_scorer",
    "parse_leading_int",
    "parse_expected_salary",
    "parse_salary_range",
]
