"""Score a posting against the operator's skills on a 0–100 scale."""
from __future__ import annotations

from typing import Iterable

from jobhunter.models import Posting
from jobhunter.patterns import (
    COMPENSATION_KEYWORDS,
    KNOWN_EMPLOYERS,
    SENIORITY_BUCKETS,
    SENIORITY_FALLBACK_POINTS,
)

SKILL_WEIGHT = 60
COMPENSATION_POINTS = 10
KNOWN_EMPLOYER_POINTS = 10
# Unknown employers still earn a floor rather than zero.
UNKNOWN_EMPLOYER_POINTS = 5
MAX_SCORE = 100


def _normalize(s: str) -> str:
    return (s or "").lower().strip()


def _skill_points(text: str, user_skills: list[str]) -> int:
    if not user_skills:
        return 0
    matched = sum(1 for s in user_skills if _normalize(s) and _normalize(s) in text)
    return SKILL_WEIGHT * matched // len(user_skills)


def _seniority_points(text: str) -> int:
    for keywords, points in SENIORITY_BUCKETS:
        if any(k in text for k in keywords):
            return points
    return SENIORITY_FALLBACK_POINTS


def _compensation_points(text: str) -> int:
    return COMPENSATION_POINTS if any(k in text for k in COMPENSATION_KEYWORDS) else 0


def _employer_points(company: str) -> int:
    name = _normalize(company)
    if any(known in name for known in KNOWN_EMPLOYERS):
        return KNOWN_EMPLOYER_POINTS
    return UNKNOWN_EMPLOYER_POINTS


def score_job(posting: Posting, user_skills: Iterable[str]) -> int:
    """Additive score: skills 60, seniority 20, compensation 10, employer 10."""
    skills = list(user_skills)
    text = _normalize(posting.description) + " " + _normalize(posting.title)

    score = (
        _skill_points(text, skills)
        + _seniority_points(text)
        + _compensation_points(text)
        + _employer_points(posting.company)
    )
    return min(score, MAX_SCORE)
