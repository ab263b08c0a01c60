"""Data models for postings, enriched jobs and skill analyses."""
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Posting:
    title: str
    company: str
    location: str
    description: str
    source: str
    url: str = ""
    posted_date: str = ""


@dataclass
class EnrichedJob:
    posting: Posting
    skills: list[str]
    tech_stack: list[str]
    salary_range: str
    experience: str
    score: int

    @property
    def url(self) -> str:
        return self.posting.url

    @property
    def dedup_key(self) -> str | None:
        """Origin URL, or None when the posting can never be deduplicated."""
        return self.posting.url.strip() or None


@dataclass
class SkillsAnalysis:
    missing_skills: list[str] = field(default_factory=list)
    matching_skills: list[str] = field(default_factory=list)
    transferable: list[str] = field(default_factory=list)
    fit_score: int = 0
    recommendations: list[str] = field(default_factory=list)


APPLICATION_STATUSES: tuple[str, ...] = ("Applied", "Interviewing", "Offer", "Rejected")


@dataclass
class Application:
    company: str
    role: str
    job_id: str = ""
    applied_date: str = ""
    status: str = "Applied"
    hiring_manager: str = ""
    notes: str = ""
    id: str = ""
    created_at: str = ""
