"""Browse stored jobs and track applications to them."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from jobhunter.analyzer import analyze_skills
from jobhunter.config import DEFAULT_USER_SKILLS, get_env
from jobhunter.cover_letter import generate_cover_letter
from jobhunter.models import Application, Posting, SkillsAnalysis
from jobhunter.storage import SQLiteJobStore

DEFAULT_USER_PROFILE = (
    "Cybersecurity professional with experience in Fortinet, AWS security, SIEM, and cloud security. "
    "Strong background in SOC operations, incident response, and vulnerability management. "
    "Proficient in Python, Go, and various security frameworks."
)


class JobNotFound(LookupError):
    pass


@dataclass(frozen=True)
class JobFilters:
    """Empty fields match everything; text fields match case-insensitive substrings."""

    min_score: int = 0
    skill: str = ""
    company: str = ""
    location: str = ""


def matches_filters(job: dict[str, Any], filters: JobFilters) -> bool:
    if (job.get("score") or 0) < filters.min_score:
        return False
    if filters.skill:
        wanted = filters.skill.lower()
        if not any(wanted in s.lower() for s in job.get("skills") or []):
            return False
    if filters.company and filters.company.lower() not in (job.get("company") or "").lower():
        return False
    if filters.location and filters.location.lower() not in (job.get("location") or "").lower():
        return False
    return True


def filter_jobs(jobs: Iterable[dict[str, Any]], filters: JobFilters) -> list[dict[str, Any]]:
    return [j for j in jobs if matches_filters(j, filters)]


def posting_from_row(row: dict[str, Any]) -> Posting:
    return Posting(
        title=row.get("title") or "",
        company=row.get("company") or "",
        location=row.get("location") or "",
        description=row.get("description") or "",
        source=row.get("source") or "",
        url=row.get("url") or "",
        posted_date=row.get("posted_date") or "",
    )


def _require_job(store: SQLiteJobStore, job_id: str) -> dict[str, Any]:
    row = store.get_job(job_id)
    if row is None:
        raise JobNotFound(job_id)
    return row


def analyze_job(store: SQLiteJobStore, job_id: str) -> SkillsAnalysis:
    row = _require_job(store, job_id)
    skills = store.get_user_skills() or list(DEFAULT_USER_SKILLS)
    return analyze_skills(row.get("description") or "", skills)


def cover_letter_for_job(store: SQLiteJobStore, job_id: str, user_profile: str = "") -> str:
    row = _require_job(store, job_id)
    profile = user_profile or get_env("USER_PROFILE") or DEFAULT_USER_PROFILE
    return generate_cover_letter(posting_from_row(row), profile)


def apply_to_job(
    store: SQLiteJobStore, job_id: str, notes: str = "", applied_date: str = ""
) -> Application:
    """Record that the operator applied to a stored job."""
    row = _require_job(store, job_id)
    return store.save_application(
        Application(
            company=row["company"],
            role=row["title"],
            job_id=row["id"],
            applied_date=applied_date,
            notes=notes,
        )
    )
