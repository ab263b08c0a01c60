"""Compare the skills a job asks for with the operator's skills."""
from __future__ import annotations

from typing import Sequence

from jobhunter.models import SkillsAnalysis
from jobhunter.patterns import REQUIRED_SKILL_KEYWORDS, TRANSFERABLE_SKILLS


def extract_required_skills(description: str) -> list[str]:
    text = (description or "").lower()
    found: list[str] = []
    for keyword in REQUIRED_SKILL_KEYWORDS:
        if keyword in text:
            name = keyword.title()
            if name not in found:
                found.append(name)
    return found


def transferable_skills(missing: Sequence[str]) -> list[str]:
    return [TRANSFERABLE_SKILLS[m] for m in missing if m in TRANSFERABLE_SKILLS]


def _recommendations(missing: list[str], matching: list[str], fit_score: int) -> list[str]:
    recs: list[str] = []
    if fit_score >= 80:
        recs.append("Excellent fit! Focus on highlighting your matching skills in applications.")
    elif fit_score >= 60:
        recs.append("Good fit. Emphasize transferable skills and relevant experience.")
    else:
        recs.append("Consider upskilling in missing areas or focusing on roles with better alignment.")

    if missing:
        if len(missing) <= 3:
            recs.append(f"Consider learning: {', '.join(missing)}")
        else:
            recs.append(f"Priority skills to learn: {', '.join(missing[:3])}")
    if matching:
        recs.append(f"Strongly emphasize: {', '.join(matching)}")
    if missing and transferable_skills(missing):
        recs.append("Highlight your transferable skills to bridge experience gaps")
    return recs


def analyze_skills(description: str, user_skills: Sequence[str]) -> SkillsAnalysis:
    required = extract_required_skills(description)
    mine = [s.lower() for s in user_skills if s and s.strip()]

    matching: list[str] = []
    missing: list[str] = []
    for skill in required:
        req = skill.lower()
        if any(u in req or req in u for u in mine):
            matching.append(skill)
        else:
            missing.append(skill)

    fit = len(matching) * 100 // len(required) if required else 0
    return SkillsAnalysis(
        missing_skills=missing,
        matching_skills=matching,
        transferable=transferable_skills(missing),
        fit_score=fit,
        recommendations=_recommendations(missing, matching, fit),
    )
