"""Extract skills, tech stack, salary and experience from free text.

All functions are total: no match (or empty text) gives an empty list or a
sentinel string, never an exception.
"""
from __future__ import annotations

import re

from jobhunter.patterns import (
    EXPERIENCE_PATTERNS,
    NEGOTIABLE,
    NOT_SPECIFIED,
    SALARY_PATTERNS,
    SKILL_PATTERNS,
    TECH_STACK_PATTERNS,
    compile_table,
)

_SKILLS = compile_table(SKILL_PATTERNS)
_TECH_STACK = compile_table(TECH_STACK_PATTERNS)
_SALARY = [re.compile(p) for p in SALARY_PATTERNS]
_EXPERIENCE = compile_table(EXPERIENCE_PATTERNS)


def _match_tags(text: str, table: list[tuple[re.Pattern[str], str]]) -> list[str]:
    if not text:
        return []
    tags: list[str] = []
    for pattern, tag in table:
        if tag not in tags and pattern.search(text):
            tags.append(tag)
    return tags


def extract_skills(text: str) -> list[str]:
    return _match_tags(text, _SKILLS)


def extract_tech_stack(text: str) -> list[str]:
    return _match_tags(text, _TECH_STACK)


def extract_salary(text: str) -> str:
    if not text:
        return NEGOTIABLE
    lowered = text.lower()
    for pattern in _SALARY:
        m = pattern.search(lowered)
        if m:
            return m.group(0).strip().title()
    return NEGOTIABLE


def extract_experience(text: str) -> str:
    if not text:
        return NOT_SPECIFIED
    lowered = text.lower()
    for pattern, label in _EXPERIENCE:
        m = pattern.search(lowered)
        if not m:
            continue
        if "{years}" in label and m.groups():
            return label.format(years=m.group(1))
        return label
    return NOT_SPECIFIED
