from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest
import requests

from jobhunter.config import ScrapingConfig
from jobhunter.models import EnrichedJob, Posting
from jobhunter.ratelimit import DomainRateLimiter
from jobhunter.sources import FetchContext
from jobhunter.storage import SQLiteJobStore


class FakeResponse:
    def __init__(self, url: str, text: str = "", status_code: int = 200) -> None:
        self.url = url
        self.text = text
        self.content = text.encode("utf-8")
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} for {self.url}", response=self)


class FakeSession:
    """Serves canned pages by URL. Unknown URLs get a 404.

    A page value may be HTML text, an HTTP status code, or an exception to raise.
    """

    def __init__(self, pages: dict[str, str | int | Exception] | None = None) -> None:
        self.pages = dict(pages or {})
        self.headers: dict[str, str] = {}
        self.requested: list[str] = []
        self.closed = False

    def get(self, url: str, timeout: float | None = None) -> FakeResponse:
        self.requested.append(url)
        value = self.pages.get(url, 404)
        if isinstance(value, Exception):
            raise value
        if isinstance(value, int):
            return FakeResponse(url, "", value)
        return FakeResponse(url, value)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fast_config() -> ScrapingConfig:
    return ScrapingConfig(parallelism=1, delay=0.0, timeout=5.0)


@pytest.fixture
def make_ctx(fast_config: ScrapingConfig) -> Callable[..., FetchContext]:
    def _make(pages: dict[str, str | int | Exception] | None = None) -> FetchContext:
        return FetchContext(fast_config, DomainRateLimiter(1, 0.0), session=FakeSession(pages))

    return _make


@pytest.fixture
def store(tmp_path: Path) -> SQLiteJobStore:
    return SQLiteJobStore(tmp_path / "jobs.db")


def make_job(
    url: str = "https://www.brightermonday.co.ke/listings/soc-analyst",
    *,
    title: str = "SOC Analyst",
    company: str = "Acme Ltd",
    score: int = 50,
    skills: list[str] | None = None,
) -> EnrichedJob:
    return EnrichedJob(
        posting=Posting(
            title=title,
            company=company,
            location="Nairobi",
            description="Monitor SIEM alerts",
            source="BrighterMonday",
            url=url,
            posted_date="2026-10-19",
        ),
        skills=skills if skills is not None else ["SIEM"],
        tech_stack=[],
        salary_range="Negotiable",
        experience="Not specified",
        score=score,
    )
