"""
Job ingestion pipeline.

Runs every source concurrently: fetch listings → fetch detail → classify →
score → persist. Each posting is persisted as soon as it is enriched, so jobs
appear while the pass is still running.
"""
from __future__ import annotations

import enum
import threading
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Callable, Sequence

from jobhunter.classifier import (
    extract_experience,
    extract_salary,
    extract_skills,
    extract_tech_stack,
)
from jobhunter.config import (
    DEFAULT_USER_SKILLS,
    ScrapingConfig,
    ensure_dirs,
    get_db_path,
    load_scraping_config,
)
from jobhunter.log import get_logger
from jobhunter.models import EnrichedJob, Posting
from jobhunter.ratelimit import DomainRateLimiter
from jobhunter.scorer import score_job
from jobhunter.sources import DEFAULT_SOURCES, FetchContext, SourceFetcher
from jobhunter.storage import PersistenceGateway, SQLiteJobStore, StorageError

log = get_logger(__name__)

SourceFactory = Callable[[FetchContext], SourceFetcher]


class RunState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    COMPLETED_WITH_ERRORS = "completed_with_errors"


class ScrapeError(Exception):
    """One or more sources failed; the others still ran to completion."""

    def __init__(self, failures: dict[str, str], summary: dict[str, Any] | None = None) -> None:
        self.failures = dict(failures)
        self.summary = summary or {}
        detail = "; ".join(f"{name}: {msg}" for name, msg in self.failures.items())
        super().__init__(f"scraping completed with errors: {detail}")


def enrich(posting: Posting, user_skills: Sequence[str]) -> EnrichedJob:
    """Classify and score a posting. Pure; never raises."""
    text = posting.description
    return EnrichedJob(
        posting=posting,
        skills=extract_skills(f"{text} {posting.title}".strip()),
        tech_stack=extract_tech_stack(text),
        salary_range=extract_salary(text),
        experience=extract_experience(text),
        score=score_job(posting, user_skills),
    )


class _Tally:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.saved = 0

    def add(self, n: int = 1) -> None:
        with self._lock:
            self.saved += n


class JobIngestor:
    def __init__(
        self,
        store: PersistenceGateway,
        sources: Sequence[SourceFactory] | None = None,
        config: ScrapingConfig | None = None,
    ) -> None:
        self.store = store
        self.sources = list(DEFAULT_SOURCES if sources is None else sources)
        self.config = config or ScrapingConfig()
        self.limiter = DomainRateLimiter(self.config.parallelism, self.config.delay)
        self._cancel = threading.Event()
        self._lock = threading.Lock()
        self._active_runs = 0
        # set by any failing run while others overlap it
        self._had_errors = False
        self._state = RunState.IDLE
        self.total_jobs_found = 0

    @property
    def state(self) -> RunState:
        with self._lock:
            return self._state

    def cancel(self) -> None:
        log.info("Cancellation requested")
        self._cancel.set()

    def load_user_skills(self) -> list[str]:
        try:
            skills = [s for s in self.store.get_user_skills() if s and s.strip()]
        except StorageError as exc:
            log.warning("Could not load user skills (%s), using defaults", exc)
            return list(DEFAULT_USER_SKILLS)
        if not skills:
            log.info("No user skills stored, using defaults")
            return list(DEFAULT_USER_SKILLS)
        return skills

    def _persist(self, job: EnrichedJob) -> bool:
        p = job.posting
        try:
            if job.dedup_key is None:
                self.store.insert_job(job)
            else:
                self.store.upsert_job(job)
        except StorageError as exc:
            log.warning("Error saving job '%s' at '%s': %s", p.title, p.company, exc)
            return False
        log.info("Saved: %s at %s (score %d)", p.title, p.company, job.score)
        return True

    def _process(self, fetcher: SourceFetcher, posting: Posting, skills: Sequence[str]) -> bool:
        if posting.url:
            detail = fetcher.fetch_detail(posting.url)
            if detail:
                posting.description = detail
        return self._persist(enrich(posting, skills))

    def _run_source(self, factory: SourceFactory, skills: Sequence[str], tally: _Tally) -> int:
        ctx = FetchContext(self.config, self.limiter, self._cancel)
        fetcher: SourceFetcher | None = None
        saved = 0
        try:
            fetcher = factory(ctx)
            name = fetcher.name
            log.info("[%s] starting", name)
            for posting in fetcher.list_candidates():
                if self._process(fetcher, posting, skills):
                    saved += 1
                    tally.add()
        finally:
            if fetcher is not None:
                fetcher.close()
            ctx.close()
        log.info("[%s] completed, %d jobs saved", name, saved)
        return saved

    def run(self) -> dict[str, Any]:
        """Run one pass over every source.

        Returns a summary, or raises ScrapeError (carrying the same summary)
        after all sources finished when any of them failed.
        """
        with self._lock:
            if self._active_runs == 0:
                self._cancel.clear()
                self._had_errors = False
            self._active_runs += 1
            self._state = RunState.RUNNING

        log.info("Starting job scraping from %d source(s)...", len(self.sources))
        started = time.monotonic()
        skills = tuple(self.load_user_skills())
        tally = _Tally()
        per_source: dict[str, int] = {}
        failures: dict[str, str] = {}

        try:
            with ThreadPoolExecutor(
                max_workers=max(1, len(self.sources)), thread_name_prefix="source"
            ) as pool:
                futures = {
                    pool.submit(self._run_source, factory, skills, tally): _source_name(factory)
                    for factory in self.sources
                }
                for future in as_completed(futures):
                    name = futures[future]
                    try:
                        per_source[name] = future.result()
                    except Exception as exc:
                        log.error("[%s] FAILED: %s", name, exc)
                        failures[name] = str(exc) or exc.__class__.__name__
        finally:
            elapsed = time.monotonic() - started
            with self._lock:
                self._active_runs -= 1
                self.total_jobs_found += tally.saved
                self._had_errors = self._had_errors or bool(failures)
                if self._active_runs == 0:
                    self._state = (
                        RunState.COMPLETED_WITH_ERRORS if self._had_errors else RunState.COMPLETED
                    )

        log.info("Scraping completed in %.1fs. Found %d jobs.", elapsed, tally.saved)
        summary = {
            "jobs_found": tally.saved,
            "elapsed_seconds": round(elapsed, 2),
            "sources": per_source,
            "failed_sources": sorted(failures),
        }
        if failures:
            log.error("Sources with errors: %s", ", ".join(sorted(failures)))
            raise ScrapeError(failures, summary)
        return summary

    def run_in_background(self) -> threading.Thread:
        """Start a pass on a daemon thread and return immediately."""

        def _target() -> None:
            try:
                result = self.run()
                log.info("Background scraping completed: %d jobs", result["jobs_found"])
            except ScrapeError as exc:
                log.error("Background scraping failed: %s", exc)

        t = threading.Thread(target=_target, name="scrape-background", daemon=True)
        t.start()
        return t


def _source_name(factory: SourceFactory) -> str:
    return getattr(factory, "name", None) or getattr(factory, "__name__", repr(factory))


_default_ingestor: JobIngestor | None = None
_default_lock = threading.Lock()


def get_ingestor() -> JobIngestor:
    """Process-wide ingestor so every trigger shares one rate limiter."""
    global _default_ingestor
    with _default_lock:
        if _default_ingestor is None:
            ensure_dirs()
            _default_ingestor = JobIngestor(
                SQLiteJobStore(get_db_path()),
                config=load_scraping_config(),
            )
        return _default_ingestor


def run_all_sources() -> dict[str, Any]:
    return get_ingestor().run()


if __name__ == "__main__":
    result = run_all_sources()
    log.info("Jobs found: %d in %.1fs", result["jobs_found"], result["elapsed_seconds"])
