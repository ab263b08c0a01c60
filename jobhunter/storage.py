"""Job persistence: the gateway interface and its SQLite implementation."""
from __future__ import annotations

import hashlib
import json
import sqlite3
import threading
import uuid
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterator

from jobhunter.config import SEED_USER_SKILLS
from jobhunter.log import get_logger
from jobhunter.models import APPLICATION_STATUSES, Application, EnrichedJob

log = get_logger(__name__)

HIGH_SCORE_THRESHOLD = 80

# Overwritten when a URL is seen again. id, url and created_at never change.
MUTABLE_COLUMNS: tuple[str, ...] = (
    "title", "company", "location", "description", "salary_range",
    "experience", "posted_date", "source", "score", "skills", "tech_stack",
)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS jobs (
    id           TEXT PRIMARY KEY,
    title        TEXT NOT NULL,
    company      TEXT NOT NULL,
    location     TEXT,
    description  TEXT,
    salary_range TEXT,
    experience   TEXT,
    posted_date  TEXT,
    source       TEXT,
    url          TEXT UNIQUE,
    score        INTEGER NOT NULL DEFAULT 0,
    skills       TEXT NOT NULL DEFAULT '[]',
    tech_stack   TEXT NOT NULL DEFAULT '[]',
    created_at   TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS applications (
    id             TEXT PRIMARY KEY,
    job_id         TEXT,
    company        TEXT NOT NULL,
    role           TEXT NOT NULL,
    applied_date   TEXT NOT NULL,
    status         TEXT NOT NULL DEFAULT 'Applied',
    hiring_manager TEXT,
    notes          TEXT,
    created_at     TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS user_skills (
    id       INTEGER PRIMARY KEY AUTOINCREMENT,
    skill    TEXT UNIQUE NOT NULL,
    category TEXT NOT NULL DEFAULT 'Technical'
);
"""

_COLUMNS = ("id", "url", "created_at") + MUTABLE_COLUMNS

_UPSERT_SQL = (
    f"INSERT INTO jobs ({', '.join(_COLUMNS)}) "
    f"VALUES ({', '.join(':' + c for c in _COLUMNS)}) "
    "ON CONFLICT(url) DO UPDATE SET "
    + ", ".join(f"{c} = excluded.{c}" for c in MUTABLE_COLUMNS)
)

_INSERT_SQL = (
    f"INSERT INTO jobs ({', '.join(_COLUMNS)}) "
    f"VALUES ({', '.join(':' + c for c in _COLUMNS)})"
)


class StorageError(Exception):
    """The backing store rejected or failed an operation."""


class PersistenceGateway(ABC):
    @abstractmethod
    def upsert_job(self, job: EnrichedJob) -> None:
        """Insert or update by origin URL. Raises ValueError when the URL is empty."""

    @abstractmethod
    def insert_job(self, job: EnrichedJob) -> None:
        """Insert as a new record with no identity key."""

    @abstractmethod
    def get_user_skills(self) -> list[str]:
        ...


def job_id_for_url(url: str) -> str:
    return hashlib.sha256(url.encode("utf-8")).hexdigest()[:12]


def _now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def _row_params(job: EnrichedJob, job_id: str, url: str | None) -> dict[str, Any]:
    p = job.posting
    return {
        "id": job_id,
        "url": url,
        "created_at": _now(),
        "title": p.title,
        "company": p.company,
        "location": p.location,
        "description": p.description,
        "salary_range": job.salary_range,
        "experience": job.experience,
        "posted_date": p.posted_date,
        "source": p.source,
        "score": job.score,
        "skills": json.dumps(list(job.skills)),
        "tech_stack": json.dumps(list(job.tech_stack)),
    }


def _row_to_dict(row: sqlite3.Row) -> dict[str, Any]:
    d = dict(row)
    d["skills"] = json.loads(d.get("skills") or "[]")
    d["tech_stack"] = json.loads(d.get("tech_stack") or "[]")
    return d


class SQLiteJobStore(PersistenceGateway):
    """SQLite-backed store; one connection per call, writes serialised by a lock."""

    def __init__(self, path: str | Path, *, seed_skills: bool = True) -> None:
        self.path = Path(path)
        self._write_lock = threading.Lock()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self._connect() as conn:
            conn.executescript(_SCHEMA)
            if seed_skills:
                conn.executemany(
                    "INSERT OR IGNORE INTO user_skills (skill, category) VALUES (?, 'Technical')",
                    [(s,) for s in SEED_USER_SKILLS],
                )
        log.debug("Job store ready at %s", self.path)

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        try:
            conn = sqlite3.connect(self.path, timeout=30)
        except sqlite3.Error as exc:
            raise StorageError(f"cannot open {self.path}: {exc}") from exc
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            raise StorageError(str(exc)) from exc
        finally:
            conn.close()

    def upsert_job(self, job: EnrichedJob) -> None:
        url = job.dedup_key
        if url is None:
            raise ValueError("cannot upsert a job without an origin URL")
        params = _row_params(job, job_id_for_url(url), url)
        with self._write_lock, self._connect() as conn:
            conn.execute(_UPSERT_SQL, params)

    def insert_job(self, job: EnrichedJob) -> None:
        params = _row_params(job, uuid.uuid4().hex[:12], None)
        with self._write_lock, self._connect() as conn:
            conn.execute(_INSERT_SQL, params)

    def get_user_skills(self) -> list[str]:
        with self._connect() as conn:
            rows = conn.execute("SELECT skill FROM user_skills ORDER BY id").fetchall()
        return [r["skill"] for r in rows]

    def add_user_skill(self, skill: str, category: str = "Technical") -> None:
        skill = skill.strip()
        if not skill:
            raise ValueError("skill must not be empty")
        with self._write_lock, self._connect() as conn:
            conn.execute(
                "INSERT OR IGNORE INTO user_skills (skill, category) VALUES (?, ?)",
                (skill, category),
            )

    def get_jobs(self, limit: int = 50, offset: int = 0) -> list[dict[str, Any]]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM jobs ORDER BY score DESC, posted_date DESC LIMIT ? OFFSET ?",
                (limit, offset),
            ).fetchall()
        return [_row_to_dict(r) for r in rows]

    def get_job(self, job_id: str) -> dict[str, Any] | None:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM jobs WHERE id = ?", (job_id,)).fetchone()
        return _row_to_dict(row) if row else None

    def get_job_by_url(self, url: str) -> dict[str, Any] | None:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM jobs WHERE url = ?", (url,)).fetchone()
        return _row_to_dict(row) if row else None

    def get_jobs_by_company(self, company: str) -> list[dict[str, Any]]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM jobs WHERE company = ? ORDER BY score DESC", (company,)
            ).fetchall()
        return [_row_to_dict(r) for r in rows]

    def count_jobs(self) -> int:
        with self._connect() as conn:
            return conn.execute("SELECT COUNT(*) FROM jobs").fetchone()[0]

    def get_job_stats(self) -> tuple[int, int]:
        """(total jobs, jobs scoring at least HIGH_SCORE_THRESHOLD)."""
        with self._connect() as conn:
            total = conn.execute("SELECT COUNT(*) FROM jobs").fetchone()[0]
            high = conn.execute(
                "SELECT COUNT(*) FROM jobs WHERE score >= ?", (HIGH_SCORE_THRESHOLD,)
            ).fetchone()[0]
        return total, high

    def save_application(self, app: Application) -> Application:
        """Store a tracked application; fills in id, applied date and created_at."""
        if not app.company.strip() or not app.role.strip():
            raise ValueError("company and role are required")
        if app.status not in APPLICATION_STATUSES:
            raise ValueError(f"unknown application status {app.status!r}")
        app.id = app.id or uuid.uuid4().hex[:12]
        app.applied_date = app.applied_date or datetime.now().strftime("%Y-%m-%d")
        app.created_at = _now()
        with self._write_lock, self._connect() as conn:
            conn.execute(
                "INSERT INTO applications (id, job_id, company, role, applied_date, status,"
                " hiring_manager, notes, created_at) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (app.id, app.job_id or None, app.company, app.role, app.applied_date,
                 app.status, app.hiring_manager, app.notes, app.created_at),
            )
        log.info("Tracked application: %s at %s (%s)", app.role, app.company, app.status)
        return app

    def get_applications(self) -> list[Application]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM applications ORDER BY applied_date DESC, created_at DESC"
            ).fetchall()
        return [
            Application(**{k: ("" if r[k] is None else r[k]) for k in r.keys()}) for r in rows
        ]

    def update_application_status(self, app_id: str, status: str) -> bool:
        """False when no application has that id."""
        if status not in APPLICATION_STATUSES:
            raise ValueError(f"unknown application status {status!r}")
        with self._write_lock, self._connect() as conn:
            cur = conn.execute(
                "UPDATE applications SET status = ? WHERE id = ?", (status, app_id)
            )
        return cur.rowcount > 0

    def get_application_stats(self) -> dict[str, int]:
        """Applications per status; every known status is present."""
        counts = dict.fromkeys(APPLICATION_STATUSES, 0)
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT status, COUNT(*) AS n FROM applications GROUP BY status"
            ).fetchall()
        for r in rows:
            counts[r["status"]] = r["n"]
        return counts
