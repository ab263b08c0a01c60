from __future__ import annotations

import threading
from pathlib import Path

import pytest

from jobhunter.config import SEED_USER_SKILLS
from jobhunter.models import Application
from jobhunter.storage import SQLiteJobStore, StorageError, job_id_for_url

from conftest import make_job

pytestmark = pytest.mark.unit

URL = "https://www.brightermonday.co.ke/listings/soc-analyst"


def test_upsert_same_url_keeps_one_row_with_latest_values(store: SQLiteJobStore) -> None:
    store.upsert_job(make_job(URL, title="SOC Analyst", score=40))
    first = store.get_job_by_url(URL)

    store.upsert_job(make_job(URL, title="Senior SOC Analyst", score=85, skills=["SOC", "SIEM"]))
    second = store.get_job_by_url(URL)

    assert store.count_jobs() == 1
    assert second["title"] == "Senior SOC Analyst"
    assert second["score"] == 85
    assert second["skills"] == ["SOC", "SIEM"]
    assert second["id"] == first["id"] == job_id_for_url(URL)
    assert second["created_at"] == first["created_at"]


def test_upsert_without_url_is_rejected(store: SQLiteJobStore) -> None:
    with pytest.raises(ValueError):
        store.upsert_job(make_job(""))
    with pytest.raises(ValueError):
        store.upsert_job(make_job("   "))
    assert store.count_jobs() == 0


def test_insert_without_url_always_adds_a_row(store: SQLiteJobStore) -> None:
    store.insert_job(make_job(""))
    store.insert_job(make_job(""))

    jobs = store.get_jobs()
    assert len(jobs) == 2
    assert all(j["url"] is None for j in jobs)
    assert jobs[0]["id"] != jobs[1]["id"]


def test_concurrent_upserts_of_one_url_leave_one_row(store: SQLiteJobStore) -> None:
    threads = [
        threading.Thread(target=store.upsert_job, args=(make_job(URL, score=i),))
        for i in range(8)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert store.count_jobs() == 1
    assert store.get_job_by_url(URL)["score"] in range(8)


def test_fresh_store_is_seeded_with_skills(store: SQLiteJobStore) -> None:
    assert store.get_user_skills() == list(SEED_USER_SKILLS)


def test_seeding_can_be_disabled(tmp_path: Path) -> None:
    assert SQLiteJobStore(tmp_path / "empty.db", seed_skills=False).get_user_skills() == []


def test_reopening_does_not_duplicate_seed_skills(tmp_path: Path) -> None:
    SQLiteJobStore(tmp_path / "jobs.db")
    again = SQLiteJobStore(tmp_path / "jobs.db")
    assert again.get_user_skills() == list(SEED_USER_SKILLS)


def test_add_user_skill_ignores_duplicates(tmp_path: Path) -> None:
    s = SQLiteJobStore(tmp_path / "jobs.db", seed_skills=False)
    s.add_user_skill("Splunk")
    s.add_user_skill(" Splunk ")
    assert s.get_user_skills() == ["Splunk"]
    with pytest.raises(ValueError):
        s.add_user_skill("  ")


def test_queries(store: SQLiteJobStore) -> None:
    store.upsert_job(make_job(URL + "-1", company="Safaricom", score=50))
    store.upsert_job(make_job(URL + "-2", company="Safaricom", score=90))
    store.upsert_job(make_job(URL + "-3", company="Acme Ltd", score=80))

    assert [j["score"] for j in store.get_jobs()] == [90, 80, 50]
    assert [j["score"] for j in store.get_jobs(limit=1, offset=1)] == [80]
    assert [j["score"] for j in store.get_jobs_by_company("Safaricom")] == [90, 50]
    assert store.get_job(job_id_for_url(URL + "-3"))["company"] == "Acme Ltd"
    assert store.get_job("missing") is None
    assert store.get_job_stats() == (3, 2)


def test_unreadable_database_raises_storage_error(tmp_path: Path) -> None:
    path = tmp_path / "jobs.db"
    path.write_bytes(b"this is not a sqlite database" * 100)
    with pytest.raises(StorageError):
        SQLiteJobStore(path)


def test_save_application_fills_defaults(store: SQLiteJobStore) -> None:
    app = store.save_application(Application(company="Safaricom", role="SOC Analyst"))

    assert app.id
    assert app.status == "Applied"
    assert len(app.applied_date) == 10
    [stored] = store.get_applications()
    assert (stored.id, stored.company, stored.role, stored.job_id) == (
        app.id, "Safaricom", "SOC Analyst", "",
    )


def test_applications_newest_first(store: SQLiteJobStore) -> None:
    store.save_application(Application(company="A", role="r", applied_date="2026-01-05"))
    store.save_application(Application(company="B", role="r", applied_date="2026-03-01"))
    assert [a.company for a in store.get_applications()] == ["B", "A"]


@pytest.mark.parametrize(
    "app",
    [
        Application(company="", role="SOC Analyst"),
        Application(company="KCB Bank", role="  "),
        Application(company="KCB Bank", role="SOC Analyst", status="Ghosted"),
    ],
)
def test_invalid_applications_are_rejected(store: SQLiteJobStore, app: Application) -> None:
    with pytest.raises(ValueError):
        store.save_application(app)
    assert store.get_applications() == []


def test_update_application_status_and_stats(store: SQLiteJobStore) -> None:
    first = store.save_application(Application(company="A", role="r"))
    store.save_application(Application(company="B", role="r"))

    assert store.update_application_status(first.id, "Interviewing") is True
    assert store.update_application_status("missing", "Offer") is False
    with pytest.raises(ValueError):
        store.update_application_status(first.id, "Hired?")

    assert store.get_application_stats() == {
        "Applied": 1, "Interviewing": 1, "Offer": 0, "Rejected": 0,
    }
