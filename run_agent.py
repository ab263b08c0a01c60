#!/usr/bin/env python3
"""
Command-line entry point.

  python run_agent.py                      one scraping pass over every source
  python run_agent.py jobs --min-score 70 --skill aws
  python run_agent.py analyze JOB_ID       skills gap against your stored skills
  python run_agent.py cover-letter JOB_ID
  python run_agent.py apply JOB_ID --notes "referred by ..."
  python run_agent.py applications
  python run_agent.py status APP_ID Interviewing
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent))

from jobhunter.log import get_logger

log = get_logger(__name__)


def scrape() -> int:
    from jobhunter.agent import ScrapeError, get_ingestor

    ingestor = get_ingestor()
    try:
        result = ingestor.run()
    except ScrapeError as exc:
        result = exc.summary
        log.error("Run finished with errors: %s", exc)
    total, high = ingestor.store.get_job_stats()
    log.info("Run complete.")
    log.info("  Jobs found this run: %d", result.get("jobs_found", 0))
    log.info("  Elapsed: %.1fs", result.get("elapsed_seconds", 0.0))
    for name, count in sorted(result.get("sources", {}).items()):
        log.info("  %s: %d", name, count)
    log.info("  Stored jobs: %d (%d scoring 80+)", total, high)
    if result.get("failed_sources"):
        log.info("  Failed sources: %s", ", ".join(result["failed_sources"]))
        return 1
    return 0


def _open_store():
    from jobhunter.config import get_db_path
    from jobhunter.storage import SQLiteJobStore

    return SQLiteJobStore(get_db_path())


def list_jobs(args: argparse.Namespace) -> int:
    from jobhunter.tracker import JobFilters, filter_jobs

    store = _open_store()
    filters = JobFilters(args.min_score, args.skill, args.company, args.location)
    jobs = filter_jobs(store.get_jobs(limit=args.limit), filters)
    for j in jobs:
        print(f"{j['id']}  {j['score']:>3}  {j['title']} @ {j['company']} ({j['location'] or '-'})")
    print(f"{len(jobs)} job(s)")
    return 0


def analyze(args: argparse.Namespace) -> int:
    from jobhunter.tracker import analyze_job

    result = analyze_job(_open_store(), args.job_id)
    print(f"Fit score: {result.fit_score}%")
    print(f"Matching: {', '.join(result.matching_skills) or '-'}")
    print(f"Missing:  {', '.join(result.missing_skills) or '-'}")
    for t in result.transferable:
        print(f"Transferable: {t}")
    for r in result.recommendations:
        print(f"- {r}")
    return 0


def cover_letter(args: argparse.Namespace) -> int:
    from jobhunter.tracker import cover_letter_for_job

    print(cover_letter_for_job(_open_store(), args.job_id, args.profile))
    return 0


def apply(args: argparse.Namespace) -> int:
    from jobhunter.tracker import apply_to_job

    app = apply_to_job(_open_store(), args.job_id, notes=args.notes)
    print(f"Application to {app.company} for {app.role} tracked (id {app.id})")
    return 0


def applications(args: argparse.Namespace) -> int:
    store = _open_store()
    for app in store.get_applications():
        print(f"{app.id}  {app.applied_date}  {app.status:<12}  {app.role} @ {app.company}")
    stats = store.get_application_stats()
    print(", ".join(f"{status}: {n}" for status, n in stats.items()))
    return 0


def set_status(args: argparse.Namespace) -> int:
    if not _open_store().update_application_status(args.app_id, args.status):
        log.error("No application with id %s", args.app_id)
        return 1
    print(f"{args.app_id} -> {args.status}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    from jobhunter.models import APPLICATION_STATUSES

    parser = argparse.ArgumentParser(description="Kenyan security job scraper and tracker")
    sub = parser.add_subparsers(dest="command")

    jobs = sub.add_parser("jobs", help="list stored jobs, best first")
    jobs.add_argument("--min-score", type=int, default=0)
    jobs.add_argument("--skill", default="")
    jobs.add_argument("--company", default="")
    jobs.add_argument("--location", default="")
    jobs.add_argument("--limit", type=int, default=50)
    jobs.set_defaults(handler=list_jobs)

    p = sub.add_parser("analyze", help="skills gap for one job")
    p.add_argument("job_id")
    p.set_defaults(handler=analyze)

    p = sub.add_parser("cover-letter", help="draft a cover letter for one job")
    p.add_argument("job_id")
    p.add_argument("--profile", default="")
    p.set_defaults(handler=cover_letter)

    p = sub.add_parser("apply", help="track an application to one job")
    p.add_argument("job_id")
    p.add_argument("--notes", default="")
    p.set_defaults(handler=apply)

    p = sub.add_parser("applications", help="list tracked applications")
    p.set_defaults(handler=applications)

    p = sub.add_parser("status", help="update an application's status")
    p.add_argument("app_id")
    p.add_argument("status", choices=APPLICATION_STATUSES)
    p.set_defaults(handler=set_status)
    return parser


def main(argv: list[str] | None = None) -> int:
    from jobhunter.storage import StorageError
    from jobhunter.tracker import JobNotFound

    args = build_parser().parse_args(argv)
    if args.command is None:
        return scrape()
    try:
        return args.handler(args)
    except JobNotFound as exc:
        log.error("No job with id %s", exc)
    except StorageError as exc:
        log.error("Database error: %s", exc)
    return 1


if __name__ == "__main__":
    sys.exit(main())
