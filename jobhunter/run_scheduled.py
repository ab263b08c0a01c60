"""
Run the scraper shortly after start and then every SCRAPE_INTERVAL_HOURS.

Usage:
  - Cron: install a 6-hourly entry with: python setup_cron.py
      Then: 0 */6 * * * cd /path/to/project && .venv/bin/python -m jobhunter.run_scheduled --once
  - Or keep this process running: python -m jobhunter.run_scheduled
"""
from __future__ import annotations

import sys
import time

from jobhunter.agent import ScrapeError, run_all_sources
from jobhunter.config import get_env
from jobhunter.log import get_logger
from jobhunter.storage import StorageError

log = get_logger(__name__)


def _float_env(key: str, default: float) -> float:
    raw = get_env(key)
    try:
        return float(raw) if raw else default
    except ValueError:
        log.warning("Invalid %s=%r, using %s", key, raw, default)
        return default


INTERVAL_HOURS = _float_env("SCRAPE_INTERVAL_HOURS", 6.0)
STARTUP_DELAY_SECONDS = _float_env("SCRAPE_STARTUP_DELAY_SECONDS", 5.0)


def run_once(label: str = "scheduled") -> bool:
    log.info("Starting %s job scraping...", label)
    try:
        result = run_all_sources()
    except ScrapeError as exc:
        log.error("%s scraping failed: %s", label.capitalize(), exc)
        return False
    except StorageError as exc:
        log.error("%s scraping aborted, job store unavailable: %s", label.capitalize(), exc)
        return False
    log.info(
        "%s scraping completed: %d jobs in %.1fs",
        label.capitalize(), result["jobs_found"], result["elapsed_seconds"],
    )
    return True


def main() -> None:
    log.info("Scheduler: first run in %.0fs, then every %.1f hours", STARTUP_DELAY_SECONDS, INTERVAL_HOURS)
    time.sleep(STARTUP_DELAY_SECONDS)
    run_once("initial")
    while True:
        log.info("Next run in %.1f hours", INTERVAL_HOURS)
        time.sleep(INTERVAL_HOURS * 3600)
        run_once("scheduled")


if __name__ == "__main__":
    if "--once" in sys.argv:
        sys.exit(0 if run_once("one-off") else 1)
    main()
