#!/usr/bin/env python3
"""
Install (or refresh) the crontab line that runs one scraping pass every
six hours. Older jobhunter lines are replaced rather than duplicated.

  python setup_cron.py            install
  python setup_cron.py --print    only show the line
"""
from __future__ import annotations

import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent
VENV_PYTHON = ROOT / ".venv" / "bin" / "python"
MARKER = "-m jobhunter.run_scheduled"
SCHEDULE = "0 */6 * * *"


def cron_line(python: Path = VENV_PYTHON) -> str:
    return f"{SCHEDULE} cd {ROOT} && {python} {MARKER} --once"


def merge_crontab(existing: str, line: str) -> str:
    kept = [entry for entry in existing.splitlines() if entry.strip() and MARKER not in entry]
    return "\n".join(kept + [line]) + "\n"


def _read_crontab() -> str:
    out = subprocess.run(["crontab", "-l"], capture_output=True, text=True, timeout=5)
    # "no crontab for user" exits non-zero
    return out.stdout if out.returncode == 0 else ""


def _write_crontab(content: str) -> bool:
    proc = subprocess.run(["crontab", "-"], input=content, capture_output=True, text=True, timeout=5)
    return proc.returncode == 0


def main(argv: list[str]) -> int:
    python = VENV_PYTHON if VENV_PYTHON.exists() else Path(sys.executable)
    line = cron_line(python)
    if "--print" in argv:
        print(line)
        return 0

    try:
        current = _read_crontab()
        updated = merge_crontab(current, line)
        if updated == current:
            print("Cron entry already up to date.")
            return 0
        if _write_crontab(updated):
            print(f"Installed: {line}")
            return 0
        print("crontab rejected the update.")
    except (FileNotFoundError, subprocess.TimeoutExpired) as exc:
        print(f"Could not run crontab ({exc}).")

    fallback = ROOT / "crontab.txt"
    fallback.write_text(line + "\n", encoding="utf-8")
    print(f"Add the line in {fallback} to your scheduler manually.")
    return 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
