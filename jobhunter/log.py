"""Logging setup shared by every module (stdlib logging).

Console output follows LOG_LEVEL; a daily file under LOG_DIR (default logs/)
always records DEBUG so per-request scraper traces are kept.
"""
from __future__ import annotations

import logging
import os
import sys
import threading
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv

_ROOT = Path(__file__).resolve().parent.parent
_ENV_FILE = _ROOT / ".env"
_DEFAULT_LOG_DIR = _ROOT / "logs"
_FORMAT = "%(asctime)s  %(levelname)-8s  [%(threadName)s]  %(name)s  %(message)s"
_DATE_FMT = "%Y-%m-%d %H:%M:%S"

# HTTP client libraries log every connection at DEBUG.
_NOISY_LOGGERS = ("urllib3", "httpx", "httpcore", "openai")

_setup_lock = threading.Lock()
_configured = False


def get_logger(name: str) -> logging.Logger:
    if not _configured:
        configure_logging()
    return logging.getLogger(name)


def configure_logging(level: str | None = None, log_dir: Path | None = None) -> None:
    """Attach console and file handlers to the root logger once per process."""
    global _configured
    with _setup_lock:
        if _configured:
            return
        _configured = True
        # LOG_LEVEL and LOG_DIR may come from .env
        load_dotenv(_ENV_FILE)

        console_level = getattr(
            logging, (level or os.environ.get("LOG_LEVEL", "INFO")).upper(), logging.INFO
        )
        formatter = logging.Formatter(_FORMAT, datefmt=_DATE_FMT)
        root = logging.getLogger()
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

        if root.handlers:
            # pytest or an embedding app already owns the handlers
            root.setLevel(console_level)
            return
        root.setLevel(logging.DEBUG)

        console = logging.StreamHandler(sys.stdout)
        console.setLevel(console_level)
        console.setFormatter(formatter)
        root.addHandler(console)

        file_handler = _daily_file_handler(log_dir or _log_dir_from_env())
        if file_handler is not None:
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)


def _log_dir_from_env() -> Path:
    raw = os.environ.get("LOG_DIR", "").strip()
    return Path(raw) if raw else _DEFAULT_LOG_DIR


def _daily_file_handler(log_dir: Path) -> logging.Handler | None:
    path = log_dir / f"jobhunter_{datetime.now():%Y-%m-%d}.log"
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding="utf-8")
    except OSError:
        return None
    handler.setLevel(logging.DEBUG)
    return handler
