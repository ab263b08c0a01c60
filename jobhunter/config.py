"""Load scraper settings from .env, config/scraper.yaml and the environment."""
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from jobhunter.log import get_logger

log = get_logger(__name__)

load_dotenv()

ROOT_DIR: Path = Path(__file__).resolve().parent.parent
CONFIG_DIR: Path = ROOT_DIR / "config"
SCRAPER_CONFIG_PATH: Path = CONFIG_DIR / "scraper.yaml"
DATA_DIR: Path = ROOT_DIR / "data"

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

# Used for scoring when the store has no skills or cannot be read.
DEFAULT_USER_SKILLS: tuple[str, ...] = (
    "AWS", "Python", "Go", "Fortinet", "SIEM", "Docker",
)

# Written to a fresh database so the operator starts with a usable profile.
SEED_USER_SKILLS: tuple[str, ...] = (
    "AWS", "Python", "Go", "Fortinet", "SIEM", "Docker",
    "Kubernetes", "Terraform", "JavaScript", "Cybersecurity",
    "Cloud Security", "SOC", "Network Security",
)


@dataclass(frozen=True)
class ScrapingConfig:
    """Politeness policy shared by every fetcher in a run."""

    parallelism: int = 1
    delay: float = 4.0
    timeout: float = 30.0
    user_agent: str = DEFAULT_USER_AGENT

    def request_headers(self) -> dict[str, str]:
        return {
            "User-Agent": self.user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.5",
            "Connection": "keep-alive",
        }


_ENV_OVERRIDES: dict[str, tuple[str, type]] = {
    "SCRAPE_PARALLELISM": ("parallelism", int),
    "SCRAPE_DELAY_SECONDS": ("delay", float),
    "SCRAPE_TIMEOUT_SECONDS": ("timeout", float),
    "SCRAPE_USER_AGENT": ("user_agent", str),
}


def get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def get_db_path() -> Path:
    raw = get_env("DB_PATH")
    return Path(raw) if raw else DATA_DIR / "jobhunter.db"


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        log.warning("Ignoring %s: expected a mapping at top level", path.name)
        return {}
    return data


def load_scraping_config(path: Path | None = None) -> ScrapingConfig:
    """Defaults, then the ``scraping:`` section of the YAML file, then env vars."""
    config = ScrapingConfig()
    fields = {name for name, _ in _ENV_OVERRIDES.values()}

    section = _load_yaml(path or SCRAPER_CONFIG_PATH).get("scraping") or {}
    for key, value in section.items():
        if key not in fields:
            log.warning("Unknown scraping option %r in config", key)
            continue
        config = _apply(config, key, value, f"config key {key!r}")

    for env_key, (name, _) in _ENV_OVERRIDES.items():
        raw = get_env(env_key)
        if raw:
            config = _apply(config, name, raw, env_key)

    if config.parallelism < 1:
        log.warning("Parallelism %d is below 1; using 1", config.parallelism)
        config = replace(config, parallelism=1)
    return config


def _apply(config: ScrapingConfig, name: str, value: Any, origin: str) -> ScrapingConfig:
    caster = next(t for n, t in _ENV_OVERRIDES.values() if n == name)
    try:
        return replace(config, **{name: caster(value)})
    except (TypeError, ValueError):
        log.warning("Invalid value %r for %s; keeping %r", value, origin, getattr(config, name))
        return config


def ensure_dirs() -> None:
    DATA_DIR.mkdir(parents=True, exist_ok=True)
