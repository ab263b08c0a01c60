from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

from jobhunter import log as jlog

pytestmark = pytest.mark.unit


@pytest.fixture
def unconfigured(monkeypatch):
    """Logging not yet configured; LOG_* restored afterwards even if .env sets them."""
    monkeypatch.setattr(jlog, "_configured", False)
    for key in ("LOG_LEVEL", "LOG_DIR"):
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    root = logging.getLogger()
    level = root.level
    yield monkeypatch
    for handler in root.handlers:
        if isinstance(handler, logging.FileHandler):
            handler.close()
    root.setLevel(level)


def _bare_root(monkeypatch) -> logging.Logger:
    root = logging.getLogger()
    # pytest attaches its capture handlers per test phase
    monkeypatch.setattr(root, "handlers", [])
    return root


def test_env_file_settings_apply_to_handlers(unconfigured, tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(f"LOG_LEVEL=ERROR\nLOG_DIR={tmp_path / 'logs'}\n")
    unconfigured.setattr(jlog, "_ENV_FILE", env_file)
    root = _bare_root(unconfigured)

    jlog.get_logger("jobhunter.test")

    console = [h for h in root.handlers if getattr(h, "stream", None) is sys.stdout]
    files = [h for h in root.handlers if isinstance(h, logging.FileHandler)]
    assert [h.level for h in console] == [logging.ERROR]
    assert len(files) == 1
    assert Path(files[0].baseFilename).parent == tmp_path / "logs"
    assert files[0].level == logging.DEBUG


def test_configures_only_once(unconfigured, tmp_path: Path) -> None:
    unconfigured.setattr(jlog, "_ENV_FILE", tmp_path / "missing.env")
    root = _bare_root(unconfigured)

    jlog.configure_logging(log_dir=tmp_path)
    jlog.configure_logging(log_dir=tmp_path)

    assert len(root.handlers) == 2
