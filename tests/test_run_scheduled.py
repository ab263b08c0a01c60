from __future__ import annotations

import pytest

from jobhunter import run_scheduled
from jobhunter.agent import ScrapeError
from jobhunter.storage import StorageError

pytestmark = pytest.mark.unit


def _raise(exc: Exception):
    def _run():
        raise exc

    return _run


@pytest.mark.parametrize(
    "failure",
    [ScrapeError({"Fuzu": "none of 4 listing pages could be fetched"}), StorageError("unable to open database file")],
)
def test_failed_pass_does_not_stop_the_scheduler(monkeypatch, failure: Exception) -> None:
    monkeypatch.setattr(run_scheduled, "run_all_sources", _raise(failure))
    assert run_scheduled.run_once("scheduled") is False


def test_successful_pass(monkeypatch) -> None:
    monkeypatch.setattr(
        run_scheduled, "run_all_sources",
        lambda: {"jobs_found": 3, "elapsed_seconds": 1.5, "sources": {}, "failed_sources": []},
    )
    assert run_scheduled.run_once("one-off") is True
