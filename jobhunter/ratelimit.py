"""Per-domain concurrency cap and request spacing, shared across fetchers."""
from __future__ import annotations

import threading
import time
from contextlib import contextmanager
from typing import Callable, Iterator

from jobhunter.log import get_logger

log = get_logger(__name__)


class DomainRateLimiter:
    """At most ``parallelism`` in-flight requests per domain, started at least
    ``delay`` seconds apart.

    Start times are reserved under a lock, so workers that arrive together are
    spaced out instead of all sleeping the same amount and firing at once.
    """

    def __init__(
        self,
        parallelism: int = 1,
        delay: float = 4.0,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.parallelism = max(1, parallelism)
        self.delay = max(0.0, delay)
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._slots: dict[str, threading.BoundedSemaphore] = {}
        self._next_start: dict[str, float] = {}

    def _semaphore(self, domain: str) -> threading.BoundedSemaphore:
        with self._lock:
            sem = self._slots.get(domain)
            if sem is None:
                sem = threading.BoundedSemaphore(self.parallelism)
                self._slots[domain] = sem
            return sem

    def _reserve_start(self, domain: str) -> float:
        with self._lock:
            now = self._clock()
            start = max(now, self._next_start.get(domain, now))
            self._next_start[domain] = start + self.delay
            return start - now

    @contextmanager
    def slot(self, domain: str) -> Iterator[None]:
        domain = domain.lower()
        with self._semaphore(domain):
            wait = self._reserve_start(domain)
            if wait > 0:
                log.debug("Waiting %.1fs before next request to %s", wait, domain)
                self._sleep(wait)
            yield
