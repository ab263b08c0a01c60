from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable, Iterator, Sequence
from urllib.parse import urljoin, urlparse

import requests
from bs4 import BeautifulSoup, Tag

from jobhunter.config import ScrapingConfig
from jobhunter.log import get_logger
from jobhunter.models import Posting
from jobhunter.ratelimit import DomainRateLimiter

log = get_logger(__name__)

# Tried in order on detail pages; the whole <body> is the last resort.
DETAIL_SELECTORS: tuple[str, ...] = (
    "div.job-description",
    "div.description",
    "article.content",
    "section.description",
    "div[class*='desc']",
    "div.job-details",
    "div.requirements",
    "div.responsibilities",
)


class SourceUnavailable(Exception):
    """No listing page of a source could be fetched during a pass."""


class FetchContext:
    """Per-run fetch state: immutable config, shared limiter, own HTTP session."""

    def __init__(
        self,
        config: ScrapingConfig,
        limiter: DomainRateLimiter,
        cancel_event: threading.Event | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.config = config
        self.limiter = limiter
        self.cancel_event = cancel_event or threading.Event()
        self.session = session or requests.Session()
        self.session.headers.update(config.request_headers())

    @property
    def cancelled(self) -> bool:
        return self.cancel_event.is_set()

    def close(self) -> None:
        self.session.close()


def clean_text(node: Tag | None) -> str:
    if node is None:
        return ""
    return " ".join(node.get_text(" ").split())


def first_text(node: Tag, selectors: Sequence[str]) -> str:
    """Text of the first selector that yields non-empty text, else ""."""
    for sel in selectors:
        for match in node.select(sel):
            text = clean_text(match)
            if text:
                return text
    return ""


def first_link(node: Tag, selectors: Sequence[str], base_url: str) -> str:
    for sel in selectors:
        for match in node.select(sel):
            href = (match.get("href") or "").strip()
            if href and not href.startswith(("#", "javascript:", "mailto:")):
                return urljoin(base_url, href)
    return ""


def today() -> str:
    return datetime.now().strftime("%Y-%m-%d")


class SourceFetcher(ABC):
    name: str = "unknown"

    @abstractmethod
    def list_candidates(self) -> Iterator[Posting]:
        """Yield postings lazily; one pass per call."""

    def fetch_detail(self, url: str) -> str:
        return ""

    def close(self) -> None:
        pass


class HtmlSourceFetcher(SourceFetcher):
    """Scrapes listing pages, then detail pages, from an allow-listed set of domains."""

    allowed_domains: tuple[str, ...] = ()
    card_selectors: tuple[str, ...] = ()
    detail_selectors: tuple[str, ...] = DETAIL_SELECTORS

    def __init__(self, ctx: FetchContext) -> None:
        self.ctx = ctx

    @abstractmethod
    def listing_urls(self) -> Iterable[str]:
        ...

    @abstractmethod
    def parse_card(self, card: Tag, page_url: str) -> Posting | None:
        ...

    def is_allowed(self, url: str) -> bool:
        host = (urlparse(url).hostname or "").lower()
        return host in self.allowed_domains

    def get_html(self, url: str) -> str | None:
        """GET *url* under the politeness policy; None on any failure."""
        if not self.is_allowed(url):
            log.warning("[%s] skipping %s: domain not allowed", self.name, url)
            return None
        if self.ctx.cancelled:
            log.info("[%s] cancelled, skipping %s", self.name, url)
            return None
        host = urlparse(url).hostname or ""
        try:
            with self.ctx.limiter.slot(host):
                log.debug("[%s] visiting %s", self.name, url)
                r = self.ctx.session.get(url, timeout=self.ctx.config.timeout)
            r.raise_for_status()
        except requests.RequestException as exc:
            log.warning("[%s] request failed: %s - %s", self.name, url, exc)
            return None
        log.debug("[%s] fetched %s (%d bytes)", self.name, url, len(r.content))
        return r.text

    def find_cards(self, soup: BeautifulSoup) -> list[Tag]:
        for sel in self.card_selectors:
            cards = soup.select(sel)
            if cards:
                return cards
        return []

    def list_candidates(self) -> Iterator[Posting]:
        attempted = reached = 0
        for page_url in self.listing_urls():
            attempted += 1
            html = self.get_html(page_url)
            if html is None:
                continue
            reached += 1
            soup = BeautifulSoup(html, "html.parser")
            cards = self.find_cards(soup)
            log.debug("[%s] %d cards on %s", self.name, len(cards), page_url)
            for card in cards:
                posting = self.parse_card(card, page_url)
                if posting is not None:
                    yield posting
        # pages skipped after cancel() are not failures
        if attempted and not reached and not self.ctx.cancelled:
            raise SourceUnavailable(f"none of {attempted} listing pages could be fetched")

    def fetch_detail(self, url: str) -> str:
        if not url:
            return ""
        html = self.get_html(url)
        if not html:
            return ""
        soup = BeautifulSoup(html, "html.parser")
        return first_text(soup, self.detail_selectors) or clean_text(soup.body or soup)
