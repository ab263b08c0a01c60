"""Fuzu Kenya: category listing pages."""
from __future__ import annotations

from typing import Iterable

from bs4 import Tag

from jobhunter.models import Posting
from jobhunter.sources.base import HtmlSourceFetcher, first_link, first_text, today

BASE_URL = "https://www.fuzu.com"

CATEGORIES: tuple[str, ...] = ("technology", "it", "security", "cyber-security")


class FuzuFetcher(HtmlSourceFetcher):
    name = "Fuzu"
    allowed_domains = ("www.fuzu.com",)
    card_selectors = ("div[class*='job-card']", "div[data-testid*='job']")

    TITLE = ("h3", "h4", "[class*='title']")
    COMPANY = ("[class*='company']", "[class*='employer']")
    LOCATION = ("[class*='location']", "[class*='address']")
    LINK = ("a[href*='/jobs/']", "a[href]")

    def listing_urls(self) -> Iterable[str]:
        for category in CATEGORIES:
            yield f"{BASE_URL}/kenya/{category}-jobs"

    def parse_card(self, card: Tag, page_url: str) -> Posting | None:
        title = first_text(card, self.TITLE)
        company = first_text(card, self.COMPANY)
        if not title or not company:
            return None
        return Posting(
            title=title,
            company=company,
            location=first_text(card, self.LOCATION),
            description="",
            source=self.name,
            url=first_link(card, self.LINK, page_url),
            posted_date=today(),
        )
