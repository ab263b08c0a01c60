"""BrighterMonday Kenya: keyword search result pages."""
from __future__ import annotations

from typing import Iterable
from urllib.parse import quote_plus

from bs4 import Tag

from jobhunter.models import Posting
from jobhunter.sources.base import HtmlSourceFetcher, first_link, first_text, today

BASE_URL = "https://www.brightermonday.co.ke"

KEYWORDS: tuple[str, ...] = (
    "cybersecurity", "security", "soc", "cloud security", "network security",
    "fortinet", "aws security", "information security", "security analyst",
)


class BrighterMondayFetcher(HtmlSourceFetcher):
    name = "BrighterMonday"
    allowed_domains = ("www.brightermonday.co.ke", "www.brightermonday.com")
    card_selectors = (
        "div.search-result",
        "div[data-cy='listing-cards-components']",
        "article[class*='job']",
    )

    TITLE = ("h3.search-result__job-title", "a[data-cy='listing-title-link'] p", "h3", "h2")
    COMPANY = (
        "div.search-result__job-meta > span:first-child",
        "p[class*='company']",
        "a[href*='/company/']",
    )
    LOCATION = (
        "div.search-result__job-meta > span:nth-child(2)",
        "span[class*='location']",
    )
    SNIPPET = ("div.search-result__job-description", "p[class*='description']")
    LINK = ("a.search-result__job-title", "a[data-cy='listing-title-link']", "a[href*='/listings/']")

    def listing_urls(self) -> Iterable[str]:
        for keyword in KEYWORDS:
            yield f"{BASE_URL}/jobs?q={quote_plus(keyword)}"

    def parse_card(self, card: Tag, page_url: str) -> Posting | None:
        title = first_text(card, self.TITLE)
        company = first_text(card, self.COMPANY)
        if not title or not company:
            return None
        return Posting(
            title=title,
            company=company,
            location=first_text(card, self.LOCATION),
            description=first_text(card, self.SNIPPET),
            source=self.name,
            url=first_link(card, self.LINK, page_url),
            posted_date=today(),
        )
