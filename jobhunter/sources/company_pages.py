"""Careers pages of large Kenyan employers.

These pages have no common markup, so any job-looking element is taken and
kept only when its title mentions a security or cloud keyword.
"""
from __future__ import annotations

from typing import Iterable
from urllib.parse import urljoin

from bs4 import Tag

from jobhunter.models import Posting
from jobhunter.sources.base import HtmlSourceFetcher, clean_text, first_link, first_text, today

COMPANIES: tuple[tuple[str, str], ...] = (
    ("Safaricom", "https://www.safaricom.co.ke/careers/"),
    ("KCB Bank", "https://www.kcbgroup.com/careers/"),
    ("Equity Bank", "https://www.equitybankgroup.com/careers/"),
)

RELEVANT_KEYWORDS: tuple[str, ...] = (
    "security", "cyber", "soc", "cloud", "network",
    "analyst", "engineer", "specialist", "consultant",
    "fortinet", "aws", "azure", "siem", "incident",
)

DEFAULT_LOCATION = "Nairobi, Kenya"


def is_relevant_title(title: str) -> bool:
    t = title.lower()
    return bool(t) and any(kw in t for kw in RELEVANT_KEYWORDS)


class CompanyPagesFetcher(HtmlSourceFetcher):
    name = "Company Websites"
    allowed_domains = ("www.safaricom.co.ke", "www.kcbgroup.com", "www.equitybankgroup.com")
    card_selectors = (
        "div.job-listing",
        "li.job",
        "tr.job-row",
        "div[class*='job']",
        "a[href*='job']",
    )

    TITLE = ("h3", "h4", ".title", ".job-title")

    def listing_urls(self) -> Iterable[str]:
        for _, url in COMPANIES:
            yield url

    def company_for(self, page_url: str) -> str:
        for name, url in COMPANIES:
            if page_url.startswith(url):
                return name
        return ""

    def parse_card(self, card: Tag, page_url: str) -> Posting | None:
        title = first_text(card, self.TITLE) or clean_text(card)
        if not is_relevant_title(title):
            return None
        if card.name == "a" and card.get("href"):
            url = urljoin(page_url, card["href"].strip())
        else:
            url = first_link(card, ("a[href]",), page_url)
        return Posting(
            title=title,
            company=self.company_for(page_url),
            location=DEFAULT_LOCATION,
            description="",
            source=self.name,
            url=url,
            posted_date=today(),
        )
