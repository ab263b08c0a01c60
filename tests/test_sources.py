from __future__ import annotations

import pytest
import requests

from jobhunter.sources import (
    BrighterMondayFetcher,
    CompanyPagesFetcher,
    FuzuFetcher,
    SourceUnavailable,
)
from jobhunter.sources.company_pages import is_relevant_title

pytestmark = pytest.mark.unit

BM_LISTING = """
<html><body>
  <div class="search-result">
    <a class="search-result__job-title" href="/listings/soc-analyst-abc">
      <h3 class="search-result__job-title">SOC Analyst</h3>
    </a>
    <div class="search-result__job-meta"><span>Acme Ltd</span><span>Nairobi</span></div>
    <div class="search-result__job-description">Monitor SIEM alerts</div>
  </div>
  <div class="search-result">
    <h3 class="search-result__job-title">Card without company</h3>
  </div>
</body></html>
"""

FUZU_LISTING = """
<div class="job-card">
  <h3>Cloud Engineer</h3>
  <span class="company-name">Beta Co</span>
  <span class="location">Mombasa</span>
  <a href="/kenya/jobs/cloud-engineer-1">View</a>
</div>
"""


def _bm_urls(ctx) -> list[str]:
    return list(BrighterMondayFetcher(ctx).listing_urls())


def test_brightermonday_listing_urls_encode_keywords(make_ctx) -> None:
    urls = _bm_urls(make_ctx())
    assert urls[0] == "https://www.brightermonday.co.ke/jobs?q=cybersecurity"
    assert "https://www.brightermonday.co.ke/jobs?q=cloud+security" in urls
    assert len(urls) == 9


def test_brightermonday_parses_cards(make_ctx) -> None:
    first_url = _bm_urls(make_ctx())[0]
    fetcher = BrighterMondayFetcher(make_ctx({first_url: BM_LISTING}))

    postings = list(fetcher.list_candidates())

    assert len(postings) == 1
    p = postings[0]
    assert p.title == "SOC Analyst"
    assert p.company == "Acme Ltd"
    assert p.location == "Nairobi"
    assert p.description == "Monitor SIEM alerts"
    assert p.url == "https://www.brightermonday.co.ke/listings/soc-analyst-abc"
    assert p.source == "BrighterMonday"
    assert len(p.posted_date) == 10


def test_failed_listing_page_does_not_stop_the_rest(make_ctx) -> None:
    urls = _bm_urls(make_ctx())
    ctx = make_ctx({
        urls[0]: 500,
        urls[1]: requests.ConnectionError("connection reset"),
        urls[2]: BM_LISTING,
    })
    fetcher = BrighterMondayFetcher(ctx)

    postings = list(fetcher.list_candidates())

    assert [p.title for p in postings] == ["SOC Analyst"]
    assert ctx.session.requested == urls


def test_source_unavailable_when_no_listing_page_is_reachable(make_ctx) -> None:
    fetcher = FuzuFetcher(make_ctx())
    with pytest.raises(SourceUnavailable):
        list(fetcher.list_candidates())


def test_fuzu_parses_cards(make_ctx) -> None:
    ctx = make_ctx({"https://www.fuzu.com/kenya/technology-jobs": FUZU_LISTING})
    postings = list(FuzuFetcher(ctx).list_candidates())

    assert len(postings) == 1
    p = postings[0]
    assert (p.title, p.company, p.location) == ("Cloud Engineer", "Beta Co", "Mombasa")
    assert p.url == "https://www.fuzu.com/kenya/jobs/cloud-engineer-1"


def test_company_pages_keep_relevant_titles_only(make_ctx) -> None:
    page = """
    <ul>
      <li class="job"><h4>Security Engineer</h4><a href="/careers/security-engineer">Apply</a></li>
      <li class="job"><h4>Retail Sales Agent</h4><a href="/careers/sales">Apply</a></li>
    </ul>
    """
    ctx = make_ctx({"https://www.safaricom.co.ke/careers/": page})
    postings = list(CompanyPagesFetcher(ctx).list_candidates())

    assert len(postings) == 1
    p = postings[0]
    assert p.title == "Security Engineer"
    assert p.company == "Safaricom"
    assert p.location == "Nairobi, Kenya"
    assert p.url == "https://www.safaricom.co.ke/careers/security-engineer"


def test_company_pages_fall_back_to_job_links(make_ctx) -> None:
    page = '<p><a href="jobs/cloud-analyst">Cloud Analyst</a></p>'
    ctx = make_ctx({"https://www.kcbgroup.com/careers/": page})
    postings = list(CompanyPagesFetcher(ctx).list_candidates())

    assert [(p.title, p.company, p.url) for p in postings] == [
        ("Cloud Analyst", "KCB Bank", "https://www.kcbgroup.com/careers/jobs/cloud-analyst"),
    ]


@pytest.mark.parametrize(
    "title, relevant",
    [("Cyber Security Analyst", True), ("AWS Specialist", True), ("Teller", False), ("", False)],
)
def test_is_relevant_title(title: str, relevant: bool) -> None:
    assert is_relevant_title(title) is relevant


def test_detail_uses_first_selector_with_text(make_ctx) -> None:
    url = "https://www.fuzu.com/kenya/jobs/1"
    page = """
    <div class="description">second choice</div>
    <div class="job-description">   </div>
    <div class="job-description">first choice</div>
    """
    fetcher = FuzuFetcher(make_ctx({url: page}))
    assert fetcher.fetch_detail(url) == "first choice"


def test_detail_falls_back_to_body_text(make_ctx) -> None:
    url = "https://www.fuzu.com/kenya/jobs/2"
    page = "<html><body><p>Only</p><p>body text</p></body></html>"
    fetcher = FuzuFetcher(make_ctx({url: page}))
    assert fetcher.fetch_detail(url) == "Only body text"


def test_detail_failure_returns_empty_string(make_ctx) -> None:
    url = "https://www.fuzu.com/kenya/jobs/3"
    fetcher = FuzuFetcher(make_ctx({url: requests.Timeout("slow")}))
    assert fetcher.fetch_detail(url) == ""
    assert fetcher.fetch_detail("") == ""


def test_domains_outside_allow_list_are_never_requested(make_ctx) -> None:
    ctx = make_ctx({"https://jobs.example.com/1": "<div class='job-description'>x</div>"})
    fetcher = FuzuFetcher(ctx)
    assert fetcher.fetch_detail("https://jobs.example.com/1") == ""
    assert ctx.session.requested == []


def test_cancelled_context_skips_requests(make_ctx) -> None:
    url = "https://www.fuzu.com/kenya/jobs/4"
    ctx = make_ctx({url: "<div class='job-description'>x</div>"})
    ctx.cancel_event.set()
    assert FuzuFetcher(ctx).fetch_detail(url) == ""
    assert ctx.session.requested == []


def test_context_sends_browser_headers(make_ctx) -> None:
    ctx = make_ctx()
    assert ctx.session.headers["User-Agent"].startswith("Mozilla/5.0")
    assert ctx.session.headers["Accept-Language"] == "en-US,en;q=0.5"
