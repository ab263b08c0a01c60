from .base import FetchContext, HtmlSourceFetcher, SourceFetcher, SourceUnavailable
from .brightermonday import BrighterMondayFetcher
from .company_pages import CompanyPagesFetcher
from .fuzu import FuzuFetcher

__all__ = [
    "FetchContext", "HtmlSourceFetcher", "SourceFetcher", "SourceUnavailable",
    "BrighterMondayFetcher", "CompanyPagesFetcher", "FuzuFetcher",
    "DEFAULT_SOURCES",
]

# Fetcher factories: each is called with a fresh FetchContext per run.
DEFAULT_SOURCES = [BrighterMondayFetcher, CompanyPagesFetcher, FuzuFetcher]
