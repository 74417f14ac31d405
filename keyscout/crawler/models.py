# keyscout/crawler/models.py
"""
Data models for the KeyScout crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class CrawlState(str, Enum):
    """Lifecycle of one domain's crawl."""

    READY = "ready"
    CRAWLING = "crawling"
    QUOTA_MET = "quota_met"
    EXHAUSTED = "exhausted"
    ERROR = "error"
    DONE = "done"
    SKIPPED = "skipped"


@dataclass(frozen=True, slots=True)
class CrawlTask:
    """Queue element: a URL and its distance from the seed set (seeds are depth 1)."""

    url: str
    depth: int


@dataclass(frozen=True, slots=True)
class ResultRecord:
    """One keyword discovered on one domain, with the page it was first seen on."""

    domain: str
    keyword: str
    reference_url: str


@dataclass(slots=True)
class DomainReport:
    """Outcome of processing a single domain."""

    domain: str
    state: CrawlState = CrawlState.READY
    records: List[ResultRecord] = field(default_factory=list)
    pages_visited: int = 0
    fetch_failures: int = 0
    error: str | None = None

    @property
    def keywords_found(self) -> List[str]:
        return [r.keyword for r in self.records]
