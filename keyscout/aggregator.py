# File: keyscout/aggregator.py
"""keyscout.aggregator: Сводный отчёт по всем обработанным доменам."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, TypedDict

from keyscout.crawler.models import DomainReport


class KeywordHit(TypedDict):
    """Найденное ключевое слово и страница, где оно встретилось впервые."""

    keyword: str
    reference_url: str


class DomainSummary(TypedDict, total=False):
    """Итог по одному домену."""

    domain: str
    state: str
    pages_visited: int
    fetch_failures: int
    keywords_found: List[KeywordHit]
    error: str


@dataclass(slots=True)
class ScoutReport:
    """Результаты запуска: сводки по доменам и общие счётчики."""

    domains: List[DomainSummary] = field(default_factory=list)
    keywords: List[str] = field(default_factory=list)
    totals: Dict[str, int] = field(default_factory=dict)

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def json(self, *, pretty: bool = False) -> str:
        """Возвращает JSON-представление ScoutReport."""
        return json.dumps(self.as_dict(), ensure_ascii=False, indent=2 if pretty else None)


def _summarize(report: DomainReport) -> DomainSummary:
    summary: DomainSummary = {
        "domain": report.domain,
        "state": report.state.value,
        "pages_visited": report.pages_visited,
        "fetch_failures": report.fetch_failures,
        "keywords_found": [
            {"keyword": r.keyword, "reference_url": r.reference_url} for r in report.records
        ],
    }
    if report.error:
        summary["error"] = report.error
    return summary


def aggregate_results(reports: List[DomainReport], keywords: List[str] | None = None) -> ScoutReport:
    """Собирает отчёты по доменам в ScoutReport."""
    result = ScoutReport(keywords=list(keywords or []))
    result.domains = [_summarize(r) for r in reports]
    states = [r.state.value for r in reports]
    result.totals = {
        "domains": len(reports),
        "domains_with_hits": sum(1 for r in reports if r.records),
        "records": sum(len(r.records) for r in reports),
        "pages_visited": sum(r.pages_visited for r in reports),
    }
    for state in sorted(set(states)):
        result.totals[state] = states.count(state)
    return result


__all__ = ["ScoutReport", "DomainSummary", "KeywordHit", "aggregate_results"]
