# === FILE: keyscout/crawler/scheduler.py ===
from __future__ import annotations

import asyncio
import logging
import time
from collections import deque
from typing import Callable, Deque, Iterable, List, Optional, Protocol, Sequence, Set

from keyscout.config import ScoutConfig
from keyscout.crawler.link_extractor import extract_links
from keyscout.crawler.matcher import match_keywords, page_text, unique_keywords
from keyscout.crawler.models import CrawlState, CrawlTask, DomainReport, ResultRecord
from keyscout.errors import DomainProcessingError, PageFetchFailure
from keyscout.logger import LOGGER_NAME

__all__ = ("CrawlScheduler", "Fetcher")


class Fetcher(Protocol):
    async def fetch(self, url: str) -> str: ...


class CrawlScheduler:
    """
    Breadth-first crawl of one domain that stops once enough distinct keywords
    have been found.

    Two limits bound the crawl: ``max_crawl_depth`` (seeds are depth 1) and
    the keyword quota ``max_keywords_per_domain``. Pages are fetched one at a
    time with ``request_delay`` between them.
    """

    def __init__(
        self,
        domain: str,
        keywords: Sequence[str],
        fetcher: Fetcher,
        config: ScoutConfig,
        on_result: Optional[Callable[[ResultRecord], None]] = None,
    ) -> None:
        self.domain = domain
        self.keywords: List[str] = unique_keywords(keywords)
        self.fetcher = fetcher
        self.config = config
        self.on_result = on_result
        # all keywords found means nothing more can be emitted
        self.quota = min(config.max_keywords_per_domain, len(self.keywords))
        self.state = CrawlState.READY
        self.queue: Deque[CrawlTask] = deque()
        self.visited: Set[str] = set()
        self.found: Set[str] = set()
        self.report = DomainReport(domain=domain)
        self.logger = logging.getLogger(LOGGER_NAME)

    @property
    def quota_met(self) -> bool:
        # an empty keyword list has no quota to meet
        return bool(self.keywords) and len(self.found) >= self.quota

    def wanted(self) -> List[str]:
        return [k for k in self.keywords if k not in self.found]

    async def run(self, seeds: Iterable[str]) -> DomainReport:
        """Crawl from *seeds* until the quota is met or the queue is empty."""
        if self.state is not CrawlState.READY:
            raise RuntimeError(f"Scheduler for {self.domain} already ran")
        if self.keywords:
            self.queue.extend(CrawlTask(url, 1) for url in seeds)
        self.state = CrawlState.CRAWLING
        start = time.monotonic()
        try:
            await self._loop()
        except Exception as exc:
            self.state = CrawlState.ERROR
            self.report.state = self.state
            self.report.error = str(exc)
            raise DomainProcessingError(self.domain, exc) from exc
        self.state = CrawlState.QUOTA_MET if self.quota_met else CrawlState.EXHAUSTED
        self.report.state = self.state
        duration = time.monotonic() - start
        if self.state is CrawlState.QUOTA_MET:
            self.logger.info(
                "✅ Limit of %d unique keywords reached for %s.", self.quota, self.domain
            )
        self.logger.info(
            "Завершено %s: %d страниц за %.2f с, найдено %d ключевых слов (%s)",
            self.domain,
            self.report.pages_visited,
            duration,
            len(self.found),
            self.state.value,
        )
        return self.report

    def finish(self) -> None:
        """Mark the crawl as fully done once its fetch context is released."""
        self.state = CrawlState.DONE

    async def _loop(self) -> None:
        while self.queue and not self.quota_met:
            task = self.queue.popleft()
            if task.url in self.visited or task.depth > self.config.max_crawl_depth:
                continue

            self.logger.info("  Crawling (depth %d): %s", task.depth, task.url)
            self.visited.add(task.url)
            self.report.pages_visited += 1

            try:
                content = await self.fetcher.fetch(task.url)
            except PageFetchFailure as exc:
                self.report.fetch_failures += 1
                self.logger.warning("    ... skipped: %s", exc)
            else:
                self._process(task, content)

            if self.queue and not self.quota_met and self.config.request_delay:
                await asyncio.sleep(self.config.request_delay)

    def _process(self, task: CrawlTask, content: str) -> None:
        wanted = self.wanted()
        if wanted:
            matches = match_keywords(page_text(content), wanted)
            for keyword in matches[: self.quota - len(self.found)]:
                self._emit(keyword, task.url)

        if task.depth < self.config.max_crawl_depth and not self.quota_met:
            for link in extract_links(content, task.url, self.domain):
                if link not in self.visited:
                    self.queue.append(CrawlTask(link, task.depth + 1))

    def _emit(self, keyword: str, url: str) -> None:
        self.found.add(keyword)
        record = ResultRecord(self.domain, keyword, url)
        self.report.records.append(record)
        self.logger.info("    ✅ Found new keyword [%s] on %s", keyword, url)
        if self.on_result is not None:
            self.on_result(record)
