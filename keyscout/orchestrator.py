# File: keyscout/orchestrator.py
"""keyscout.orchestrator: последовательная обработка доменов и управление ресурсами."""

from __future__ import annotations

from typing import Any, Callable, List, Optional, Protocol, Sequence

from aiohttp import ClientSession

from keyscout.aggregator import ScoutReport, aggregate_results
from keyscout.config import ScoutConfig
from keyscout.crawler.browser import BrowserSession
from keyscout.crawler.fetcher import PageFetcher
from keyscout.crawler.matcher import unique_keywords
from keyscout.crawler.models import CrawlState, DomainReport, ResultRecord
from keyscout.crawler.scheduler import CrawlScheduler
from keyscout.errors import DomainProcessingError, SeedFetchFailure
from keyscout.inputs import read_domains, read_keywords
from keyscout.logger import logger
from keyscout.report.csv_sink import CsvResultSink
from keyscout.search import SearchClient

__all__ = ["DomainOrchestrator", "start_scout"]


class SeedSource(Protocol):
    async def seed_urls(self, domain: str) -> List[str]: ...


class DomainOrchestrator:
    """
    Обходит домены строго по очереди.

    Для каждого домена: seed-URL из поиска, свежая браузерная сессия,
    CrawlScheduler до конечного состояния, закрытие сессии в любом случае.
    Домены независимы: общим остаётся только список ключевых слов.
    """

    def __init__(
        self,
        config: ScoutConfig,
        keywords: Sequence[str],
        sink: Optional[Callable[[ResultRecord], None]] = None,
        *,
        search: Optional[SeedSource] = None,
        browser_factory: Callable[[ScoutConfig], BrowserSession] = BrowserSession,
        fetcher_factory: Callable[..., PageFetcher] = PageFetcher,
    ) -> None:
        self.config = config
        self.keywords: List[str] = unique_keywords(keywords)
        self.sink = sink
        self.search = search
        self.browser_factory = browser_factory
        self.fetcher_factory = fetcher_factory
        self.session: Optional[ClientSession] = None

    async def __aenter__(self) -> DomainOrchestrator:
        self.session = ClientSession(headers={"User-Agent": self.config.user_agent})
        if self.search is None:
            self.search = SearchClient(self.session, self.config)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def run(self, domains: Sequence[str]) -> List[DomainReport]:
        """Обрабатывает все домены и возвращает отчёт по каждому."""
        logger.info("Loaded %d domains and %d keywords.", len(domains), len(self.keywords))
        reports: List[DomainReport] = []
        for domain in domains:
            reports.append(await self.process_domain(domain))
        logger.info("--- All domains processed. ---")
        return reports

    async def process_domain(self, domain: str) -> DomainReport:
        if self.session is None or self.search is None:
            raise RuntimeError("Orchestrator must be used as an async context manager")
        logger.info("--- Processing Domain: %s ---", domain)
        if not self.keywords:
            logger.warning("No keywords to look for on %s. Moving to next.", domain)
            return DomainReport(domain=domain, state=CrawlState.EXHAUSTED)

        try:
            seeds = await self.search.seed_urls(domain)
        except SeedFetchFailure as exc:
            logger.warning("Skipping %s: %s", domain, exc)
            return DomainReport(domain=domain, state=CrawlState.SKIPPED, error=exc.reason)
        except Exception as exc:
            logger.exception("Skipping %s: search step failed", domain)
            return DomainReport(
                domain=domain, state=CrawlState.SKIPPED, error=str(exc) or type(exc).__name__
            )
        if not seeds:
            logger.info("No URLs to crawl for %s. Moving to next.", domain)
            return DomainReport(domain=domain, state=CrawlState.SKIPPED)

        scheduler: Optional[CrawlScheduler] = None
        report = DomainReport(domain=domain)
        try:
            async with self.browser_factory(self.config) as browser:
                fetcher = self.fetcher_factory(self.session, self.config, browser)
                scheduler = CrawlScheduler(
                    domain, self.keywords, fetcher, self.config, on_result=self.sink
                )
                report = await scheduler.run(seeds)
        except DomainProcessingError as exc:
            logger.error("❌ An unexpected error occurred while processing %s: %s", domain, exc.cause)
            report = scheduler.report if scheduler is not None else report
        except Exception as exc:
            # browser launch or teardown failed outside the crawl loop
            logger.exception("❌ Could not process %s", domain)
            if scheduler is not None:
                report = scheduler.report
            if report.state not in (CrawlState.QUOTA_MET, CrawlState.EXHAUSTED):
                report.state = CrawlState.ERROR
            report.error = str(exc)
        finally:
            logger.info("--- Cleaning up resources for %s ---", domain)
            if scheduler is not None:
                scheduler.finish()
        return report


async def start_scout(cfg: ScoutConfig, **orchestrator_kwargs: Any) -> ScoutReport:
    """
    Полный запуск: читает входные файлы, готовит CSV, обходит домены.

    Ошибки чтения доменов/ключевых слов не перехватываются.
    ``orchestrator_kwargs`` передаются в DomainOrchestrator (search, browser_factory, ...).
    """
    domains = read_domains(cfg.domains_file)
    keywords = read_keywords(cfg.keywords_file)

    cfg.results_dir.mkdir(parents=True, exist_ok=True)
    sink = CsvResultSink(cfg.results_csv)
    sink.initialize()
    logger.info("--- Crawler Initialized ---")

    async with DomainOrchestrator(cfg, keywords, sink.append, **orchestrator_kwargs) as orchestrator:
        reports = await orchestrator.run(domains)
    return aggregate_results(reports, keywords)
