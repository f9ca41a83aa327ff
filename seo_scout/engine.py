# File: seo_scout/engine.py
"""seo_scout.engine: Orchestration layer для пакетной проверки сайтов и агрегации ошибок."""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Sequence

from aiohttp import ClientSession

from seo_scout.aggregator import GlobalReport, record_site
from seo_scout.config import CrawlerConfig, load_config
from seo_scout.crawler.crawler import SiteCrawler
from seo_scout.crawler.models import CrawlOutcome, CrawlRequest, InvalidSeedError
from seo_scout.logger import logger

__all__ = ["Engine", "crawl_site", "start_scan"]


async def crawl_site(url: str, config: CrawlerConfig, session: ClientSession) -> CrawlOutcome:
    """
    Обходит один сайт. Ошибка входных данных или непредвиденный сбой
    превращаются в CrawlOutcome с полем error, исключение наружу не выходит.
    """
    try:
        request = CrawlRequest.from_url(url)
        crawler = SiteCrawler(request, config, session)
        report = await crawler.crawl()
    except InvalidSeedError as exc:
        logger.error("Skipping site %r: %s", url, exc)
        return CrawlOutcome(url=url, error=str(exc))
    except Exception as exc:
        logger.error("Crawl of %s failed: %s", url, exc, exc_info=logger.isEnabledFor(logging.DEBUG))
        return CrawlOutcome(url=url, error=str(exc) or type(exc).__name__)

    return CrawlOutcome(
        url=url,
        visited_urls=list(crawler.visited_order),
        results=list(crawler.results),
        report=report,
    )


class Engine:
    """Фасад для CLI и тестов: последовательный обход сайтов и сбор общего отчёта."""

    @staticmethod
    def load_config(path: Optional[str]) -> CrawlerConfig:
        """Загружает конфиг из YAML/JSON или использует значения по умолчанию."""
        return load_config(path)

    def __init__(self, config: CrawlerConfig) -> None:
        self.config = config
        self.outcomes: List[CrawlOutcome] = []

    async def run(self, sites: Optional[Sequence[str]] = None) -> GlobalReport:
        """Обходит сайты по очереди; отчёт создаётся заново на каждый запуск."""
        seeds = list(sites) if sites is not None else list(self.config.sites)
        global_report = GlobalReport()
        self.outcomes = []
        logger.info("Sites to crawl: %d", len(seeds))

        async with ClientSession() as session:
            for url in seeds:
                logger.info("Processing site: %s", url)
                outcome = await crawl_site(url, self.config, session)
                self.outcomes.append(outcome)
                if outcome.report is None:
                    continue
                if not record_site(url, outcome.report, global_report):
                    logger.info("No errors found for site: %s", url)

        return global_report

    def start_scan(self, sites: Optional[Sequence[str]] = None) -> GlobalReport:
        """Синхронная обёртка над run()."""
        return asyncio.run(self.run(sites))


async def start_scan(cfg: CrawlerConfig, sites: Optional[Sequence[str]] = None) -> GlobalReport:
    """Запускает Engine и возвращает GlobalReport (точка входа для CLI)."""
    return await Engine(cfg).run(sites)
