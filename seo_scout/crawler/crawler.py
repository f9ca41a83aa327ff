from __future__ import annotations

import asyncio
import logging
import time
from collections import deque
from typing import Deque, List, Set
from urllib.parse import urlsplit

from aiohttp import ClientSession

from seo_scout.config import CrawlerConfig
from seo_scout.crawler.checkers import LinkChecker, ResourceChecker
from seo_scout.crawler.fetcher import Fetcher, FetchFailed
from seo_scout.crawler.link_extractor import is_mail_link, normalize_url, strip_query
from seo_scout.crawler.models import (
    CrawlRequest,
    FetchError,
    MetadataLink,
    PageResult,
    SeoError,
    SiteReport,
)
from seo_scout.parser.html_parser import ParsedPage, attr
from seo_scout.seo.validator import validate_seo_tags

__all__ = ("REDIRECT_STATUSES", "SiteCrawler")

REDIRECT_STATUSES = frozenset({301, 302})


class SiteCrawler:
    """
    BFS crawler for a single site with SEO validation of every page.

    Pages are fetched strictly one at a time in discovery order; the
    reachability checks of one page run concurrently and are joined before
    the next page is dequeued. All state belongs to this instance.
    """

    def __init__(self, request: CrawlRequest, config: CrawlerConfig, session: ClientSession) -> None:
        self.request = request
        self.config = config
        self.fetcher = Fetcher(session, config)
        self.logger = logging.getLogger("SeoScout")

        self.report = SiteReport(site_url=request.seed_url)
        self.visited: Set[str] = set()
        self.visited_order: List[str] = []
        self.results: List[PageResult] = []
        self.frontier: Deque[str] = deque()
        self._queued: Set[str] = set()

        self._seed_key = normalize_url(request.seed_url)
        self._links = LinkChecker(self.fetcher)
        self._resources = ResourceChecker(self.fetcher, self.report.errors)

    @property
    def total_pages(self) -> int:
        return self.report.total_pages_visited

    async def crawl(self) -> SiteReport:
        self.logger.info("Starting crawl from: %s", self.request.seed_url)
        self.logger.info("Crawl mode: %s", "Entire site" if self.request.crawl_entire_site else "Single page")
        start = time.monotonic()

        self._enqueue(self.request.seed_url)
        while self.frontier and self.total_pages < self.config.max_pages:
            await self.crawl_page(self.frontier.popleft())

        duration = time.monotonic() - start
        self.logger.info(
            "Finished %s: %d pages in %.2f s (%d crawl, %d resource, %d SEO errors)",
            self.request.seed_url,
            self.total_pages,
            duration,
            len(self.report.errors.crawl),
            len(self.report.errors.resources),
            len(self.report.errors.seo),
        )
        return self.report

    async def crawl_page(self, page_url: str) -> None:
        if is_mail_link(page_url):
            return

        try:
            page_url = strip_query(page_url)
        except ValueError:
            self.logger.debug("Skipping malformed URL: %s", page_url)
            return
        key = normalize_url(page_url)

        if self._is_excluded(key):
            return
        if key in self.visited:
            return
        if not self.request.crawl_entire_site and key != self._seed_key:
            self.logger.info("Skipping page: %s (not in single-page mode)", page_url)
            return

        self.logger.info("Crawling: %s", key)
        try:
            response = await self.fetcher.fetch_page(page_url)
        except FetchFailed as exc:
            self.logger.warning("Failed %s: %s", page_url, exc.message)
            self.report.errors.add(FetchError(page_url, exc.message))
            return

        if response.status in REDIRECT_STATUSES:
            self.logger.info("Skipping redirected page: %s (%d)", page_url, response.status)
            return

        self.visited.add(key)
        self.visited_order.append(key)
        self.report.total_pages_visited += 1

        page = ParsedPage(response.body, page_url)

        seo_errors = validate_seo_tags(page, page_url)
        if seo_errors:
            self.report.errors.add(SeoError(page_url, seo_errors))

        metadata_links = await self._check_page(page)
        if metadata_links:
            self.results.append(PageResult(page_url, metadata_links))

        for link in page.same_origin_links(self.request.base_origin):
            self._enqueue(link)

    async def _check_page(self, page: ParsedPage) -> List[MetadataLink]:
        """Probe metadata links and resources of *page* concurrently."""
        tags = page.metadata_link_tags()
        resources = page.resources(skip=self.config.bypass_markers)

        async with asyncio.TaskGroup() as tg:
            link_tasks = [tg.create_task(self._links.check(attr(tag, "href"))) for tag in tags]
            for res in resources:
                tg.create_task(self._resources.check(res.url, res.type, page.url))

        return [MetadataLink(str(tag).strip(), task.result()) for tag, task in zip(tags, link_tasks)]

    def _enqueue(self, url: str) -> None:
        key = normalize_url(url)
        if key in self.visited or key in self._queued:
            return
        self._queued.add(key)
        self.frontier.append(url)

    def _is_excluded(self, key: str) -> bool:
        try:
            path = urlsplit(key).path.lower()
        except ValueError:
            return False
        return any(word in path for word in self.config.excluded_path_keywords)
