"""
Reachability checks for resources and metadata links found on a page.
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional

from seo_scout.crawler.fetcher import Fetcher, FetchFailed
from seo_scout.crawler.models import CrawlErrors, ResourceError

__all__ = ("is_bypassed", "LinkChecker", "ResourceChecker")

logger = logging.getLogger("SeoScout")


def is_bypassed(url: str, markers: Iterable[str]) -> bool:
    """Debug-widget URLs are reachable by definition and never probed."""
    lowered = url.lower()
    return any(marker in lowered for marker in markers)


class LinkChecker:
    """Probes hrefs of canonical/hreflang tags. Failures are not recorded."""

    def __init__(self, fetcher: Fetcher) -> None:
        self.fetcher = fetcher
        self.markers = fetcher.config.bypass_markers

    async def check(self, href: Optional[str]) -> bool:
        if not href:
            return False
        if is_bypassed(href, self.markers):
            return True
        try:
            await self.fetcher.probe(href)
        except FetchFailed as exc:
            logger.debug("Link %s unreachable: %s", href, exc.message)
            return False
        return True


class ResourceChecker:
    """Probes stylesheets, scripts, images etc. and records failures."""

    def __init__(self, fetcher: Fetcher, errors: CrawlErrors) -> None:
        self.fetcher = fetcher
        self.errors = errors
        self.markers = fetcher.config.bypass_markers

    async def check(self, url: str, type_: str, page_url: str) -> bool:
        if is_bypassed(url, self.markers):
            return True
        try:
            await self.fetcher.probe(url)
        except FetchFailed as exc:
            logger.warning("Resource %s (%s) unreachable: %s", url, type_, exc.message)
            self.errors.add(
                ResourceError(
                    url=url,
                    type=type_,
                    page_url=page_url,
                    error=f"{exc.message} (from page: {page_url})",
                )
            )
            return False
        return True
