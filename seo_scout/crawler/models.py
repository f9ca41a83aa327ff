"""
Data models for the SeoScout crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from urllib.parse import urlsplit

from seo_scout.crawler.link_extractor import origin_of

__all__ = (
    "InvalidSeedError",
    "CrawlRequest",
    "MetadataLink",
    "PageResult",
    "FetchError",
    "ResourceError",
    "SeoError",
    "CrawlErrors",
    "SiteReport",
    "CrawlOutcome",
)


class InvalidSeedError(ValueError):
    """Seed URL is missing or cannot be crawled."""


@dataclass(frozen=True, slots=True)
class CrawlRequest:
    """Immutable input of one site crawl."""

    seed_url: str

    @classmethod
    def from_url(cls, url: Optional[str]) -> CrawlRequest:
        if not url:
            raise InvalidSeedError("URL is required")
        try:
            parts = urlsplit(url)
        except ValueError as exc:
            raise InvalidSeedError(f"Invalid URL format: {url}") from exc
        if parts.scheme not in ("http", "https") or origin_of(url) is None:
            raise InvalidSeedError(f"Invalid URL format: {url}")
        return cls(url)

    @property
    def base_origin(self) -> str:
        return origin_of(self.seed_url)

    @property
    def crawl_entire_site(self) -> bool:
        """True when the seed points at the site root ("" or "/")."""
        return urlsplit(self.seed_url).path in ("", "/")


@dataclass(slots=True)
class MetadataLink:
    """Canonical/hreflang <link> tag found on a page and its reachability."""

    raw_tag: str
    is_reachable: bool


@dataclass(slots=True)
class PageResult:
    page_url: str
    metadata_links: List[MetadataLink] = field(default_factory=list)


# --------------------------------------------------------------------------- #
# Error records, one variant per error kind                                   #
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class FetchError:
    """Page GET failed (network, timeout, HTTP status >= 400)."""

    url: str
    error: str

    def to_dict(self) -> Dict[str, Any]:
        return {"url": self.url, "error": self.error}


@dataclass(slots=True)
class ResourceError:
    """Resource referenced by a page did not answer the HEAD probe."""

    url: str
    type: str
    page_url: str
    error: str

    def to_dict(self) -> Dict[str, Any]:
        return {"url": self.url, "type": self.type, "pageUrl": self.page_url, "error": self.error}


@dataclass(slots=True)
class SeoError:
    """Canonical/hreflang rule violations found on one page."""

    url: str
    errors: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {"url": self.url, "errors": list(self.errors)}


@dataclass(slots=True)
class CrawlErrors:
    """Per-site error mappings. Keys are unique per mapping, last write wins."""

    crawl: Dict[str, FetchError] = field(default_factory=dict)
    resources: Dict[str, ResourceError] = field(default_factory=dict)
    seo: Dict[str, SeoError] = field(default_factory=dict)

    def add(self, record: FetchError | ResourceError | SeoError) -> None:
        if isinstance(record, FetchError):
            self.crawl[record.url] = record
        elif isinstance(record, ResourceError):
            self.resources[record.url] = record
        elif isinstance(record, SeoError):
            self.seo[record.url] = record
        else:
            raise TypeError(f"unsupported error record: {record!r}")

    @property
    def has_errors(self) -> bool:
        return bool(self.crawl or self.resources or self.seo)


@dataclass(slots=True)
class SiteReport:
    """Result of one site crawl, read once by the aggregator."""

    site_url: str
    total_pages_visited: int = 0
    errors: CrawlErrors = field(default_factory=CrawlErrors)

    @property
    def has_errors(self) -> bool:
        return self.errors.has_errors

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalPages": self.total_pages_visited,
            "errors": {
                "crawlErrors": [e.to_dict() for e in self.errors.crawl.values()],
                "resourceErrors": [e.to_dict() for e in self.errors.resources.values()],
                "seoErrors": [e.to_dict() for e in self.errors.seo.values()],
            },
        }


@dataclass(slots=True)
class CrawlOutcome:
    """What the engine got back for one seed: either a report or an error."""

    url: str
    visited_urls: List[str] = field(default_factory=list)
    results: List[PageResult] = field(default_factory=list)
    report: Optional[SiteReport] = None
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None
