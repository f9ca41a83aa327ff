"""HTML parsing utilities for SeoScout.

:class:`ParsedPage` wraps a BeautifulSoup document and exposes the handful of
queries the crawler and the SEO validator need:

* canonical and hreflang ``<link>`` tags,
* metadata links to probe (anything with ``rel`` + ``hreflang``, or a
  canonical),
* resource URLs from known resource-bearing tags, resolved against the page,
* same-origin ``<a href>`` targets.

Selection goes through CSS selectors (``soupsieve``), so multi-valued
attributes like ``rel`` match on their joined text.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Iterable
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from bs4.element import Tag

from seo_scout.crawler.link_extractor import extract_links

__all__: Sequence[str] = ("RESOURCE_SELECTORS", "Resource", "ParsedPage", "parse_html", "attr")

RESOURCE_SELECTORS: dict[str, str] = {
    "css": 'link[rel="stylesheet"]',
    "script": "script[src]",
    "image": "img[src]",
    "video": "video source[src]",
    "audio": "audio source[src]",
    "favicon": 'link[rel="icon"], link[rel="shortcut icon"]',
    "font": 'link[rel="preload"][as="font"]',
}

CANONICAL_SELECTOR = 'link[rel="canonical"]'
HREFLANG_SELECTOR = 'link[rel="alternate"][hreflang]'


def attr(tag: Tag, name: str) -> str | None:
    """Attribute as a plain string (multi-valued ones joined by a space)."""
    value = tag.get(name)
    if value is None:
        return None
    if isinstance(value, list):
        return " ".join(value)
    return str(value)


@dataclass(frozen=True, slots=True)
class Resource:
    url: str
    type: str


class ParsedPage:
    """Queryable view over one fetched HTML document."""

    def __init__(self, html: str, url: str) -> None:
        self.url = url
        self.soup = BeautifulSoup(html, "html.parser")

    # Metadata tags ---------------------------------------------------------
    def canonical_tags(self) -> list[Tag]:
        return self.soup.select(CANONICAL_SELECTOR)

    def hreflang_tags(self) -> list[Tag]:
        return self.soup.select(HREFLANG_SELECTOR)

    def metadata_link_tags(self) -> list[Tag]:
        """<link> tags carrying rel + hreflang, or rel == canonical."""
        found: list[Tag] = []
        for tag in self.soup.find_all("link"):
            rel = attr(tag, "rel")
            if (rel and tag.get("hreflang")) or (rel or "").strip() == "canonical":
                found.append(tag)
        return found

    # Resources -------------------------------------------------------------
    def resources(self, skip: Iterable[str] = ()) -> list[Resource]:
        """
        Absolute URLs of resources referenced by the page.

        Each URL is reported once with the type it was first seen under;
        URLs containing any of the *skip* markers are left out.
        """
        markers = tuple(skip)
        seen: dict[str, Resource] = {}
        for type_, selector in RESOURCE_SELECTORS.items():
            for tag in self.soup.select(selector):
                src = attr(tag, "src") or attr(tag, "href")
                if not src:
                    continue
                try:
                    absolute = urljoin(self.url, src.strip())
                except ValueError:
                    continue
                if any(m in absolute.lower() for m in markers):
                    continue
                seen.setdefault(absolute, Resource(absolute, type_))
        return list(seen.values())

    # Navigation ------------------------------------------------------------
    def same_origin_links(self, origin: str) -> list[str]:
        return extract_links(self.soup, self.url, origin)


def parse_html(html: str, url: str) -> ParsedPage:
    return ParsedPage(html, url)
