"""
Link extraction and URL normalization utilities for SeoScout.
"""
from __future__ import annotations

from typing import List, Optional
from urllib.parse import urljoin, urlsplit, urlunsplit

from bs4 import BeautifulSoup
from bs4.element import Tag

MAIL_MARKER = "mailto"
DEFAULT_PORTS = {"http": 80, "https": 443}


def origin_of(url: str) -> Optional[str]:
    """
    ``scheme://host[:port]`` of a URL: host lowercased, default port dropped.

    Returns None when the URL has no scheme or host.
    """
    try:
        parsed = urlsplit(url)
        port = parsed.port
    except ValueError:
        return None
    host = parsed.hostname
    if not parsed.scheme or not host:
        return None
    if ":" in host:
        host = f"[{host}]"
    if port is not None and port != DEFAULT_PORTS.get(parsed.scheme):
        host = f"{host}:{port}"
    return f"{parsed.scheme}://{host}"


def normalize_url(url: str) -> str:
    """
    Dedup key of a URL: origin + path without trailing slashes,
    query and fragment. Empty path collapses to "/".

    Input that cannot be parsed is returned unchanged.
    """
    origin = origin_of(url)
    if origin is None:
        return url
    path = urlsplit(url).path.rstrip("/") or "/"
    return f"{origin}{path}"


def strip_query(url: str) -> str:
    """Drop query string and fragment, keep path as is."""
    parsed = urlsplit(url)
    return urlunsplit((parsed.scheme, parsed.netloc, parsed.path, "", ""))


def is_same_origin(url: str, origin: str) -> bool:
    """True if *url* and *origin* have the same scheme, host and port."""
    own = origin_of(url)
    return own is not None and own == origin_of(origin)


def is_mail_link(url: str) -> bool:
    return MAIL_MARKER in url.lower()


def extract_links(html: str | BeautifulSoup, page_url: str, origin: str) -> List[str]:
    """
    Extract same-origin <a href> targets as absolute URLs.

    Ignores mail links, javascript: and external domains. Order of first
    appearance is kept, duplicates are dropped.
    """
    soup = html if isinstance(html, BeautifulSoup) else BeautifulSoup(html, "html.parser")
    seen: set[str] = set()
    links: List[str] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str):
            continue
        raw = href_val.strip()
        if is_mail_link(raw):
            continue
        try:
            absolute = urljoin(page_url, raw)
        except ValueError:
            continue
        if not is_same_origin(absolute, origin) or absolute in seen:
            continue
        seen.add(absolute)
        links.append(absolute)
    return links
