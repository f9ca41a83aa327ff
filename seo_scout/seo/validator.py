"""Canonical and hreflang checks for a single parsed page.

Every rule runs independently; the result is the list of distinct messages in
the order they were produced. An empty list means the page passes.
"""
from __future__ import annotations

import re
from typing import Dict, List, Optional
from urllib.parse import urlsplit

from seo_scout.parser.html_parser import ParsedPage, attr

__all__ = ("SUSPICIOUS_TAG_COUNTS", "normalize_page_url", "expected_subdomains", "validate_seo_tags")

# canonical + alternate totals that indicate an incomplete tag set
SUSPICIOUS_TAG_COUNTS = frozenset({2, 3})

WWW_LANGS = frozenset({"x-default", "en"})
SPECIAL_SUBDOMAINS: Dict[str, tuple[str, ...]] = {
    "ja": ("jp",),
    "ko": ("ko", "kr"),
    "zh-TW": ("tw",),
    "zh-Hant": ("tw",),
}

_TRAILING_SLASH = re.compile(r"/$")
_TRAILING_INDEX_HTML = re.compile(r"/index\.html$")
_TRAILING_INDEX = re.compile(r"/index$")


def normalize_page_url(url: str) -> str:
    """Strip one trailing slash, then a trailing /index.html, then /index."""
    url = _TRAILING_SLASH.sub("", url)
    url = _TRAILING_INDEX_HTML.sub("", url)
    return _TRAILING_INDEX.sub("", url)


def expected_subdomains(lang: str) -> tuple[str, ...]:
    if lang in WWW_LANGS:
        return ("www",)
    return SPECIAL_SUBDOMAINS.get(lang, (lang,))


def _hostname(url: str) -> Optional[str]:
    try:
        return urlsplit(url).hostname
    except ValueError:
        return None


def _strip_www(host: Optional[str]) -> str:
    host = host or ""
    return host[4:] if host.startswith("www.") else host


def _check_total(page: ParsedPage) -> List[str]:
    total = len(page.canonical_tags()) + len(page.hreflang_tags())
    if total in SUSPICIOUS_TAG_COUNTS:
        return [f"Invalid total number of link tags (canonical + alternate): {total}"]
    return []


def _check_canonical(page: ParsedPage, page_url: str) -> List[str]:
    canonical = page.canonical_tags()
    if not canonical:
        return ["Missing canonical tag"]
    if len(canonical) > 1:
        return ["Multiple canonical tags found"]

    href = attr(canonical[0], "href")
    if not href:
        return ["Canonical tag has no href attribute"]
    if not href.startswith("http"):
        return [f"Invalid canonical URL format: {href}"]

    normalized_canonical = normalize_page_url(href)
    normalized_page = normalize_page_url(page_url)
    if normalized_canonical == normalized_page:
        return []
    # only the host matters, and www./bare hosts are treated as the same site
    canonical_host = _hostname(normalized_canonical)
    page_host = _hostname(normalized_page)
    if canonical_host != page_host and _strip_www(canonical_host) != _strip_www(page_host):
        return [f"Canonical URL ({href}) does not match page URL ({page_url})"]
    return []


def _check_url_language(href: str, lang: str) -> Optional[str]:
    host = _hostname(href)
    if not host:
        return f"Invalid URL format: {href}"
    subdomain = host.split(".")[0]
    expected = expected_subdomains(lang)
    if subdomain in expected:
        return None
    if lang in WWW_LANGS:
        return f"{lang} hreflang should use www subdomain, got: {subdomain}"
    if lang in SPECIAL_SUBDOMAINS:
        return f"Language code {lang} should use {' or '.join(expected)} subdomain, got: {subdomain}"
    return f"Language code {lang} does not match subdomain {subdomain}"


def _check_hreflang(page: ParsedPage) -> List[str]:
    tags = page.hreflang_tags()
    if not tags:
        return []

    errors: List[str] = []
    has_x_default = False
    seen_langs: set[str] = set()
    for tag in tags:
        lang = attr(tag, "hreflang") or ""
        href = attr(tag, "href")

        if not href:
            errors.append(f"Hreflang tag missing href attribute for lang: {lang}")
            continue
        if href.lower().startswith("mailto:"):
            continue
        if not href.startswith("http"):
            errors.append(f"Invalid hreflang URL format for lang {lang}: {href}")
            continue

        url_error = _check_url_language(href, lang)
        if url_error:
            errors.append(url_error)

        if lang == "x-default":
            has_x_default = True

        if lang in seen_langs:
            errors.append(f"Duplicate hreflang found for language: {lang}")
        seen_langs.add(lang)

    if not has_x_default:
        errors.append("Alternate tags present but missing required x-default hreflang tag")
    return errors


def validate_seo_tags(page: ParsedPage, page_url: str) -> List[str]:
    """Run the tag-count, canonical and hreflang rules against *page*."""
    errors = _check_total(page) + _check_canonical(page, page_url) + _check_hreflang(page)
    return list(dict.fromkeys(errors))
