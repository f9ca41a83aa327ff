# File: seo_scout/aggregator.py
"""seo_scout.aggregator: Сбор отчётов по сайтам в один отчёт пакетного запуска."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, TypedDict

from seo_scout.crawler.models import SiteReport


class CrawlErrorInfo(TypedDict):
    """Ошибка загрузки страницы."""

    url: str
    error: str


class ResourceErrorInfo(TypedDict):
    """Недоступный ресурс и страница, на которой он найден."""

    url: str
    type: str
    pageUrl: str
    error: str


class SeoErrorInfo(TypedDict):
    """Нарушения правил canonical/hreflang на странице."""

    url: str
    errors: List[str]


class SiteErrors(TypedDict):
    crawlErrors: List[CrawlErrorInfo]
    resourceErrors: List[ResourceErrorInfo]
    seoErrors: List[SeoErrorInfo]


class SiteEntry(TypedDict):
    totalPages: int
    errors: SiteErrors


def utc_now_iso() -> str:
    """Текущее время UTC в ISO-8601 с миллисекундами."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(slots=True)
class GlobalReport:
    """Отчёт пакетного запуска: только сайты, на которых найдены ошибки."""

    timestamp: str = field(default_factory=utc_now_iso)
    sites: Dict[str, SiteEntry] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.sites

    def to_dict(self) -> Dict[str, Any]:
        return {"timestamp": self.timestamp, "sites": self.sites}

    def json(self, *, pretty: bool = False) -> str:
        """Возвращает JSON-представление отчёта."""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2 if pretty else None)


def record_site(site_url: str, report: SiteReport, global_report: GlobalReport) -> bool:
    """
    Добавляет отчёт сайта в общий отчёт.

    Сайты без ошибок пропускаются; возвращает True, если запись добавлена.
    """
    if not report.has_errors:
        return False
    global_report.sites[site_url] = report.to_dict()  # type: ignore[assignment]
    return True
