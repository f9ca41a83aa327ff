# seo_scout/crawler/fetcher.py
"""
Fetcher module: page GETs and HEAD reachability probes over a shared aiohttp session.

Both operations raise :class:`FetchFailed` with a human readable message;
callers decide whether that is a recorded error or just ``False``.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass

from aiohttp import ClientError, ClientResponseError, ClientSession, ClientTimeout, TooManyRedirects

from seo_scout.config import CrawlerConfig


class FetchFailed(Exception):
    """Network error, timeout or HTTP status >= 400."""

    def __init__(self, url: str, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.message = message
        self.status = status


@dataclass(slots=True)
class FetchResponse:
    url: str
    status: int
    body: str


class Fetcher:
    """Handles page downloads and existence probes with per-request timeouts."""

    def __init__(self, session: ClientSession, config: CrawlerConfig) -> None:
        self.session = session
        self.config = config

    async def fetch_page(self, url: str) -> FetchResponse:
        """
        GET *url* without following redirects.

        3xx responses are returned as is (the crawler decides what to skip),
        any status >= 400 raises FetchFailed.
        """
        timeout = self.config.page_timeout
        try:
            async with self.session.get(
                url,
                headers={"User-Agent": self.config.user_agent},
                allow_redirects=False,
                timeout=ClientTimeout(total=timeout),
            ) as resp:
                if resp.status >= 400:
                    raise FetchFailed(url, f"Request failed with status code {resp.status}", resp.status)
                body = await resp.text(errors="replace")
                return FetchResponse(url, resp.status, body)
        except asyncio.TimeoutError as exc:
            raise FetchFailed(url, f"timeout of {timeout:g}s exceeded") from exc
        except (ClientError, ValueError) as exc:
            raise FetchFailed(url, _describe(exc)) from exc

    async def probe(self, url: str) -> int:
        """
        HEAD *url*, following up to ``max_redirects`` redirects.

        Returns the final status (< 400), raises FetchFailed otherwise.
        """
        timeout = self.config.probe_timeout
        max_redirects = self.config.max_redirects
        try:
            # aiohttp gives up when it reaches max_redirects, so allow one more
            async with self.session.head(
                url,
                allow_redirects=max_redirects > 0,
                max_redirects=max_redirects + 1,
                timeout=ClientTimeout(total=timeout),
            ) as resp:
                if resp.status >= 400:
                    raise FetchFailed(url, f"Request failed with status code {resp.status}", resp.status)
                return resp.status
        except asyncio.TimeoutError as exc:
            raise FetchFailed(url, f"timeout of {timeout:g}s exceeded") from exc
        except TooManyRedirects as exc:
            raise FetchFailed(url, f"Maximum number of redirects exceeded ({max_redirects})") from exc
        except (ClientError, ValueError) as exc:
            raise FetchFailed(url, _describe(exc)) from exc


def _describe(exc: BaseException) -> str:
    if isinstance(exc, ClientResponseError):
        return f"Request failed with status code {exc.status}"
    return str(exc) or type(exc).__name__
