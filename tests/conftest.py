# File: tests/conftest.py
from __future__ import annotations

from typing import Awaitable, Callable, Dict, List, Tuple, Union

import pytest
import pytest_asyncio
from aiohttp import web
from seo_scout.config import CrawlerConfig

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]
Route = Union[str, int, Handler]


def pytest_configure(config):
    """Register custom markers so that `--strict-markers` does not fail."""
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')",
    )


def html_page(head: str = "", body: str = "") -> str:
    return f"<html><head>{head}</head><body>{body}</body></html>"


@pytest.fixture()
def page():
    """Expose html_page() to test modules."""
    return html_page


@pytest.fixture()
def config() -> CrawlerConfig:
    """Fast timeouts for local test servers."""
    return CrawlerConfig(page_timeout=2.0, probe_timeout=2.0, max_pages=50)


def _handler(route: Route) -> Handler:
    if isinstance(route, str):
        async def html(_):
            return web.Response(text=route, content_type="text/html")
        return html
    if isinstance(route, int):
        async def status(_):
            headers = {"Location": "/"} if 300 <= route < 400 else None
            return web.Response(status=route, headers=headers)
        return status
    return route


@pytest_asyncio.fixture
async def make_site(unused_tcp_port_factory):
    """
    Factory: start an aiohttp app from {path: html | status | handler}.

    Returns ``(base_url, hits)`` where *hits* collects ``(method, path)`` of
    every request the server received.
    """
    runners: List[web.AppRunner] = []

    async def _make(routes: Dict[str, Route]) -> Tuple[str, List[Tuple[str, str]]]:
        hits: List[Tuple[str, str]] = []

        @web.middleware
        async def track(request, handler):
            hits.append((request.method, request.path))
            return await handler(request)

        app = web.Application(middlewares=[track])
        for path, route in routes.items():
            app.router.add_route("*", path, _handler(route))

        runner = web.AppRunner(app)
        await runner.setup()
        port = unused_tcp_port_factory()
        site = web.TCPSite(runner, "127.0.0.1", port)
        await site.start()
        runners.append(runner)
        return f"http://127.0.0.1:{port}", hits

    yield _make

    for runner in runners:
        await runner.cleanup()
