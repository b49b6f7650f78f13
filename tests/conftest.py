"""Shared fixtures for crawler tests."""

import asyncio
import socket
import threading
import time
from collections.abc import AsyncIterator, Generator
from contextlib import AsyncExitStack, asynccontextmanager, closing

import pytest
from aiohttp import web
from playwright.async_api import Error as PlaywrightError

from peipsi_birds.driver.playwright_page import PlaywrightPage
from tests.mock_server import create_app, site_pages
from tests.utils import FakePage

SITE_URL = "https://birds.example"


@pytest.fixture
def site_url() -> str:
    return SITE_URL


@pytest.fixture
def fake_site() -> FakePage:
    """In-memory guide whose listing reveals the loons section on expand.

    Returns:
        FakePage positioned on a blank document.
    """
    collapsed = site_pages(SITE_URL, expanded=False)
    expanded = site_pages(SITE_URL, expanded=True)
    return FakePage(
        collapsed,
        revealed={f"{SITE_URL}/": expanded[f"{SITE_URL}/"]},
    )


# =============================================================================
# aiohttp test server fixtures
# =============================================================================


def find_free_port() -> int:
    """Find a free port on localhost.

    Returns:
        An available port number.
    """
    with closing(socket.socket(socket.AF_INET, socket.SOCK_STREAM)) as s:
        s.bind(("", 0))
        s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        return s.getsockname()[1]


class AioHttpTestServer:
    """Wrapper to run aiohttp server in a background thread."""

    def __init__(self, app: web.Application, port: int) -> None:
        self.app = app
        self.port = port
        self.host = "127.0.0.1"
        self._loop: asyncio.AbstractEventLoop | None = None
        self._runner: web.AppRunner | None = None
        self._thread: threading.Thread | None = None
        self._started = threading.Event()

    @property
    def url(self) -> str:
        """Get the base URL of the server."""
        return f"http://{self.host}:{self.port}"

    def start(self) -> None:
        """Start the server in a background thread."""
        self._thread = threading.Thread(target=self._run_server, daemon=True)
        self._thread.start()
        self._started.wait(timeout=5.0)

    def _run_server(self) -> None:
        self._loop = asyncio.new_event_loop()
        asyncio.set_event_loop(self._loop)

        async def start() -> None:
            self._runner = web.AppRunner(self.app)
            await self._runner.setup()
            site = web.TCPSite(self._runner, self.host, self.port)
            await site.start()

        self._loop.run_until_complete(start())
        self._started.set()
        self._loop.run_forever()

    def stop(self) -> None:
        """Stop the server and clean up resources."""
        if self._loop and self._runner:
            future = asyncio.run_coroutine_threadsafe(
                self._runner.cleanup(), self._loop
            )
            future.result(timeout=2.0)

        if self._loop:
            self._loop.call_soon_threadsafe(self._loop.stop)

        if self._thread:
            self._thread.join(timeout=2.0)


@pytest.fixture
def guide_server() -> Generator[AioHttpTestServer, None, None]:
    """Start an aiohttp server running the mock guide on a random port.

    Yields:
        AioHttpTestServer instance with the guide app running.
    """
    server = AioHttpTestServer(create_app(), find_free_port())
    server.start()
    # Give the listener a moment before the browser connects
    time.sleep(0.1)
    yield server
    server.stop()


@pytest.fixture
def server_url(guide_server: AioHttpTestServer) -> str:
    return guide_server.url


# =============================================================================
# Playwright fixtures
# =============================================================================

MISSING_BROWSER_MARKERS = (
    "Executable doesn't exist",
    "Host system is missing dependencies",
)


@pytest.fixture
def open_page():
    """Factory opening a PlaywrightPage, skipping if no browser is installed.

    Example::

        async with open_page(timeout_ms=5_000) as page:
            await page.goto(server_url)
    """

    @asynccontextmanager
    async def _open(**kwargs) -> AsyncIterator[PlaywrightPage]:
        async with AsyncExitStack() as stack:
            try:
                page = await stack.enter_async_context(
                    PlaywrightPage.open(**kwargs)
                )
            except PlaywrightError as e:
                if not any(m in str(e) for m in MISSING_BROWSER_MARKERS):
                    raise
                pytest.skip("Playwright browser is not installed")
            yield page

    return _open


@pytest.fixture
async def browser_page(open_page) -> AsyncIterator[PlaywrightPage]:
    async with open_page(timeout_ms=10_000) as page:
        yield page
