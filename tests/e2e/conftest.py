"""
E2E Test Configuration
======================

Fixtures that drive a real Chromium browser. Tests are skipped when
Playwright's browsers are not installed (``playwright install chromium``).
"""

import asyncio
from typing import AsyncGenerator, Tuple

import pytest
import pytest_asyncio

from carousel_renderer.config.settings import Settings
from carousel_renderer.core.rendering.png_generator import PlaywrightPNGGenerator


@pytest.fixture
def e2e_settings() -> Settings:
    """Short content timeout keeps the never-idle case fast."""
    return Settings(_env_file=None, environment="testing", render_timeout=3000)


@pytest_asyncio.fixture
async def live_generator(e2e_settings: Settings) -> AsyncGenerator[PlaywrightPNGGenerator, None]:
    """PNG generator backed by a real Playwright driver."""
    generator = PlaywrightPNGGenerator(e2e_settings)
    try:
        await generator.initialize()
        browser = await generator._launch_browser()
        await browser.close()
    except Exception as e:
        await generator.close()
        pytest.skip(f"Chromium is not available: {e}")

    yield generator

    await generator.close()


@pytest_asyncio.fixture
async def hanging_server() -> AsyncGenerator[Tuple[str, int], None]:
    """TCP server that accepts requests and never answers them."""
    release = asyncio.Event()

    async def handle(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        await reader.read(1024)
        await release.wait()
        writer.close()

    server = await asyncio.start_server(handle, "127.0.0.1", 0)
    host, port = server.sockets[0].getsockname()[:2]

    yield host, port

    release.set()
    server.close()
    await server.wait_closed()
