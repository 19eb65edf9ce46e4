"""
PNG Generator
=============

Playwright-based PNG screenshot generation from HTML content.

Every render launches its own Chromium process and tears it down afterwards;
only the Playwright driver connection is shared between renders.
"""

from typing import Optional, Dict, Any, Tuple
import asyncio
import base64
import io
import time

from playwright.async_api import async_playwright, Browser, BrowserContext, Page, Playwright
from PIL import Image  # type: ignore

from carousel_renderer.config.logging import get_logger
from carousel_renderer.config.settings import get_settings, Settings
from carousel_renderer.models.schemas import PNGResult

logger = get_logger(__name__)


class PNGGenerationError(Exception):
    """Exception raised when PNG generation fails."""

    pass


class PlaywrightPNGGenerator:
    """Playwright-based PNG generator implementation."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.logger: Any = logger.bind(generator="playwright")
        self._playwright: Optional[Playwright] = None
        self._init_lock = asyncio.Lock()

        limit = self.settings.max_concurrent_renders
        self._semaphore: Optional[asyncio.Semaphore] = asyncio.Semaphore(limit) if limit else None

    @property
    def initialized(self) -> bool:
        return self._playwright is not None

    async def initialize(self) -> None:
        """Start the Playwright driver. Safe to call more than once."""
        async with self._init_lock:
            if self._playwright is not None:
                return
            try:
                self._playwright = await async_playwright().start()
            except Exception as e:
                self.logger.error("Failed to start Playwright", error=str(e))
                raise PNGGenerationError(f"Playwright initialization failed: {e}") from e

        self.logger.info(
            "PNG generator initialized",
            max_concurrent_renders=self.settings.max_concurrent_renders,
        )

    async def close(self) -> None:
        """Stop the Playwright driver."""
        if self._playwright:
            await self._playwright.stop()
            self._playwright = None
        self.logger.info("PNG generator closed")

    async def generate_png(self, html_content: str) -> PNGResult:
        """
        Generate PNG from HTML content.

        Args:
            html_content: HTML document to render

        Returns:
            PNGResult containing PNG data and metadata

        Raises:
            PNGGenerationError: If launching, loading or capturing fails
        """
        if self._semaphore is None:
            return await self._render(html_content)

        async with self._semaphore:
            return await self._render(html_content)

    async def _render(self, html_content: str) -> PNGResult:
        start_time = time.perf_counter()
        browser: Optional[Browser] = None

        self.logger.info(
            "Generating PNG from HTML",
            html_length=len(html_content),
            width=self.settings.viewport_width,
            height=self.settings.viewport_height,
        )

        try:
            if not self.initialized:
                await self.initialize()

            driver = self._playwright
            try:
                browser = await self._launch_browser()
            except Exception:
                await self._reset_driver(driver)
                raise

            context = await self._create_browser_context(browser)
            page = await context.new_page()
            self._configure_page(page)

            await page.set_content(
                html_content,
                wait_until="networkidle",
                timeout=self.settings.render_timeout,
            )

            screenshot_bytes = await page.screenshot(type="png")
            pixel_width, pixel_height = self._read_dimensions(screenshot_bytes)

            result = PNGResult(
                png_data=screenshot_bytes,
                base64_data=base64.b64encode(screenshot_bytes).decode("utf-8"),
                width=self.settings.viewport_width,
                height=self.settings.viewport_height,
                pixel_width=pixel_width,
                pixel_height=pixel_height,
                file_size=len(screenshot_bytes),
                metadata={
                    "generator": "playwright",
                    "device_scale_factor": self.settings.device_scale_factor,
                },
            )

            self.logger.info(
                "PNG generation completed",
                file_size=result.file_size,
                pixel_width=pixel_width,
                pixel_height=pixel_height,
                elapsed=round(time.perf_counter() - start_time, 3),
            )

            return result

        except Exception as e:
            self.logger.error("PNG generation error", error=str(e))
            raise PNGGenerationError(str(e)) from e

        finally:
            if browser is not None:
                await self._close_browser(browser)

    async def _launch_browser(self) -> Browser:
        """Launch a dedicated Chromium process for one render."""
        if self._playwright is None:
            raise PNGGenerationError("Playwright driver is not running")
        return await self._playwright.chromium.launch(
            headless=self.settings.playwright_headless,
            args=self.settings.browser_args,
        )

    async def _reset_driver(self, driver: Optional[Playwright]) -> None:
        """Drop a driver whose launch failed so the next render starts a fresh one."""
        if driver is None or self._playwright is not driver:
            return

        self._playwright = None
        self.logger.warning("Resetting Playwright driver after failed launch")
        try:
            await driver.stop()
        except Exception as e:
            self.logger.warning("Failed to stop Playwright driver", error=str(e))

    async def _create_browser_context(self, browser: Browser) -> BrowserContext:
        """Create browser context sized to the carousel slide."""
        context_options: Dict[str, Any] = {
            "viewport": {
                "width": self.settings.viewport_width,
                "height": self.settings.viewport_height,
            },
            "device_scale_factor": self.settings.device_scale_factor,
        }
        return await browser.new_context(**context_options)

    def _configure_page(self, page: Page) -> None:
        page.set_default_timeout(self.settings.render_timeout)

    async def _close_browser(self, browser: Browser) -> None:
        try:
            await browser.close()
        except Exception as e:
            self.logger.warning("Failed to close browser", error=str(e))

    @staticmethod
    def _read_dimensions(png_bytes: bytes) -> Tuple[int, int]:
        """Read the physical pixel size from the PNG header."""
        with Image.open(io.BytesIO(png_bytes)) as image:
            return image.size


# Global generator instance
_global_generator: Optional[PlaywrightPNGGenerator] = None


async def initialize_png_generator() -> None:
    """Initialize global PNG generator."""
    global _global_generator
    if _global_generator is None:
        _global_generator = PlaywrightPNGGenerator()
    await _global_generator.initialize()


async def close_png_generator() -> None:
    """Close global PNG generator."""
    global _global_generator
    if _global_generator:
        await _global_generator.close()
        _global_generator = None


async def generate_png_from_html(html_content: str) -> PNGResult:
    """
    Generate PNG from HTML using the shared generator.

    The generator is created on first use when the application lifespan
    has not set it up already.

    Args:
        html_content: HTML document to render

    Returns:
        PNGResult containing PNG data and metadata
    """
    global _global_generator

    if _global_generator is None:
        logger.info("Auto-initializing PNG generator")
        _global_generator = PlaywrightPNGGenerator()

    return await _global_generator.generate_png(html_content)
