"""PDF rendering of print documents using Playwright."""

import asyncio
import logging
from contextlib import asynccontextmanager

from playwright.async_api import Browser, async_playwright

logger = logging.getLogger(__name__)

CHROMIUM_ARGS = [
    "--no-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
    "--disable-extensions",
    "--disable-plugins",
    "--disable-default-apps",
]


class PDFGeneratorError(Exception):
    """Raised when PDF rendering fails."""

    pass


class BrowserPool:
    """Fixed-size pool of headless Chromium instances handed out through a queue."""

    def __init__(self, pool_size: int = 2, acquire_timeout: float = 30.0):
        self.pool_size = pool_size
        self.acquire_timeout = acquire_timeout
        self._available: asyncio.Queue[Browser] = asyncio.Queue(maxsize=pool_size)
        self._browsers: set[Browser] = set()
        self._playwright = None
        self._closed = False

    async def start(self):
        """Start Playwright and launch ``pool_size`` browsers."""
        try:
            self._playwright = await async_playwright().start()
            self._closed = False
            for i in range(self.pool_size):
                browser = await self._launch_browser()
                self._browsers.add(browser)
                await self._available.put(browser)
                logger.info(f"Browser {i + 1}/{self.pool_size} launched")
        except Exception as e:
            logger.error(f"Failed to initialize browser pool: {e}")
            raise PDFGeneratorError(f"Browser pool initialization failed: {e}")

    async def _launch_browser(self) -> Browser:
        return await self._playwright.chromium.launch(headless=True, args=CHROMIUM_ARGS)

    async def acquire(self) -> Browser:
        """Take a browser from the pool, waiting up to ``acquire_timeout`` seconds."""
        if self._closed:
            raise PDFGeneratorError("Browser pool is closed")
        try:
            return await asyncio.wait_for(self._available.get(), timeout=self.acquire_timeout)
        except asyncio.TimeoutError:
            raise PDFGeneratorError(
                f"No browser available within timeout ({self.acquire_timeout:.0f}s)"
            )

    async def release(self, browser: Browser):
        """Return a browser to the pool, replacing it if it has disconnected."""
        if self._closed or browser not in self._browsers:
            return
        if browser.is_connected():
            await self._available.put(browser)
            return

        logger.warning("Replacing disconnected browser in pool")
        self._browsers.discard(browser)
        try:
            replacement = await self._launch_browser()
        except Exception as e:
            logger.error(f"Failed to replace browser: {e}")
            return
        self._browsers.add(replacement)
        await self._available.put(replacement)

    async def close(self):
        """Close every browser and stop Playwright."""
        self._closed = True
        await asyncio.gather(
            *(browser.close() for browser in self._browsers if browser.is_connected()),
            return_exceptions=True,
        )
        self._browsers.clear()
        while not self._available.empty():
            self._available.get_nowait()
        if self._playwright:
            await self._playwright.stop()
            self._playwright = None
        logger.info("Browser pool closed")

    def get_pool_stats(self) -> dict:
        """Get browser pool statistics for monitoring."""
        available = self._available.qsize()
        return {
            "total_browsers": len(self._browsers),
            "available_browsers": available,
            "busy_browsers": len(self._browsers) - available,
        }


class PlaywrightPDFGenerator:
    """Renders HTML documents to PDF with a pooled headless browser."""

    def __init__(
        self,
        pool_size: int = 2,
        render_timeout: int = 10000,
        page_format: str = "A4",
        margin: str = "0cm",
    ):
        self.pool: BrowserPool | None = None
        self.pool_size = pool_size
        self.render_timeout = render_timeout
        self.page_format = page_format
        self.margin = margin

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def start(self):
        """Initialize browser pool."""
        try:
            self.pool = BrowserPool(pool_size=self.pool_size)
            await self.pool.start()
            logger.info("PDF generator initialized with browser pool")
        except Exception as e:
            logger.error(f"Failed to initialize PDF generator: {e}")
            raise PDFGeneratorError(f"PDF generator initialization failed: {e}")

    async def close(self):
        """Close browser pool."""
        if self.pool:
            await self.pool.close()
            self.pool = None
        logger.info("PDF generator closed")

    @asynccontextmanager
    async def _browser_context(self):
        """Yield an isolated browser context; the browser goes back to the pool afterwards."""
        if not self.pool:
            raise PDFGeneratorError("Browser pool not initialized. Call start() first.")

        browser = await self.pool.acquire()
        context = None
        try:
            # Print documents are static, so scripts stay off
            context = await browser.new_context(java_script_enabled=False)
            yield context
        finally:
            if context:
                try:
                    await context.close()
                except Exception as e:
                    logger.warning(f"Error closing browser context: {e}")
            if self.pool:
                await self.pool.release(browser)

    async def generate_pdf(self, html: str) -> bytes:
        """
        Render an HTML document to PDF.

        Args:
            html: Complete HTML document

        Returns:
            PDF content as bytes

        Raises:
            PDFGeneratorError: If rendering fails
        """
        try:
            async with self._browser_context() as context:
                page = await context.new_page()
                await page.set_content(html, wait_until="load", timeout=self.render_timeout)
                pdf_bytes = await page.pdf(
                    format=self.page_format,
                    print_background=True,
                    margin={side: self.margin for side in ("top", "right", "bottom", "left")},
                    display_header_footer=False,
                )
        except PDFGeneratorError:
            raise
        except Exception as e:
            logger.error(f"Unexpected error generating PDF: {e}")
            raise PDFGeneratorError(f"PDF generation failed: {e}")

        logger.info(f"PDF generated successfully, size: {len(pdf_bytes)} bytes")
        return pdf_bytes
