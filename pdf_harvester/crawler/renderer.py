"""
Page renderer using Playwright for JavaScript rendering.

Handles headless browser rendering to capture dynamically generated content.
"""

import asyncio
from typing import Optional

from playwright.async_api import async_playwright, Browser, Page, Playwright, TimeoutError as PlaywrightTimeout

from ..utils.log import get_logger
from ..utils.constants import DEFAULT_USER_AGENT, DEFAULT_RENDER_TIMEOUT


class PageRenderer:
    """
    Renders web pages using Playwright headless browser.

    Captures the final DOM after JavaScript execution.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_RENDER_TIMEOUT,
        wait_until: str = "networkidle",
        headless: bool = True,
        user_agent: str = DEFAULT_USER_AGENT
    ):
        """
        Initialize the page renderer.

        Args:
            timeout: Ceiling in seconds for browser startup, navigation and
                extraction together
            wait_until: Event to wait for ('load', 'domcontentloaded', 'networkidle')
            headless: Run browser in headless mode
            user_agent: User agent for the browser context
        """
        self.timeout = timeout
        self.wait_until = wait_until
        self.headless = headless
        self.user_agent = user_agent
        self.logger = get_logger("renderer")

        self._playwright_manager = None
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None

    async def start(self) -> None:
        """
        Start the Playwright browser instance.
        """
        self.logger.info("Starting Playwright browser...")
        # Kept before awaiting start() so a cancelled startup can still be torn down
        self._playwright_manager = async_playwright()
        self._playwright = await self._playwright_manager.start()
        self._browser = await self._playwright.chromium.launch(
            headless=self.headless,
            args=[
                '--disable-gpu',
                '--no-sandbox',
                '--disable-setuid-sandbox',
                '--disable-dev-shm-usage',
            ]
        )
        self.logger.info("Browser started successfully")

    async def stop(self) -> None:
        """
        Stop the Playwright browser instance.
        """
        if self._browser:
            await self._browser.close()
            self._browser = None
        if self._playwright:
            await self._playwright.stop()
            self._playwright = None
        elif self._playwright_manager:
            await self._playwright_manager.__aexit__(None, None, None)
        self._playwright_manager = None
        self.logger.info("Browser stopped")

    async def render(self, url: str) -> str:
        """
        Start a browser, render one page, and shut the browser down.

        Args:
            url: URL to render

        Returns:
            Rendered HTML, or '' on any failure
        """
        self.logger.info(f"Scraping: {url}")
        try:
            return await asyncio.wait_for(self._start_and_render(url), timeout=self.timeout)
        except asyncio.TimeoutError:
            self.logger.error(f"Timed out after {self.timeout}s rendering {url}")
            return ""
        except Exception as e:
            self.logger.error(f"Failed to scrape {url}: {e}")
            return ""
        finally:
            await self._stop_quietly()

    async def _start_and_render(self, url: str) -> str:
        html = await self.render_page(url)
        return html or ""

    async def render_page(self, url: str) -> Optional[str]:
        """
        Render a page and return the final HTML content.

        Args:
            url: URL to render

        Returns:
            HTML content, or None on error
        """
        if not self._browser:
            await self.start()

        page: Optional[Page] = None

        try:
            context = await self._browser.new_context(
                user_agent=self.user_agent,
                viewport={"width": 1920, "height": 1080},
                ignore_https_errors=True,
            )

            page = await context.new_page()

            self.logger.debug(f"Rendering: {url}")
            response = await page.goto(
                url,
                wait_until=self.wait_until,
                timeout=self.timeout * 1000
            )

            if not response:
                self.logger.warning(f"No response for {url}")
                return None

            if response.status >= 400:
                self.logger.warning(f"HTTP {response.status} for {url}")
                return None

            html_content = await page.content()

            self.logger.debug(f"Successfully rendered: {page.url}")

            return html_content

        except PlaywrightTimeout:
            self.logger.warning(f"Timeout rendering {url}")
            return None
        except Exception as e:
            self.logger.error(f"Error rendering {url}: {e}")
            return None
        finally:
            if page:
                await page.context.close()

    async def _stop_quietly(self) -> None:
        try:
            await self.stop()
        except Exception as e:
            self.logger.warning(f"Error stopping browser: {e}")


async def render_page_html(
    url: str,
    timeout: float = DEFAULT_RENDER_TIMEOUT,
    headless: bool = True,
    user_agent: str = DEFAULT_USER_AGENT
) -> str:
    """
    Render a URL in a fresh headless browser.

    Args:
        url: URL to render
        timeout: Overall ceiling in seconds
        headless: Run browser in headless mode
        user_agent: User agent for the browser context

    Returns:
        Rendered HTML, or '' on failure
    """
    renderer = PageRenderer(timeout=timeout, headless=headless, user_agent=user_agent)
    return await renderer.render(url)
