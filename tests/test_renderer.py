"""Unit tests for pdf_harvester.crawler.renderer.

Playwright is mocked out entirely; no browser is launched.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

from pdf_harvester.crawler.renderer import PageRenderer, render_page_html


def _fake_playwright(status=200, html="<html><body>ok</body></html>", goto=None):
    """Build a mock of the ``async_playwright()`` object graph."""
    response = MagicMock(status=status)

    page = MagicMock()
    page.url = "https://x.test/listing/"
    page.goto = goto or AsyncMock(return_value=response)
    page.content = AsyncMock(return_value=html)
    page.context.close = AsyncMock()

    context = MagicMock()
    context.new_page = AsyncMock(return_value=page)

    browser = MagicMock()
    browser.new_context = AsyncMock(return_value=context)
    browser.close = AsyncMock()

    playwright = MagicMock()
    playwright.chromium.launch = AsyncMock(return_value=browser)
    playwright.stop = AsyncMock()

    factory = MagicMock()
    factory.return_value.start = AsyncMock(return_value=playwright)
    return factory, playwright, browser, page


async def test_returns_rendered_markup_and_releases_browser():
    factory, playwright, browser, page = _fake_playwright()

    with patch("pdf_harvester.crawler.renderer.async_playwright", factory):
        html = await render_page_html("https://x.test/listing/")

    assert html == "<html><body>ok</body></html>"
    page.context.close.assert_awaited_once()
    browser.close.assert_awaited_once()
    playwright.stop.assert_awaited_once()


async def test_http_error_returns_empty_string():
    factory, playwright, browser, _ = _fake_playwright(status=503)

    with patch("pdf_harvester.crawler.renderer.async_playwright", factory):
        html = await PageRenderer().render("https://x.test/listing/")

    assert html == ""
    browser.close.assert_awaited_once()


async def test_browser_launch_failure_returns_empty_string():
    factory = MagicMock()
    factory.return_value.start = AsyncMock(side_effect=RuntimeError("chromium missing"))

    with patch("pdf_harvester.crawler.renderer.async_playwright", factory):
        html = await PageRenderer().render("https://x.test/listing/")

    assert html == ""


async def test_overall_timeout_returns_empty_string_and_releases_browser():
    async def hang(*args, **kwargs):
        await asyncio.sleep(10)

    factory, playwright, browser, _ = _fake_playwright(goto=hang)

    with patch("pdf_harvester.crawler.renderer.async_playwright", factory):
        html = await PageRenderer(timeout=0.05).render("https://x.test/listing/")

    assert html == ""
    browser.close.assert_awaited_once()
    playwright.stop.assert_awaited_once()


async def test_navigation_uses_configured_wait_and_timeout():
    factory, _, browser, page = _fake_playwright()

    with patch("pdf_harvester.crawler.renderer.async_playwright", factory):
        await PageRenderer(timeout=2, wait_until="load").render("https://x.test/listing/")

    page.goto.assert_awaited_once_with("https://x.test/listing/", wait_until="load", timeout=2000)
    assert browser.new_context.await_args.kwargs["viewport"] == {"width": 1920, "height": 1080}


async def test_timeout_during_driver_startup_still_tears_driver_down():
    async def hang(*args, **kwargs):
        await asyncio.sleep(10)

    factory = MagicMock()
    factory.return_value.start = AsyncMock(side_effect=hang)
    factory.return_value.__aexit__ = AsyncMock(return_value=False)

    with patch("pdf_harvester.crawler.renderer.async_playwright", factory):
        html = await PageRenderer(timeout=0.05).render("https://x.test/listing/")

    assert html == ""
    factory.return_value.__aexit__.assert_awaited_once_with(None, None, None)


async def test_successful_render_does_not_exit_manager_twice():
    factory, playwright, _, _ = _fake_playwright()
    factory.return_value.__aexit__ = AsyncMock(return_value=False)

    with patch("pdf_harvester.crawler.renderer.async_playwright", factory):
        await PageRenderer().render("https://x.test/listing/")

    playwright.stop.assert_awaited_once()
    factory.return_value.__aexit__.assert_not_awaited()
