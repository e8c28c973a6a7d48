"""
Harvest pipeline orchestration.

Renders the listing page once (cached as a local snapshot), extracts and
deduplicates document links, then downloads each link in turn while keeping
the ledger of processed links up to date.
"""

import time
from dataclasses import dataclass, field
from typing import Awaitable, Callable, List, Optional

import aiohttp

from .renderer import render_page_html
from .extractor import LinkExtractor, dedupe_links
from .ledger import Ledger
from .downloader import DocumentDownloader
from ..utils.config import HarvestConfig
from ..utils.log import get_logger
from ..utils.paths import normalize_link, file_exists, ensure_dir, ensure_parent_dir

# async (url) -> rendered markup, '' on failure
Renderer = Callable[[str], Awaitable[str]]

STATE_DONE = "done"
STATE_ABORTED = "aborted"


@dataclass
class HarvestResult:
    """Outcome of a harvest run."""

    state: str = STATE_DONE
    links_found: int = 0

    # Links fetched and saved during this run
    downloaded: List[str] = field(default_factory=list)

    # Links whose file was already on disk, never requested
    present: List[str] = field(default_factory=list)

    # Links found in the ledger, never requested
    skipped: List[str] = field(default_factory=list)

    failed: List[str] = field(default_factory=list)
    duration_seconds: float = 0.0


class HarvestPipeline:
    """
    Render -> extract -> dedup -> download, for a single listing page.

    Links are processed strictly one at a time.
    """

    def __init__(
        self,
        config: HarvestConfig,
        renderer: Optional[Renderer] = None,
        session_factory: Optional[Callable[[], aiohttp.ClientSession]] = None
    ):
        """
        Initialize the pipeline.

        Args:
            config: Run configuration
            renderer: Coroutine function mapping a URL to rendered markup;
                defaults to a headless Playwright browser
            session_factory: Callable returning the HTTP session used for
                downloads; defaults to the downloader's own session
        """
        self.config = config
        self.logger = get_logger("pipeline")

        self.renderer = renderer or self._default_renderer
        self.extractor = LinkExtractor(extension=config.extension)
        self.ledger = Ledger(config.ledger_path)
        self.downloader = DocumentDownloader(
            output_dir=config.output_dir,
            timeout=config.timeout,
            media_type=config.media_type,
            user_agent=config.user_agent
        )
        self.session_factory = session_factory or self.downloader.create_session

    async def _default_renderer(self, url: str) -> str:
        return await render_page_html(
            url,
            timeout=self.config.render_timeout,
            headless=self.config.headless,
            user_agent=self.config.user_agent
        )

    async def run(self) -> HarvestResult:
        """
        Execute the whole pipeline.

        Returns:
            HarvestResult describing what happened to each link
        """
        start_time = time.time()
        result = HarvestResult()

        if not file_exists(self.config.snapshot_path):
            await self.create_snapshot()

        try:
            ensure_dir(self.config.output_dir, self.config.dir_mode)
        except OSError as e:
            self.logger.error(f"Could not create output directory {self.config.output_dir}: {e}")
            result.state = STATE_ABORTED
            result.duration_seconds = time.time() - start_time
            return result

        html = self.read_snapshot()
        if html is None:
            result.state = STATE_ABORTED
            result.duration_seconds = time.time() - start_time
            return result

        links = self.discover_links(html)
        result.links_found = len(links)

        self.ledger.load()

        async with self.session_factory() as session:
            for link in links:
                await self._process_link(session, link, result)

        result.duration_seconds = time.time() - start_time
        self.logger.info(
            f"Finished: {len(result.downloaded)} downloaded, "
            f"{len(result.present)} already on disk, "
            f"{len(result.skipped)} skipped, {len(result.failed)} failed"
        )
        return result

    async def create_snapshot(self) -> bool:
        """
        Render the listing page and persist it as the snapshot.

        Returns:
            True if a snapshot was written
        """
        try:
            html = await self.renderer(self.config.listing_url)
        except Exception as e:
            self.logger.error(f"Rendering {self.config.listing_url} failed: {e}")
            html = ""

        if not html:
            self.logger.error(
                f"Rendering {self.config.listing_url} produced no markup; "
                f"snapshot not written"
            )
            return False

        try:
            ensure_parent_dir(self.config.snapshot_path)
            with open(self.config.snapshot_path, 'w', encoding='utf-8') as f:
                f.write(html)
        except OSError as e:
            self.logger.error(f"Could not write snapshot {self.config.snapshot_path}: {e}")
            return False

        self.logger.info(f"Saved snapshot to {self.config.snapshot_path}")
        return True

    def read_snapshot(self) -> Optional[str]:
        """
        Read the snapshot markup.

        Returns:
            The markup, or None if the snapshot is missing or unreadable
        """
        path = self.config.snapshot_path
        if not file_exists(path):
            self.logger.error(f"Snapshot {path} does not exist")
            return None

        try:
            with open(path, 'r', encoding='utf-8', errors='replace') as f:
                return f.read()
        except OSError as e:
            self.logger.error(f"Could not read snapshot {path}: {e}")
            return None

    def discover_links(self, html: str) -> List[str]:
        """
        Extract and deduplicate document links from markup.

        Args:
            html: Rendered listing page

        Returns:
            Unique raw links in first-appearance order
        """
        extracted = self.extractor.extract(html)
        links = dedupe_links(extracted.links)
        self.logger.info(f"Found {len(links)} unique document links")
        return links

    async def _process_link(
        self,
        session: aiohttp.ClientSession,
        link: str,
        result: HarvestResult
    ) -> None:
        url = normalize_link(link, self.config.origin)

        if self.ledger.contains(url):
            self.logger.info(f"Link already processed, skipping: {url}")
            result.skipped.append(url)
            return

        target = self.downloader.target_path(url)
        on_disk = target is not None and file_exists(target)

        local_path = await self.downloader.download(session, url)
        if local_path is None:
            result.failed.append(url)
            return

        self.ledger.record(url)
        if on_disk:
            result.present.append(url)
        else:
            result.downloaded.append(url)
