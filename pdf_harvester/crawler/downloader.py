"""
Document downloader for fetching and saving harvested files.

Uses aiohttp for the HTTP requests. Every failure is logged and isolated to
the link being downloaded.
"""

import asyncio
import os
from typing import Optional

import aiohttp
from aiohttp import ClientTimeout, ClientError

from ..utils.log import get_logger
from ..utils.paths import url_to_safe_filename, file_exists
from ..utils.constants import DEFAULT_TIMEOUT, DEFAULT_MEDIA_TYPE, DEFAULT_USER_AGENT


class DocumentDownloader:
    """
    Downloads documents into a single output directory.

    A file is written only when the response succeeded, declared the
    expected media type and carried a non-empty body.
    """

    def __init__(
        self,
        output_dir: str,
        timeout: float = DEFAULT_TIMEOUT,
        media_type: str = DEFAULT_MEDIA_TYPE,
        user_agent: str = DEFAULT_USER_AGENT
    ):
        """
        Initialize the document downloader.

        Args:
            output_dir: Directory for saved documents
            timeout: Total request timeout in seconds
            media_type: Token the Content-Type header must contain
            user_agent: User agent string for requests
        """
        self.output_dir = output_dir
        self.timeout = ClientTimeout(total=timeout)
        self.media_type = media_type.lower()
        self.user_agent = user_agent
        self.logger = get_logger("downloader")

    def create_session(self) -> aiohttp.ClientSession:
        """Create an HTTP session configured for this downloader."""
        return aiohttp.ClientSession(
            timeout=self.timeout,
            headers={"User-Agent": self.user_agent}
        )

    def target_path(self, url: str) -> Optional[str]:
        """
        Compute where a URL would be saved.

        Args:
            url: Absolute document URL

        Returns:
            Local file path, or None if no usable filename can be derived
        """
        filename = url_to_safe_filename(url)
        if filename in ('', '.', '..'):
            return None
        return os.path.join(self.output_dir, filename)

    async def download(
        self,
        session: aiohttp.ClientSession,
        url: str
    ) -> Optional[str]:
        """
        Download a single document unless it is already on disk.

        Args:
            session: aiohttp session
            url: Absolute document URL

        Returns:
            Local file path if the document is on disk after the call
            (downloaded now or already present), None otherwise
        """
        local_path = self.target_path(url)
        if local_path is None:
            self.logger.error(f"Cannot derive a filename from {url}, skipping")
            return None

        if file_exists(local_path):
            self.logger.info(f"File already exists, skipping: {local_path}")
            return local_path

        content = await self._fetch(session, url)
        if content is None:
            return None

        if not self._save(url, content, local_path):
            return None

        self.logger.info(f"Downloaded {len(content)} bytes: {url} -> {local_path}")
        return local_path

    async def _fetch(
        self,
        session: aiohttp.ClientSession,
        url: str
    ) -> Optional[bytes]:
        """Fetch and validate a response body, or return None."""
        try:
            async with session.get(url, timeout=self.timeout, allow_redirects=True) as response:
                if not 200 <= response.status < 300:
                    self.logger.warning(
                        f"Download failed for {url}: HTTP {response.status}"
                    )
                    return None

                content_type = response.headers.get('Content-Type', '')
                if self.media_type not in content_type.lower():
                    self.logger.warning(
                        f"Invalid content type for {url}: {content_type!r} "
                        f"(expected {self.media_type})"
                    )
                    return None

                content = await response.read()

        except ClientError as e:
            self.logger.warning(f"Failed to download {url}: {e}")
            return None
        except asyncio.TimeoutError:
            self.logger.warning(f"Timeout downloading {url}")
            return None

        if not content:
            self.logger.warning(f"Downloaded 0 bytes for {url}; not creating file")
            return None

        return content

    def _save(self, url: str, content: bytes, local_path: str) -> bool:
        """Write a fully buffered body to disk, removing partial files on error."""
        try:
            with open(local_path, 'wb') as f:
                f.write(content)
        except OSError as e:
            self.logger.error(f"Failed to write {url} to {local_path}: {e}")
            if os.path.exists(local_path):
                try:
                    os.remove(local_path)
                except OSError as cleanup_error:
                    self.logger.error(
                        f"Could not remove partial file {local_path}: {cleanup_error}"
                    )
            return False
        return True
