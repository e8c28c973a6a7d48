"""
Run configuration for the PDF harvester.

Collects every path, URL and limit the pipeline needs into one object that
is built once at startup and handed to the orchestrator.
"""

from dataclasses import dataclass
from urllib.parse import urlparse

from .constants import (
    DEFAULT_BASE_URL,
    DEFAULT_DIR_MODE,
    DEFAULT_EXTENSION,
    DEFAULT_LEDGER_FILE,
    DEFAULT_LISTING_URL,
    DEFAULT_MEDIA_TYPE,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_RENDER_TIMEOUT,
    DEFAULT_SNAPSHOT_FILE,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
)


@dataclass
class HarvestConfig:
    """Settings for a single harvest run."""

    # Page rendered to discover links
    listing_url: str = DEFAULT_LISTING_URL

    # Origin used to absolutise site-relative links
    base_url: str = DEFAULT_BASE_URL

    # Local state
    snapshot_path: str = DEFAULT_SNAPSHOT_FILE
    ledger_path: str = DEFAULT_LEDGER_FILE
    output_dir: str = DEFAULT_OUTPUT_DIR
    dir_mode: int = DEFAULT_DIR_MODE

    # Which documents to keep
    extension: str = DEFAULT_EXTENSION
    media_type: str = DEFAULT_MEDIA_TYPE

    # Limits, in seconds
    timeout: float = DEFAULT_TIMEOUT
    render_timeout: float = DEFAULT_RENDER_TIMEOUT

    headless: bool = True
    user_agent: str = DEFAULT_USER_AGENT

    @property
    def origin(self) -> str:
        """Scheme and host of ``base_url`` (e.g. 'https://example.com')."""
        parsed = urlparse(self.base_url)
        return f"{parsed.scheme}://{parsed.netloc}"

    def validate(self) -> "HarvestConfig":
        """
        Check the configuration for values the pipeline cannot work with.

        Returns:
            The configuration itself, for chaining

        Raises:
            ValueError: If a setting is invalid
        """
        for name, url in (("listing_url", self.listing_url), ("base_url", self.base_url)):
            parsed = urlparse(url)
            if parsed.scheme not in ("http", "https") or not parsed.netloc:
                raise ValueError(f"{name} must be an absolute http(s) URL: {url!r}")

        if not self.extension:
            raise ValueError("extension must not be empty")
        if not self.media_type:
            raise ValueError("media_type must not be empty")

        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.render_timeout <= 0:
            raise ValueError(f"render_timeout must be positive, got {self.render_timeout}")

        for name in ("snapshot_path", "ledger_path", "output_dir"):
            if not getattr(self, name):
                raise ValueError(f"{name} must not be empty")

        return self
