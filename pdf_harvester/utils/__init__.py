"""
Utility modules for the PDF harvester.

Contains logging, path handling, run configuration, and constants.
"""

from .log import setup_logger, get_logger
from .paths import (
    normalize_link,
    is_valid_url,
    url_to_safe_filename,
    file_exists,
    ensure_dir,
)
from .config import HarvestConfig
from .constants import (
    DEFAULT_USER_AGENT,
    DEFAULT_TIMEOUT,
    DEFAULT_RENDER_TIMEOUT,
    DEFAULT_EXTENSION,
    DEFAULT_MEDIA_TYPE,
)

__all__ = [
    "setup_logger",
    "get_logger",
    "normalize_link",
    "is_valid_url",
    "url_to_safe_filename",
    "file_exists",
    "ensure_dir",
    "HarvestConfig",
    "DEFAULT_USER_AGENT",
    "DEFAULT_TIMEOUT",
    "DEFAULT_RENDER_TIMEOUT",
    "DEFAULT_EXTENSION",
    "DEFAULT_MEDIA_TYPE",
]
