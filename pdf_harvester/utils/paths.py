"""
Path and URL utilities for the PDF harvester.

Provides link normalization, safe filename generation, and file/directory
checks.
"""

import os
import re
from urllib.parse import urlparse, unquote_plus

from .constants import DEFAULT_DIR_MODE

# Characters allowed in a local filename; everything else collapses to '_'
UNSAFE_FILENAME_CHARS = re.compile(r'[^a-z0-9._-]+')

# A '%' that does not start a valid two-digit hex escape
MALFORMED_ESCAPE = re.compile(r'%(?![0-9A-Fa-f]{2})')

# Characters never valid inside a single URL
LINE_BREAKS = re.compile(r'[\t\r\n]')


def get_domain(url: str) -> str:
    """
    Extract the host from a URL.

    Args:
        url: URL to extract the host from

    Returns:
        Host string (e.g., 'example.com'), or '' if there is none or the
        URL cannot be parsed
    """
    try:
        return urlparse(url).hostname or ""
    except ValueError:
        return ""


def normalize_link(link: str, base_url: str) -> str:
    """
    Make a link absolute by prefixing the base origin when it has no host.

    Links that already carry a scheme and host are returned unmodified
    apart from dropped tabs and line breaks.

    Args:
        link: Absolute or site-relative link
        base_url: Origin to prepend (e.g., 'https://example.com')

    Returns:
        Absolute URL string
    """
    # Tabs and line breaks inside a URL are dropped, as browsers do
    link = LINE_BREAKS.sub('', link).strip()

    parsed_base = urlparse(base_url)

    # Protocol-relative URLs only lack the scheme
    if link.startswith('//'):
        return f"{parsed_base.scheme}:{link}"

    if get_domain(link):
        return link

    origin = f"{parsed_base.scheme}://{parsed_base.netloc}"
    if not link.startswith('/'):
        link = '/' + link

    return origin + link


def is_valid_url(url: str) -> bool:
    """
    Check that a URL is absolute and usable for an HTTP request.

    Args:
        url: URL to check

    Returns:
        True if the URL has an http(s) scheme and a host and no line breaks
    """
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    if LINE_BREAKS.search(url):
        return False
    return parsed.scheme in ('http', 'https') and bool(parsed.netloc)


def url_to_safe_filename(url: str) -> str:
    """
    Convert a URL into a safe, lowercase filename.

    Uses the last path segment, percent-decoded, lowercased, with every run
    of characters outside ``[a-z0-9._-]`` replaced by a single underscore.

    Args:
        url: Absolute or relative URL

    Returns:
        Sanitized filename, or '' if the URL cannot be parsed or its path
        has no final segment
    """
    try:
        parsed = urlparse(url)
    except ValueError:
        return ""

    segment = parsed.path.rsplit('/', 1)[-1]
    if not segment:
        return ""

    decoded = segment
    if not MALFORMED_ESCAPE.search(segment):
        try:
            decoded = unquote_plus(segment, errors='strict')
        except UnicodeDecodeError:
            decoded = segment

    return UNSAFE_FILENAME_CHARS.sub('_', decoded.lower())


def file_exists(path: str) -> bool:
    """Return True if path exists and is a regular file."""
    return os.path.isfile(path)


def ensure_dir(path: str, mode: int = DEFAULT_DIR_MODE) -> None:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path to ensure exists
        mode: Permission bits for newly created directories
    """
    os.makedirs(path, mode=mode, exist_ok=True)


def ensure_parent_dir(file_path: str) -> None:
    """
    Ensure the parent directory of a file exists.

    Args:
        file_path: File path whose parent directory should exist
    """
    parent = os.path.dirname(file_path)
    if parent:
        ensure_dir(parent)
