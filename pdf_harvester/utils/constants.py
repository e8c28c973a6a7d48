"""
Shared constants for the PDF harvester.

Contains the default configuration values used across multiple modules.
"""

# Default user agent string for all HTTP requests
# Used by both the browser renderer and document downloader
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)

# Listing page rendered to discover document links
DEFAULT_LISTING_URL = "https://www.duragloss.com/sds-sheets/"

# Origin prepended to site-relative links
DEFAULT_BASE_URL = "https://www.duragloss.com"

# Local state files
DEFAULT_SNAPSHOT_FILE = "duragloss.html"
DEFAULT_LEDGER_FILE = "pdf_links.txt"
DEFAULT_OUTPUT_DIR = "PDFs"

# Permissions for created directories (rwxr-xr-x)
DEFAULT_DIR_MODE = 0o755

# Document type to harvest
DEFAULT_EXTENSION = ".pdf"
DEFAULT_MEDIA_TYPE = "application/pdf"

# Default download timeout in seconds
DEFAULT_TIMEOUT = 30

# Overall render ceiling in seconds (browser startup, navigation, extraction)
DEFAULT_RENDER_TIMEOUT = 300
