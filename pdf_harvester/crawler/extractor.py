"""
Link extractor for parsing rendered HTML and finding document links.

Uses BeautifulSoup for HTML parsing to find anchors pointing at documents.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from bs4 import BeautifulSoup

from ..utils.log import get_logger
from ..utils.constants import DEFAULT_EXTENSION


@dataclass
class ExtractedLinks:
    """Container for extracted document links."""

    # Raw href values, in document order
    links: List[str] = field(default_factory=list)

    # Parse error message, if the markup could not be parsed
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        """True if the markup was parsed."""
        return self.error is None


class LinkExtractor:
    """
    Extracts document links from HTML content.

    Keeps the href of every anchor whose value ends with the target
    extension, compared case-insensitively.
    """

    def __init__(self, extension: str = DEFAULT_EXTENSION):
        """
        Initialize the link extractor.

        Args:
            extension: File extension to match (e.g. '.pdf')
        """
        self.extension = extension.lower()
        self.logger = get_logger("extractor")

    def extract(self, html: str) -> ExtractedLinks:
        """
        Extract document links from HTML content.

        Args:
            html: HTML content to parse

        Returns:
            ExtractedLinks with the matching hrefs, or with an empty list
            and an error message if the markup could not be parsed
        """
        if not isinstance(html, str):
            message = f"expected markup string, got {type(html).__name__}"
            self.logger.error(f"Error parsing HTML: {message}")
            return ExtractedLinks(error=message)

        try:
            soup = self._parse(html)
        except Exception as e:
            self.logger.error(f"Error parsing HTML: {e}")
            return ExtractedLinks(error=str(e))

        result = ExtractedLinks()
        for anchor in soup.find_all('a', href=True):
            href = anchor.get('href')
            # Multi-valued attributes come back as lists
            if not isinstance(href, str):
                continue
            if href.lower().endswith(self.extension):
                result.links.append(href)

        self.logger.debug(f"Extracted {len(result.links)} '{self.extension}' links")

        return result

    def _parse(self, html: str) -> BeautifulSoup:
        try:
            return BeautifulSoup(html, 'lxml')
        except Exception:
            # Fallback to html.parser if lxml fails
            return BeautifulSoup(html, 'html.parser')


def dedupe_links(links: Iterable[str]) -> List[str]:
    """
    Remove duplicate links, keeping the first occurrence of each.

    Args:
        links: Links in discovery order

    Returns:
        New list with each distinct link once, in first-appearance order
    """
    seen = set()
    unique = []
    for link in links:
        if link not in seen:
            seen.add(link)
            unique.append(link)
    return unique
