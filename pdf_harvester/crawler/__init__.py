"""
Crawler module for document harvesting.

Contains components for rendering, extracting, ledger keeping, downloading,
and the pipeline that ties them together.
"""

from .pipeline import HarvestPipeline, HarvestResult
from .renderer import PageRenderer, render_page_html
from .extractor import LinkExtractor, ExtractedLinks, dedupe_links
from .ledger import Ledger
from .downloader import DocumentDownloader

__all__ = [
    "HarvestPipeline",
    "HarvestResult",
    "PageRenderer",
    "render_page_html",
    "LinkExtractor",
    "ExtractedLinks",
    "dedupe_links",
    "Ledger",
    "DocumentDownloader",
]
