"""
PDF Harvester - renders a listing page and downloads the documents it links.

This package provides functionality to render a JavaScript listing page,
extract document links, and download each document exactly once, keeping a
ledger of processed links so re-runs are incremental.
"""

__version__ = "1.0.0"
__author__ = "PDF Harvester Team"
