#!/usr/bin/env python3
"""
PDF Harvester - download every document linked from a listing page.

Renders the listing page with Playwright (once, cached as a snapshot),
extracts document links, and downloads each one into the output directory.
A ledger of processed links makes re-runs incremental.

Usage:
    python -m pdf_harvester.main --url https://www.duragloss.com/sds-sheets/ --output ./PDFs

Delete the snapshot file to force the listing page to be rendered again.
"""

import argparse
import asyncio
import logging
import os
import sys
from typing import List, Optional

from pdf_harvester.crawler import HarvestPipeline
from pdf_harvester.crawler.pipeline import STATE_DONE
from pdf_harvester.utils.config import HarvestConfig
from pdf_harvester.utils.constants import (
    DEFAULT_BASE_URL,
    DEFAULT_EXTENSION,
    DEFAULT_LEDGER_FILE,
    DEFAULT_LISTING_URL,
    DEFAULT_MEDIA_TYPE,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_RENDER_TIMEOUT,
    DEFAULT_SNAPSHOT_FILE,
    DEFAULT_TIMEOUT,
)
from pdf_harvester.utils.log import (
    setup_logger,
    print_status,
    print_success,
    print_error,
    print_info,
    print_warning
)


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog='pdf-harvester',
        description='Download the documents linked from a JavaScript listing page',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s
    %(prog)s --url https://example.com/docs/ --base-url https://example.com -o ./docs
    %(prog)s --extension .pdf --media-type application/pdf --timeout 60
        """
    )

    parser.add_argument(
        '--url', '-u',
        type=str,
        default=DEFAULT_LISTING_URL,
        help=f'Listing page to render (default: {DEFAULT_LISTING_URL})'
    )

    parser.add_argument(
        '--base-url',
        type=str,
        default=DEFAULT_BASE_URL,
        help=f'Origin prepended to site-relative links (default: {DEFAULT_BASE_URL})'
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        default=DEFAULT_OUTPUT_DIR,
        help=f'Directory for downloaded documents (default: {DEFAULT_OUTPUT_DIR})'
    )

    parser.add_argument(
        '--snapshot',
        type=str,
        default=DEFAULT_SNAPSHOT_FILE,
        help=f'Cached copy of the rendered listing page (default: {DEFAULT_SNAPSHOT_FILE})'
    )

    parser.add_argument(
        '--ledger',
        type=str,
        default=DEFAULT_LEDGER_FILE,
        help=f'File recording processed links (default: {DEFAULT_LEDGER_FILE})'
    )

    parser.add_argument(
        '--extension',
        type=str,
        default=DEFAULT_EXTENSION,
        help=f'Link suffix to harvest (default: {DEFAULT_EXTENSION})'
    )

    parser.add_argument(
        '--media-type',
        type=str,
        default=DEFAULT_MEDIA_TYPE,
        help=f'Required Content-Type of downloads (default: {DEFAULT_MEDIA_TYPE})'
    )

    parser.add_argument(
        '--timeout',
        type=float,
        default=DEFAULT_TIMEOUT,
        help=f'Download timeout in seconds (default: {DEFAULT_TIMEOUT})'
    )

    parser.add_argument(
        '--render-timeout',
        type=float,
        default=DEFAULT_RENDER_TIMEOUT,
        help=f'Page render timeout in seconds (default: {DEFAULT_RENDER_TIMEOUT})'
    )

    parser.add_argument(
        '--no-headless',
        action='store_true',
        help='Run browser in visible mode (useful for debugging)'
    )

    parser.add_argument(
        '--log-file',
        type=str,
        default=None,
        help='Also write logs to this file'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress output except warnings and errors'
    )

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> HarvestConfig:
    """
    Build and validate the run configuration from parsed arguments.

    Raises:
        ValueError: If an option is invalid
    """
    config = HarvestConfig(
        listing_url=args.url,
        base_url=args.base_url,
        snapshot_path=args.snapshot,
        ledger_path=args.ledger,
        output_dir=args.output,
        extension=args.extension,
        media_type=args.media_type,
        timeout=args.timeout,
        render_timeout=args.render_timeout,
        headless=not args.no_headless,
    )
    return config.validate()


async def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the harvester.

    Returns:
        Exit code (0 once the run finishes, 1 for invalid input or a crash)
    """
    args = parse_arguments(argv)

    log_level = logging.DEBUG if args.verbose else (logging.WARNING if args.quiet else logging.INFO)
    setup_logger(level=log_level, log_file=args.log_file)

    try:
        config = build_config(args)
    except ValueError as e:
        print_error(f"Invalid input: {e}")
        return 1

    if not args.quiet:
        print_status("PDF Harvester", "bold cyan")
        print_info(f"Listing page: {config.listing_url}")
        print_info(f"Output: {config.output_dir}")

    try:
        result = await HarvestPipeline(config).run()
    except Exception as e:
        print_error(f"Error: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1

    if result.state != STATE_DONE:
        print_warning("Run aborted: no snapshot of the listing page is available")
    elif not args.quiet:
        print_success(f"Documents saved to: {os.path.abspath(config.output_dir)}")

    return 0


def run() -> None:
    """Entry point wrapper for running as module."""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        print_error("Harvest interrupted by user")
        sys.exit(130)


if __name__ == '__main__':
    run()
