"""
==============================================================================
Shopping Catalog Manager - Application Entry Point
==============================================================================

Interactive console application with:
- JSON-backed product catalog (saved after every change)
- Sorted, paginated listings and keyword search
- Product reviews with average ratings

Usage:
------
    # Default settings (data/products.json, 5 products per page)
    shopcatalog

    # Custom catalog file
    shopcatalog --products-file /tmp/products.json --page-size 10

    # Environment configuration
    SHOPCATALOG_PRODUCTS_FILE=/tmp/products.json python -m shopcatalog.main

==============================================================================
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from pydantic import ValidationError

from shopcatalog.catalog import CatalogStore
from shopcatalog.cli import CatalogMenu
from shopcatalog.config import Settings, get_settings
from shopcatalog.core import AppException
from shopcatalog.services import CatalogService


logger = logging.getLogger(__name__)


# ============================================================================
# LOGGING SETUP
# ============================================================================

def setup_logging(settings: Settings) -> None:
    """
    Configure logging for the entire application.

    Records go to the log file only, so they never interleave with the
    interactive menu on the console.
    """
    settings.ensure_directories()

    logging.basicConfig(
        level=settings.effective_log_level,
        format=settings.log_format,
        handlers=[logging.FileHandler(settings.log_path, encoding="utf-8")],
    )


# ============================================================================
# APPLICATION
# ============================================================================

class Application:
    """
    Console application manager.

    Handles application lifecycle including:
    - Loading the catalog store
    - Wiring the service and the console menu
    - Startup and shutdown logging
    """

    def __init__(self, settings: Settings, menu_factory=CatalogMenu) -> None:
        self._settings = settings
        self._menu_factory = menu_factory

    def run(self) -> None:
        """
        Load the catalog and run the menu until the user exits.

        Raises:
            AppException: CATALOG_CORRUPT or STORAGE_READ_FAILED if the
                backing file cannot be loaded
        """
        self._startup()

        store = CatalogStore(self._settings.products_path)
        service = CatalogService(store, default_page_size=self._settings.page_size)
        logger.info(f"✅ Catalog ready with {len(store)} products")

        menu = self._menu_factory(
            service,
            page_size=self._settings.page_size,
            default_sort=self._settings.default_sort,
            app_name=self._settings.app_name,
        )
        menu.run()

        self._shutdown()

    def _startup(self) -> None:
        logger.info("=" * 60)
        logger.info(f"🚀 Starting {self._settings.app_name}")
        logger.info(f"📁 Products file: {self._settings.products_path}")
        logger.info("=" * 60)

    def _shutdown(self) -> None:
        logger.info(f"✅ {self._settings.app_name} stopped")


# ============================================================================
# ENTRY POINT
# ============================================================================

def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=f"{settings.app_name} - interactive product catalog manager"
    )

    parser.add_argument(
        "--products-file",
        default=None,
        help=f"Catalog JSON file (default: {settings.products_file})"
    )

    parser.add_argument(
        "--page-size",
        type=int,
        default=None,
        help=f"Products per page (default: {settings.page_size})"
    )

    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.log_level})"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Console entry point; returns the process exit code."""
    settings = get_settings()
    parser = build_parser(settings)
    args = parser.parse_args(argv)

    overrides = {
        "products_file": args.products_file,
        "page_size": args.page_size,
        "log_level": args.log_level,
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}
    if overrides:
        try:
            settings = Settings(**{**settings.model_dump(), **overrides})
        except ValidationError as e:
            parser.error(f"invalid option: {e.errors()[0]['msg']}")

    setup_logging(settings)
    logger.debug("Debug logging initialised.")

    try:
        Application(settings).run()
        return 0

    except KeyboardInterrupt:
        logger.warning("Application interrupted by user")
        print("\n⚠️  Interrupted")
        return 130

    except AppException as e:
        if e.is_fatal:
            logger.error(f"Application failed to start: {e.message}", exc_info=True)
        else:
            logger.error(f"Application stopped on {e.code}: {e.message}", exc_info=True)
        print(f"❌ An error occurred: {e.message}")
        print(f"Check {settings.log_path} for details")
        return 1


if __name__ == "__main__":
    sys.exit(main())
