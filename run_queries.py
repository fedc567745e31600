#!/usr/bin/env python3
"""
Bookstore Query Runner - Main Entry Point
Runs the demonstration query catalog against the seeded books collection
"""

import sys
import asyncio

from config import load_settings
from bookstore.core.errors import BookstoreError, ConfigError
from bookstore.core.utils import setup_logging, get_logger
from bookstore.services.query_runner import QueryRunner

logger = get_logger(__name__)


def main() -> int:
    """Main entry point"""
    try:
        settings = load_settings()
    except ConfigError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    setup_logging(settings.log_level, settings.log_dir)

    try:
        report = asyncio.run(QueryRunner(settings).run())
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt")
        return 130
    except BookstoreError as e:
        logger.critical(f"Fatal error: {e}", exc_info=True)
        return 1

    # Step failures were already reported; only fatal errors change the exit status
    if not report.ok:
        logger.info(f"Finished with {len(report.failed)} failed step(s)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
