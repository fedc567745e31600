#!/usr/bin/env python3
"""
Bookstore Seeder - Main Entry Point
Replaces the books collection with the fixed seed set
"""

import sys
import asyncio

from pymongo.errors import PyMongoError

from config import load_settings
from bookstore.core.errors import BookstoreError, ConfigError
from bookstore.core.utils import setup_logging, get_logger
from bookstore.services.seeder import Seeder

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
        asyncio.run(Seeder(settings).run())
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt")
        return 130
    except (BookstoreError, PyMongoError) as e:
        logger.critical(f"Error inserting books: {e}", exc_info=True)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
