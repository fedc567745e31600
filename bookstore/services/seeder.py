"""
Seeder - replaces the books collection with the fixed seed set
"""

import sys
from typing import List, Optional, TextIO

from config import Settings
from database.mongodb import BookstoreDB, open_db
from bookstore.core.constants import SUMMARY_PROJECTION
from bookstore.core.models import Book, SeedReport
from bookstore.core.seed_data import SEED_BOOKS
from bookstore.core.utils import get_logger, emit

logger = get_logger(__name__)


class Seeder:
    """Drops any existing books and bulk-inserts the seed set.

    The insert is one insert_many call but not a transaction: if it fails
    midway the collection may hold a partial seed set. Re-running the seeder
    is the recovery path.
    """

    def __init__(self, settings: Settings, books: Optional[List[Book]] = None,
                 out: Optional[TextIO] = None, client=None):
        self.settings = settings
        self.books = list(SEED_BOOKS if books is None else books)
        self.out = out or sys.stdout
        self.client = client

    async def run(self) -> SeedReport:
        """Connect, reset, insert and print the summary"""
        try:
            async with open_db(self.settings, self.client) as db:
                emit(self.out, "Connected to MongoDB")
                return await self.seed(db)
        finally:
            emit(self.out, "Connection closed.")

    async def seed(self, db: BookstoreDB) -> SeedReport:
        report = SeedReport()
        collection = self.settings.collection_name

        report.existing_count = await db.count_books()
        if report.existing_count > 0:
            emit(self.out, f'Collection "{collection}" exists and has {report.existing_count} documents. '
                           f'Dropping collection...')
            await db.drop_books()
            report.dropped = True
            emit(self.out, "Dropped existing collection.")

        report.inserted_count = await db.insert_books([book.to_dict() for book in self.books])
        logger.info(f"Inserted {report.inserted_count} books into {db.namespace}")
        emit(self.out, f"Inserted {report.inserted_count} documents into {db.namespace}")

        report.summary = await db.find_books(projection=SUMMARY_PROJECTION)
        emit(self.out)
        emit(self.out, "Inserted books:")
        for i, doc in enumerate(report.summary, start=1):
            emit(self.out, f"{i}. {doc.get('title')} — {doc.get('author')} ({doc.get('published_year')})")

        return report
