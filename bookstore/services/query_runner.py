"""
Query Runner - executes the demonstration catalog against the books collection
"""

import sys
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, List, Optional, TextIO

from config import Settings
from database.mongodb import BookstoreDB, open_db
from bookstore.core import constants as C
from bookstore.core.constants import Section
from bookstore.core.models import CatalogReport, StepFailure
from bookstore.core.utils import (
    get_logger, emit, format_price, format_average, format_decade, describe_indexes
)
from bookstore.services import queries as Q

logger = get_logger(__name__)


@dataclass
class Step:
    """One independent catalog entry"""
    key: str
    section: Section
    title: str
    action: Callable[[BookstoreDB], Awaitable[Any]]


class QueryRunner:
    """Runs every catalog step in order; a failing step is logged and skipped"""

    def __init__(self, settings: Settings, out: Optional[TextIO] = None, client=None):
        self.settings = settings
        self.out = out or sys.stdout
        self.client = client

    async def run(self) -> CatalogReport:
        """Connect, run the catalog, always release the connection"""
        try:
            emit(self.out, "Connecting to MongoDB...")
            async with open_db(self.settings, self.client) as db:
                emit(self.out, "Connected to MongoDB")
                report = await self.run_catalog(db)
        finally:
            emit(self.out)
            emit(self.out, "Connection closed.")
        return report

    def steps(self) -> List[Step]:
        """The catalog in execution order"""
        return [
            Step("fiction", Section.CRUD, "Books in Fiction genre", self.fiction_books),
            Step("modern", Section.CRUD, f"Books published after {C.MODERN_YEAR}", self.modern_books),
            Step("author", Section.CRUD, f"Books by {C.FEATURED_AUTHOR}", self.books_by_author),
            Step("update_price", Section.CRUD, f'Updating price of "{C.REPRICED_TITLE}"...', self.update_price),
            Step("delete", Section.CRUD, f'Deleting "{C.REMOVED_TITLE}"...', self.delete_book),
            Step("recent_in_stock", Section.ADVANCED, f"Books in stock published after {C.RECENT_YEAR}",
                 self.recent_in_stock),
            Step("projection", Section.ADVANCED, "Books with title, author, and price only", self.projection),
            Step("cheapest", Section.ADVANCED, f"{self.settings.sort_limit} Cheapest books", self.cheapest),
            Step("most_expensive", Section.ADVANCED, f"{self.settings.sort_limit} Most expensive books",
                 self.most_expensive),
            *[
                Step(f"page_{page}", Section.ADVANCED,
                     f"Pagination (Page {page} - {self.settings.page_size} books per page)",
                     self._page_action(page))
                for page in C.PAGES_SHOWN
            ],
            Step("avg_price_by_genre", Section.AGGREGATION, "Average price by genre", self.avg_price_by_genre),
            Step("top_author", Section.AGGREGATION, "Author with the most books", self.top_author),
            Step("by_decade", Section.AGGREGATION, "Books by publication decade", self.books_by_decade),
            Step("title_index", Section.INDEXING, "Creating index on title field...", self.create_title_index),
            Step("author_year_index", Section.INDEXING,
                 "Creating compound index on author and published_year...", self.create_author_year_index),
            Step("indexes", Section.INDEXING, "Current indexes on books collection", self.list_indexes),
            Step("explain", Section.INDEXING, "Query execution stats (using index)", self.explain_title_query),
        ]

    async def run_catalog(self, db: BookstoreDB) -> CatalogReport:
        """Run every step on an open connection and collect the outcome"""
        report = CatalogReport()
        section = None

        for number, step in enumerate(self.steps(), start=1):
            if step.section is not section:
                section = step.section
                self._header(section.value)

            emit(self.out)
            emit(self.out, f"{number}. {step.title}" + ("" if step.title.endswith("...") else ":"))
            try:
                report.results[step.key] = await step.action(db)
                report.completed.append(step.key)
            except Exception as e:
                logger.error(f"Catalog step '{step.key}' failed: {e}", exc_info=True)
                emit(self.out, f"   ! {step.title.rstrip('.')} failed: {e}")
                report.failed.append(StepFailure(step.key, str(e)))

        if report.ok:
            self._header("ALL QUERIES COMPLETED SUCCESSFULLY!")
        else:
            logger.warning(f"{len(report.failed)} catalog step(s) failed: "
                           f"{', '.join(f.name for f in report.failed)}")
            self._header(f"COMPLETED WITH {len(report.failed)} FAILED STEP(S)")
        return report

    def _header(self, text: str) -> None:
        emit(self.out)
        emit(self.out, C.RULE)
        emit(self.out, text)
        emit(self.out, C.RULE)

    def _list(self, docs, render, empty: str = "No books found") -> None:
        if not docs:
            emit(self.out, f"   {empty}")
        for doc in docs:
            emit(self.out, f"   {render(doc)}")

    # ============== TASK 2: BASIC CRUD ==============

    async def fiction_books(self, db: BookstoreDB):
        """Exact match on genre"""
        docs = await db.find_books(Q.by_genre(C.FICTION_GENRE))
        self._list(docs, lambda b: f"{b.get('title')} by {b.get('author')}")
        return docs

    async def modern_books(self, db: BookstoreDB):
        """Range filter on published_year"""
        docs = await db.find_books(Q.published_after(C.MODERN_YEAR))
        self._list(docs, lambda b: f"{b.get('title')} ({b.get('published_year')})")
        return docs

    async def books_by_author(self, db: BookstoreDB):
        """Exact match on author"""
        docs = await db.find_books(Q.by_author(C.FEATURED_AUTHOR))
        self._list(docs, lambda b: f"{b.get('title')} ({b.get('published_year')})")
        return docs

    async def update_price(self, db: BookstoreDB) -> int:
        """Reprice one title; returns the modified count"""
        modified = await db.update_book(Q.by_title(C.REPRICED_TITLE), {"price": C.NEW_PRICE})
        emit(self.out, f"   Modified {modified} document(s)")
        return modified

    async def delete_book(self, db: BookstoreDB) -> int:
        """Delete one title; returns the deleted count"""
        deleted = await db.delete_book(Q.by_title(C.REMOVED_TITLE))
        emit(self.out, f"   Deleted {deleted} document(s)")
        return deleted

    # ============== TASK 3: ADVANCED QUERIES ==============

    async def recent_in_stock(self, db: BookstoreDB):
        """In stock and recent; an empty result is reported, not raised"""
        docs = await db.find_books(Q.in_stock_published_after(C.RECENT_YEAR))
        self._list(docs, lambda b: f"{b.get('title')} ({b.get('published_year')})",
                   empty=f"No books found (none published after {C.RECENT_YEAR})")
        return docs

    async def projection(self, db: BookstoreDB):
        """Title, author and price only, without _id"""
        docs = await db.find_books(projection=C.PRICE_PROJECTION)
        self._list(docs[:C.PROJECTION_PREVIEW],
                   lambda b: f"{b.get('title')} by {b.get('author')} - {format_price(b.get('price'))}")
        if docs:
            emit(self.out, f"   ... (showing first {min(len(docs), C.PROJECTION_PREVIEW)} of {len(docs)} books)")
        return docs

    async def cheapest(self, db: BookstoreDB):
        """Lowest prices first, capped at sort_limit"""
        docs = await db.find_books(sort=Q.PRICE_ASC, limit=self.settings.sort_limit)
        self._list(docs, lambda b: f"{b.get('title')} - {format_price(b.get('price'))}")
        return docs

    async def most_expensive(self, db: BookstoreDB):
        """Highest prices first, capped at sort_limit"""
        docs = await db.find_books(sort=Q.PRICE_DESC, limit=self.settings.sort_limit)
        self._list(docs, lambda b: f"{b.get('title')} - {format_price(b.get('price'))}")
        return docs

    def _page_action(self, page: int):
        async def action(db: BookstoreDB):
            return await self.page(db, page)
        return action

    async def page(self, db: BookstoreDB, page: int):
        """One page of books ordered by title"""
        skip, limit = Q.page_bounds(page, self.settings.page_size)
        docs = await db.find_books(sort=Q.TITLE_ASC, skip=skip, limit=limit)
        if not docs:
            emit(self.out, f"    No books on page {page}")
        for i, doc in enumerate(docs, start=skip + 1):
            emit(self.out, f"    {i}. {doc.get('title')}")
        return docs

    # ============== TASK 4: AGGREGATION PIPELINES ==============

    async def avg_price_by_genre(self, db: BookstoreDB):
        """Mean price and count per genre"""
        groups = await db.aggregate(Q.avg_price_by_genre_pipeline())
        self._list(groups, lambda g: f" {g['_id']}: {format_average(g.get('avgPrice'))} ({g['count']} books)",
                   empty="No results")
        return groups

    async def top_author(self, db: BookstoreDB):
        """Single author with the most books"""
        groups = await db.aggregate(Q.top_author_pipeline())
        self._list(groups, lambda g: f" {g['_id']}: {g['count']} books", empty="No results")
        return groups[0] if groups else None

    async def books_by_decade(self, db: BookstoreDB):
        """Count per publication decade"""
        groups = await db.aggregate(Q.books_by_decade_pipeline())
        self._list(groups, lambda g: f" {format_decade(g['_id'])}: {g['count']} books", empty="No results")
        return groups

    # ============== TASK 5: INDEXING ==============

    async def create_title_index(self, db: BookstoreDB) -> str:
        """Ascending index on title"""
        name = await db.create_index(C.TITLE_INDEX)
        emit(self.out, f"    ✓ Index created on title field ({name})")
        return name

    async def create_author_year_index(self, db: BookstoreDB) -> str:
        """Compound index on author and published_year"""
        name = await db.create_index(C.AUTHOR_YEAR_INDEX)
        emit(self.out, f"    ✓ Compound index created on author and published_year ({name})")
        return name

    async def list_indexes(self, db: BookstoreDB):
        """Print every index on the collection"""
        info = await db.list_indexes()
        for line in describe_indexes(info):
            emit(self.out, f"    {line}")
        return info

    async def explain_title_query(self, db: BookstoreDB):
        """executionStats for the title lookup"""
        plan = await db.explain_find(Q.by_title(C.EXPLAINED_TITLE))
        summary = Q.summarize_explain(plan)
        emit(self.out, f"    Execution time: {summary.execution_time_ms}ms")
        emit(self.out, f"    Documents examined: {summary.docs_examined}")
        emit(self.out, f"    Documents returned: {summary.docs_returned}")
        emit(self.out, f"    Index used: {summary.index_name or 'None'}")
        return summary
