"""
Tests for database/mongodb.py against an in-memory motor client: the
read/update/delete/aggregate/index operations the catalog relies on.
"""
from collections import Counter

import pytest

from database.mongodb import BookstoreDB, open_db
from bookstore.core.errors import DatabaseConnectionError
from bookstore.core.models import decade_of
from bookstore.core.seed_data import SEED_BOOKS
from bookstore.services import queries as Q


SORTED_TITLES = sorted(b.title for b in SEED_BOOKS)


class TestConnection:

    async def test_connect_sets_collection(self, settings, client):
        db = BookstoreDB(settings, client)
        await db.connect()
        assert db.is_connected
        assert db.namespace == "test_bookstore.books"
        await db.disconnect()
        assert not db.is_connected

    async def test_unreachable_server_is_fatal(self, unreachable_settings):
        with pytest.raises(DatabaseConnectionError):
            async with open_db(unreachable_settings):
                pass

    async def test_client_released_after_failure(self, unreachable_settings, monkeypatch):
        released = []
        original = BookstoreDB.disconnect

        async def tracking_disconnect(self):
            released.append(self.client is not None)
            await original(self)

        monkeypatch.setattr(BookstoreDB, "disconnect", tracking_disconnect)
        with pytest.raises(DatabaseConnectionError):
            async with open_db(unreachable_settings):
                pass
        assert released == [True]


class TestReads:

    async def test_count_after_seed(self, seeded_db):
        assert await seeded_db.count_books() == 12

    async def test_fiction_filter(self, seeded_db):
        docs = await seeded_db.find_books(Q.by_genre("Fiction"))
        assert {d["title"] for d in docs} == {"To Kill a Mockingbird", "The Great Gatsby",
                                             "The Catcher in the Rye", "The Alchemist"}

    async def test_range_filter(self, seeded_db):
        docs = await seeded_db.find_books(Q.published_after(1950))
        assert all(d["published_year"] > 1950 for d in docs)
        assert len(docs) == sum(1 for b in SEED_BOOKS if b.published_year > 1950)

    async def test_compound_filter_empty(self, seeded_db):
        assert await seeded_db.find_books(Q.in_stock_published_after(2010)) == []

    async def test_projection_suppresses_id(self, seeded_db):
        docs = await seeded_db.find_books(projection={"title": 1, "author": 1, "price": 1, "_id": 0})
        assert len(docs) == 12
        assert all(set(d) == {"title", "author", "price"} for d in docs)

    async def test_sort_with_limit(self, seeded_db):
        cheapest = await seeded_db.find_books(sort=Q.PRICE_ASC, limit=3)
        priciest = await seeded_db.find_books(sort=Q.PRICE_DESC, limit=3)
        assert [d["price"] for d in cheapest] == sorted(b.price for b in SEED_BOOKS)[:3]
        assert priciest[0]["title"] == "The Lord of the Rings"
        assert len(priciest) == 3

    async def test_pages_cover_first_ten_titles(self, seeded_db):
        skip1, limit1 = Q.page_bounds(1, 5)
        skip2, limit2 = Q.page_bounds(2, 5)
        page1 = await seeded_db.find_books(sort=Q.TITLE_ASC, skip=skip1, limit=limit1)
        page2 = await seeded_db.find_books(sort=Q.TITLE_ASC, skip=skip2, limit=limit2)
        titles = [d["title"] for d in page1 + page2]
        assert titles == SORTED_TITLES[:10]
        assert len(set(titles)) == 10

    async def test_last_page_is_partial(self, seeded_db):
        skip, limit = Q.page_bounds(3, 5)
        page3 = await seeded_db.find_books(sort=Q.TITLE_ASC, skip=skip, limit=limit)
        assert [d["title"] for d in page3] == SORTED_TITLES[10:]


class TestWrites:

    async def test_update_price(self, seeded_db):
        modified = await seeded_db.update_book(Q.by_title("The Alchemist"), {"price": 11.99})
        assert modified == 1
        doc = await seeded_db.find_book(Q.by_title("The Alchemist"))
        assert doc["price"] == 11.99

    async def test_update_missing_title(self, seeded_db):
        assert await seeded_db.update_book(Q.by_title("No Such Book"), {"price": 1.0}) == 0

    async def test_delete_then_delete_again(self, seeded_db):
        assert await seeded_db.delete_book(Q.by_title("Moby Dick")) == 1
        assert await seeded_db.count_books() == 11
        assert await seeded_db.delete_book(Q.by_title("Moby Dick")) == 0
        assert await seeded_db.count_books() == 11


class TestAggregations:

    async def test_genre_average(self, seeded_db):
        groups = await seeded_db.aggregate(Q.avg_price_by_genre_pipeline())
        by_genre = {g["_id"]: g for g in groups}
        assert by_genre["Fiction"]["count"] == 4
        assert by_genre["Fiction"]["avgPrice"] == pytest.approx((12.99 + 9.99 + 8.99 + 10.99) / 4)
        assert groups[0]["_id"] == "Fantasy"
        averages = [g["avgPrice"] for g in groups]
        assert averages == sorted(averages, reverse=True)

    async def test_genre_average_is_repeatable(self, seeded_db):
        first = await seeded_db.aggregate(Q.avg_price_by_genre_pipeline())
        second = await seeded_db.aggregate(Q.avg_price_by_genre_pipeline())
        assert first == second

    async def test_top_author_tie_goes_to_first_name(self, seeded_db):
        groups = await seeded_db.aggregate(Q.top_author_pipeline())
        assert groups == [{"_id": "George Orwell", "count": 2}]

    async def test_decades(self, seeded_db):
        groups = await seeded_db.aggregate(Q.books_by_decade_pipeline())
        expected = Counter(decade_of(b.published_year) for b in SEED_BOOKS)
        assert {int(g["_id"]): g["count"] for g in groups} == dict(expected)
        decades = [g["_id"] for g in groups]
        assert decades == sorted(decades)


class TestIndexes:

    async def test_create_and_list(self, seeded_db):
        assert await seeded_db.create_index([("title", 1)]) == "title_1"
        assert await seeded_db.create_index([("author", 1), ("published_year", -1)]) == \
            "author_1_published_year_-1"
        info = await seeded_db.list_indexes()
        assert {"_id_", "title_1", "author_1_published_year_-1"} <= set(info)

    async def test_create_is_idempotent(self, seeded_db):
        await seeded_db.create_index([("title", 1)])
        await seeded_db.create_index([("title", 1)])
        info = await seeded_db.list_indexes()
        assert len([name for name in info if name == "title_1"]) == 1


class TestExplainCommand:

    async def test_command_document(self, settings):
        sent = []

        class RecordingDatabase:
            async def command(self, command):
                sent.append(command)
                return {"ok": 1.0}

        db = BookstoreDB(settings)
        db.db = RecordingDatabase()
        assert await db.explain_find(Q.by_title("To Kill a Mockingbird")) == {"ok": 1.0}
        assert sent == [{
            "explain": {"find": "books", "filter": {"title": "To Kill a Mockingbird"}},
            "verbosity": "executionStats",
        }]
        assert list(sent[0]) == ["explain", "verbosity"]

    async def test_custom_verbosity(self, settings):
        sent = []

        class RecordingDatabase:
            async def command(self, command):
                sent.append(command)
                return {}

        db = BookstoreDB(settings)
        db.db = RecordingDatabase()
        await db.explain_find({}, verbosity="queryPlanner")
        assert sent[0]["verbosity"] == "queryPlanner"
