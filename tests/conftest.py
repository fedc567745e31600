"""
Shared pytest fixtures: an in-memory motor client, settings, and a seeded
books collection.
"""
import io
import os
import sys

import pytest
from mongomock_motor import AsyncMongoMockClient

_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _PROJECT_ROOT not in sys.path:
    sys.path.insert(0, _PROJECT_ROOT)

from config import Settings
from database.mongodb import open_db
from bookstore.services.seeder import Seeder


@pytest.fixture
def settings():
    return Settings(
        mongodb_uri="mongodb://localhost:27017",
        db_name="test_bookstore",
        collection_name="books",
    )


@pytest.fixture
def unreachable_settings():
    """Nothing listens on port 1; server selection gives up quickly."""
    return Settings(mongodb_uri="mongodb://127.0.0.1:1", timeout_ms=50)


@pytest.fixture
def client():
    return AsyncMongoMockClient()


@pytest.fixture
def out():
    return io.StringIO()


@pytest.fixture
async def db(settings, client):
    async with open_db(settings, client) as database:
        yield database


@pytest.fixture
async def seeded_db(db, settings, client):
    await Seeder(settings, out=io.StringIO(), client=client).seed(db)
    return db


def make_plan(index_name="title_1"):
    """executionStats explain output shaped like a server's FETCH over IXSCAN."""
    return {
        "queryPlanner": {"winningPlan": {"stage": "FETCH",
                                         "inputStage": {"stage": "IXSCAN", "indexName": index_name}}},
        "executionStats": {
            "executionTimeMillis": 3,
            "totalDocsExamined": 1,
            "nReturned": 1,
            "executionStages": {
                "stage": "FETCH",
                "nReturned": 1,
                "inputStage": {"stage": "IXSCAN", "indexName": index_name, "nReturned": 1},
            },
        },
    }
