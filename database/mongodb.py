"""
MongoDB access for the bookstore collection
Thin wrapper over motor; errors propagate to the caller
"""

from contextlib import asynccontextmanager
from typing import Optional, Dict, Any, List, Sequence, Tuple, AsyncIterator

import motor.motor_asyncio
from pymongo.errors import ConnectionFailure, PyMongoError

from config import Settings
from bookstore.core.constants import EXPLAIN_VERBOSITY
from bookstore.core.errors import DatabaseConnectionError
from bookstore.core.utils import get_logger

logger = get_logger(__name__)

SortSpec = Sequence[Tuple[str, int]]


class BookstoreDB:
    """MongoDB Database Manager for one books collection"""

    def __init__(self, settings: Settings, client=None):
        self.settings = settings
        self.client = client
        self.db = None
        self.books = None
        self.is_connected = False
        # Injected clients belong to the caller and are not closed here
        self._owns_client = client is None

    async def connect(self) -> None:
        """Establish connection to MongoDB"""
        try:
            if self.client is None:
                self.client = motor.motor_asyncio.AsyncIOMotorClient(
                    self.settings.mongodb_uri,
                    connectTimeoutMS=self.settings.timeout_ms,
                    serverSelectionTimeoutMS=self.settings.timeout_ms,
                )

            # Test connection
            await self.client.admin.command('ping')

            self.db = self.client[self.settings.db_name]
            self.books = self.db[self.settings.collection_name]

            self.is_connected = True
            logger.info(f"Connected to MongoDB: {self.settings.db_name}.{self.settings.collection_name}")

        except ConnectionFailure as e:
            logger.error(f"MongoDB connection failed: {e}")
            raise DatabaseConnectionError(f"Could not reach MongoDB: {e}") from e
        except PyMongoError as e:
            logger.error(f"MongoDB error: {e}")
            raise DatabaseConnectionError(f"MongoDB client error: {e}") from e

    async def disconnect(self) -> None:
        """Close database connection"""
        if self.client is not None and self._owns_client:
            self.client.close()
            logger.info("Disconnected from MongoDB")
        self.is_connected = False

    @property
    def namespace(self) -> str:
        """Database and collection name joined by a dot"""
        return f"{self.settings.db_name}.{self.settings.collection_name}"

    # ============== WRITES ==============

    async def count_books(self, query: Optional[Dict[str, Any]] = None) -> int:
        """Count documents matching query (all when omitted)"""
        return await self.books.count_documents(query or {})

    async def drop_books(self) -> None:
        """Drop the whole collection, indexes included"""
        await self.books.drop()
        logger.debug(f"Dropped {self.namespace}")

    async def insert_books(self, documents: List[Dict[str, Any]]) -> int:
        """Insert all documents in one bulk call and return the inserted count"""
        result = await self.books.insert_many(documents)
        return len(result.inserted_ids)

    async def update_book(self, query: Dict[str, Any], changes: Dict[str, Any]) -> int:
        """$set `changes` on the first match; returns the modified count"""
        result = await self.books.update_one(query, {"$set": changes})
        return result.modified_count

    async def delete_book(self, query: Dict[str, Any]) -> int:
        """Delete the first match; returns the deleted count"""
        result = await self.books.delete_one(query)
        return result.deleted_count

    # ============== READS ==============

    async def find_books(self, query: Optional[Dict[str, Any]] = None,
                         projection: Optional[Dict[str, int]] = None,
                         sort: Optional[SortSpec] = None,
                         skip: int = 0, limit: int = 0) -> List[Dict[str, Any]]:
        """find() with optional projection, sort, skip and limit"""
        cursor = self.books.find(query or {}, projection)
        if sort:
            cursor = cursor.sort(list(sort))
        if skip:
            cursor = cursor.skip(skip)
        if limit:
            cursor = cursor.limit(limit)
        return await cursor.to_list(length=None)

    async def find_book(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """First match without _id, or None"""
        return await self.books.find_one(query, {"_id": 0})

    async def aggregate(self, pipeline: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Run a pipeline and collect the results"""
        cursor = self.books.aggregate(pipeline)
        return await cursor.to_list(length=None)

    # ============== INDEXES ==============

    async def create_index(self, keys: SortSpec) -> str:
        """Create (or reuse) an index and return its name"""
        name = await self.books.create_index(list(keys))
        logger.debug(f"Index {name} ensured on {self.namespace}")
        return name

    async def list_indexes(self) -> Dict[str, Dict[str, Any]]:
        """Index name -> descriptor, as returned by index_information()"""
        return await self.books.index_information()

    async def explain_find(self, query: Dict[str, Any], verbosity: str = EXPLAIN_VERBOSITY) -> Dict[str, Any]:
        """Run the explain command for find(query) at the given verbosity"""
        return await self.db.command({
            "explain": {"find": self.settings.collection_name, "filter": query},
            "verbosity": verbosity,
        })


# ============== INITIALIZATION ==============

@asynccontextmanager
async def open_db(settings: Settings, client=None) -> AsyncIterator[BookstoreDB]:
    """Connect for the duration of the block; the client is released on every exit path"""
    db = BookstoreDB(settings, client)
    try:
        await db.connect()
        yield db
    finally:
        await db.disconnect()
