"""
Base repository class providing common CRUD operations.

All entity-specific repositories inherit from this base class.
"""

import functools
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import ConnectionFailure, NetworkTimeout, ServerSelectionTimeoutError
from pymongo.results import DeleteResult, InsertOneResult

from jobboard.core.errors import InvalidArgumentError, TransientError
from jobboard.data.database import get_database_manager
from jobboard.data.models.base import BaseDocument, utcnow
from jobboard.utils.logger import get_logger

logger = get_logger(__name__)

# Type variable for document models
T = TypeVar("T", bound=BaseDocument)
R = TypeVar("R")

STORE_UNAVAILABLE_ERRORS = (ConnectionFailure, ServerSelectionTimeoutError, NetworkTimeout)


def translate_store_errors(func: Callable[..., Awaitable[R]]) -> Callable[..., Awaitable[R]]:
    """Surface driver connectivity failures as ``TransientError``."""

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> R:
        try:
            return await func(*args, **kwargs)
        except STORE_UNAVAILABLE_ERRORS as e:
            logger.error(f"Store unavailable in {func.__qualname__}: {e}")
            raise TransientError("Database unavailable", details=str(e)) from e

    return wrapper


def sort_spec(sort_by: Optional[str] = None, sort_order: int = -1) -> list[tuple[str, int]]:
    """Sort on ``sort_by`` (default ``created_at``), breaking ties on ``_id``."""
    field = sort_by or "created_at"
    if field == "_id":
        return [("_id", sort_order)]
    return [(field, sort_order), ("_id", sort_order)]


def to_object_id(id_value: str | ObjectId, label: str = "id") -> ObjectId:
    """Convert string to ObjectId, rejecting malformed ids."""
    if isinstance(id_value, ObjectId):
        return id_value
    try:
        return ObjectId(id_value)
    except (InvalidId, TypeError) as e:
        raise InvalidArgumentError(f"Invalid {label}", details=str(id_value)) from e


class BaseRepository(ABC, Generic[T]):
    """
    Abstract base repository providing common database operations.

    Synchronous operations back the CLI; asynchronous ones back the API.
    Subclasses must define the collection name and model class.
    """

    @property
    @abstractmethod
    def collection_name(self) -> str:
        """Name of the MongoDB collection."""
        pass

    @property
    @abstractmethod
    def model_class(self) -> type[T]:
        """Pydantic model class for this repository."""
        pass

    def __init__(self) -> None:
        """Initialize repository with database connection."""
        self._db_manager = get_database_manager()

    # -------------------------------------------------------------------------
    # Collection Access
    # -------------------------------------------------------------------------

    def _get_sync_collection(self) -> Collection:
        """Get synchronous collection instance."""
        return self._db_manager.get_sync_collection(self.collection_name)

    def _get_async_collection(self) -> AsyncIOMotorCollection:
        """Get asynchronous collection instance."""
        return self._db_manager.get_async_collection(self.collection_name)

    # -------------------------------------------------------------------------
    # Document Conversion
    # -------------------------------------------------------------------------

    def _to_model(self, document: Optional[dict[str, Any]]) -> Optional[T]:
        """Convert MongoDB document to Pydantic model."""
        if document is None:
            return None
        return self.model_class.model_validate(document)

    def _to_models(self, documents: list[dict[str, Any]]) -> list[T]:
        """Convert list of MongoDB documents to Pydantic models."""
        return [self._to_model(doc) for doc in documents if doc is not None]

    def _to_document(self, model: T) -> dict[str, Any]:
        """Convert Pydantic model to MongoDB document."""
        return model.model_dump_mongo()

    _to_object_id = staticmethod(to_object_id)

    # -------------------------------------------------------------------------
    # Synchronous Operations
    # -------------------------------------------------------------------------

    def get_by_id(self, id_value: str | ObjectId) -> Optional[T]:
        """Get a document by its ID."""
        collection = self._get_sync_collection()
        document = collection.find_one({"_id": self._to_object_id(id_value)})
        return self._to_model(document)

    def find(
        self,
        query: dict[str, Any],
        skip: int = 0,
        limit: int = 100,
        sort_by: Optional[str] = None,
        sort_order: int = -1,
    ) -> list[T]:
        """Find documents matching a query."""
        collection = self._get_sync_collection()
        cursor = collection.find(query).sort(sort_spec(sort_by, sort_order)).skip(skip).limit(limit)
        return self._to_models(list(cursor))

    def count(self, query: Optional[dict[str, Any]] = None) -> int:
        """Count documents matching a query."""
        collection = self._get_sync_collection()
        return collection.count_documents(query or {})

    # -------------------------------------------------------------------------
    # Asynchronous Operations
    # -------------------------------------------------------------------------

    @translate_store_errors
    async def create_async(self, model: T) -> T:
        """Create a new document asynchronously."""
        collection = self._get_async_collection()
        now = utcnow()
        model.created_at = now
        model.updated_at = now
        document = self._to_document(model)

        result: InsertOneResult = await collection.insert_one(document)
        model.id = result.inserted_id
        logger.debug(f"Created {self.collection_name} document: {result.inserted_id}")
        return model

    @translate_store_errors
    async def get_by_id_async(self, id_value: str | ObjectId) -> Optional[T]:
        """Get a document by its ID asynchronously."""
        collection = self._get_async_collection()
        document = await collection.find_one({"_id": self._to_object_id(id_value)})
        return self._to_model(document)

    @translate_store_errors
    async def find_async(
        self,
        query: dict[str, Any],
        skip: int = 0,
        limit: int = 100,
        sort_by: Optional[str] = None,
        sort_order: int = -1,
    ) -> list[T]:
        """Find documents matching a query asynchronously."""
        collection = self._get_async_collection()
        cursor = collection.find(query).sort(sort_spec(sort_by, sort_order)).skip(skip).limit(limit)
        documents = await cursor.to_list(length=limit)
        return self._to_models(documents)

    @translate_store_errors
    async def find_page_async(
        self,
        query: dict[str, Any],
        skip: int,
        limit: int,
        sort_by: Optional[str] = None,
    ) -> tuple[list[T], int]:
        """Read one page of documents sorted on ``sort_by`` (descending) plus the total match count."""
        total = await self.count_async(query)
        documents = await self.find_async(query, skip=skip, limit=limit, sort_by=sort_by)
        return documents, total

    @translate_store_errors
    async def find_one_async(self, query: dict[str, Any]) -> Optional[T]:
        """Find a single document matching a query asynchronously."""
        collection = self._get_async_collection()
        document = await collection.find_one(query)
        return self._to_model(document)

    @translate_store_errors
    async def update_async(
        self, id_value: str | ObjectId, update_data: dict[str, Any]
    ) -> Optional[T]:
        """Update a document by ID and return the new version, or None if absent."""
        collection = self._get_async_collection()
        update_data = {**update_data, "updated_at": utcnow()}

        document = await collection.find_one_and_update(
            {"_id": self._to_object_id(id_value)},
            {"$set": update_data},
            return_document=ReturnDocument.AFTER,
        )
        if document is not None:
            logger.debug(f"Updated {self.collection_name} document: {id_value}")
        return self._to_model(document)

    @translate_store_errors
    async def delete_one_async(self, query: dict[str, Any]) -> bool:
        """Delete the first document matching a query asynchronously."""
        collection = self._get_async_collection()
        result: DeleteResult = await collection.delete_one(query)
        if result.deleted_count > 0:
            logger.debug(f"Deleted {self.collection_name} document matching {query}")
            return True
        return False

    @translate_store_errors
    async def count_async(self, query: Optional[dict[str, Any]] = None) -> int:
        """Count documents matching a query asynchronously."""
        collection = self._get_async_collection()
        return await collection.count_documents(query or {})

    @translate_store_errors
    async def exists_async(self, query: dict[str, Any]) -> bool:
        """Check if any document matches the query asynchronously."""
        collection = self._get_async_collection()
        count = await collection.count_documents(query, limit=1)
        return count > 0

    @translate_store_errors
    async def aggregate_async(self, pipeline: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Run an aggregation pipeline and return every resulting document."""
        collection = self._get_async_collection()
        cursor = collection.aggregate(pipeline)
        return await cursor.to_list(length=None)
