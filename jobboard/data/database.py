"""
Database connection manager for the jobboard service.

Provides MongoDB connection management with both synchronous (PyMongo)
and asynchronous (Motor) client support.
"""

from typing import Any, Optional
from urllib.parse import quote_plus

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database
from pymongo.errors import ConnectionFailure, ServerSelectionTimeoutError

from jobboard.utils.config import get_settings
from jobboard.utils.logger import get_logger

logger = get_logger(__name__)

JOBS_COLLECTION = "jobs"
CANDIDATES_COLLECTION = "candidates"
SAVED_JOBS_COLLECTION = "saved_jobs"
APPLIED_JOBS_COLLECTION = "applied_jobs"


class DatabaseManager:
    """
    Manages MongoDB database connections.

    Supports both synchronous and asynchronous operations.
    Implements singleton pattern for connection reuse.
    """

    _instance: Optional["DatabaseManager"] = None
    _sync_client: Optional[MongoClient] = None
    _async_client: Optional[AsyncIOMotorClient] = None

    def __new__(cls) -> "DatabaseManager":
        """Ensure singleton instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        """Initialize database manager with settings."""
        if hasattr(self, "_initialized") and self._initialized:
            return

        self._settings = get_settings()
        self._db_name = self._settings.database.name
        self._uri = self._build_uri()
        self._initialized = True

    def _build_uri(self) -> str:
        """
        Build MongoDB connection URI from settings.

        Credentials are URL-encoded; hosts containing shell or URI
        metacharacters are rejected.
        """
        db_settings = self._settings.database

        host = db_settings.host.strip()
        if not host or any(c in host for c in [";", "&", "|", "$", "`"]):
            raise ValueError(f"Invalid database host: {host}")

        auth = ""
        if db_settings.username and db_settings.password:
            encoded_user = quote_plus(db_settings.username)
            encoded_pass = quote_plus(db_settings.password)
            auth = f"{encoded_user}:{encoded_pass}@"

        return f"mongodb://{auth}{host}:{db_settings.port}"

    def _client_options(self) -> dict[str, Any]:
        db_settings = self._settings.database
        return {
            "serverSelectionTimeoutMS": db_settings.server_selection_timeout_ms,
            "connectTimeoutMS": db_settings.connect_timeout_ms,
            "maxPoolSize": db_settings.max_pool_size,
            "minPoolSize": db_settings.min_pool_size,
        }

    # -------------------------------------------------------------------------
    # Synchronous Client
    # -------------------------------------------------------------------------

    def get_sync_client(self) -> MongoClient:
        """Get or create synchronous MongoDB client."""
        if self._sync_client is None:
            logger.info("Creating synchronous MongoDB client")
            self._sync_client = MongoClient(self._uri, **self._client_options())
        return self._sync_client

    def get_sync_database(self) -> Database:
        """Get synchronous database instance."""
        return self.get_sync_client()[self._db_name]

    def get_sync_collection(self, collection_name: str) -> Any:
        """Get a synchronous collection by name."""
        return self.get_sync_database()[collection_name]

    def check_sync_connection(self) -> bool:
        """Check if synchronous connection is healthy."""
        try:
            self.get_sync_client().admin.command("ping")
            return True
        except (ConnectionFailure, ServerSelectionTimeoutError) as e:
            logger.error(f"Sync connection check failed: {e}")
            self._sync_client = None
            return False

    # -------------------------------------------------------------------------
    # Asynchronous Client
    # -------------------------------------------------------------------------

    def get_async_client(self) -> AsyncIOMotorClient:
        """Get or create asynchronous MongoDB client."""
        if self._async_client is None:
            logger.info("Creating asynchronous MongoDB client")
            self._async_client = AsyncIOMotorClient(self._uri, **self._client_options())
        return self._async_client

    def get_async_database(self) -> AsyncIOMotorDatabase:
        """Get asynchronous database instance."""
        return self.get_async_client()[self._db_name]

    def get_async_collection(self, collection_name: str) -> Any:
        """Get an asynchronous collection by name."""
        return self.get_async_database()[collection_name]

    async def check_async_connection(self) -> bool:
        """Check if asynchronous connection is healthy."""
        try:
            await self.get_async_client().admin.command("ping")
            return True
        except (ConnectionFailure, ServerSelectionTimeoutError) as e:
            logger.error(f"Async connection check failed: {e}")
            return False

    # -------------------------------------------------------------------------
    # Lifecycle Management
    # -------------------------------------------------------------------------

    def close_sync(self) -> None:
        """Close synchronous client connection."""
        if self._sync_client:
            logger.info("Closing synchronous MongoDB client")
            self._sync_client.close()
            self._sync_client = None

    def close_async(self) -> None:
        """Close asynchronous client connection."""
        if self._async_client:
            logger.info("Closing asynchronous MongoDB client")
            self._async_client.close()
            self._async_client = None

    def close_all(self) -> None:
        """Close all database connections."""
        self.close_sync()
        self.close_async()

    # -------------------------------------------------------------------------
    # Index Management
    # -------------------------------------------------------------------------

    async def ensure_indexes(self) -> None:
        """Create indexes for all collections."""
        logger.info("Ensuring database indexes")

        jobs = self.get_async_collection(JOBS_COLLECTION)
        await jobs.create_index("status")
        await jobs.create_index("company_name")
        await jobs.create_index("location")
        await jobs.create_index("job_type")
        await jobs.create_index("industry_type")
        await jobs.create_index("key_skills")
        await jobs.create_index([("updated_at", DESCENDING)])
        await jobs.create_index([("created_at", DESCENDING)])

        candidates = self.get_async_collection(CANDIDATES_COLLECTION)
        await candidates.create_index("email", unique=True, sparse=True)
        await candidates.create_index("phone", unique=True, sparse=True)
        await candidates.create_index("status")

        # One relation row per (candidate, job): duplicate inserts fail here
        for name in (SAVED_JOBS_COLLECTION, APPLIED_JOBS_COLLECTION):
            relations = self.get_async_collection(name)
            await relations.create_index(
                [("candidate_id", ASCENDING), ("job_id", ASCENDING)], unique=True
            )
            await relations.create_index([("candidate_id", ASCENDING), ("created_at", DESCENDING)])
            await relations.create_index("job_id")

        applied = self.get_async_collection(APPLIED_JOBS_COLLECTION)
        await applied.create_index("status")

        logger.info("Database indexes created successfully")


# Global database manager instance
_db_manager: Optional[DatabaseManager] = None


def get_database_manager() -> DatabaseManager:
    """Get the global database manager instance."""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager
