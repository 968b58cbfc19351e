"""Storage service - thin orchestrator for the MongoDB client."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase

logger = logging.getLogger(__name__)

TODOS_COLLECTION = "todos"
USERS_COLLECTION = "users"


class DocumentStoreConfig(BaseModel):
    """MongoDB connection configuration."""

    url: str
    database: str

    model_config = ConfigDict(frozen=True)


class StorageService:
    """
    Thin orchestrator - lazy-loads the document client from config.

    Responsibilities:
    - Provide the todos and users collections
    - Own index creation (unique email)
    - Lazy initialization for faster startup
    """

    def __init__(self, config: DocumentStoreConfig, client: AsyncIOMotorClient | None = None):
        self.config = config
        self._client = client

    def get_document_client(self) -> AsyncIOMotorClient:
        """Get or create the Motor client (lazy)."""
        if self._client is None:
            from motor.motor_asyncio import AsyncIOMotorClient

            self._client = AsyncIOMotorClient(self.config.url)
        return self._client

    def get_database(self) -> AsyncIOMotorDatabase:
        return self.get_document_client()[self.config.database]

    def todos(self) -> AsyncIOMotorCollection:
        return self.get_database()[TODOS_COLLECTION]

    def users(self) -> AsyncIOMotorCollection:
        return self.get_database()[USERS_COLLECTION]

    async def ensure_indexes(self) -> None:
        """Create the indexes the aggregates rely on (idempotent)."""
        await self.users().create_index("email", unique=True)
        logger.debug("Indexes ensured on %s", self.config.database)

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None


def create_storage_service(config: DocumentStoreConfig) -> StorageService:
    """Factory from infrastructure config."""
    return StorageService(config)


__all__ = [
    "TODOS_COLLECTION",
    "USERS_COLLECTION",
    "DocumentStoreConfig",
    "StorageService",
    "create_storage_service",
]
