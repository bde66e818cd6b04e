from __future__ import annotations

import logging
from typing import Any, Optional

from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorCollection,
    AsyncIOMotorDatabase,
)
from pymongo import ASCENDING
from pymongo.errors import PyMongoError

from ..exceptions import StoreError
from .settings import MongoSettings

logger = logging.getLogger(__name__)

NAME_INDEX = "name_unique"


def sanitize_url(url: str) -> str:
    """Drop credentials from a mongodb URL before it is logged."""
    scheme, sep, rest = url.partition("://")
    if not sep or "@" not in rest:
        return url
    return f"{scheme}://***@{rest.split('@', 1)[1]}"


class MongoEngine:
    """Holds the motor client plus the database and collection the service uses."""

    def __init__(self, settings: MongoSettings, client: Optional[Any] = None):
        self.settings = settings
        self._client = client or AsyncIOMotorClient(
            settings.resolved_url,
            serverSelectionTimeoutMS=settings.server_selection_timeout_ms,
            tz_aware=True,
        )

    @property
    def client(self) -> AsyncIOMotorClient:
        return self._client

    @property
    def database(self) -> AsyncIOMotorDatabase:
        return self._client[self.settings.db]

    @property
    def documents(self) -> AsyncIOMotorCollection:
        return self.database[self.settings.collection]

    @property
    def url(self) -> str:
        return sanitize_url(self.settings.resolved_url)

    async def ping(self) -> bool:
        try:
            await self.database.command("ping")
            return True
        except PyMongoError as exc:
            logger.warning("Mongo ping failed: %s", exc)
            return False

    async def ensure_indexes(self) -> None:
        # Name uniqueness lives in the store; writes rely on this index.
        await self.documents.create_index([("name", ASCENDING)], unique=True, name=NAME_INDEX)

    async def connect(self) -> None:
        """Verify the store is reachable and ready, or raise StoreError."""
        try:
            await self.database.command("ping")
            await self.ensure_indexes()
        except PyMongoError as exc:
            raise StoreError("connect", str(exc)) from exc
        logger.info(
            "Mongo attached: url=%s db=%s collection=%s",
            self.url,
            self.settings.db,
            self.settings.collection,
        )

    async def dispose(self) -> None:
        self._client.close()
