"""
Root conftest.py for svc-files tests.

This file provides:
1. An in-memory stand-in for the motor client/database/collection trio
2. Engine, repository and FastAPI app fixtures wired to that stand-in
3. Cache resets so settings and env resolution never leak between tests
"""

from __future__ import annotations

import itertools
from typing import Any, Dict, Optional
from unittest.mock import Mock

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from bson import decode, encode
from bson.codec_options import CodecOptions
from pymongo.errors import DuplicateKeyError, ServerSelectionTimeoutError

from svc_files.api.fastapi import create_app
from svc_files.app.core.env import get_env
from svc_files.app.settings import AppSettings, get_app_settings
from svc_files.db.engine import MongoEngine
from svc_files.db.settings import MongoSettings, get_mongo_settings
from svc_files.documents import DocumentRepository


# =============================================================================
# IN-MEMORY MONGO
# =============================================================================


# what the engine asks motor for: tz_aware=True
_CODEC_OPTIONS = CodecOptions(tz_aware=True)


def _through_bson(row: dict[str, Any]) -> dict[str, Any]:
    """Copy a row the way the store would: BSON types, UTC milliseconds."""
    return decode(encode(row), codec_options=_CODEC_OPTIONS)


class FakeMongoState:
    """Shared switches for a fake client and everything hanging off it."""

    def __init__(self):
        self.down = False
        self.closed = False

    def check(self) -> None:
        if self.down:
            raise ServerSelectionTimeoutError("127.0.0.1:27017: [Errno 111] Connection refused")


class FakeCursor:
    def __init__(self, rows: list[dict[str, Any]]):
        self._rows = rows

    async def to_list(self, length: Optional[int] = None) -> list[dict[str, Any]]:
        return list(self._rows if length is None else self._rows[:length])


class FakeCollection:
    """Just enough of AsyncIOMotorCollection for the repository.

    Unique indexes are honoured on insert, like the real store.
    """

    _ids = itertools.count(1)

    def __init__(self, state: FakeMongoState):
        self._state = state
        self.rows: list[dict[str, Any]] = []
        self.indexes: Dict[str, Dict[str, Any]] = {}

    @staticmethod
    def _matches(row: dict[str, Any], filter: Optional[dict[str, Any]]) -> bool:
        return all(row.get(k) == v for k, v in (filter or {}).items())

    @staticmethod
    def _project(row: dict[str, Any], projection: Optional[dict[str, Any]]) -> dict[str, Any]:
        out = _through_bson(row)
        for key, keep in (projection or {}).items():
            if not keep:
                out.pop(key, None)
        return out

    def find(self, filter=None, projection=None) -> FakeCursor:
        self._state.check()
        return FakeCursor(
            [self._project(r, projection) for r in self.rows if self._matches(r, filter)]
        )

    async def find_one(self, filter=None, projection=None):
        self._state.check()
        for row in self.rows:
            if self._matches(row, filter):
                return self._project(row, projection)
        return None

    async def insert_one(self, document: dict[str, Any]):
        self._state.check()
        for index in self.indexes.values():
            if not index.get("unique"):
                continue
            fields = [k for k, _ in index["keys"]]
            if any(all(r.get(f) == document.get(f) for f in fields) for r in self.rows):
                raise DuplicateKeyError(
                    f"E11000 duplicate key error collection: index: {index['name']}"
                )
        row = _through_bson({"_id": next(self._ids), **document})
        self.rows.append(row)
        return Mock(inserted_id=row["_id"], acknowledged=True)

    async def create_index(self, keys, *, name: str, unique: bool = False, **kwargs):
        self._state.check()
        self.indexes[name] = {"keys": list(keys), "unique": unique, "name": name}
        return name


class FakeDatabase:
    def __init__(self, state: FakeMongoState):
        self._state = state
        self.collections: Dict[str, FakeCollection] = {}

    def __getitem__(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection(self._state))

    async def command(self, cmd: str):
        self._state.check()
        return {"ok": 1.0}


class FakeMongoClient:
    def __init__(self):
        self.state = FakeMongoState()
        self.databases: Dict[str, FakeDatabase] = {}

    def __getitem__(self, name: str) -> FakeDatabase:
        return self.databases.setdefault(name, FakeDatabase(self.state))

    def close(self) -> None:
        self.state.closed = True


# =============================================================================
# CACHES
# =============================================================================


@pytest.fixture(autouse=True)
def _reset_caches():
    get_env.cache_clear()
    get_app_settings.cache_clear()
    get_mongo_settings.cache_clear()
    yield
    get_env.cache_clear()
    get_app_settings.cache_clear()
    get_mongo_settings.cache_clear()


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture
def mongo_settings() -> MongoSettings:
    return MongoSettings(url="mongodb://127.0.0.1:27017", db="test_db", collection="files")


@pytest.fixture
def fake_client() -> FakeMongoClient:
    return FakeMongoClient()


@pytest.fixture
def engine(mongo_settings, fake_client) -> MongoEngine:
    """A real MongoEngine driving the in-memory client."""
    return MongoEngine(mongo_settings, client=fake_client)


@pytest_asyncio.fixture
async def ready_engine(engine) -> MongoEngine:
    """Engine with the unique name index in place, as after startup."""
    await engine.connect()
    return engine


@pytest.fixture
def repository(ready_engine) -> DocumentRepository:
    return DocumentRepository(ready_engine.documents)


# =============================================================================
# FASTAPI APP FIXTURES
# =============================================================================


@pytest.fixture
def app_settings() -> AppSettings:
    return AppSettings()


@pytest.fixture
def app(app_settings, ready_engine) -> FastAPI:
    return create_app(app_settings, engine=ready_engine)


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncClient:
    """Async client over ASGI; lifespan does not run, the engine is already connected."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================


@pytest.fixture
def sample_file_data() -> Dict[str, Any]:
    return {"name": "notes.txt", "details": "hello", "date": "2024-01-01"}
