from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Annotated, Optional

from fastapi import Depends, FastAPI, Request

from ...exceptions import StoreError
from ..engine import MongoEngine
from ..settings import get_mongo_settings

logger = logging.getLogger(__name__)


def attach_mongo(app: FastAPI, engine: Optional[MongoEngine] = None) -> MongoEngine:
    """Put a MongoEngine on ``app.state`` and tie its lifetime to the app lifespan.

    Startup pings the store and ensures indexes; if that fails the error is
    logged and re-raised so the server never starts half-ready.
    """
    engine = engine or MongoEngine(get_mongo_settings())
    app.state.db_engine = engine  # type: ignore[attr-defined]

    existing = getattr(app.router, "lifespan_context", None)  # type: ignore[attr-defined]

    @asynccontextmanager
    async def composed_lifespan(_app: FastAPI):
        try:
            await engine.connect()
        except StoreError as exc:
            logger.error("Mongo connection failed at startup (%s): %s", engine.url, exc)
            await engine.dispose()
            raise
        try:
            if existing:
                async with existing(_app):  # type: ignore[misc]
                    yield
            else:
                yield
        finally:
            await engine.dispose()

    app.router.lifespan_context = composed_lifespan  # type: ignore[attr-defined]
    return engine


def get_engine(request: Request) -> MongoEngine:
    return request.app.state.db_engine  # type: ignore[attr-defined]


EngineDep = Annotated[MongoEngine, Depends(get_engine)]
