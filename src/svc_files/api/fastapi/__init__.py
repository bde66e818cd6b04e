from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from svc_files.api.fastapi.middleware.errors import (
    CatchAllExceptionMiddleware,
    register_error_handlers,
)
from svc_files.api.fastapi.routers.files import router as files_router
from svc_files.app.core.env import get_env
from svc_files.app.settings import AppSettings, get_app_settings
from svc_files.db.engine import MongoEngine
from svc_files.db.integration import attach_mongo
from svc_files.db.routers.health import router as db_health_router

logger = logging.getLogger(__name__)


def create_app(settings: Optional[AppSettings] = None, *, engine: Optional[MongoEngine] = None) -> FastAPI:
    """Build the files service.

    ``engine`` defaults to one built from MONGO_* settings; tests pass their own.
    The returned app only starts serving once the store has answered a ping.
    """
    settings = settings or get_app_settings()

    @asynccontextmanager
    async def announce(_app: FastAPI):
        logger.info(f"Starting server on http://{settings.host}:{settings.port}")
        yield
        logger.info(f"{settings.name} shutting down")

    app = FastAPI(title=settings.name, version=settings.version, lifespan=announce)
    app.state.settings = settings  # type: ignore[attr-defined]
    app.state.templates = Jinja2Templates(directory=str(settings.templates_dir))  # type: ignore[attr-defined]

    if settings.static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=str(settings.static_dir)), name="static")
    else:
        logger.warning("Static directory %s not found; /static is disabled", settings.static_dir)

    app.add_middleware(CatchAllExceptionMiddleware)
    register_error_handlers(app, strict_validation=settings.strict_validation)

    app.include_router(files_router)
    app.include_router(db_health_router)

    # composes around `announce`: the store connects before the startup message
    attach_mongo(app, engine)

    logger.info(f"{settings.version} version of {settings.name} initialized [env: {get_env()}]")
    return app


__all__ = ["create_app"]
