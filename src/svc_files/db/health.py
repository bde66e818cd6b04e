from __future__ import annotations

from .engine import MongoEngine


async def db_healthcheck(engine: MongoEngine) -> bool:
    return await engine.ping()
