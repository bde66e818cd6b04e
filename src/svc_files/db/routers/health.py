from __future__ import annotations

from fastapi import APIRouter, Response
from fastapi.responses import JSONResponse

from ..health import db_healthcheck
from ..integration import EngineDep

router = APIRouter(tags=["internal"])


@router.get("/_db/health", include_in_schema=False)
async def db_health(engine: EngineDep, verbose: int = 0):
    ok = await db_healthcheck(engine)
    if not verbose:
        return Response(status_code=200 if ok else 503)
    info = {
        "ok": ok,
        "database": engine.settings.db,
        "collection": engine.settings.collection,
    }
    return JSONResponse(status_code=200 if ok else 503, content=info)
