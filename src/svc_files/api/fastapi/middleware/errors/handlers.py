from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from starlette.responses import PlainTextResponse

from svc_files.exceptions import DocumentNotFound, DocumentValidationError, StoreError

logger = logging.getLogger(__name__)

NOT_FOUND_BODY = "File not found"
SERVER_ERROR_BODY = "Internal Server Error"


def _http_extra(request: Request, status_code: int) -> dict[str, object]:
    return {"http_method": request.method, "path": request.url.path, "status_code": status_code}


def register_error_handlers(app: FastAPI, *, strict_validation: bool = False) -> None:
    """Map domain errors onto plain-text responses.

    Rejected documents collapse to 500 unless ``strict_validation`` is set,
    in which case they surface as 400.
    """
    validation_status = 400 if strict_validation else 500

    @app.exception_handler(DocumentNotFound)
    async def _handle_not_found(request: Request, exc: DocumentNotFound):
        return PlainTextResponse(NOT_FOUND_BODY, status_code=404)

    @app.exception_handler(DocumentValidationError)
    async def _handle_validation(request: Request, exc: DocumentValidationError):
        logger.warning(
            "Rejected document on %s: %s",
            request.url.path,
            exc,
            extra=_http_extra(request, validation_status),
        )
        body = str(exc) if strict_validation else SERVER_ERROR_BODY
        return PlainTextResponse(body, status_code=validation_status)

    @app.exception_handler(StoreError)
    async def _handle_store_error(request: Request, exc: StoreError):
        logger.error(
            "Store operation %s failed on %s %s: %s",
            exc.operation,
            request.method,
            request.url.path,
            exc,
            extra={"operation": exc.operation, **_http_extra(request, 500)},
        )
        return PlainTextResponse(SERVER_ERROR_BODY, status_code=500)
