from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError
from pymongo.errors import DuplicateKeyError, PyMongoError

from ..exceptions import DocumentNotFound, DocumentValidationError, StoreError
from .models import REQUIRED_FIELDS, Document

logger = logging.getLogger(__name__)

# never hand the store's _id back to callers
_PROJECTION = {"_id": 0}


def build_document(name: Any, details: Any, date: Any) -> Document:
    """Validate raw field values into a Document or raise DocumentValidationError."""
    raw = {"name": name, "details": details, "date": date}
    for field in REQUIRED_FIELDS:
        if raw[field] is None or raw[field] == "":
            raise DocumentValidationError(f"{field} is required", field=field)
    try:
        return Document.model_validate(raw)
    except ValidationError as exc:
        err = exc.errors()[0]
        field = str(err["loc"][0]) if err.get("loc") else None
        raise DocumentValidationError(f"{field}: {err['msg']}", field=field) from exc


class DocumentRepository:
    """Create and look up documents in a motor collection.

    The collection must carry a unique index on ``name``; duplicate detection
    is left entirely to the store.
    """

    def __init__(self, collection):
        self.collection = collection

    async def list_all(self) -> list[Document]:
        try:
            rows = await self.collection.find({}, _PROJECTION).to_list(length=None)
        except PyMongoError as exc:
            raise StoreError("list_all", str(exc)) from exc
        return [Document.model_validate(row) for row in rows]

    async def find_by_name(self, name: str) -> Document:
        try:
            row = await self.collection.find_one({"name": name}, _PROJECTION)
        except PyMongoError as exc:
            raise StoreError("find_by_name", str(exc)) from exc
        if row is None:
            raise DocumentNotFound(name)
        return Document.model_validate(row)

    async def create(self, name: Any, details: Any, date: Any) -> Document:
        doc = build_document(name, details, date)
        try:
            await self.collection.insert_one(doc.model_dump())
        except DuplicateKeyError as exc:
            raise DocumentValidationError(
                f"a document named {doc.name!r} already exists", field="name"
            ) from exc
        except PyMongoError as exc:
            raise StoreError("create", str(exc)) from exc
        logger.debug("Created document %r", doc.name)
        return doc
