from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from fastapi.templating import Jinja2Templates

from svc_files.db.integration import EngineDep
from svc_files.documents import DocumentRepository


def get_repository(engine: EngineDep) -> DocumentRepository:
    return DocumentRepository(engine.documents)


def get_templates(request: Request) -> Jinja2Templates:
    return request.app.state.templates  # type: ignore[attr-defined]


RepositoryDep = Annotated[DocumentRepository, Depends(get_repository)]
TemplatesDep = Annotated[Jinja2Templates, Depends(get_templates)]
