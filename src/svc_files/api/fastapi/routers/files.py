from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from svc_files.api.fastapi.dependencies import RepositoryDep, TemplatesDep
from svc_files.exceptions import DocumentValidationError

router = APIRouter(tags=["files"])


async def _read_body(request: Request) -> dict[str, Any]:
    """Accept either a JSON object or a urlencoded/multipart form."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError as exc:
            raise DocumentValidationError("request body is not valid JSON") from exc
        if not isinstance(body, dict):
            raise DocumentValidationError("JSON body must be an object")
        return body
    form = await request.form()
    return dict(form)


@router.get("/", response_class=HTMLResponse)
async def list_files(request: Request, repo: RepositoryDep, templates: TemplatesDep):
    files = await repo.list_all()
    return templates.TemplateResponse(request, "index.html", {"files": files})


@router.get("/files/{filename:path}", response_class=HTMLResponse)
async def show_file(filename: str, request: Request, repo: RepositoryDep, templates: TemplatesDep):
    doc = await repo.find_by_name(filename)
    return templates.TemplateResponse(
        request, "show.html", {"filename": doc.name, "filedata": doc.details}
    )


@router.post("/create")
async def create_file(request: Request, repo: RepositoryDep):
    body = await _read_body(request)
    await repo.create(body.get("name"), body.get("details"), body.get("date"))
    return RedirectResponse("/", status_code=status.HTTP_302_FOUND)
