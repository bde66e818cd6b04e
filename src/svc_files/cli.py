from __future__ import annotations

import asyncio
import os
from typing import Optional

import typer
import uvicorn

from svc_files.app import get_app_settings, setup_logging
from svc_files.db import MongoEngine, get_mongo_settings
from svc_files.exceptions import StoreError

app = typer.Typer(no_args_is_help=True, add_completion=False)


@app.command("serve")
def serve(
        host: Optional[str] = typer.Option(None, help="Bind address; defaults to APP_HOST or 127.0.0.1"),
        port: Optional[int] = typer.Option(None, help="Listen port; defaults to APP_PORT or 3000"),
        reload: bool = typer.Option(False, help="Restart on code changes (development only)"),
):
    """Run the files service under uvicorn."""
    # uvicorn imports svc_files.main in its own settings scope, so hand overrides over via env
    if host is not None:
        os.environ["APP_HOST"] = host
    if port is not None:
        os.environ["APP_PORT"] = str(port)
    get_app_settings.cache_clear()
    settings = get_app_settings()

    setup_logging()
    uvicorn.run(
        "svc_files.main:app",
        host=settings.host,
        port=settings.port,
        reload=reload,
        log_config=None,  # keep our dictConfig
    )


async def _check() -> None:
    engine = MongoEngine(get_mongo_settings())
    try:
        await engine.connect()
    finally:
        await engine.dispose()


@app.command("check")
def check():
    """Ping the document store and make sure its indexes exist."""
    setup_logging()
    try:
        asyncio.run(_check())
    except StoreError as exc:
        typer.echo(f"store unavailable: {exc}", err=True)
        raise typer.Exit(code=1)
    typer.echo("store ok")


def main():
    app()


if __name__ == "__main__":
    main()
