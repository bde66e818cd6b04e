from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parent.parent


class AppSettings(BaseSettings):
    # flat = easy env overrides
    name: str = "svc-files"
    version: str = "0.1.0"
    host: str = "127.0.0.1"
    port: int = 3000
    # 400 instead of 500 for rejected documents
    strict_validation: bool = False
    templates_dir: Path = Field(default=PACKAGE_DIR / "templates")
    static_dir: Path = Field(default=PACKAGE_DIR / "static")

    model_config = SettingsConfigDict(
        env_prefix="APP_",            # APP_PORT, APP_STRICT_VALIDATION, ...
        env_file=".env",
        extra="ignore",
    )


@lru_cache
def get_app_settings(**kwargs) -> AppSettings:
    # Only include kwargs that are not None, so defaults in AppSettings are used
    filtered_kwargs = {k: v for k, v in kwargs.items() if v is not None}
    return AppSettings(**filtered_kwargs)
