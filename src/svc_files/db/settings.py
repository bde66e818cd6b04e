from __future__ import annotations

import os
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MONGO_URL = "mongodb://127.0.0.1:27017"


class MongoSettings(BaseSettings):
    """
    Document store settings.

    Env support:
      - MONGO_URL, MONGO_DB, MONGO_COLLECTION, MONGO_SERVER_SELECTION_TIMEOUT_MS
      - Also accepts MONGODB_URI as a fallback for convenience.
    """

    url: Optional[str] = Field(default=None)
    db: str = Field(default="techTalk")
    collection: str = Field(default="files")
    server_selection_timeout_ms: int = Field(default=30000)

    model_config = SettingsConfigDict(
        env_prefix="MONGO_",
        env_file=".env",
        extra="ignore",
    )

    @property
    def resolved_url(self) -> str:
        url = self.url or os.getenv("MONGODB_URI") or DEFAULT_MONGO_URL
        if not url.startswith(("mongodb://", "mongodb+srv://")):
            raise ValueError(f"MONGO_URL must be a mongodb:// or mongodb+srv:// URL, got {url!r}")
        return url


@lru_cache
def get_mongo_settings(**kwargs) -> MongoSettings:
    filtered = {k: v for k, v in kwargs.items() if v is not None}
    return MongoSettings(**filtered)
