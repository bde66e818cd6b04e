from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Document(BaseModel):
    """A named text file as stored in the ``files`` collection."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str = Field(min_length=1)
    details: str = Field(min_length=1)
    # supplied by the caller, never server-assigned
    date: datetime

    @field_validator("date")
    @classmethod
    def _at_store_precision(cls, value: datetime) -> datetime:
        # BSON dates are UTC milliseconds; naive input is taken as UTC
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        else:
            value = value.astimezone(timezone.utc)
        return value.replace(microsecond=value.microsecond // 1000 * 1000)


REQUIRED_FIELDS = ("name", "details", "date")
