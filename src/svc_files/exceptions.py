from __future__ import annotations


class SvcFilesError(Exception):
    """Base class for every error raised by svc-files."""


class DocumentValidationError(SvcFilesError):
    """A document could not be written: a required field is missing or invalid,
    or its name is already taken."""

    def __init__(self, message: str, *, field: str | None = None):
        super().__init__(message)
        self.field = field


class DocumentNotFound(SvcFilesError):
    def __init__(self, name: str):
        super().__init__(f"No document named {name!r}")
        self.name = name


class StoreError(SvcFilesError):
    """The document store is unreachable or failed an operation."""

    def __init__(self, operation: str, message: str):
        super().__init__(f"{operation}: {message}")
        self.operation = operation
