from . import api, app

from .exceptions import DocumentNotFound, DocumentValidationError, StoreError, SvcFilesError

__all__ = [
    # Modules
    "app",
    "api",
    # Errors
    "SvcFilesError",
    "DocumentValidationError",
    "DocumentNotFound",
    "StoreError",
]
