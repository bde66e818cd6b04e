from .models import Document
from .repository import DocumentRepository, build_document

__all__ = ["Document", "DocumentRepository", "build_document"]
