"""Repository package exports."""

from .base import AsyncRepository
from .document_repo import DocumentRepository, DocumentStore, InsertResult

__all__ = ["AsyncRepository", "DocumentRepository", "DocumentStore", "InsertResult"]
