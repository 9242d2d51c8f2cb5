"""Dependencies for document endpoints."""
from __future__ import annotations

from fastapi import Depends

from ..dependencies import ServiceContainer, get_container
from ..infrastructure.repositories.document_repo import DocumentStore
from .loader import FolderDocumentSource
from .pipeline import IngestionPipeline


def get_ingestion_pipeline(container: ServiceContainer = Depends(get_container)) -> IngestionPipeline:
    return container.ingestion


def get_document_store(container: ServiceContainer = Depends(get_container)) -> DocumentStore:
    return container.store


def get_document_source(container: ServiceContainer = Depends(get_container)) -> FolderDocumentSource:
    loader = container.settings.loader
    return FolderDocumentSource(loader.documents_dir, loader.pattern)


__all__ = ["get_ingestion_pipeline", "get_document_store", "get_document_source"]
