"""Ingestion package exports."""

from .loader import FolderDocumentSource, LoadReport, load_documents
from .pipeline import IngestionPipeline

__all__ = ["IngestionPipeline", "FolderDocumentSource", "LoadReport", "load_documents"]
