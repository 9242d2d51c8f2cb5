"""Schemas for document endpoints."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class AddDocumentRequest(BaseModel):
    content: Optional[str] = Field(default=None, description="Document text")


class AddDocumentResponse(BaseModel):
    message: str
    doc_id: Optional[int] = Field(default=None, serialization_alias="docId")


class CountResponse(BaseModel):
    count: int


class LoadedDocumentResponse(BaseModel):
    doc_id: int = Field(serialization_alias="docId")
    file: str


class LoadDocumentsResponse(BaseModel):
    message: str
    results: list[LoadedDocumentResponse]
    existing: list[str] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)


class DocumentResponse(BaseModel):
    doc_id: int = Field(serialization_alias="docId")
    content: str
    dimension: int


__all__ = [
    "AddDocumentRequest",
    "AddDocumentResponse",
    "CountResponse",
    "LoadedDocumentResponse",
    "LoadDocumentsResponse",
    "DocumentResponse",
]
