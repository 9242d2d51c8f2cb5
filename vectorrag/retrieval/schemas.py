"""Schemas for the search endpoint."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class SearchRequest(BaseModel):
    query: Optional[str] = None
    k: Optional[int] = Field(default=None, description="Number of documents to retrieve")


class MatchResponse(BaseModel):
    doc_id: int = Field(serialization_alias="docId")
    score: float
    content: Optional[str] = None


class SearchResponse(BaseModel):
    query: str
    answer: str
    matches: list[MatchResponse]


__all__ = ["SearchRequest", "MatchResponse", "SearchResponse"]
