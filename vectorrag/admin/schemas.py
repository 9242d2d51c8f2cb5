"""Schemas for administrative endpoints."""
from __future__ import annotations

from pydantic import BaseModel, Field


class ResyncResponse(BaseModel):
    indexed: int
    skipped: list[int] = Field(default_factory=list, description="Document ids rejected by the index")


class HealthResponse(BaseModel):
    status: str
    indexed: int
    stored: int
    dimension: int | None = None


__all__ = ["ResyncResponse", "HealthResponse"]
