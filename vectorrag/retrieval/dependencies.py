"""Dependencies for retrieval module."""
from __future__ import annotations

from fastapi import Depends

from ..dependencies import ServiceContainer, get_container
from .pipeline import RetrievalPipeline


def get_retrieval_pipeline(container: ServiceContainer = Depends(get_container)) -> RetrievalPipeline:
    return container.retrieval


def get_default_k(container: ServiceContainer = Depends(get_container)) -> int:
    return container.settings.retrieval.default_k


__all__ = ["get_retrieval_pipeline", "get_default_k"]
