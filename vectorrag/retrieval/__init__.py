"""Retrieval package exports."""

from .pipeline import RetrievalMatch, RetrievalPipeline, RetrievalResult, RetrievalStage

__all__ = ["RetrievalPipeline", "RetrievalResult", "RetrievalMatch", "RetrievalStage"]
