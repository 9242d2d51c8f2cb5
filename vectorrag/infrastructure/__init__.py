"""Infrastructure package exports."""

from . import database, embeddings, llm, repositories, vectorstore

__all__ = ["database", "embeddings", "llm", "repositories", "vectorstore"]
