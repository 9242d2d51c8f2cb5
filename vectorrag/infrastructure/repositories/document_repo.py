"""Document repository and the session-per-call document store."""
from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Iterable, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ...exceptions import StorageError
from ..database import AsyncSessionFactory, Document
from .base import AsyncRepository

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class InsertResult:
    """Outcome of an insert-if-absent call."""

    created: bool
    document_id: int


class DocumentRepository(AsyncRepository[Document]):
    """Queries against the documents table within one session."""

    model = Document

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def get_by_content(self, content: str) -> Optional[Document]:
        stmt = select(Document).where(Document.content == content)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def insert_if_absent(self, content: str, vector: Sequence[float]) -> InsertResult:
        existing = await self.get_by_content(content)
        if existing is not None:
            return InsertResult(created=False, document_id=existing.id)

        document = Document(content=content, vector=list(vector))
        try:
            await self.add(document)
            await self.commit()
        except IntegrityError:
            # A concurrent writer committed the same content first.
            await self.rollback()
            existing = await self.get_by_content(content)
            if existing is None:
                raise
            return InsertResult(created=False, document_id=existing.id)
        return InsertResult(created=True, document_id=document.id)

    async def contents_by_ids(self, ids: Iterable[int]) -> dict[int, str]:
        wanted = set(ids)
        if not wanted:
            return {}
        stmt = select(Document.id, Document.content).where(Document.id.in_(wanted))
        result = await self.session.execute(stmt)
        return {row_id: content for row_id, content in result.all()}

    async def ids_and_vectors(self) -> list[tuple[int, list[float]]]:
        stmt = select(Document.id, Document.vector).order_by(Document.id)
        result = await self.session.execute(stmt)
        return [(row_id, vector) for row_id, vector in result.all()]

    async def count(self) -> int:
        result = await self.session.execute(select(func.count(Document.id)))
        return int(result.scalar_one())

    async def list_documents(self, *, limit: int = 100, offset: int = 0) -> list[Document]:
        stmt = select(Document).order_by(Document.id).limit(limit).offset(offset)
        result = await self.session.execute(stmt)
        return list(result.scalars())


class DocumentStore:
    """Durable document storage; every call runs in its own session.

    Storage failures surface as :class:`StorageError` with the underlying
    SQLAlchemy exception attached as ``cause``.
    """

    def __init__(self, session_factory: AsyncSessionFactory) -> None:
        self._session_factory = session_factory

    @asynccontextmanager
    async def _repository(self, operation: str) -> AsyncIterator[DocumentRepository]:
        try:
            async with self._session_factory() as session:
                yield DocumentRepository(session)
        except SQLAlchemyError as exc:
            LOGGER.error("Document store failure | operation=%s error=%s", operation, exc)
            raise StorageError(f"Document store {operation} failed", cause=exc) from exc

    async def insert_if_absent(self, content: str, vector: Sequence[float]) -> InsertResult:
        async with self._repository("insert") as repo:
            return await repo.insert_if_absent(content, vector)

    async def get_by_ids(self, ids: Iterable[int]) -> dict[int, str]:
        async with self._repository("lookup") as repo:
            return await repo.contents_by_ids(ids)

    async def get_all_ids_and_vectors(self) -> list[tuple[int, list[float]]]:
        async with self._repository("snapshot") as repo:
            return await repo.ids_and_vectors()

    async def count(self) -> int:
        async with self._repository("count") as repo:
            return await repo.count()

    async def list_documents(self, *, limit: int = 100, offset: int = 0) -> list[Document]:
        async with self._repository("list") as repo:
            return await repo.list_documents(limit=limit, offset=offset)


__all__ = ["DocumentRepository", "DocumentStore", "InsertResult"]
