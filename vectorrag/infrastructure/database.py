"""Database configuration and ORM models."""
from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Any

from sqlalchemy import DateTime, Integer, LargeBinary, MetaData, Text, func
from sqlalchemy.engine import Dialect
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

from ..config import Settings
from .vectorstore.codec import decode_vector, encode_vector

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=NAMING_CONVENTION)


class Base(DeclarativeBase):
    metadata = metadata


class Float32Vector(TypeDecorator):
    """Store a float sequence as little-endian float32 bytes."""

    impl = LargeBinary
    cache_ok = True

    def process_bind_param(self, value: Sequence[float] | None, dialect: Dialect) -> bytes | None:
        if value is None:
            return None
        return encode_vector(value)

    def process_result_value(self, value: Any, dialect: Dialect) -> list[float] | None:
        if value is None:
            return None
        return decode_vector(bytes(value))


class Document(Base):
    """A stored text together with its embedding."""

    __tablename__ = "documents"
    # AUTOINCREMENT keeps SQLite from handing out a previously used rowid.
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    content: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    vector: Mapped[list[float]] = mapped_column(Float32Vector, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


AsyncSessionFactory = async_sessionmaker[AsyncSession]


def configure_engine(settings: Settings) -> tuple[AsyncEngine, AsyncSessionFactory]:
    """Create the database engine and session factory."""

    engine = create_async_engine(
        settings.sqlalchemy_database_uri(),
        echo=settings.database.echo,
    )
    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    return engine, session_factory


async def create_schema(engine: AsyncEngine) -> None:
    """Create missing tables."""

    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)


__all__ = [
    "Base",
    "Document",
    "Float32Vector",
    "AsyncSessionFactory",
    "configure_engine",
    "create_schema",
]
