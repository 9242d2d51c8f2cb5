"""Application configuration objects based on Pydantic settings."""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FastAPISettings(BaseModel):
    """Settings that control FastAPI specific behaviour."""

    title: str = "Vector RAG"
    description: str = "Document store with in-memory vector search and retrieval augmented answers."
    version: str = "0.1.0"
    docs_url: str | None = "/docs"
    redoc_url: str | None = "/redoc"
    openapi_url: str = "/openapi.json"
    cors_allow_origins: list[str] = Field(default_factory=lambda: ["*"])
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = Field(default_factory=lambda: ["*"])
    cors_allow_headers: list[str] = Field(default_factory=lambda: ["*"])
    gzip_minimum_size: int = 1024
    host: str = "0.0.0.0"
    port: int = 3000


class DatabaseSettings(BaseModel):
    """Document store connection settings."""

    url: str = "sqlite+aiosqlite:///./vectors.db"
    echo: bool = False


class LLMSettings(BaseModel):
    """Embedding and answer provider configuration."""

    provider: Literal["openai", "ollama"] = "openai"
    embedding_provider: Literal["openai", "ollama", "local"] = "openai"
    openai_host: str = "https://api.openai.com"
    openai_api_key: str | None = None
    openai_model: str = "gpt-4"
    openai_embedding_model: str = "text-embedding-3-small"
    ollama_host: str = "http://localhost:11434"
    ollama_model: str = "qwen3:4b"
    ollama_embedding_model: str = "qwen3-embedding:0.6b"
    embedding_dimension: int | None = Field(
        default=None,
        description="Override the embedding length; derived from the embedding model when unset.",
    )
    request_timeout: float = 60.0
    max_prompt_chars: int = 10_000


class IndexSettings(BaseModel):
    """In-memory vector index behaviour."""

    projection: Literal["identity", "truncate"] = "identity"
    truncate_dimension: int = Field(default=5, gt=0)


class RetrievalSettings(BaseModel):
    """Defaults for the retrieval pipeline."""

    default_k: int = 5


class LoaderSettings(BaseModel):
    """Folder used by the bulk document loader."""

    documents_dir: Path = Path("documents")
    pattern: str = "*"


class LoggingSettings(BaseModel):
    """Where log files are written."""

    directory: Path = Path("logs")
    level: str = "INFO"


class Settings(BaseSettings):
    """Aggregate settings for the application."""

    fastapi: FastAPISettings = Field(default_factory=FastAPISettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    index: IndexSettings = Field(default_factory=IndexSettings)
    retrieval: RetrievalSettings = Field(default_factory=RetrievalSettings)
    loader: LoaderSettings = Field(default_factory=LoaderSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(env_file=".env", env_nested_delimiter="__", case_sensitive=False)

    def sqlalchemy_database_uri(self) -> str:
        """Return SQLAlchemy DSN."""

        return self.database.url


@lru_cache()
def load_settings() -> Settings:
    """Load application settings with caching."""

    return Settings()


__all__ = [
    "Settings",
    "FastAPISettings",
    "DatabaseSettings",
    "LLMSettings",
    "IndexSettings",
    "RetrievalSettings",
    "LoaderSettings",
    "LoggingSettings",
    "load_settings",
]
