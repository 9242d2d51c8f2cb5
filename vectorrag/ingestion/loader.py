"""Bulk loading of documents from a folder."""
from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from .pipeline import IngestionPipeline

LOGGER = logging.getLogger(__name__)


class FolderDocumentSource:
    """Yield ``(name, content)`` for every matching file, sorted by name."""

    def __init__(self, directory: Path, pattern: str = "*") -> None:
        self.directory = Path(directory)
        self.pattern = pattern

    def __iter__(self) -> Iterator[tuple[str, str]]:
        if not self.directory.is_dir():
            raise FileNotFoundError(f"Documents folder not found: {self.directory}")
        for path in sorted(self.directory.glob(self.pattern)):
            if not path.is_file():
                continue
            try:
                content = path.read_text(encoding="utf-8")
            except UnicodeDecodeError:
                LOGGER.error("Document %s is not valid UTF-8", path.name)
                raise
            yield path.name, content


@dataclass(slots=True)
class LoadedDocument:
    document_id: int
    name: str


@dataclass(slots=True)
class LoadReport:
    loaded: list[LoadedDocument] = field(default_factory=list)
    existing: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


async def load_documents(pipeline: IngestionPipeline, source: FolderDocumentSource) -> LoadReport:
    """Ingest every item of ``source``; stop at the first failure."""

    report = LoadReport()
    for name, content in source:
        if not content.strip():
            LOGGER.warning("Skipping blank document %s", name)
            report.skipped.append(name)
            continue
        result = await pipeline.ingest(content)
        if result.created:
            report.loaded.append(LoadedDocument(document_id=result.document_id, name=name))
        else:
            report.existing.append(name)
    LOGGER.info(
        "Bulk load finished | folder=%s loaded=%d existing=%d skipped=%d",
        source.directory,
        len(report.loaded),
        len(report.existing),
        len(report.skipped),
    )
    return report


__all__ = ["FolderDocumentSource", "LoadedDocument", "LoadReport", "load_documents"]
