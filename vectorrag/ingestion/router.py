"""Document endpoints."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from ..infrastructure.repositories.document_repo import DocumentStore
from .dependencies import get_document_source, get_document_store, get_ingestion_pipeline
from .loader import FolderDocumentSource, load_documents
from .pipeline import IngestionPipeline
from .schemas import (
    AddDocumentRequest,
    AddDocumentResponse,
    CountResponse,
    DocumentResponse,
    LoadDocumentsResponse,
    LoadedDocumentResponse,
)

LOGGER = logging.getLogger(__name__)

router = APIRouter()


@router.post("/add", response_model=AddDocumentResponse, response_model_exclude_none=True)
async def add_document(
    payload: AddDocumentRequest,
    pipeline: IngestionPipeline = Depends(get_ingestion_pipeline),
) -> AddDocumentResponse:
    result = await pipeline.ingest(payload.content)
    message = "Document added." if result.created else "Document already exists."
    return AddDocumentResponse(message=message, doc_id=result.document_id)


@router.get("/count-documents", response_model=CountResponse)
async def count_documents(store: DocumentStore = Depends(get_document_store)) -> CountResponse:
    return CountResponse(count=await store.count())


@router.get("/load-documents", response_model=LoadDocumentsResponse)
async def load_folder(
    pipeline: IngestionPipeline = Depends(get_ingestion_pipeline),
    source: FolderDocumentSource = Depends(get_document_source),
):
    try:
        report = await load_documents(pipeline, source)
    except (OSError, UnicodeDecodeError) as exc:
        LOGGER.error("Bulk load failed | folder=%s error=%s", source.directory, exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Error loading documents.", "details": str(exc)},
        )
    return LoadDocumentsResponse(
        message=f"Loaded {len(report.loaded)} documents.",
        results=[LoadedDocumentResponse(doc_id=item.document_id, file=item.name) for item in report.loaded],
        existing=report.existing,
        skipped=report.skipped,
    )


@router.get("/documents", response_model=list[DocumentResponse])
async def list_documents(
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    store: DocumentStore = Depends(get_document_store),
) -> list[DocumentResponse]:
    documents = await store.list_documents(limit=limit, offset=offset)
    return [
        DocumentResponse(doc_id=document.id, content=document.content, dimension=len(document.vector))
        for document in documents
    ]


__all__ = ["router"]
