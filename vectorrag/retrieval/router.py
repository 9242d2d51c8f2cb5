"""Retrieval endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from .dependencies import get_default_k, get_retrieval_pipeline
from .pipeline import RetrievalPipeline
from .schemas import MatchResponse, SearchRequest, SearchResponse

router = APIRouter()


@router.post("/search", response_model=SearchResponse)
async def search(
    payload: SearchRequest,
    pipeline: RetrievalPipeline = Depends(get_retrieval_pipeline),
    default_k: int = Depends(get_default_k),
) -> SearchResponse:
    k = payload.k if payload.k is not None else default_k
    result = await pipeline.retrieve(payload.query, k)
    return SearchResponse(
        query=result.query,
        answer=result.answer,
        matches=[
            MatchResponse(doc_id=match.document_id, score=match.score, content=match.content)
            for match in result.matches
        ],
    )


__all__ = ["router"]
