"""Administrative endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from ..dependencies import ServiceContainer, get_container
from .schemas import HealthResponse, ResyncResponse

router = APIRouter()


@router.post("/resync", response_model=ResyncResponse)
async def resync(container: ServiceContainer = Depends(get_container)) -> ResyncResponse:
    report = await container.synchronizer.resync()
    return ResyncResponse(indexed=report.indexed, skipped=report.skipped)


@router.get("/health", response_model=HealthResponse)
async def health(container: ServiceContainer = Depends(get_container)) -> HealthResponse:
    stored = await container.store.count()
    indexed = len(container.index)
    return HealthResponse(
        status="ok" if stored == indexed else "diverged",
        indexed=indexed,
        stored=stored,
        dimension=container.index.dimension,
    )


__all__ = ["router"]
