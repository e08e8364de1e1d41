"""Liveness probe."""
from fastapi import APIRouter

from app import __version__
from app.schemas import HealthResponse

router = APIRouter()


@router.get("/healthz", response_model=HealthResponse)
async def healthz() -> HealthResponse:
    return HealthResponse(version=__version__)
