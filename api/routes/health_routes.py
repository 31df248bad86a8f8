"""Health check endpoints."""

from fastapi import APIRouter

from core.dependencies import AppSettings
from schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health(settings: AppSettings) -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy", service=settings.service_name)
