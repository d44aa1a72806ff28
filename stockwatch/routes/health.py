from fastapi import APIRouter

from stockwatch.schemas.responses import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Basic liveness check"""
    return HealthResponse(status="healthy", service="Stockwatch critical stock notifier")
