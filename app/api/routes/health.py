from fastapi import APIRouter, status
from pydantic import BaseModel
from datetime import datetime, timezone
from app.config.settings import settings

router = APIRouter(prefix="/health", tags=["health"])


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str
    environment: str


@router.get("/", response_model=HealthResponse, status_code=status.HTTP_200_OK)
async def health_check():
    """Health check endpoint"""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version=settings.app_version,
        environment=settings.environment
    )


@router.get("/readiness")
async def readiness_check():
    """Readiness check endpoint"""
    # Without a key every AI call degrades to reference or mock data
    checks = {
        "ai_provider": settings.ai_provider,
        "ai_credentials": "ok" if settings.ai_provider_configured else "not_configured",
    }

    return {
        "status": "ready" if settings.ai_provider_configured else "degraded",
        "checks": checks,
        "timestamp": datetime.now(timezone.utc)
    }
