"""
Health check endpoints for liveness, readiness and startup probes.
"""

from fastapi import APIRouter, Response, status
from pydantic import BaseModel
from typing import Optional
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthStatus(BaseModel):
    """Health status response"""
    status: str  # "healthy", "starting", "unhealthy"
    message: Optional[str] = None
    checks: dict = {}


class ReadinessStatus(BaseModel):
    """Readiness status response"""
    ready: bool
    message: Optional[str] = None
    checks: dict = {}


@router.get("/live", response_model=HealthStatus)
async def liveness_check():
    """
    Liveness probe. Does not touch external services.
    """
    return HealthStatus(
        status="healthy",
        message="Application is running"
    )


@router.get("/ready", response_model=ReadinessStatus)
async def readiness_check(response: Response):
    """
    Readiness probe: the vector index must be initialized and reachable.
    """
    from ragsync.core import index
    from ragsync.config.settings import settings
    
    checks = {}
    all_ready = True
    
    if not index.is_initialized():
        checks["vector_db"] = {"status": "unhealthy", "message": "Index not initialized"}
        all_ready = False
    elif index.get_collection("health").health_check():
        checks["vector_db"] = {"status": "healthy", "message": "Connected"}
    else:
        checks["vector_db"] = {"status": "unhealthy", "message": "Connection failed"}
        all_ready = False
    
    # Skip a live LLM call to avoid spending provider quota on probes
    if settings.OPENAI_API_KEY:
        checks["llm_service"] = {"status": "healthy", "message": "Configured"}
    else:
        checks["llm_service"] = {"status": "unhealthy", "message": "OPENAI_API_KEY not set"}
        all_ready = False
    
    if all_ready:
        return ReadinessStatus(
            ready=True,
            message="All systems operational",
            checks=checks
        )
    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return ReadinessStatus(
        ready=False,
        message="Some dependencies are unavailable",
        checks=checks
    )


@router.get("/", response_model=HealthStatus)
@router.get("", response_model=HealthStatus)
async def health_check():
    """
    Basic health check endpoint.
    """
    return HealthStatus(
        status="healthy",
        message="RAG Sync is running",
        checks={
            "api": "operational"
        }
    )


@router.get("/startup", response_model=HealthStatus)
async def startup_check(response: Response):
    """
    Startup probe: healthy once the startup sync has finished.
    """
    from ragsync.startup import is_startup_complete
    
    if is_startup_complete():
        return HealthStatus(
            status="healthy",
            message="Startup complete"
        )
    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return HealthStatus(
        status="starting",
        message="Application is still starting up"
    )
