"""Health check and monitoring API endpoints."""

import time
from datetime import datetime

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse

from ..config import get_settings
from ..models.response import HealthResponse

router = APIRouter(prefix="/api/v1", tags=["health"])
settings = get_settings()

# Import the global search engine instance
from ..engine_instance import search_engine

# Track application start time
app_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check the health status of the lexicon search service"
)
async def health_check() -> HealthResponse:
    """
    Perform a health check on the lexicon search service.

    The lexicon is "degraded" when no entries are loaded; the engine is
    "unhealthy" when its index table does not cover the loaded entries.
    """
    try:
        uptime = time.time() - app_start_time

        dependencies = {
            "search_engine": "healthy",
            "lexicon": "healthy",
        }

        if not search_engine.entries:
            dependencies["lexicon"] = "degraded"

        if not search_engine.index_manager.covers(search_engine.entries):
            dependencies["search_engine"] = "unhealthy"

        if all(status == "healthy" for status in dependencies.values()):
            status = "healthy"
        elif any(status == "unhealthy" for status in dependencies.values()):
            status = "unhealthy"
        else:
            status = "degraded"

        return HealthResponse(
            status=status,
            version=settings.app_version,
            uptime=uptime,
            dependencies=dependencies
        )

    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Health check failed: {str(e)}"
        )


@router.get(
    "/health/ready",
    summary="Readiness check",
    description="Check if the lexicon is loaded and the service can answer queries"
)
async def readiness_check() -> JSONResponse:
    """Ready once the lexicon has been loaded and indexed."""
    index_stats = search_engine.index_manager.get_stats()

    if not search_engine.entries:
        return JSONResponse(
            status_code=503,
            content={
                "status": "not_ready",
                "error": "Lexicon not loaded",
                "timestamp": datetime.utcnow().isoformat()
            }
        )

    return JSONResponse(
        status_code=200,
        content={
            "status": "ready",
            "timestamp": datetime.utcnow().isoformat(),
            "index_stats": index_stats
        }
    )


@router.get(
    "/health/live",
    summary="Liveness check",
    description="Check if the service is alive and responding"
)
async def liveness_check() -> JSONResponse:
    """Check if the service process is alive."""
    return JSONResponse(
        status_code=200,
        content={
            "status": "alive",
            "timestamp": datetime.utcnow().isoformat(),
            "uptime": time.time() - app_start_time
        }
    )


@router.get(
    "/status",
    summary="Service status",
    description="Get detailed status information about the service"
)
async def service_status() -> JSONResponse:
    """Get configuration and statistics of the running service."""
    try:
        stats = search_engine.get_stats()

        config_info = {
            "default_mode": settings.default_mode.value,
            "page_size": settings.page_size,
            "max_page_size": settings.max_page_size,
            "max_query_length": settings.max_query_length,
            "debug": settings.debug
        }

        return JSONResponse(
            status_code=200,
            content={
                "service": {
                    "name": settings.app_name,
                    "version": settings.app_version,
                    "status": "running",
                    "uptime": time.time() - app_start_time,
                    "start_time": datetime.fromtimestamp(app_start_time).isoformat()
                },
                "configuration": config_info,
                "statistics": stats,
                "timestamp": datetime.utcnow().isoformat()
            }
        )

    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Failed to get service status: {str(e)}"
        )
