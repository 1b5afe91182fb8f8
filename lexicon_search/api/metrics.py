"""Metrics and monitoring API endpoints."""

import psutil
from fastapi import APIRouter, HTTPException

from ..models.response import MetricsResponse

router = APIRouter(prefix="/api/v1", tags=["metrics"])

# Import the global search engine instance
from ..engine_instance import search_engine


@router.get(
    "/metrics",
    response_model=MetricsResponse,
    summary="Get performance metrics",
    description="Get query statistics and memory usage of the search service"
)
async def get_metrics() -> MetricsResponse:
    """
    Get performance metrics for the search engine.

    Query counters come from the engine; memory is the resident set size of
    this process.
    """
    try:
        stats = search_engine.get_stats()

        memory_usage_mb = psutil.Process().memory_info().rss / (1024 * 1024)

        return MetricsResponse(
            total_queries=stats["total_queries"],
            forward_queries=stats["forward_queries"],
            reverse_queries=stats["reverse_queries"],
            empty_queries=stats["empty_queries"],
            no_match_rate=stats["no_match_rate"],
            average_response_time_ms=stats["average_execution_time_ms"],
            total_entries=stats["index_stats"]["total_entries"],
            memory_usage_mb=memory_usage_mb
        )

    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Failed to get metrics: {str(e)}"
        )


@router.post(
    "/metrics/reset",
    summary="Reset query statistics",
    description="Reset query counters without unloading the lexicon"
)
async def reset_metrics() -> dict:
    """Reset query counters, keeping the loaded lexicon."""
    search_engine.reset_stats()
    return {"message": "Metrics reset successfully"}
