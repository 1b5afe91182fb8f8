"""Main FastAPI application for the Lexicon Search service."""

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from .api import entries_router, health_router, metrics_router, search_router
from .config import get_settings
from .core.exceptions import LexiconError
from .core.loader import load_lexicon, parse_entries
from .engine_instance import search_engine
from .models.response import ErrorResponse

settings = get_settings()

# Configure structured logging
logging.basicConfig(format="%(message)s", level=settings.log_level.upper())

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
        if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer()
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()

# Served when no lexicon file is deployed
FALLBACK_ENTRIES = [
    {"lemma": "furmâi", "pos": "s.m.", "senses": [{"text": "formaggio"}]},
    {"lemma": "furmaśén", "pos": "s.m.", "senses": [{"text": "forma di formaggio piccola"}]},
    {"lemma": "pan", "pos": "s.m.", "senses": [{"text": "pane"}]},
    {"lemma": "vén", "pos": "s.m.", "senses": [{"text": "vino"}]},
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    # Startup
    logger.info("Starting Lexicon Search service", version=settings.app_version)

    try:
        entries = load_lexicon(settings.data_path, settings.parts_path)
        search_engine.load_entries(entries)
    except FileNotFoundError:
        logger.warning("Lexicon data not found, using fallback entries", path=settings.data_path)
        search_engine.load_entries(parse_entries(FALLBACK_ENTRIES, source="fallback"))
    except Exception as e:
        logger.error("Failed to load lexicon", error=str(e))
        raise

    yield

    # Shutdown
    logger.info("Shutting down Lexicon Search service")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Accent-insensitive forward and reverse search over a dialect dictionary",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan
)

# Add middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(GZipMiddleware, minimum_size=1000)


# Request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next) -> Response:
    """Log all HTTP requests."""
    start_time = time.time()

    logger.info(
        "Request started",
        method=request.method,
        url=str(request.url),
        client_ip=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent")
    )

    response = await call_next(request)

    process_time = time.time() - start_time
    logger.info(
        "Request completed",
        method=request.method,
        url=str(request.url),
        status_code=response.status_code,
        process_time_ms=round(process_time * 1000, 2)
    )

    return response


@app.exception_handler(LexiconError)
async def lexicon_exception_handler(request: Request, exc: LexiconError) -> JSONResponse:
    """Handle lexicon data and index errors."""
    logger.warning(
        "Lexicon error",
        method=request.method,
        url=str(request.url),
        error=str(exc)
    )

    return JSONResponse(
        status_code=422,
        content=ErrorResponse(
            error=type(exc).__name__,
            message=str(exc)
        ).model_dump(mode="json")
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle global exceptions."""
    logger.error(
        "Unhandled exception",
        method=request.method,
        url=str(request.url),
        error=str(exc),
        exc_info=True
    )

    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="Internal Server Error",
            message="An unexpected error occurred",
            details={"exception": str(exc)} if settings.debug else None
        ).model_dump(mode="json")
    )


# Include API routers
app.include_router(search_router)
app.include_router(entries_router)
app.include_router(health_router)
app.include_router(metrics_router)


# Root endpoint
@app.get("/", summary="Root endpoint", description="Get basic information about the API")
async def root() -> dict:
    """Root endpoint with basic API information."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Accent-insensitive forward and reverse search over a dialect dictionary",
        "docs_url": "/docs",
        "health_url": "/api/v1/health",
        "status": "running"
    }


# API info endpoint
@app.get("/api", summary="API information", description="Get detailed API information")
async def api_info() -> dict:
    """Get detailed API information."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "endpoints": {
            "search": "/api/v1/search?q={query}&mode={forward|reverse}",
            "entry_count": "/api/v1/entries/count",
            "entry": "/api/v1/entries/{position}",
            "health": "/api/v1/health",
            "metrics": "/api/v1/metrics"
        },
        "features": [
            "Forward search by dialect headword",
            "Reverse search by definition text",
            "Accent and case insensitive matching",
            "Ranked results with stable headword ordering",
            "Paged results with match counts",
            "Optional raw sense text"
        ],
        "paging": {
            "page_size": settings.page_size,
            "max_page_size": settings.max_page_size,
            "max_query_length": settings.max_query_length
        }
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "lexicon_search.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=1 if settings.debug else settings.workers,
        log_level=settings.log_level.lower()
    )
