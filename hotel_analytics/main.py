"""Hotel Analytics — FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hotel_analytics.analytics.cache import SnapshotCache
from hotel_analytics.api.v1.analytics import router as analytics_router
from hotel_analytics.config import settings

# Configure root logger so all hotel_analytics.* loggers output to stderr.
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup and shutdown events."""
    # Startup: one snapshot cache per application instance
    app.state.snapshot_cache = SnapshotCache(
        ttl_seconds=settings.snapshot_cache_ttl_seconds,
        max_entries=settings.snapshot_cache_max_entries,
    )
    yield
    # Shutdown
    app.state.snapshot_cache.invalidate()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Occupancy, revenue and trend analytics over hotel reservation records.",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(analytics_router)


@app.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy", "service": settings.app_name}


@app.get("/", tags=["root"])
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }


if __name__ == "__main__":
    uvicorn.run(app, host=settings.host, port=settings.port)
