"""FastAPI application entrypoint — lifespan, routers, middleware."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from redis.asyncio import Redis

from growbraz.config import get_settings
from growbraz.middleware.logging import RequestLoggingMiddleware, configure_structured_logging
from growbraz.routes import ask, grow_spaces, plants
from growbraz.services.advisor_service import GeminiAdvisor
from growbraz.services.grow_service import GrowService
from growbraz.services.store import CollectionStore

logger = structlog.get_logger("growbraz")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application startup / shutdown lifecycle.

    Startup:
      1. Initialize structured logging
      2. Connect to Redis and load both collections (seeding absent ones)
      3. Build the advisory client

    Shutdown:
      1. Close Redis connection pool
    """
    configure_structured_logging()
    settings = get_settings()
    logger.info(
        "GrowBraZ starting",
        log_level=settings.log_level,
        store_key_prefix=settings.store_key_prefix,
        advisor_configured=bool(settings.gemini_api_key),
    )

    redis = Redis.from_url(settings.redis_url, decode_responses=True)
    app.state.redis = redis

    service = GrowService(
        CollectionStore(redis, key_prefix=settings.store_key_prefix),
        seed_defaults=settings.seed_defaults,
    )
    await service.load()
    app.state.grow_service = service
    app.state.advisor = GeminiAdvisor(settings)

    yield

    logger.info("GrowBraZ shutting down")
    await redis.aclose()


app = FastAPI(
    title="GrowBraZ API",
    description=(
        "Cultivation tracker for grow spaces, plants and maintenance logs "
        "persisted to Redis, with an AI master-grower advisor."
    ),
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── Middleware ──────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)


# ── Health check ────────────────────────────────────────────────────────────
@app.get("/health", tags=["system"])
async def health_check() -> dict[str, str]:
    """Basic health check — verifies the API process is alive."""
    return {
        "status": "ok",
        "service": "growbraz",
        "version": "0.1.0",
    }


# ── Router registration ────────────────────────────────────────────────────
app.include_router(grow_spaces.router, prefix="/api/v1")
app.include_router(plants.router, prefix="/api/v1")
app.include_router(ask.router, prefix="/api/v1")
