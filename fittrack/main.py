"""FitTrack API — FastAPI application entry point.

Run locally:
    uvicorn fittrack.main:app --reload --port 8000
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fittrack.config import get_settings
from fittrack.middleware.supabase_auth import SupabaseAuthMiddleware
from fittrack.routers import dashboard, exercises, goals, health, profile, shell, workouts
from fittrack.services.store import Store

# ---------- Logging ----------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stdout,
)
logger = logging.getLogger("fittrack")


# ---------- Lifespan ----------

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup / shutdown hooks."""
    settings = get_settings()
    logger.info(
        "Starting FitTrack API v%s [%s]",
        settings.app_version,
        settings.environment,
    )
    store = Store(settings)
    await store.open()
    app.state.store = store
    yield
    await store.close()
    logger.info("FitTrack API shut down")


# ---------- App factory ----------

def create_app() -> FastAPI:
    settings = get_settings()
    logging.getLogger("fittrack").setLevel(settings.log_level)

    app = FastAPI(
        title="FitTrack API",
        description="Workout logging, goal tracking and profile management.",
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ---------- Middleware (last added runs first) ----------

    # Supabase JWT authentication
    app.add_middleware(SupabaseAuthMiddleware, settings=settings)

    # CORS wraps auth so preflight responses carry CORS headers
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ---------- Health check (outside the v1 prefix) ----------
    app.include_router(health.router)

    # ---------- API v1 routes ----------
    v1_prefix = "/api/v1"

    app.include_router(shell.router, prefix=v1_prefix)
    app.include_router(dashboard.router, prefix=v1_prefix)
    app.include_router(workouts.router, prefix=v1_prefix)
    app.include_router(exercises.router, prefix=v1_prefix)
    app.include_router(goals.router, prefix=v1_prefix)
    app.include_router(profile.router, prefix=v1_prefix)

    return app


app = create_app()
