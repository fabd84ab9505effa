"""Health check endpoint — public, no auth required."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter

from fittrack.config import get_settings
from fittrack.dependencies import StoreDep
from fittrack.services.store import StoreError

router = APIRouter(tags=["system"])
logger = logging.getLogger("fittrack.health")


@router.get("/health")
async def health_check(store: StoreDep) -> dict:
    """Liveness probe. Returns 200 if the API process is up.

    Also performs a lightweight store connectivity check.
    """
    settings = get_settings()
    db_ok = False
    try:
        db_ok = await store.ping()
    except StoreError as exc:
        logger.warning("Health check store probe failed: %s", exc)

    return {
        "status": "healthy" if db_ok else "degraded",
        "version": settings.app_version,
        "environment": settings.environment,
        "database": "connected" if db_ok else "unreachable",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
