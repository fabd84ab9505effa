"""Shared FastAPI dependencies injected into route handlers."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Annotated, Any

from fastapi import Depends, HTTPException, Request

from fittrack.config import Settings, get_settings
from fittrack.services.store import Store


@dataclass(frozen=True)
class Identity:
    """Authenticated user as supplied by Supabase Auth."""

    id: uuid.UUID
    email: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    access_token: str | None = None

    @property
    def full_name(self) -> str | None:
        name = self.metadata.get("full_name")
        return name if isinstance(name, str) and name else None


async def get_current_user(request: Request) -> Identity:
    """Extract the authenticated user from the request state.

    The Supabase auth middleware sets ``request.state.identity`` before routes run.
    """
    identity: Identity | None = getattr(request.state, "identity", None)
    if identity is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return identity


def get_store(request: Request) -> Store:
    """Return the store opened by the app lifespan."""
    store: Store | None = getattr(request.app.state, "store", None)
    if store is None:
        raise HTTPException(status_code=503, detail="Store unavailable")
    return store


# Annotated shortcuts for route signatures
CurrentUser = Annotated[Identity, Depends(get_current_user)]
StoreDep = Annotated[Store, Depends(get_store)]
AppSettings = Annotated[Settings, Depends(get_settings)]
