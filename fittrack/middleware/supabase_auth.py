"""Supabase Auth JWT verification middleware for FastAPI.

Validates the Bearer token on every request (except public routes),
extracts claims, and sets ``request.state.identity`` with the authenticated
identity that downstream route handlers consume via ``get_current_user``.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any

import jwt as pyjwt
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from fittrack.config import Settings, get_settings
from fittrack.dependencies import Identity

logger = logging.getLogger("fittrack.auth")

# Paths that do not require authentication
PUBLIC_PATHS: set[str] = {
    "/health",
    "/docs",
    "/openapi.json",
    "/redoc",
}


def _is_public(path: str) -> bool:
    return path in PUBLIC_PATHS or path.startswith("/docs") or path.startswith("/redoc")


def _unauthorized(detail: str) -> Response:
    return Response(
        content=f'{{"detail":"{detail}"}}',
        status_code=401,
        media_type="application/json",
    )


class SupabaseAuthMiddleware(BaseHTTPMiddleware):
    """Verify Supabase-issued JWTs and populate request.state.identity."""

    def __init__(self, app: Any, settings: Settings | None = None) -> None:
        super().__init__(app)
        self._settings = settings or get_settings()

    def decode(self, token: str) -> Identity:
        """Decode a Supabase access token into an ``Identity``.

        Raises ``jwt.InvalidTokenError`` (or a subclass) on any failure.
        """
        payload = pyjwt.decode(
            token,
            self._settings.supabase_jwt_secret,
            algorithms=["HS256"],
            audience=self._settings.supabase_jwt_audience,
        )
        try:
            user_id = uuid.UUID(payload.get("sub"))
        except (TypeError, AttributeError, ValueError) as exc:
            raise pyjwt.InvalidTokenError("sub claim is not a UUID") from exc

        email = payload.get("email")
        metadata = payload.get("user_metadata")
        return Identity(
            id=user_id,
            email=email if isinstance(email, str) else None,
            metadata=metadata if isinstance(metadata, dict) else {},
            access_token=token,
        )

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if _is_public(request.url.path):
            return await call_next(request)

        # OPTIONS requests pass through (CORS preflight)
        if request.method == "OPTIONS":
            return await call_next(request)

        auth_header = request.headers.get("Authorization")
        if not auth_header or not auth_header.startswith("Bearer "):
            return _unauthorized("Missing or invalid Authorization header")

        token = auth_header.removeprefix("Bearer ").strip()

        try:
            request.state.identity = self.decode(token)
        except pyjwt.ExpiredSignatureError:
            return _unauthorized("Token expired")
        except pyjwt.InvalidTokenError as exc:
            logger.warning("JWT validation failed: %s", exc)
            return _unauthorized("Invalid token")

        return await call_next(request)
