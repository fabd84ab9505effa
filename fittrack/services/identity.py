"""Supabase Auth client: the parts of the identity provider the API delegates to."""

from __future__ import annotations

import logging

import httpx

from fittrack.config import Settings, get_settings

logger = logging.getLogger("fittrack.identity")


class IdentityClient:
    """Thin wrapper around the Supabase Auth (GoTrue) REST endpoints."""

    def __init__(
        self,
        settings: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings:    App settings (Supabase URL and anon key).
            http_client: Optional pre-configured httpx client (for testing).
        """
        self._settings = settings or get_settings()
        self._http_client = http_client

    @property
    def _logout_url(self) -> str:
        return f"{self._settings.supabase_url.rstrip('/')}/auth/v1/logout"

    async def sign_out(self, access_token: str) -> bool:
        """Revoke the session behind ``access_token``.

        Failures are logged and reported as ``False``; the caller's token
        simply expires on its own in that case.
        """
        headers = {
            "apikey": self._settings.supabase_anon_key,
            "Authorization": f"Bearer {access_token}",
        }
        try:
            if self._http_client is not None:
                response = await self._http_client.post(self._logout_url, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=10.0) as client:
                    response = await client.post(self._logout_url, headers=headers)
            response.raise_for_status()
        except httpx.HTTPError:
            logger.exception("Error signing out")
            return False
        return True
