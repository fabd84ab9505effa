"""App shell endpoints: navigation state and sign-out."""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query

from fittrack.dependencies import AppSettings, CurrentUser
from fittrack.services.identity import IdentityClient
from fittrack.views.shell import AppShell, DEFAULT_VIEW

router = APIRouter(tags=["shell"])


def get_identity_client(settings: AppSettings) -> IdentityClient:
    return IdentityClient(settings)


@router.get("/shell")
async def get_shell(
    user: CurrentUser,
    view: str = Query(default=DEFAULT_VIEW.value),
) -> Any:
    """Navigation items, the screen to render and the header greeting."""
    shell = AppShell(view)
    return {
        "navigation": [{"id": item.id.value, "name": item.name} for item in shell.navigation],
        "screen": shell.screen(user).value,
        "greeting": shell.greeting(user),
    }


@router.post("/auth/sign-out")
async def sign_out(
    user: CurrentUser,
    identity_client: Annotated[IdentityClient, Depends(get_identity_client)],
) -> dict:
    signed_out = await identity_client.sign_out(user.access_token or "")
    return {"signed_out": signed_out}
