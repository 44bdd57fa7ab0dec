"""Dependency definitions for the FridgeRaider API server."""

from __future__ import annotations

from fastapi import Depends, HTTPException, Request, status

from fridgeraider.config import get_settings
from fridgeraider.state.session import KitchenSession


def get_session(request: Request) -> KitchenSession:
    """Return the kitchen session created at application startup."""

    session = getattr(request.app.state, "session", None)
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Application is still starting",
        )
    return session


def require_api_token(
    request: Request,
    settings = Depends(get_settings),
) -> None:
    """Ensure requests carry the configured API token when required."""

    token = settings.api_token
    if not token:
        return

    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.split("Bearer ")[-1].strip() == token:
        return

    if request.headers.get("X-API-Key") == token:
        return

    if request.query_params.get("api_token") == token:
        return

    raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
