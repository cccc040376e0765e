"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from content_manager.version import get_version

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict[str, str]:
    """
    Liveness check. No authentication required.

    Returns:
        Status and server version
    """
    return {"status": "ok", "version": get_version()}
