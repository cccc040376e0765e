from __future__ import annotations

import secrets
from typing import TYPE_CHECKING

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from content_manager.config import Settings, get_settings
from content_manager.services.container import get_container

if TYPE_CHECKING:
    from content_manager.services.content_search import ContentSearchService

security = HTTPBearer(auto_error=False)


async def verify_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    settings: Settings = Depends(get_settings),
) -> None:
    """Verify the bearer token matches the configured auth token."""
    if credentials is None or not secrets.compare_digest(
        credentials.credentials,
        settings.auth_token,
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication token",
            headers={"WWW-Authenticate": "Bearer"},
        )


async def get_content_search_service() -> ContentSearchService:
    """Get content search service via dependency injection."""
    container = get_container()
    return container.content_search_service
