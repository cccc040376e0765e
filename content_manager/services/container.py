"""
Service dependency container.

Holds the services built at startup so routers can reach them through
FastAPI's Depends() without module-level globals in the API modules.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from content_manager.services.content_search import ContentSearchService


class ServiceContainer:
    """Container for application services."""

    def __init__(self, content_search_service: ContentSearchService) -> None:
        self.content_search_service = content_search_service


_container: ServiceContainer | None = None


def init_container(content_search_service: ContentSearchService) -> ServiceContainer:
    """Create the process-wide container. Called from the app lifespan and tests."""
    global _container
    _container = ServiceContainer(content_search_service=content_search_service)
    return _container


def get_container() -> ServiceContainer:
    """Return the container, failing loudly if startup hasn't run."""
    if _container is None:
        msg = "Service container not initialized"
        raise RuntimeError(msg)
    return _container


def reset_container() -> None:
    """Drop the container (test teardown)."""
    global _container
    _container = None
