import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, Response

from content_manager.api import files, health, markdown, search
from content_manager.config import Settings, get_settings
from content_manager.logging_config import (
    configure_json_logging,
    generate_request_id,
    request_id_var,
)
from content_manager.services.container import init_container, reset_container
from content_manager.services.content_search import ContentSearchService
from content_manager.utils.frontmatter import get_parser
from content_manager.version import get_version

logger = logging.getLogger(__name__)


def build_search_service(settings: Settings) -> ContentSearchService:
    return ContentSearchService(
        extensions=settings.extensions,
        parser=get_parser(settings.frontmatter_parser),
        include_hidden=settings.include_hidden,
        max_results_limit=settings.max_results_limit,
    )


async def attach_request_id(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Tag the request with an ID (client-supplied X-Request-ID or a new one) for log correlation."""
    request_id = request.headers.get("X-Request-ID") or generate_request_id()
    token = request_id_var.set(request_id)

    should_log = not request.url.path.startswith("/health")
    if should_log:
        logger.info(
            "Request started",
            extra={
                "method": request.method,
                "path": request.url.path,
            },
        )

    try:
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        if should_log:
            logger.info(
                "Request completed",
                extra={
                    "status_code": response.status_code,
                },
            )
        return response
    finally:
        request_id_var.reset(token)


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to use; loaded from the config file when omitted
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Application startup and shutdown."""
        logger.info("Starting Content Manager server...")
        init_container(content_search_service=build_search_service(settings))
        logger.info(
            "Content Manager server ready",
            extra={
                "frontmatter_parser": settings.frontmatter_parser,
                "extensions": settings.extensions,
            },
        )

        yield

        logger.info("Content Manager server shutting down")
        reset_container()

    app = FastAPI(
        title="Content Manager",
        description="Search and metadata extraction for markdown and text documents",
        version=get_version(),
        lifespan=lifespan,
    )
    app.dependency_overrides[get_settings] = lambda: settings
    app.middleware("http")(attach_request_id)

    app.include_router(health.router)
    app.include_router(search.router)
    app.include_router(files.router)
    app.include_router(markdown.router)

    return app


def run() -> None:
    """Console entry point: configure logging and serve with uvicorn."""
    settings = get_settings()
    configure_json_logging(log_level=settings.log_level, use_json=settings.log_json)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    run()
