"""Helpers for turning exceptions into API error payloads."""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from content_manager.exceptions import ContentManagerError, ReadError, ScanError, ValidationError

logger = logging.getLogger(__name__)


def format_exception_for_response(e: Exception) -> dict[str, object]:
    """
    Format exception for API error response.

    Args:
        e: Exception to format

    Returns:
        Dictionary with error name, message and, for ContentManagerError
        subclasses, their context

    Example:
        try:
            do_something()
        except ScanError as e:
            raise HTTPException(
                status_code=500,
                detail=format_exception_for_response(e)
            )
    """
    error_dict: dict[str, object] = {
        "error": type(e).__name__,
        "message": str(e),
    }

    if isinstance(e, ContentManagerError) and e.context:
        error_dict["context"] = e.context

    return error_dict


def http_error(status_code: int, e: Exception) -> HTTPException:
    """Build an HTTPException carrying the formatted exception as detail."""
    return HTTPException(status_code=status_code, detail=format_exception_for_response(e))


def to_http_exception(exc: Exception, operation: str, target: str) -> HTTPException:
    """
    Map an engine failure onto an HTTP error and log it.

    Args:
        exc: Exception raised by the service
        operation: Operation name for logging context
        target: Directory or file the operation worked on

    Returns:
        HTTPException to raise from the endpoint
    """
    if isinstance(exc, ValidationError):
        logger.warning(
            f"Invalid {operation} request",
            extra={
                "operation": operation,
                "target": target,
                "reason": exc.context.get("reason") or exc.context.get("field"),
            },
        )
        return http_error(status.HTTP_400_BAD_REQUEST, exc)

    if isinstance(exc, FileNotFoundError) or (
        isinstance(exc, ReadError) and exc.context.get("missing")
    ):
        logger.info(
            "Path not found",
            extra={
                "operation": operation,
                "target": target,
                "error": str(exc),
            },
        )
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Not found: {target}",
        )

    if isinstance(exc, ScanError | ReadError):
        logger.error(
            f"Error in {operation}",
            extra={
                "operation": operation,
                "target": target,
                "error_type": type(exc).__name__,
                **exc.context,
            },
        )
        return http_error(status.HTTP_500_INTERNAL_SERVER_ERROR, exc)

    logger.exception(
        f"Unexpected error in {operation}",
        extra={
            "operation": operation,
            "target": target,
            "error_type": type(exc).__name__,
        },
    )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Unexpected error in {operation}",
    )
