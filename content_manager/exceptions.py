"""
Custom exception classes with context for Content Manager.

All exceptions inherit from ContentManagerError and support attaching
contextual information for logging and API error responses.
"""

from __future__ import annotations


class ContentManagerError(Exception):
    """
    Base exception for Content Manager.

    Attributes:
        message: Human-readable error message
        context: Optional dictionary with additional context for logging/debugging
    """

    def __init__(self, message: str, context: dict[str, object] | None = None):
        """
        Initialize exception with message and optional context.

        Args:
            message: Human-readable error message
            context: Optional dictionary with contextual information
                    (operation name, file paths, error details, etc.)
        """
        super().__init__(message)
        self.context = context or {}


class ReadError(ContentManagerError):
    """
    A single document could not be read or statted.

    Bulk loads treat this as non-fatal: the file is skipped and the
    batch continues.

    Example:
        raise ReadError(
            "Failed to read content file",
            context={
                "path": "/notes/broken.md",
                "reason": "permission_denied",
            }
        )
    """


class ScanError(ContentManagerError):
    """
    The root directory of a scan could not be enumerated.

    This is the only failure that aborts a multi-file operation.
    """


class ValidationError(ContentManagerError):
    """
    Caller input failed validation.

    Example:
        raise ValidationError(
            "max_results out of range",
            context={
                "field": "max_results",
                "min": 1,
                "max": 1000,
            }
        )
    """


class ConfigurationError(ContentManagerError):
    """
    Configuration loading, expansion or validation failed.

    Example:
        raise ConfigurationError(
            "Invalid YAML in configuration file",
            context={"config_file": "/etc/content-manager/config.yaml"}
        )
    """
