"""Version information for the Content Manager server."""

from functools import cache
from importlib.metadata import PackageNotFoundError, version

DISTRIBUTION_NAME = "content-manager"


@cache
def get_version() -> str:
    """
    Get the installed distribution version.

    Returns:
        Version string (e.g., "0.1.0"), or "unknown" when running from an
        uninstalled source tree
    """
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return "unknown"
