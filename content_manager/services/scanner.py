from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from content_manager.exceptions import ScanError, ValidationError
from content_manager.models.document import DirectoryStats

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS: tuple[str, ...] = (".md", ".markdown", ".txt", ".mdx")
MARKDOWN_EXTENSIONS = frozenset({".md", ".markdown", ".mdx"})
FOLLOW_SYMLINKS = False


def normalize_extensions(extensions: Iterable[str] | None) -> tuple[str, ...]:
    """Return extensions with a leading dot, deduplicated, in input order."""
    if extensions is None:
        return DEFAULT_EXTENSIONS

    normalized: list[str] = []
    for ext in extensions:
        cleaned = ext.strip()
        if not cleaned:
            continue
        if not cleaned.startswith("."):
            cleaned = f".{cleaned}"
        if cleaned not in normalized:
            normalized.append(cleaned)
    return tuple(normalized)


def is_markdown_file(filename: str) -> bool:
    """True for markdown-family files, which may carry frontmatter."""
    return Path(filename).suffix.lower() in MARKDOWN_EXTENSIONS


def resolve_root(directory: str | os.PathLike[str]) -> Path:
    """Resolve and check a scan root.

    Raises:
        FileNotFoundError: Directory doesn't exist
        ValidationError: Path is not a directory
        ScanError: Directory cannot be listed
    """
    root = Path(directory).expanduser().resolve()

    if not root.exists():
        msg = f"Directory not found: {root}"
        raise FileNotFoundError(msg)

    if not root.is_dir():
        msg = "Path is not a directory"
        raise ValidationError(
            msg,
            context={
                "path": str(root),
                "reason": "not_a_directory",
            },
        )

    try:
        with os.scandir(root):
            pass
    except OSError as exc:
        msg = "Directory cannot be enumerated"
        raise ScanError(
            msg,
            context={
                "path": str(root),
                "error_type": type(exc).__name__,
            },
        ) from exc

    return root


def _log_walk_error(exc: OSError) -> None:
    logger.warning(
        "Skipping unreadable directory",
        extra={
            "path": exc.filename,
            "error_type": type(exc).__name__,
        },
    )


def _is_utf8_name(current: str, name: str) -> bool:
    """False for names holding undecodable bytes (surrogate escapes), with a warning."""
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        logger.warning(
            "Skipping entry with non-UTF-8 name",
            extra={
                "directory": current,
                "entry": name.encode("utf-8", "backslashreplace").decode("utf-8"),
            },
        )
        return False
    return True


def _iter_files(root: Path, include_hidden: bool) -> Iterator[Path]:
    for current, dirnames, filenames in os.walk(
        root,
        onerror=_log_walk_error,
        followlinks=FOLLOW_SYMLINKS,
    ):
        dirnames[:] = [
            name
            for name in dirnames
            if (include_hidden or not name.startswith(".")) and _is_utf8_name(current, name)
        ]
        for filename in filenames:
            if not include_hidden and filename.startswith("."):
                continue
            if not _is_utf8_name(current, filename):
                continue
            yield Path(current) / filename


def find_content_files(
    directory: str | os.PathLike[str],
    extensions: Iterable[str] | None = None,
    include_hidden: bool = False,
) -> list[Path]:
    """
    Recursively list content files under a directory.

    Args:
        directory: Root directory to scan
        extensions: File extensions to include (default: DEFAULT_EXTENSIONS)
        include_hidden: Include dotfiles and dot-directories

    Returns:
        Sorted, deduplicated absolute paths

    Raises:
        FileNotFoundError: Directory doesn't exist
        ValidationError: Path is not a directory
        ScanError: Directory cannot be listed
    """
    root = resolve_root(directory)
    suffixes = normalize_extensions(extensions)

    matches = {
        path
        for path in _iter_files(root, include_hidden)
        if path.name.endswith(suffixes)
    }

    logger.debug(
        "Directory scanned",
        extra={
            "directory": str(root),
            "extensions": list(suffixes),
            "file_count": len(matches),
        },
    )
    return sorted(matches)


def get_directory_stats(
    directory: str | os.PathLike[str],
    extensions: Iterable[str] | None = None,
    include_hidden: bool = False,
) -> DirectoryStats:
    """Count content files, their total size and files per extension."""
    total_size = 0
    file_types: dict[str, int] = {}
    counted = 0

    for path in find_content_files(directory, extensions, include_hidden):
        try:
            size = path.stat().st_size
        except OSError as exc:
            logger.warning(
                "Skipping file that cannot be statted",
                extra={
                    "path": str(path),
                    "error_type": type(exc).__name__,
                },
            )
            continue

        counted += 1
        total_size += size
        file_types[path.suffix] = file_types.get(path.suffix, 0) + 1

    return DirectoryStats(total_files=counted, total_size=total_size, file_types=file_types)
