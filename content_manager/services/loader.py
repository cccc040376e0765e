from __future__ import annotations

import asyncio
import logging
import os
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

from content_manager.exceptions import ReadError
from content_manager.models.document import Document
from content_manager.services.scanner import is_markdown_file
from content_manager.utils.frontmatter import parse_frontmatter

if TYPE_CHECKING:
    from collections.abc import Iterable

    from content_manager.utils.frontmatter import FrontmatterParser

logger = logging.getLogger(__name__)


def read_content_file(
    file_path: str | os.PathLike[str],
    parser: FrontmatterParser = parse_frontmatter,
) -> Document:
    """
    Load one file into a Document.

    Markdown-family files have their frontmatter split from the body;
    other files keep their full text as body and have no frontmatter.

    Args:
        file_path: Path of the file to load
        parser: Frontmatter parser applied to markdown files

    Returns:
        Fully populated Document

    Raises:
        ReadError: File cannot be opened, decoded as text or statted
    """
    path = Path(file_path).expanduser().absolute()

    try:
        text = path.read_text(encoding="utf-8", errors="replace")
        stat = path.stat()
    except OSError as exc:
        msg = f"Failed to read content file: {path}"
        raise ReadError(
            msg,
            context={
                "path": str(path),
                "error_type": type(exc).__name__,
                "missing": isinstance(exc, FileNotFoundError),
            },
        ) from exc

    frontmatter = None
    body = text
    if is_markdown_file(path.name):
        frontmatter, body = parser(text)

    return Document(
        path=str(path),
        name=path.name,
        body=body,
        frontmatter=frontmatter,
        last_modified=datetime.fromtimestamp(stat.st_mtime, tz=UTC),
        size=stat.st_size,
    )


async def load_documents(
    paths: Iterable[Path],
    parser: FrontmatterParser = parse_frontmatter,
) -> list[Document]:
    """
    Load many files concurrently, skipping the ones that fail.

    Each file is read in a worker thread. A ReadError drops that file with a
    warning; the rest of the batch is unaffected. Output order follows the
    input order.
    """
    paths = list(paths)
    outcomes = await asyncio.gather(
        *(asyncio.to_thread(read_content_file, path, parser) for path in paths),
        return_exceptions=True,
    )

    documents: list[Document] = []
    for path, outcome in zip(paths, outcomes, strict=True):
        if isinstance(outcome, ReadError):
            logger.warning(
                "Skipping unreadable file",
                extra={
                    "path": str(path),
                    **outcome.context,
                },
            )
            continue
        if isinstance(outcome, BaseException):
            raise outcome
        documents.append(outcome)

    return documents
