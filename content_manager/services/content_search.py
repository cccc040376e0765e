from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING

from content_manager.exceptions import ValidationError
from content_manager.models.search import ensure_utc
from content_manager.services.loader import load_documents, read_content_file
from content_manager.services.ranking import (
    DEFAULT_MAX_RESULTS,
    filter_by_date_range,
    filter_by_tags,
    rank_exact,
    rank_fuzzy,
)
from content_manager.services.scanner import (
    DEFAULT_EXTENSIONS,
    find_content_files,
    get_directory_stats,
)
from content_manager.utils.frontmatter import parse_frontmatter

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime
    from pathlib import Path

    from content_manager.models.document import DirectoryStats, Document, SearchResult
    from content_manager.utils.frontmatter import FrontmatterParser

logger = logging.getLogger(__name__)

MIN_MAX_RESULTS = 1
DEFAULT_MAX_RESULTS_LIMIT = 1000


def _elapsed_ms(start_time: float) -> int:
    return int((time.monotonic() - start_time) * 1000)


class ContentSearchService:
    """Scan, load and rank documents for one query at a time.

    Every call rescans the directory it is given; nothing is cached between
    calls.
    """

    def __init__(
        self,
        extensions: Iterable[str] = DEFAULT_EXTENSIONS,
        parser: FrontmatterParser = parse_frontmatter,
        include_hidden: bool = False,
        max_results_limit: int = DEFAULT_MAX_RESULTS_LIMIT,
    ) -> None:
        """
        Initialize content search service.

        Args:
            extensions: File extensions scanned when a call doesn't name any
            parser: Frontmatter parser applied to markdown files
            include_hidden: Scan dotfiles and dot-directories
            max_results_limit: Upper bound accepted for max_results
        """
        self.extensions = tuple(extensions)
        self.parser = parser
        self.include_hidden = include_hidden
        self.max_results_limit = max_results_limit

    async def search(
        self,
        query: str,
        directory: str,
        max_results: int = DEFAULT_MAX_RESULTS,
        fuzzy: bool = True,
    ) -> list[SearchResult]:
        """
        Rank the documents under a directory against a query.

        Raises:
            ValidationError: Blank query or max_results out of range
            FileNotFoundError: Directory doesn't exist
            ScanError: Directory cannot be listed
        """
        self._validate_search(query, max_results)

        start_time = time.monotonic()
        documents = await self._load_directory(directory)
        rank = rank_fuzzy if fuzzy else rank_exact
        results = await asyncio.to_thread(rank, documents, query, max_results)

        logger.info(
            "Content search completed",
            extra={
                "query_length": len(query),
                "strategy": "fuzzy" if fuzzy else "exact",
                "directory": directory,
                "document_count": len(documents),
                "result_count": len(results),
                "max_results": max_results,
                "duration_ms": _elapsed_ms(start_time),
            },
        )
        return results

    async def search_by_tags(self, tags: list[str], directory: str) -> list[Document]:
        """Documents tagged with any of the given tags, newest first."""
        cleaned = [tag.strip() for tag in tags if tag.strip()]
        if not cleaned:
            msg = "At least one tag is required"
            raise ValidationError(msg, context={"field": "tags"})

        start_time = time.monotonic()
        documents = await self._load_directory(directory)
        results = filter_by_tags(documents, cleaned)

        logger.info(
            "Tag search completed",
            extra={
                "tags_count": len(cleaned),
                "directory": directory,
                "document_count": len(documents),
                "result_count": len(results),
                "duration_ms": _elapsed_ms(start_time),
            },
        )
        return results

    async def search_by_date_range(
        self,
        start: datetime,
        end: datetime,
        directory: str,
    ) -> list[Document]:
        """Documents modified between start and end inclusive, newest first.

        Naive bounds are interpreted as UTC.
        """
        start = ensure_utc(start)
        end = ensure_utc(end)
        if start > end:
            msg = "Start date must not be after end date"
            raise ValidationError(
                msg,
                context={
                    "field": "startDate",
                    "start": start.isoformat(),
                    "end": end.isoformat(),
                },
            )

        start_time = time.monotonic()
        documents = await self._load_directory(directory)
        results = filter_by_date_range(documents, start, end)

        logger.info(
            "Date range search completed",
            extra={
                "directory": directory,
                "document_count": len(documents),
                "result_count": len(results),
                "duration_ms": _elapsed_ms(start_time),
            },
        )
        return results

    async def find_files(
        self,
        directory: str,
        extensions: Iterable[str] | None = None,
    ) -> list[Path]:
        """List content files under a directory."""
        return await asyncio.to_thread(
            find_content_files,
            directory,
            self._extensions(extensions),
            self.include_hidden,
        )

    async def directory_stats(
        self,
        directory: str,
        extensions: Iterable[str] | None = None,
    ) -> DirectoryStats:
        """File count, total size and per-extension counts for a directory."""
        return await asyncio.to_thread(
            get_directory_stats,
            directory,
            self._extensions(extensions),
            self.include_hidden,
        )

    async def load_document(self, file_path: str) -> Document:
        """
        Load a single document.

        Raises:
            ReadError: File cannot be read or statted
        """
        return await asyncio.to_thread(read_content_file, file_path, self.parser)

    async def _load_directory(self, directory: str) -> list[Document]:
        paths = await self.find_files(directory)
        return await load_documents(paths, self.parser)

    def _extensions(self, extensions: Iterable[str] | None) -> tuple[str, ...]:
        if extensions is None:
            return self.extensions
        return tuple(extensions)

    def _validate_search(self, query: str, max_results: int) -> None:
        if not isinstance(query, str) or not query.strip():
            msg = "Query must be non-empty"
            raise ValidationError(msg, context={"field": "query"})

        if max_results < MIN_MAX_RESULTS or max_results > self.max_results_limit:
            msg = "max_results out of range"
            raise ValidationError(
                msg,
                context={
                    "field": "max_results",
                    "min": MIN_MAX_RESULTS,
                    "max": self.max_results_limit,
                },
            )
