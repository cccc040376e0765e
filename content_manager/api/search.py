"""Search API endpoints: free-text, tag and date-range queries."""

from __future__ import annotations

import time

from fastapi import APIRouter, Depends

from content_manager.dependencies import get_content_search_service, verify_token
from content_manager.models.document import SearchResult
from content_manager.models.search import (
    DateRangeSearchRequest,
    DocumentListResponse,
    SearchRequest,
    SearchResponse,
    TagSearchRequest,
)
from content_manager.services.content_search import ContentSearchService
from content_manager.utils.error_handling import to_http_exception

router = APIRouter(prefix="/api/v1/search", tags=["search"], dependencies=[Depends(verify_token)])


@router.post("", response_model=SearchResponse)
async def search_content(
    request: SearchRequest,
    search_service: ContentSearchService = Depends(get_content_search_service),
) -> SearchResponse:
    """Search notes and documents with fuzzy or exact matching."""
    start_time = time.monotonic()
    try:
        results = await search_service.search(
            request.query,
            request.directory,
            max_results=request.max_results,
            fuzzy=request.fuzzy,
        )
    except Exception as exc:
        raise to_http_exception(exc, "search", request.directory) from exc

    if not request.include_content:
        results = [
            SearchResult(
                document=result.document.model_copy(update={"body": ""}),
                score=result.score,
                matches=result.matches,
            )
            for result in results
        ]

    return SearchResponse(
        query=request.query,
        strategy="fuzzy" if request.fuzzy else "exact",
        results=results,
        total_results=len(results),
        duration_ms=int((time.monotonic() - start_time) * 1000),
    )


@router.post("/tags", response_model=DocumentListResponse)
async def search_by_tags(
    request: TagSearchRequest,
    search_service: ContentSearchService = Depends(get_content_search_service),
) -> DocumentListResponse:
    """Find files whose frontmatter tags include any of the given tags."""
    try:
        documents = await search_service.search_by_tags(request.tags, request.directory)
    except Exception as exc:
        raise to_http_exception(exc, "tag search", request.directory) from exc

    return DocumentListResponse(documents=documents, total=len(documents))


@router.post("/date-range", response_model=DocumentListResponse)
async def search_by_date_range(
    request: DateRangeSearchRequest,
    search_service: ContentSearchService = Depends(get_content_search_service),
) -> DocumentListResponse:
    """Find files modified within a date range (inclusive)."""
    start, end = request.bounds()
    try:
        documents = await search_service.search_by_date_range(start, end, request.directory)
    except Exception as exc:
        raise to_http_exception(exc, "date range search", request.directory) from exc

    return DocumentListResponse(documents=documents, total=len(documents))
