"""File listing, directory statistics and single-document endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from content_manager.dependencies import get_content_search_service, verify_token
from content_manager.models.document import DirectoryStats, Document
from content_manager.models.search import FileListRequest, FileListResponse, ReadDocumentRequest
from content_manager.services.content_search import ContentSearchService
from content_manager.utils.error_handling import to_http_exception

router = APIRouter(prefix="/api/v1", tags=["files"], dependencies=[Depends(verify_token)])


@router.post("/files", response_model=FileListResponse)
async def find_content_files(
    request: FileListRequest,
    search_service: ContentSearchService = Depends(get_content_search_service),
) -> FileListResponse:
    """List content files in a directory, recursively."""
    try:
        paths = await search_service.find_files(request.directory, request.extensions)
    except Exception as exc:
        raise to_http_exception(exc, "file listing", request.directory) from exc

    files = [str(path) for path in paths]
    return FileListResponse(directory=request.directory, files=files, total=len(files))


@router.post("/files/stats", response_model=DirectoryStats)
async def get_directory_stats(
    request: FileListRequest,
    search_service: ContentSearchService = Depends(get_content_search_service),
) -> DirectoryStats:
    """File count, total size and per-extension counts."""
    try:
        return await search_service.directory_stats(request.directory, request.extensions)
    except Exception as exc:
        raise to_http_exception(exc, "directory stats", request.directory) from exc


@router.post("/documents/read", response_model=Document)
async def read_content_file(
    request: ReadDocumentRequest,
    search_service: ContentSearchService = Depends(get_content_search_service),
) -> Document:
    """Load one file with its frontmatter and metadata."""
    try:
        return await search_service.load_document(request.file_path)
    except Exception as exc:
        raise to_http_exception(exc, "document read", request.file_path) from exc
