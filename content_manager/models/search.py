"""Request and response models for the search and files API."""

from __future__ import annotations

from datetime import UTC, date, datetime, time

from pydantic import BaseModel, ConfigDict, Field, field_validator

from content_manager.models.document import Document, SearchResult
from content_manager.services.ranking import DEFAULT_MAX_RESULTS


def ensure_utc(value: datetime) -> datetime:
    """Interpret a naive datetime as UTC; convert an aware one to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def parse_date_boundary(value: str, end_of_day: bool = False) -> datetime:
    """
    Parse an ISO date or datetime into a timezone-aware UTC datetime.

    Args:
        value: ISO 8601 date (``2024-01-31`` or ``20240131``) or datetime
        end_of_day: For a date without time, use the last instant of the day
                    instead of midnight

    Raises:
        ValueError: Value is not a parseable date
    """
    text = value.strip()
    try:
        day = date.fromisoformat(text)
    except ValueError:
        pass
    else:
        return ensure_utc(datetime.combine(day, time.max if end_of_day else time.min))

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        msg = f"Invalid date: {value}"
        raise ValueError(msg) from None
    return ensure_utc(parsed)


class DirectoryRequest(BaseModel):
    """Common field for operations scoped to one directory."""

    directory: str = Field(..., min_length=1, description="Directory to scan")


class SearchRequest(DirectoryRequest):
    """Request body for free-text search."""

    query: str = Field(..., min_length=1, description="Search query")
    max_results: int = Field(
        DEFAULT_MAX_RESULTS,
        alias="maxResults",
        gt=0,
        description="Maximum number of results",
    )
    fuzzy: bool = Field(True, description="Use fuzzy matching instead of exact substring")
    include_content: bool = Field(
        True,
        alias="includeContent",
        description="Include document bodies in results",
    )

    model_config = ConfigDict(populate_by_name=True)


class SearchResponse(BaseModel):
    """Response payload for free-text search."""

    query: str = Field(..., description="Search query")
    strategy: str = Field(..., description="fuzzy or exact")
    results: list[SearchResult] = Field(..., description="Ranked results, best first")
    total_results: int = Field(..., alias="totalResults", description="Number of results")
    duration_ms: int = Field(..., alias="durationMs", description="Search duration in milliseconds")

    model_config = ConfigDict(populate_by_name=True)


class TagSearchRequest(DirectoryRequest):
    """Request body for tag search."""

    tags: list[str] = Field(..., min_length=1, description="Tags to search for")


class DateRangeSearchRequest(DirectoryRequest):
    """Request body for modification date search."""

    start_date: str = Field(..., alias="startDate", description="Start date (ISO format)")
    end_date: str = Field(..., alias="endDate", description="End date (ISO format)")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("start_date", "end_date", mode="after")
    @classmethod
    def validate_date(cls, v: str) -> str:
        parse_date_boundary(v)
        return v

    def bounds(self) -> tuple[datetime, datetime]:
        """Parsed (start, end); a date-only end covers that whole day."""
        return (
            parse_date_boundary(self.start_date),
            parse_date_boundary(self.end_date, end_of_day=True),
        )


class DocumentListResponse(BaseModel):
    """Documents returned by the tag and date-range filters, newest first."""

    documents: list[Document] = Field(..., description="Matching documents")
    total: int = Field(..., description="Number of documents")


class FileListRequest(DirectoryRequest):
    """Request body for listing or summarizing content files."""

    extensions: list[str] | None = Field(
        None,
        description="File extensions to include (default: configured set)",
    )


class FileListResponse(BaseModel):
    directory: str = Field(..., description="Scanned directory")
    files: list[str] = Field(..., description="Absolute file paths")
    total: int = Field(..., description="Number of files")


class ReadDocumentRequest(BaseModel):
    file_path: str = Field(..., alias="filePath", min_length=1, description="File to load")

    model_config = ConfigDict(populate_by_name=True)
