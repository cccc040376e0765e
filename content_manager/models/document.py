"""Core domain models: documents, search results, headings and directory stats."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Document(BaseModel):
    """One indexed file, rebuilt from disk on every query."""

    path: str = Field(..., description="Absolute filesystem path")
    name: str = Field(..., description="Base filename")
    body: str = Field(..., description="Text content with frontmatter removed")
    frontmatter: dict[str, Any] | None = Field(
        None,
        description="Frontmatter mapping (None when the file type has no frontmatter)",
    )
    last_modified: datetime = Field(
        ...,
        alias="lastModified",
        description="Last modified timestamp (UTC)",
    )
    size: int = Field(..., ge=0, description="Size in bytes")

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class SearchResult(BaseModel):
    """A ranked document with its match explanations."""

    document: Document = Field(..., description="Matched document")
    score: float = Field(..., ge=0.0, le=1.0, description="Relevance, higher is better")
    matches: list[str] = Field(
        default_factory=list,
        max_length=5,
        description="Human-readable match explanations",
    )


class Heading(BaseModel):
    """A markdown heading and its anchor id."""

    level: int = Field(..., ge=1, le=6, description="Heading level (number of #)")
    text: str = Field(..., description="Heading text")
    id: str = Field(..., description="Anchor slug")


class DirectoryStats(BaseModel):
    """Aggregate statistics over the content files of a directory."""

    total_files: int = Field(..., alias="totalFiles", description="Number of content files")
    total_size: int = Field(..., alias="totalSize", description="Total size in bytes")
    file_types: dict[str, int] = Field(
        default_factory=dict,
        alias="fileTypes",
        description="File count per extension",
    )

    model_config = ConfigDict(populate_by_name=True)
