"""Models for markdown processing endpoints."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from content_manager.models.document import Heading


class ContentRequest(BaseModel):
    """Request body carrying raw markdown text."""

    content: str = Field(..., min_length=1, description="Markdown content")


class RenderRequest(ContentRequest):
    generate_toc: bool = Field(True, alias="generateToc", description="Prepend a table of contents")
    sanitize_html: bool = Field(True, alias="sanitizeHtml", description="Sanitize the resulting HTML")
    enable_code_highlight: bool = Field(
        True,
        alias="enableCodeHighlight",
        description="Add highlight CSS classes to code blocks",
    )

    model_config = ConfigDict(populate_by_name=True)


class RenderResponse(BaseModel):
    html: str = Field(..., description="Rendered HTML")


class HeadingsResponse(BaseModel):
    headings: list[Heading] = Field(..., description="Headings in document order")


class TableOfContentsResponse(BaseModel):
    toc: str | None = Field(..., description="Markdown table of contents, null without headings")


class FrontmatterResponse(BaseModel):
    frontmatter: dict[str, Any] = Field(..., description="Parsed metadata")
    body: str = Field(..., description="Content without the frontmatter block")
