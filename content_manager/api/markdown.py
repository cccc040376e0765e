"""Markdown processing endpoints. These work on request text only, no filesystem access."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from content_manager.config import Settings, get_settings
from content_manager.dependencies import verify_token
from content_manager.models.markdown import (
    ContentRequest,
    FrontmatterResponse,
    HeadingsResponse,
    RenderRequest,
    RenderResponse,
    TableOfContentsResponse,
)
from content_manager.utils.frontmatter import get_parser
from content_manager.utils.markdown_utils import (
    extract_headings,
    generate_table_of_contents,
    render_markdown,
)

router = APIRouter(prefix="/api/v1/markdown", tags=["markdown"], dependencies=[Depends(verify_token)])


@router.post("/render", response_model=RenderResponse)
async def render(request: RenderRequest) -> RenderResponse:
    """Render markdown to HTML with optional table of contents and sanitization."""
    html = render_markdown(
        request.content,
        generate_toc=request.generate_toc,
        sanitize=request.sanitize_html,
        enable_code_highlight=request.enable_code_highlight,
    )
    return RenderResponse(html=html)


@router.post("/headings", response_model=HeadingsResponse)
async def headings(request: ContentRequest) -> HeadingsResponse:
    """Extract all headings with their levels and anchor ids."""
    return HeadingsResponse(headings=extract_headings(request.content))


@router.post("/toc", response_model=TableOfContentsResponse)
async def table_of_contents(request: ContentRequest) -> TableOfContentsResponse:
    """Generate a table of contents from the headings."""
    return TableOfContentsResponse(toc=generate_table_of_contents(request.content))


@router.post("/frontmatter", response_model=FrontmatterResponse)
async def frontmatter(
    request: ContentRequest,
    settings: Settings = Depends(get_settings),
) -> FrontmatterResponse:
    """Split frontmatter metadata from the body with the configured parser."""
    parsed = get_parser(settings.frontmatter_parser)(request.content)
    return FrontmatterResponse(frontmatter=parsed.frontmatter, body=parsed.body)
