"""Heading extraction, table of contents and HTML rendering for markdown."""

from __future__ import annotations

import logging
import re

import markdown

from content_manager.models.document import Heading

logger = logging.getLogger(__name__)

TOC_TITLE = "## Table of Contents"
TOC_INDENT = "  "

_HEADING_RE = re.compile(r"^(#{1,6})[ \t]+(.+)$", re.MULTILINE)
_SLUG_STRIP_RE = re.compile(r"[^\w\s-]")
_WHITESPACE_RE = re.compile(r"\s+")

_SCRIPT_RE = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)
_EVENT_HANDLER_RE = re.compile(r"\s*on\w+\s*=\s*[\"'][^\"']*[\"']", re.IGNORECASE)
_JS_SCHEME_RE = re.compile(r"javascript:", re.IGNORECASE)


def slugify(text: str) -> str:
    """Derive an anchor id from heading text.

    Identical headings produce identical slugs; no de-duplication is done.
    """
    slug = _SLUG_STRIP_RE.sub("", text.lower())
    return _WHITESPACE_RE.sub("-", slug)


def extract_headings(content: str) -> list[Heading]:
    """Return ATX headings (``#`` through ``######``) in document order."""
    headings: list[Heading] = []
    for match in _HEADING_RE.finditer(content):
        text = match.group(2).strip()
        headings.append(Heading(level=len(match.group(1)), text=text, id=slugify(text)))
    return headings


def generate_table_of_contents(content: str) -> str | None:
    """
    Build a markdown table of contents linking to each heading.

    Args:
        content: Markdown text

    Returns:
        TOC markdown, or None when the text has no headings
    """
    headings = extract_headings(content)
    if not headings:
        return None

    entries = [
        f"{TOC_INDENT * (heading.level - 1)}- [{heading.text}](#{heading.id})"
        for heading in headings
    ]
    return f"{TOC_TITLE}\n\n" + "\n".join(entries)


def sanitize_html(html: str) -> str:
    """Strip script elements, inline event handlers and javascript: URLs.

    This is a minimal pass, not a full HTML sanitizer.
    """
    html = _SCRIPT_RE.sub("", html)
    html = _EVENT_HANDLER_RE.sub("", html)
    return _JS_SCHEME_RE.sub("", html)


def render_markdown(
    content: str,
    generate_toc: bool = True,
    sanitize: bool = True,
    enable_code_highlight: bool = True,
) -> str:
    """
    Render markdown to HTML.

    Args:
        content: Markdown text
        generate_toc: Prepend a generated table of contents
        sanitize: Apply the minimal sanitization pass to the output
        enable_code_highlight: Tokenize fenced code with Pygments, emitting
                               CSS classes under a "highlight" wrapper

    Returns:
        HTML fragment
    """
    source = content
    if generate_toc:
        toc = generate_table_of_contents(content)
        if toc:
            source = f"{toc}\n\n{content}"

    extensions: list[str] = ["extra", "nl2br", "sane_lists", "toc"]
    extension_configs: dict[str, dict[str, object]] = {
        "toc": {"slugify": lambda value, separator: slugify(value)},
    }
    if enable_code_highlight:
        extensions.append("codehilite")
        extension_configs["codehilite"] = {
            "css_class": "highlight",
            "guess_lang": False,
        }

    html = markdown.markdown(
        source,
        extensions=extensions,
        extension_configs=extension_configs,
    )

    logger.debug(
        "Rendered markdown",
        extra={
            "content_length": len(content),
            "html_length": len(html),
            "toc": generate_toc,
        },
    )

    if sanitize:
        return sanitize_html(html)
    return html
