"""
Frontmatter extraction for markdown documents.

Two parsers share one interface, ``(text) -> ParsedContent``:

- ``parse_frontmatter`` understands a deliberately small subset of YAML:
  one ``key: value`` pair per line with scalar type inference. Nested
  mappings, multi-line scalars and inline arrays are NOT supported;
  ``tags: [a, b]`` yields the literal string ``"[a, b]"``.
- ``parse_yaml_frontmatter`` hands the block to PyYAML for callers that
  need full YAML fidelity.

Neither parser raises on malformed input. An unclosed or unparseable block
is reported as "no frontmatter": an empty mapping plus the original text.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from typing import Any, NamedTuple

import yaml

logger = logging.getLogger(__name__)

DELIMITER = "---"

_INT_RE = re.compile(r"^\d+$")
_FLOAT_RE = re.compile(r"^\d+\.\d+$")


class ParsedContent(NamedTuple):
    """Result of parsing text with optional frontmatter."""

    frontmatter: dict[str, Any]
    body: str


FrontmatterParser = Callable[[str], ParsedContent]


def _split_block(content: str) -> tuple[str, str] | None:
    """Locate a leading delimited block.

    Returns:
        (block_text, body) or None when no complete block opens the text
    """
    lines = content.split("\n")
    if lines[0].rstrip() != DELIMITER:
        return None

    for idx in range(1, len(lines)):
        if lines[idx].rstrip() == DELIMITER:
            block = "\n".join(line.rstrip("\r") for line in lines[1:idx])
            body = "\n".join(lines[idx + 1 :])
            return block, body

    logger.warning(
        "Frontmatter missing closing marker",
        extra={
            "content_length": len(content),
        },
    )
    return None


def parse_scalar(raw: str) -> Any:
    """Infer the type of a single frontmatter value.

    Precedence: booleans, null, integers, floats, then strings with one
    layer of matching quotes removed.
    """
    if raw == "true":
        return True
    if raw == "false":
        return False
    if raw == "null":
        return None
    if _INT_RE.match(raw):
        return int(raw)
    if _FLOAT_RE.match(raw):
        return float(raw)
    if len(raw) >= 2 and raw[0] == raw[-1] and raw[0] in {'"', "'"}:
        return raw[1:-1]
    return raw


def parse_simple_yaml(block: str) -> dict[str, Any]:
    """Parse ``key: value`` lines into a mapping.

    Blank lines, ``#`` comments and lines without a colon are skipped.
    Later duplicate keys overwrite earlier ones.
    """
    result: dict[str, Any] = {}
    for line in block.split("\n"):
        trimmed = line.strip()
        if not trimmed or trimmed.startswith("#"):
            continue

        key, sep, value = trimmed.partition(":")
        if not sep:
            continue

        result[key.strip()] = parse_scalar(value.strip())
    return result


def parse_frontmatter(content: str) -> ParsedContent:
    """
    Split minimal-YAML frontmatter from the body of a document.

    The block must start on the very first line with ``---`` and end at the
    next line containing only ``---``. Values are scalars only; see the module
    docstring for the unsupported YAML features.

    Args:
        content: Raw document text

    Returns:
        ParsedContent with the metadata mapping and the remaining body.
        Without a complete block the mapping is empty and the body is the
        input unchanged.
    """
    split = _split_block(content)
    if split is None:
        return ParsedContent({}, content)

    block, body = split
    return ParsedContent(parse_simple_yaml(block), body)


def _timestamp_free_loader() -> type[yaml.SafeLoader]:
    """SafeLoader subclass that keeps dates and timestamps as strings."""

    class _Loader(yaml.SafeLoader):
        pass

    _Loader.yaml_implicit_resolvers = {
        first: [
            (tag, regexp)
            for tag, regexp in resolvers
            if tag != "tag:yaml.org,2002:timestamp"
        ]
        for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
    }
    return _Loader


_YAML_LOADER = _timestamp_free_loader()


def parse_yaml_frontmatter(content: str) -> ParsedContent:
    """
    Split frontmatter parsed with PyYAML from the body of a document.

    Same block detection and degradation rules as ``parse_frontmatter``.
    Timestamps stay strings so values remain JSON-serializable.
    """
    split = _split_block(content)
    if split is None:
        return ParsedContent({}, content)

    block, body = split
    try:
        data = yaml.load(block, Loader=_YAML_LOADER)  # noqa: S506
    except yaml.YAMLError as e:
        logger.warning(
            "YAML parse error in frontmatter",
            extra={
                "error": str(e),
                "frontmatter_length": len(block),
            },
        )
        return ParsedContent({}, content)

    if data is None:
        return ParsedContent({}, body)

    if not isinstance(data, dict):
        logger.warning(
            "Frontmatter is not a mapping",
            extra={
                "type": type(data).__name__,
            },
        )
        return ParsedContent({}, content)

    return ParsedContent({str(key): value for key, value in data.items()}, body)


PARSERS: dict[str, FrontmatterParser] = {
    "simple": parse_frontmatter,
    "yaml": parse_yaml_frontmatter,
}


def get_parser(name: str) -> FrontmatterParser:
    """Look up a frontmatter parser by its configuration name."""
    try:
        return PARSERS[name]
    except KeyError:
        msg = f"Unknown frontmatter parser: {name}"
        raise ValueError(msg) from None
