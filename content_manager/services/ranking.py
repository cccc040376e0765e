"""
Ranking and filtering over an in-memory document set.

All functions are pure: they read Documents and never modify them.

Fuzzy and exact strategies both report scores in [0, 1] where higher is
better. Tag and date-range filters produce no score and order by recency.
"""

from __future__ import annotations

import sys
from datetime import datetime  # noqa: TC003
from typing import TYPE_CHECKING, Any, NamedTuple

from content_manager.models.document import Document, SearchResult
from content_manager.utils.fuzzy import best_substring_match

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

DEFAULT_MAX_RESULTS = 10
MAX_MATCHES_PER_RESULT = 5
SNIPPET_LENGTH = 100
SNIPPET_LEAD = 30

FUZZY_THRESHOLD = 0.3
MIN_MATCH_CHAR_LENGTH = 2
FUZZY_FIELD_WEIGHTS: tuple[tuple[str, float], ...] = (
    ("name", 0.4),
    ("body", 0.3),
    ("frontmatter.title", 0.2),
    ("frontmatter.tags", 0.1),
)

EXACT_FILENAME_SCORE = 0.4
EXACT_LINE_SCORE = 0.1
EXACT_FRONTMATTER_SCORE = 0.2


class _FieldMatch(NamedTuple):
    field: str
    weight: float
    distance: float
    snippet: str


def _field_values(document: Document, field: str) -> list[str]:
    """Searchable string values of a document field."""
    if field == "name":
        return [document.name]
    if field == "body":
        return [document.body]

    key = field.removeprefix("frontmatter.")
    value: Any = (document.frontmatter or {}).get(key)
    items = value if isinstance(value, list) else [value]
    return [
        str(item)
        for item in items
        if isinstance(item, str | int | float) and not isinstance(item, bool)
    ]


def _snippet(value: str, start: int) -> str:
    if len(value) <= SNIPPET_LENGTH:
        return value

    begin = max(0, min(start - SNIPPET_LEAD, len(value) - SNIPPET_LENGTH))
    excerpt = value[begin : begin + SNIPPET_LENGTH]
    prefix = "..." if begin > 0 else ""
    suffix = "..." if begin + SNIPPET_LENGTH < len(value) else ""
    return f"{prefix}{excerpt}{suffix}"


def _match_field(document: Document, field: str, weight: float, pattern: str) -> _FieldMatch | None:
    best: _FieldMatch | None = None
    for value in _field_values(document, field):
        found = best_substring_match(pattern, value.lower())
        if found is None:
            continue
        distance = found.normalized(len(pattern))
        if distance > FUZZY_THRESHOLD:
            continue
        if found.end - found.start < MIN_MATCH_CHAR_LENGTH:
            continue
        if best is None or distance < best.distance:
            best = _FieldMatch(field, weight, distance, _snippet(value, found.start))
    return best


def rank_fuzzy(
    documents: Sequence[Document],
    query: str,
    max_results: int = DEFAULT_MAX_RESULTS,
) -> list[SearchResult]:
    """
    Rank documents by approximate match across weighted fields.

    Each field matches when its normalized edit distance to the query is at
    most FUZZY_THRESHOLD. A document's raw score is the product of
    ``max(distance, eps) ** weight`` over its matching fields (0 is perfect);
    the reported score is ``1 - raw``.

    Args:
        documents: Candidate documents in scan order
        query: Search text (case-insensitive)
        max_results: Maximum number of results

    Returns:
        Results sorted best first; ties keep scan order
    """
    pattern = query.strip().lower()
    if len(pattern) < MIN_MATCH_CHAR_LENGTH:
        return []

    scored: list[tuple[float, int, SearchResult]] = []
    for index, document in enumerate(documents):
        field_matches = [
            match
            for field, weight in FUZZY_FIELD_WEIGHTS
            if (match := _match_field(document, field, weight, pattern)) is not None
        ]
        if not field_matches:
            continue

        raw = 1.0
        for match in field_matches:
            raw *= max(match.distance, sys.float_info.epsilon) ** match.weight

        score = min(max(1.0 - raw, 0.0), 1.0)
        explanations = [f"{match.field}: {match.snippet}" for match in field_matches]
        scored.append(
            (
                raw,
                index,
                SearchResult(
                    document=document,
                    score=score,
                    matches=explanations[:MAX_MATCHES_PER_RESULT],
                ),
            )
        )

    scored.sort(key=lambda item: (item[0], item[1]))
    return [result for _, _, result in scored[:max_results]]


def rank_exact(
    documents: Sequence[Document],
    query: str,
    max_results: int = DEFAULT_MAX_RESULTS,
) -> list[SearchResult]:
    """
    Rank documents by case-insensitive substring matches.

    Scoring is additive: filename +0.4, each matching body line +0.1, each
    matching string frontmatter value +0.2, clamped to 1.0. Long documents
    reach the cap quickly since line matches are not normalized by length.

    Args:
        documents: Candidate documents in scan order
        query: Search text (case-insensitive)
        max_results: Maximum number of results

    Returns:
        Matching documents sorted by descending score; ties keep scan order
    """
    needle = query.lower()
    results: list[SearchResult] = []

    for document in documents:
        matches: list[str] = []
        score = 0.0

        if needle in document.name.lower():
            matches.append(f"Filename: {document.name}")
            score += EXACT_FILENAME_SCORE

        for line_number, line in enumerate(document.body.split("\n"), start=1):
            if needle in line.lower():
                matches.append(f"Line {line_number}: {line.strip()}")
                score += EXACT_LINE_SCORE

        for key, value in (document.frontmatter or {}).items():
            if isinstance(value, str) and needle in value.lower():
                matches.append(f"{key}: {value}")
                score += EXACT_FRONTMATTER_SCORE

        if not matches:
            continue

        results.append(
            SearchResult(
                document=document,
                score=min(score, 1.0),
                matches=matches[:MAX_MATCHES_PER_RESULT],
            )
        )

    results.sort(key=lambda result: result.score, reverse=True)
    return results[:max_results]


def document_tags(document: Document) -> list[str]:
    """Frontmatter tags as a list of strings; a scalar becomes a one-item list."""
    value = (document.frontmatter or {}).get("tags")
    if value is None:
        return []
    items = value if isinstance(value, list) else [value]
    return [item for item in items if isinstance(item, str)]


def _by_recency(documents: Iterable[Document]) -> list[Document]:
    return sorted(documents, key=lambda document: document.last_modified, reverse=True)


def filter_by_tags(documents: Sequence[Document], tags: Iterable[str]) -> list[Document]:
    """Documents having at least one of the given tags (case-insensitive), newest first."""
    wanted = {tag.lower() for tag in tags}
    return _by_recency(
        document
        for document in documents
        if any(tag.lower() in wanted for tag in document_tags(document))
    )


def filter_by_date_range(
    documents: Sequence[Document],
    start: datetime,
    end: datetime,
) -> list[Document]:
    """Documents modified within [start, end] inclusive, newest first.

    Bounds must be timezone-aware to compare with Document.last_modified.
    """
    return _by_recency(
        document for document in documents if start <= document.last_modified <= end
    )
