"""Models for Content Manager."""

from content_manager.models.document import DirectoryStats, Document, Heading, SearchResult

__all__ = [
    "DirectoryStats",
    "Document",
    "Heading",
    "SearchResult",
]
