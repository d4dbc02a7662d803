"""Pydantic models for Snippet Converter."""

from .collection import CollectionMetadata, InputType, SelectedCollection
from .snippet import AlfredSnippet, SnippetExport

__all__ = [
    "AlfredSnippet",
    "SnippetExport",
    "InputType",
    "CollectionMetadata",
    "SelectedCollection",
]
