"""Pydantic models describing snippet collections."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class InputType(str, Enum):
    """Classification of an input path."""

    DIRECTORY = "directory"
    ARCHIVE = "archive"
    UNSUPPORTED = "unsupported"


class CollectionMetadata(BaseModel):
    """Name and size of one input collection, derived once per run."""

    source_path: str = Field(description="Path as given by the caller")
    collection_name: str = Field(description="Sanitized name used for prefixes and file names")
    snippet_count: int = Field(ge=0, description="Number of .json files in the collection")

    model_config = {"frozen": True}

    @classmethod
    def create(cls, original_path: str, handler) -> "CollectionMetadata":
        """Resolve `handler` and derive metadata for the collection at `original_path`."""
        from ..metadata import create_collection_metadata

        return create_collection_metadata(original_path, handler)


class SelectedCollection(BaseModel):
    """An input chosen for conversion, as listed by `snippet-converter inspect`.

    Two selections are equal when they point at the same path.
    """

    path: str
    display_name: str
    input_type: InputType
    snippet_count: Optional[int] = None

    model_config = {"frozen": True}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SelectedCollection):
            return NotImplemented
        return self.path == other.path

    def __hash__(self) -> int:
        return hash(self.path)
