"""Collection metadata: display names and snippet counts per input."""

import logging
import os
import re
from pathlib import Path
from typing import Union

from .decoder import count_snippet_files
from .inputs import SnippetInputHandler, determine_input_type, expand_path
from .models.collection import CollectionMetadata, InputType, SelectedCollection

logger = logging.getLogger(__name__)

DEFAULT_COLLECTION_NAME = "Collection"

_INVALID_NAME_CHARS = re.compile(r'[\\/:*?"<>|]')


def sanitize_collection_name(name: str) -> str:
    """Replace characters that are unsafe in file names with underscores."""
    return _INVALID_NAME_CHARS.sub("_", name)


def derive_collection_name(original_path: Union[str, Path], input_type: InputType) -> str:
    """Directory name, or archive file name without its extension."""
    expanded = Path(os.path.abspath(expand_path(original_path)))
    if input_type == InputType.DIRECTORY:
        name = expanded.name
    elif input_type == InputType.ARCHIVE:
        name = expanded.stem
    else:
        name = DEFAULT_COLLECTION_NAME
    return sanitize_collection_name(name) or DEFAULT_COLLECTION_NAME


def create_collection_metadata(
    original_path: Union[str, Path],
    handler: SnippetInputHandler,
) -> CollectionMetadata:
    """Resolve `handler` and describe the collection it contains."""
    directory = handler.prepare_input()
    snippet_count = count_snippet_files(directory)
    input_type = determine_input_type(original_path)

    metadata = CollectionMetadata(
        source_path=str(original_path),
        collection_name=derive_collection_name(original_path, input_type),
        snippet_count=snippet_count,
    )
    logger.debug(
        f"Collection {metadata.collection_name!r}: {snippet_count} snippet(s) from {original_path}"
    )
    return metadata


def describe_inputs(paths: list[str]) -> list[SelectedCollection]:
    """Describe inputs without extracting archives.

    Directory counts come from a listing; archive counts are left unknown.
    Repeated paths are listed once.
    """
    selections: list[SelectedCollection] = []
    for path in paths:
        input_type = determine_input_type(path)
        snippet_count = None
        if input_type == InputType.DIRECTORY:
            snippet_count = count_snippet_files(expand_path(path))

        selection = SelectedCollection(
            path=str(path),
            display_name=derive_collection_name(path, input_type),
            input_type=input_type,
            snippet_count=snippet_count,
        )
        if selection not in selections:
            selections.append(selection)
    return selections
