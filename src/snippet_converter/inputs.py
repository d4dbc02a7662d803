"""Input classification and input handlers.

Every accepted input is normalized to a readable directory of snippet JSON
files. Directories are used in place; .alfredsnippets archives are extracted
into a private temporary directory that the handler removes on cleanup.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Protocol, Union

from .archive import (
    create_temporary_directory,
    extract_archive,
    is_archive,
    remove_directory,
    validate_extracted_content,
)
from .errors import (
    CleanupFailed,
    DirectoryNotFound,
    DuplicateInputPaths,
    InvalidZipFile,
    NoInputPathsProvided,
    UnsupportedInputFormat,
    ZipExtractionFailed,
    ZipFileNotFound,
)
from .models.collection import InputType

logger = logging.getLogger(__name__)

SNIPPET_ARCHIVE_EXTENSION = ".alfredsnippets"


def expand_path(path: Union[str, Path]) -> Path:
    """Expand a leading `~` without resolving symlinks."""
    return Path(os.path.expanduser(str(path)))


def determine_input_type(path: Union[str, Path]) -> InputType:
    """Classify `path` as a snippet directory, a snippet archive, or unsupported.

    Archives are recognized by extension alone; whether the file exists is
    checked later by the handler.
    """
    expanded = expand_path(path)

    if expanded.suffix.lower() == SNIPPET_ARCHIVE_EXTENSION:
        return InputType.ARCHIVE
    if expanded.is_dir():
        return InputType.DIRECTORY
    return InputType.UNSUPPORTED


class SnippetInputHandler(Protocol):
    """Resolves an input into a directory of snippet files."""

    def prepare_input(self) -> Path:
        ...

    def cleanup(self) -> None:
        ...


class DirectoryInputHandler:
    """Input handler for an already-extracted snippet directory."""

    def __init__(self, directory_path: Union[str, Path]):
        self.directory_path = str(directory_path)

    def prepare_input(self) -> Path:
        expanded = expand_path(self.directory_path)

        if not expanded.exists():
            raise DirectoryNotFound(expanded)
        if not expanded.is_dir():
            raise UnsupportedInputFormat(expanded)

        return expanded

    def cleanup(self) -> None:
        # Nothing to release; the directory belongs to the caller.
        pass

    def __enter__(self) -> Path:
        return self.prepare_input()

    def __exit__(self, exc_type, exc, tb):
        self.cleanup()
        return False

    def __repr__(self) -> str:
        return f"DirectoryInputHandler({self.directory_path!r})"


class ArchiveInputHandler:
    """Input handler for an .alfredsnippets archive.

    Owns at most one temporary extraction directory between `prepare_input()`
    and `cleanup()`. Repeated `prepare_input()` calls reuse the extracted
    directory.
    """

    def __init__(self, archive_path: Union[str, Path]):
        self.archive_path = str(archive_path)
        self.temporary_directory: Optional[Path] = None
        self._prepared = False

    def prepare_input(self) -> Path:
        if self._prepared and self.temporary_directory is not None:
            return self.temporary_directory

        expanded = expand_path(self.archive_path)

        if not expanded.exists():
            raise ZipFileNotFound(expanded)
        if not is_archive(expanded):
            raise InvalidZipFile(expanded)

        self.temporary_directory = create_temporary_directory()

        try:
            extract_archive(expanded, self.temporary_directory)
            validate_extracted_content(self.temporary_directory)
        except Exception as e:
            try:
                self.cleanup()
            except CleanupFailed as cleanup_error:
                logger.warning(f"Could not clean up after failed extraction of {expanded}: {cleanup_error}")
            raise ZipExtractionFailed(e) from e

        self._prepared = True
        logger.info(f"Prepared archive {expanded} in {self.temporary_directory}")
        return self.temporary_directory

    def cleanup(self) -> None:
        if self.temporary_directory is None:
            return

        try:
            remove_directory(self.temporary_directory)
        except OSError as e:
            raise CleanupFailed(e) from e

        self.temporary_directory = None
        self._prepared = False

    def __enter__(self) -> Path:
        return self.prepare_input()

    def __exit__(self, exc_type, exc, tb):
        self.cleanup()
        return False

    def __repr__(self) -> str:
        return f"ArchiveInputHandler({self.archive_path!r})"


def _validate_directory(path: str) -> None:
    expanded = expand_path(path)
    if not expanded.exists():
        raise DirectoryNotFound(expanded)
    if not expanded.is_dir():
        raise UnsupportedInputFormat(expanded)


def _validate_archive(path: str) -> None:
    expanded = expand_path(path)
    if not expanded.exists():
        raise ZipFileNotFound(expanded)
    if not is_archive(expanded):
        raise InvalidZipFile(expanded)


def check_for_duplicates(paths: list[str]) -> None:
    """Raise DuplicateInputPaths if any two paths name the same input (after `~` expansion)."""
    seen: set[str] = set()
    duplicates: list[str] = []
    for path in paths:
        key = str(expand_path(path))
        if key in seen and path not in duplicates:
            duplicates.append(path)
        seen.add(key)
    if duplicates:
        raise DuplicateInputPaths(duplicates)


def validate_inputs(paths: list[str]) -> None:
    """Validate a list of inputs before any conversion work starts.

    Emptiness and duplicates are checked before touching the filesystem.
    """
    if not paths:
        raise NoInputPathsProvided()

    check_for_duplicates(paths)

    input_types = [determine_input_type(path) for path in paths]
    for path, input_type in zip(paths, input_types):
        if input_type == InputType.UNSUPPORTED:
            raise UnsupportedInputFormat(path)

    for path, input_type in zip(paths, input_types):
        if input_type == InputType.DIRECTORY:
            _validate_directory(path)
        else:
            _validate_archive(path)


def create_handler(path: Union[str, Path]) -> SnippetInputHandler:
    """Build the handler matching the input's classification."""
    input_type = determine_input_type(path)
    if input_type == InputType.DIRECTORY:
        return DirectoryInputHandler(path)
    if input_type == InputType.ARCHIVE:
        return ArchiveInputHandler(path)
    raise UnsupportedInputFormat(path)


def create_handlers(paths: list[str]) -> list[SnippetInputHandler]:
    """Validate all inputs, then build one handler per path (in order)."""
    validate_inputs(paths)
    return [create_handler(path) for path in paths]


def cleanup_quietly(handler: SnippetInputHandler) -> None:
    """Best-effort cleanup: log a failure instead of raising it."""
    try:
        handler.cleanup()
    except CleanupFailed as e:
        logger.warning(f"Cleanup failed for {handler!r}: {e}")
