"""Single-input snippet conversion."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from .decoder import decode_directory
from .errors import FileAlreadyExists, InvalidOutputFileType, UnsupportedInputFormat
from .inputs import (
    SnippetInputHandler,
    cleanup_quietly,
    create_handler,
    determine_input_type,
    expand_path,
)
from .metadata import derive_collection_name
from .writer import PropertyListWriter

logger = logging.getLogger(__name__)

OUTPUT_FILE_SUFFIX = ".plist"


@dataclass
class ConversionResult:
    """Summary of a conversion run."""

    output_files: list[Path] = field(default_factory=list)
    collections: list[str] = field(default_factory=list)
    snippets_written: int = 0


def validate_output_file_name(file_name: str) -> None:
    if not file_name.endswith(OUTPUT_FILE_SUFFIX):
        raise InvalidOutputFileType(file_name)


def resolve_output_path(output_destination: Union[str, Path], file_name: str) -> Path:
    return expand_path(output_destination) / file_name


def prepare_output(
    output_destination: Union[str, Path],
    file_name: str,
    escape_markup: bool = False,
) -> PropertyListWriter:
    """Validate the target name, refuse to overwrite, and create the empty file."""
    validate_output_file_name(file_name)

    output_path = resolve_output_path(output_destination, file_name)
    if output_path.exists():
        raise FileAlreadyExists(output_path)

    writer = PropertyListWriter(output_path, escape_markup=escape_markup)
    writer.create()
    return writer


class SnippetConverter:
    """Convert one snippet directory or archive into one plist.

    The output file is created before the input is read, so a failed run can
    leave an empty or partial file behind.
    """

    def __init__(
        self,
        input_path: Optional[Union[str, Path]] = None,
        output_destination: Union[str, Path] = "~/Desktop/",
        output_file_name: str = "snippet-converter-output.plist",
        input_handler: Optional[SnippetInputHandler] = None,
        escape_markup: bool = False,
    ):
        self.input_path = str(input_path) if input_path is not None else None
        self.input_handler = input_handler
        self.output_destination = str(output_destination)
        self.output_file_name = output_file_name
        self.escape_markup = escape_markup

    @property
    def output_path(self) -> Path:
        return resolve_output_path(self.output_destination, self.output_file_name)

    def _create_input_handler(self) -> SnippetInputHandler:
        if self.input_handler is not None:
            return self.input_handler
        if self.input_path is not None:
            return create_handler(self.input_path)
        raise UnsupportedInputFormat()

    def _collection_names(self) -> list[str]:
        if self.input_path is None:
            return []
        return [derive_collection_name(self.input_path, determine_input_type(self.input_path))]

    def run(self) -> ConversionResult:
        writer = prepare_output(
            self.output_destination,
            self.output_file_name,
            escape_markup=self.escape_markup,
        )

        handler = self._create_input_handler()
        try:
            directory = handler.prepare_input()
            snippets = decode_directory(directory)
            count = writer.write_document(snippets)
        finally:
            cleanup_quietly(handler)

        logger.info(f"Converted {count} snippet(s) into {writer.output_path}")
        return ConversionResult(
            output_files=[writer.output_path],
            collections=self._collection_names(),
            snippets_written=count,
        )
