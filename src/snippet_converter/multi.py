"""Conversion of several snippet collections in one run.

Two output strategies are supported:

- merge: every collection goes into one plist; keywords are prefixed with
  the collection name so triggers from different collections do not clash.
- separate: one plist per collection, named after the collection.

Collections are processed in input order. The first failure stops the run;
files already written for earlier collections are left in place.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from .converter import ConversionResult, prepare_output
from .decoder import decode_directory
from .inputs import SnippetInputHandler, cleanup_quietly, create_handlers
from .metadata import create_collection_metadata
from .models.collection import CollectionMetadata

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_EXTENSION = "plist"


@dataclass(frozen=True)
class MergeStrategy:
    """Write all collections into `file_name`."""

    file_name: str
    prefix_keywords: bool = True


@dataclass(frozen=True)
class SeparateStrategy:
    """Write each collection to `<base>-<collection>.<ext>`."""

    base_file_name: str


OutputStrategy = Union[MergeStrategy, SeparateStrategy]


def separate_file_name(base_file_name: str, collection_name: str) -> str:
    """Build the per-collection file name, defaulting the extension to plist."""
    base, ext = os.path.splitext(base_file_name)
    extension = ext[1:] if ext else DEFAULT_OUTPUT_EXTENSION
    return f"{base}-{collection_name}.{extension}"


class MultiSnippetConverter:
    """Convert several snippet directories/archives with one output strategy."""

    def __init__(
        self,
        input_paths: list[str],
        output_strategy: OutputStrategy,
        output_destination: Union[str, Path] = "~/Desktop/",
        escape_markup: bool = False,
    ):
        self.input_paths = [str(path) for path in input_paths]
        self.output_strategy = output_strategy
        self.output_destination = str(output_destination)
        self.escape_markup = escape_markup

    def run(self) -> ConversionResult:
        handlers = create_handlers(self.input_paths)
        try:
            collections = [
                create_collection_metadata(path, handler)
                for path, handler in zip(self.input_paths, handlers)
            ]

            if isinstance(self.output_strategy, MergeStrategy):
                return self._run_merge(handlers, collections, self.output_strategy)
            if isinstance(self.output_strategy, SeparateStrategy):
                return self._run_separate(handlers, collections, self.output_strategy)
            raise TypeError(f"Unknown output strategy: {self.output_strategy!r}")
        finally:
            for handler in handlers:
                cleanup_quietly(handler)

    def _run_merge(
        self,
        handlers: list[SnippetInputHandler],
        collections: list[CollectionMetadata],
        strategy: MergeStrategy,
    ) -> ConversionResult:
        writer = prepare_output(
            self.output_destination,
            strategy.file_name,
            escape_markup=self.escape_markup,
        )
        result = ConversionResult(output_files=[writer.output_path])

        writer.write_header()
        for handler, metadata in zip(handlers, collections):
            snippets = decode_directory(handler.prepare_input())
            prefix = metadata.collection_name if strategy.prefix_keywords else None
            result.snippets_written += writer.write_snippets(snippets, prefix)
            result.collections.append(metadata.collection_name)
            logger.debug(f"Merged {len(snippets)} snippet(s) from {metadata.collection_name}")
        writer.write_footer()

        logger.info(
            f"Merged {result.snippets_written} snippet(s) from {len(collections)} "
            f"collection(s) into {writer.output_path}"
        )
        return result

    def _run_separate(
        self,
        handlers: list[SnippetInputHandler],
        collections: list[CollectionMetadata],
        strategy: SeparateStrategy,
    ) -> ConversionResult:
        result = ConversionResult()

        for handler, metadata in zip(handlers, collections):
            file_name = separate_file_name(strategy.base_file_name, metadata.collection_name)
            writer = prepare_output(
                self.output_destination,
                file_name,
                escape_markup=self.escape_markup,
            )
            result.output_files.append(writer.output_path)

            snippets = decode_directory(handler.prepare_input())
            result.snippets_written += writer.write_document(snippets)
            result.collections.append(metadata.collection_name)

        return result
