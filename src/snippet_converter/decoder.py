"""Decoder for Alfred snippet JSON files."""

import json
import logging
from pathlib import Path
from typing import Union

from pydantic import ValidationError

from .errors import SnippetDecodeError
from .models.snippet import AlfredSnippet, SnippetExport

logger = logging.getLogger(__name__)

SNIPPET_FILE_SUFFIX = ".json"


def list_snippet_files(directory: Union[str, Path]) -> list[Path]:
    """List top-level entries whose name ends with `.json`.

    Order follows the filesystem listing. Subdirectories are not descended into.
    """
    directory = Path(directory)
    return [entry for entry in directory.iterdir() if entry.name.endswith(SNIPPET_FILE_SUFFIX)]


def count_snippet_files(directory: Union[str, Path]) -> int:
    return len(list_snippet_files(directory))


def parse_snippet(raw: bytes, source: Union[str, Path] = "<memory>") -> AlfredSnippet:
    """Parse the raw bytes of one snippet file.

    Raises:
        SnippetDecodeError: On invalid UTF-8, malformed JSON, or a missing/mistyped field
    """
    try:
        data = json.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise SnippetDecodeError(source, f"not valid UTF-8 ({e})") from e
    except json.JSONDecodeError as e:
        raise SnippetDecodeError(source, f"malformed JSON ({e})") from e

    if not isinstance(data, dict):
        raise SnippetDecodeError(source, f"expected a JSON object, got {type(data).__name__}")

    try:
        snippet = SnippetExport.model_validate(data).alfredsnippet
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise SnippetDecodeError(source, problems) from e

    # JSON \u escapes can produce lone surrogates that cannot be written as UTF-8
    for field_name, value in snippet.model_dump().items():
        try:
            value.encode("utf-8")
        except UnicodeEncodeError as e:
            raise SnippetDecodeError(
                source, f"alfredsnippet.{field_name}: not encodable as UTF-8 ({e.reason})"
            ) from e

    return snippet


def decode_snippet(path: Union[str, Path]) -> AlfredSnippet:
    """Read and decode one snippet JSON file."""
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise SnippetDecodeError(path, f"could not read file ({e})") from e

    snippet = parse_snippet(raw, source=path)
    logger.debug(f"Decoded snippet {snippet.uid} from {path.name}")
    return snippet


def decode_directory(directory: Union[str, Path]) -> list[AlfredSnippet]:
    """Decode every snippet file in `directory`, stopping at the first failure."""
    return [decode_snippet(path) for path in list_snippet_files(directory)]
