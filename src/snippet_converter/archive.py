"""Archive handling for .alfredsnippets exports.

An .alfredsnippets file is a plain ZIP archive holding one JSON file per
snippet plus an `info.plist` manifest at the top level.
"""

import logging
import shutil
import tempfile
import uuid
import zipfile
from pathlib import Path, PurePosixPath
from typing import Optional, Union

from .errors import ExtractionError, InvalidArchiveContent, TemporaryDirectoryCreationFailed

logger = logging.getLogger(__name__)

ARCHIVE_EXTENSIONS = {".alfredsnippets", ".zip"}
SNIPPET_FILE_SUFFIX = ".json"
MANIFEST_FILE_NAME = "info.plist"
TEMP_DIR_PREFIX = "snippet-converter-"

ZIP_SIGNATURES = (
    b"PK\x03\x04",  # local file header
    b"PK\x05\x06",  # end of central directory
    b"PK\x07\x08",  # data descriptor
)


def is_archive(path: Union[str, Path]) -> bool:
    """Check extension and leading magic bytes without opening the archive."""
    path = Path(path)
    if path.suffix.lower() not in ARCHIVE_EXTENSIONS:
        return False

    try:
        with open(path, "rb") as f:
            header = f.read(4)
    except OSError:
        return False

    if len(header) < 4:
        return False
    return header in ZIP_SIGNATURES


def create_temporary_directory() -> Path:
    """Create a uniquely named directory under the system temp root.

    Raises:
        TemporaryDirectoryCreationFailed: If the directory cannot be created
    """
    candidate = Path(tempfile.gettempdir()) / f"{TEMP_DIR_PREFIX}{uuid.uuid4().hex}"
    try:
        candidate.mkdir(parents=True, exist_ok=False)
    except OSError as e:
        raise TemporaryDirectoryCreationFailed(e) from e
    logger.debug(f"Created temporary directory {candidate}")
    return candidate


def remove_directory(path: Union[str, Path]) -> None:
    """Remove a directory tree. Errors propagate to the caller."""
    shutil.rmtree(path)
    logger.debug(f"Removed directory {path}")


def _safe_member_path(member_name: str) -> Optional[PurePosixPath]:
    """Return a normalized relative member path, or None if it would escape the destination."""
    normalized = member_name.replace("\\", "/")
    member_path = PurePosixPath(normalized)
    if member_path.is_absolute() or ".." in member_path.parts:
        return None
    if member_path.parts and member_path.parts[0].endswith(":"):
        return None
    return member_path


def extract_archive(source: Union[str, Path], destination: Union[str, Path]) -> None:
    """Extract every member of `source` into the existing `destination` directory.

    Raises:
        ExtractionError: With the underlying diagnostic when extraction fails
    """
    source = Path(source)
    destination = Path(destination)

    if not destination.is_dir():
        raise ExtractionError(f"Destination directory does not exist: {destination}")

    try:
        with zipfile.ZipFile(source, "r") as zip_ref:
            for info in zip_ref.infolist():
                if _safe_member_path(info.filename) is None:
                    raise ExtractionError(f"Unsafe member path in archive: {info.filename}")
            zip_ref.extractall(destination)
    except zipfile.BadZipFile as e:
        raise ExtractionError(f"Invalid archive {source}: {e}") from e
    except OSError as e:
        raise ExtractionError(f"Could not extract {source}: {e}") from e

    logger.info(f"Extracted {source} to {destination}")


def validate_extracted_content(directory: Union[str, Path]) -> None:
    """Require snippet JSON files and an info.plist at the top level of `directory`.

    The JSON check runs first, so an archive missing both reports the JSON reason.
    """
    names = [entry.name for entry in Path(directory).iterdir()]

    if not any(name.endswith(SNIPPET_FILE_SUFFIX) for name in names):
        raise InvalidArchiveContent("No JSON snippet files found")
    if MANIFEST_FILE_NAME not in names:
        raise InvalidArchiveContent("No info.plist found")
