"""Exceptions raised by the snippet conversion pipeline."""

from pathlib import Path
from typing import Union


class SnippetConverterError(Exception):
    """Base class for all conversion errors."""

    pass


# Input errors

class DirectoryNotFound(SnippetConverterError):
    def __init__(self, path: Union[str, Path]):
        self.path = str(path)
        super().__init__(f"Directory not found: {self.path}")


class ZipFileNotFound(SnippetConverterError):
    def __init__(self, path: Union[str, Path]):
        self.path = str(path)
        super().__init__(f"Snippet archive not found: {self.path}")


class InvalidZipFile(SnippetConverterError):
    def __init__(self, path: Union[str, Path]):
        self.path = str(path)
        super().__init__(f"\"{self.path}\" is not a valid .alfredsnippets archive.")


class UnsupportedInputFormat(SnippetConverterError):
    def __init__(self, path: Union[str, Path, None] = None):
        self.path = str(path) if path is not None else None
        if self.path:
            message = (
                f"Unsupported input: \"{self.path}\". Provide a directory containing "
                "JSON files or an .alfredsnippets file."
            )
        else:
            message = "Unsupported input format."
        super().__init__(message)


class NoInputPathsProvided(SnippetConverterError):
    def __init__(self):
        super().__init__("No input paths were provided.")


class DuplicateInputPaths(SnippetConverterError):
    def __init__(self, duplicates: list[str] | None = None):
        self.duplicates = duplicates or []
        detail = f": {', '.join(self.duplicates)}" if self.duplicates else ""
        super().__init__(f"The same input was provided more than once{detail}")


# Extraction errors

class ExtractionError(SnippetConverterError):
    """Raised when the archive could not be unpacked."""

    pass


class TemporaryDirectoryCreationFailed(SnippetConverterError):
    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"Failed to create a temporary directory: {cause}")


class ZipExtractionFailed(SnippetConverterError):
    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"Failed to extract snippet archive: {cause}")


class InvalidArchiveContent(SnippetConverterError):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid archive content: {reason}")


class CleanupFailed(SnippetConverterError):
    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"Failed to remove temporary files: {cause}")


# Output errors

class InvalidOutputFileType(SnippetConverterError):
    def __init__(self, file_name: str | None = None):
        self.file_name = file_name
        super().__init__("Output file must be of type `.plist`.")


class FileAlreadyExists(SnippetConverterError):
    def __init__(self, path: Union[str, Path]):
        self.path = str(path)
        super().__init__(f"\"{self.path}\" already exists.")


# Decode errors

class SnippetDecodeError(SnippetConverterError):
    def __init__(self, path: Union[str, Path], reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Exported data in \"{self.path}\" has an invalid format: {reason}")
