"""Property list writer for macOS text replacements.

The document is built by appending: header once, one entry per snippet,
footer once. Each append opens the file, writes UTF-8 text and closes it.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from .errors import FileAlreadyExists
from .models.snippet import AlfredSnippet

logger = logging.getLogger(__name__)

PLIST_HEADER = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<!DOCTYPE plist PUBLIC "-//Apple//DTD PLIST 1.0//EN" '
    '"http://www.apple.com/DTDs/PropertyList-1.0.dtd">\n'
    '<plist version="1.0">\n'
    "<array>\n"
)

PLIST_FOOTER = "</array>\n</plist>\n"

ENTRY_TEMPLATE = (
    "<dict>\n"
    "    <key>phrase</key>\n"
    "    <string>{phrase}</string>\n"
    "    <key>shortcut</key>\n"
    "    <string>:{shortcut}</string>\n"
    "</dict>\n"
)


def escape_markup(text: str) -> str:
    """Escape the characters that break the surrounding XML."""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def build_shortcut(keyword: str, collection_name: Optional[str] = None) -> str:
    if collection_name is not None:
        return f"{collection_name}_{keyword}"
    return keyword


def render_entry(
    snippet: AlfredSnippet,
    collection_name: Optional[str] = None,
    escape: bool = False,
) -> str:
    """Render one snippet as a phrase/shortcut dict.

    Text is embedded verbatim unless `escape` is set.
    """
    phrase = snippet.snippet
    shortcut = build_shortcut(snippet.keyword, collection_name)
    if escape:
        phrase = escape_markup(phrase)
        shortcut = escape_markup(shortcut)
    return ENTRY_TEMPLATE.format(phrase=phrase, shortcut=shortcut)


class PropertyListWriter:
    """Append-only writer for one output plist."""

    def __init__(self, output_path: Union[str, Path], escape_markup: bool = False):
        self.output_path = Path(output_path)
        self.escape_markup = escape_markup
        self.entries_written = 0

    def create(self) -> None:
        """Create the empty output file. Never overwrites an existing file."""
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            with open(self.output_path, "x", encoding="utf-8", newline=""):
                pass
        except FileExistsError as e:
            raise FileAlreadyExists(self.output_path) from e
        logger.debug(f"Created output file {self.output_path}")

    def append(self, text: str) -> None:
        with open(self.output_path, "a", encoding="utf-8", newline="") as f:
            f.write(text)

    def write_header(self) -> None:
        self.append(PLIST_HEADER)

    def write_footer(self) -> None:
        self.append(PLIST_FOOTER)

    def write_snippet(self, snippet: AlfredSnippet, collection_name: Optional[str] = None) -> None:
        self.append(render_entry(snippet, collection_name, escape=self.escape_markup))
        self.entries_written += 1

    def write_snippets(
        self,
        snippets: Iterable[AlfredSnippet],
        collection_name: Optional[str] = None,
    ) -> int:
        count = 0
        for snippet in snippets:
            self.write_snippet(snippet, collection_name)
            count += 1
        return count

    def write_document(
        self,
        snippets: Iterable[AlfredSnippet],
        collection_name: Optional[str] = None,
    ) -> int:
        """Write header, entries and footer. Returns the number of entries written."""
        self.write_header()
        count = self.write_snippets(snippets, collection_name)
        self.write_footer()
        logger.info(f"Wrote {count} snippet(s) to {self.output_path}")
        return count
