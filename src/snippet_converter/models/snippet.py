"""Pydantic models for exported Alfred snippets."""

from pydantic import BaseModel, Field, StrictStr


class AlfredSnippet(BaseModel):
    """A single snippet as exported by Alfred.

    All four fields are required. Values are kept verbatim, including empty
    strings and embedded control characters.
    """

    snippet: StrictStr = Field(description="Expanded phrase text")
    uid: StrictStr = Field(description="Unique snippet identifier")
    name: StrictStr = Field(description="Display name")
    keyword: StrictStr = Field(description="Trigger keyword")

    model_config = {"frozen": True}


class SnippetExport(BaseModel):
    """On-disk wrapper: one JSON file holds one `alfredsnippet` object."""

    alfredsnippet: AlfredSnippet

    model_config = {"frozen": True}
