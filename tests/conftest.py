"""Pytest fixtures for Snippet Converter tests."""

import json
import tempfile
import uuid
import zipfile
from pathlib import Path

import pytest


def snippet_payload(keyword: str, snippet: str, name: str | None = None, uid: str | None = None) -> dict:
    """Build the JSON structure Alfred writes for one snippet."""
    return {
        "alfredsnippet": {
            "snippet": snippet,
            "uid": uid or str(uuid.uuid4()),
            "name": name or keyword,
            "keyword": keyword,
        }
    }


INFO_PLIST = """<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE plist PUBLIC "-//Apple//DTD PLIST 1.0//EN" "http://www.apple.com/DTDs/PropertyList-1.0.dtd">
<plist version="1.0">
<dict>
    <key>snippetkeywordprefix</key>
    <string></string>
</dict>
</plist>
"""


@pytest.fixture(autouse=True)
def temp_root(tmp_path, monkeypatch):
    """Point tempfile at a private directory so extraction dirs can be counted.

    Returns:
        Path to the temp root used by the code under test
    """
    root = tmp_path / "system_tmp"
    root.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(root))
    return root


@pytest.fixture
def output_dir(tmp_path):
    """Empty output directory."""
    path = tmp_path / "output"
    path.mkdir()
    return path


@pytest.fixture
def make_collection(tmp_path):
    """Factory for snippet directories.

    Args (of the returned callable):
        name: Directory name
        snippets: List of (keyword, snippet) tuples or full payload dicts
        extra_files: Optional mapping of file name to text content
    """
    def _make(name: str, snippets=(), extra_files: dict | None = None) -> Path:
        directory = tmp_path / "collections" / name
        directory.mkdir(parents=True)
        for i, item in enumerate(snippets):
            payload = item if isinstance(item, dict) else snippet_payload(*item)
            keyword = payload["alfredsnippet"]["keyword"] if "alfredsnippet" in payload else f"item{i}"
            file_path = directory / f"{keyword or 'empty'} [{i}].json"
            file_path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
        for file_name, content in (extra_files or {}).items():
            (directory / file_name).write_text(content, encoding="utf-8")
        return directory

    return _make


@pytest.fixture
def make_archive(tmp_path):
    """Factory for .alfredsnippets archives.

    Args (of the returned callable):
        name: Archive file name (extension included)
        snippets: List of (keyword, snippet) tuples
        include_manifest: Whether to add info.plist
        extra_files: Optional mapping of member name to text content
    """
    def _make(
        name: str,
        snippets=(),
        include_manifest: bool = True,
        extra_files: dict | None = None,
    ) -> Path:
        archive_dir = tmp_path / "archives"
        archive_dir.mkdir(exist_ok=True)
        archive_path = archive_dir / name
        with zipfile.ZipFile(archive_path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for i, (keyword, snippet) in enumerate(snippets):
                payload = snippet_payload(keyword, snippet)
                archive.writestr(f"{keyword} [{i}].json", json.dumps(payload, ensure_ascii=False))
            if include_manifest:
                archive.writestr("info.plist", INFO_PLIST)
            for member, content in (extra_files or {}).items():
                archive.writestr(member, content)
        return archive_path

    return _make
