"""Tests for collection metadata."""

from snippet_converter.inputs import ArchiveInputHandler, DirectoryInputHandler
from snippet_converter.metadata import (
    create_collection_metadata,
    derive_collection_name,
    describe_inputs,
    sanitize_collection_name,
)
from snippet_converter.models.collection import CollectionMetadata, InputType, SelectedCollection


def test_directory_metadata(make_collection):
    collection = make_collection(
        "Collection1",
        [("test", "Test snippet")],
        extra_files={"notes.txt": "ignored"},
    )
    handler = DirectoryInputHandler(str(collection))

    metadata = CollectionMetadata.create(str(collection), handler)

    assert metadata.collection_name == "Collection1"
    assert metadata.snippet_count == 1
    assert metadata.source_path == str(collection)


def test_archive_metadata_uses_stem(make_archive):
    archive = make_archive("Work Stuff.alfredsnippets", [("a", "A"), ("b", "B"), ("c", "C")])
    handler = ArchiveInputHandler(str(archive))

    try:
        metadata = create_collection_metadata(str(archive), handler)
    finally:
        handler.cleanup()

    assert metadata.collection_name == "Work Stuff"
    assert metadata.snippet_count == 3


def test_sanitize_collection_name():
    assert sanitize_collection_name('a\\b/c:d*e?f"g<h>i|j') == "a_b_c_d_e_f_g_h_i_j"
    assert sanitize_collection_name("Plain Name") == "Plain Name"
    assert sanitize_collection_name("") == ""


def test_metadata_name_is_sanitized(make_collection):
    collection = make_collection("Work: Email?", [("sig", "Regards")])

    metadata = create_collection_metadata(str(collection), DirectoryInputHandler(str(collection)))

    assert metadata.collection_name == "Work_ Email_"


def test_describe_inputs(make_collection, make_archive, tmp_path):
    collection = make_collection("Personal", [("a", "A"), ("b", "B")])
    archive = make_archive("Work.alfredsnippets", [("c", "C")])
    unsupported = tmp_path / "notes.txt"
    unsupported.write_text("")

    selections = describe_inputs([str(collection), str(archive), str(unsupported)])

    assert [s.display_name for s in selections] == ["Personal", "Work", "Collection"]
    assert [s.input_type for s in selections] == [
        InputType.DIRECTORY,
        InputType.ARCHIVE,
        InputType.UNSUPPORTED,
    ]
    assert selections[0].snippet_count == 2
    assert selections[1].snippet_count is None


def test_describe_inputs_does_not_extract(make_archive, temp_root):
    archive = make_archive("Work.alfredsnippets", [("c", "C")])

    describe_inputs([str(archive)])

    assert list(temp_root.iterdir()) == []


def test_describe_inputs_lists_repeated_path_once(make_collection):
    collection = make_collection("Personal", [("a", "A")])

    selections = describe_inputs([str(collection), str(collection)])

    assert len(selections) == 1


def test_selected_collection_identity_is_path():
    first = SelectedCollection(path="/a", display_name="A", input_type=InputType.DIRECTORY, snippet_count=1)
    second = SelectedCollection(path="/a", display_name="Other", input_type=InputType.ARCHIVE)
    third = SelectedCollection(path="/b", display_name="A", input_type=InputType.DIRECTORY, snippet_count=1)

    assert first == second
    assert first != third
    assert len({first, second, third}) == 2


def test_relative_dot_paths_use_directory_name(make_collection, monkeypatch):
    collection = make_collection("Personal", [("a", "A")])
    (collection / "nested").mkdir()
    monkeypatch.chdir(collection / "nested")

    assert derive_collection_name(".", InputType.DIRECTORY) == "nested"
    assert derive_collection_name("..", InputType.DIRECTORY) == "Personal"


def test_filesystem_root_falls_back_to_default_name():
    assert derive_collection_name("/", InputType.DIRECTORY) == "Collection"
