"""Tests for the single-level directory enumerator."""

from __future__ import annotations

import gc
from pathlib import Path

import pytest

from filespec.listing import (
    DirectoryEnumerator,
    EnumeratorState,
    EnumeratorStateError,
    FileAttrib,
    MemoryListingBackend,
)
from filespec.path_spec import FileSpec


def _tree() -> dict:
    return {
        "README.md": 7,
        "src": {
            "main.cpp": 120,
            "util.cpp": 40,
            "util.h": 10,
            "lib": {"x.cpp": 5},
        },
        "empty": {},
    }


def test_lists_matching_entries():
    backend = MemoryListingBackend(_tree())
    names = [entry.spec.full_path for entry in DirectoryEnumerator("src\\*.cpp", backend)]
    assert names == ["src\\main.cpp", "src\\util.cpp"]


def test_cursor_protocol():
    backend = MemoryListingBackend(_tree())
    cursor = DirectoryEnumerator(FileSpec("src\\*.cpp"), backend)
    assert cursor.state is EnumeratorState.positioned
    assert cursor.has_current()
    assert cursor.current() == FileSpec("src\\main.cpp")
    assert cursor.current_attributes() == FileAttrib(is_folder=False, size=120)

    assert cursor.advance() is cursor
    assert cursor.current().file == "util.cpp"

    cursor.advance()
    assert not cursor.has_current()
    assert cursor.state is EnumeratorState.exhausted
    with pytest.raises(EnumeratorStateError):
        cursor.current()
    with pytest.raises(EnumeratorStateError):
        cursor.current_attributes()
    with pytest.raises(EnumeratorStateError):
        cursor.advance()


def test_never_yields_dot_entries():
    backend = MemoryListingBackend(_tree())
    names = [entry.spec.file for entry in DirectoryEnumerator("src\\*", backend)]
    assert names == ["main.cpp", "util.cpp", "util.h", "lib"]
    assert "." not in names and ".." not in names


def test_directory_with_only_dot_entries_is_empty():
    backend = MemoryListingBackend(_tree())
    cursor = DirectoryEnumerator("empty\\*", backend)
    assert not cursor.has_current()
    assert cursor.network_available
    assert backend.opened == ["empty\\*"]
    assert backend.released == ["empty\\*"]


def test_folder_attributes_come_from_the_listing():
    backend = MemoryListingBackend(_tree())
    entries = {entry.spec.file: entry for entry in DirectoryEnumerator("src\\*", backend)}
    assert entries["lib"].is_folder
    assert entries["lib"].attrib.size == 0
    assert not entries["util.h"].is_folder
    assert entries["util.h"].attrib.size == 10


def test_trailing_separator_is_stripped():
    backend = MemoryListingBackend(_tree())
    cursor = DirectoryEnumerator("src\\", backend)
    assert backend.opened == ["src"]
    assert cursor.pattern == FileSpec("src")
    assert cursor.current() == FileSpec("src")
    assert cursor.current_attributes().is_folder


def test_volume_and_directory_come_from_the_pattern():
    backend = MemoryListingBackend(_tree())
    cursor = DirectoryEnumerator("c:\\src\\*.h", backend)
    assert cursor.current().full_path == "c:\\src\\util.h"
    assert cursor.current().volume == "c:"


def test_missing_directory():
    backend = MemoryListingBackend(_tree())
    cursor = DirectoryEnumerator("nope\\*", backend)
    assert not cursor.has_current()
    assert cursor.state is EnumeratorState.exhausted
    assert cursor.network_available
    assert list(cursor) == []
    assert backend.failed == ["nope\\*"]
    assert backend.opened == []


def test_unreachable_network_share():
    backend = MemoryListingBackend({"net": {"a.txt": 1}}, unreachable=frozenset({"net\\"}))
    cursor = DirectoryEnumerator("net\\*", backend)
    assert not cursor.has_current()
    assert not cursor.network_available


def test_releases_listing_once_when_exhausted():
    backend = MemoryListingBackend(_tree())
    cursor = DirectoryEnumerator("src\\*", backend)
    assert backend.open_handles == 1
    entries = list(cursor)
    assert len(entries) == 4
    assert backend.open_handles == 0
    cursor.close()
    cursor.close()
    assert backend.released == ["src\\*"]
    assert backend.redundant_closes == 0


def test_releases_listing_on_close_and_context_exit():
    backend = MemoryListingBackend(_tree())
    with DirectoryEnumerator("src\\*", backend) as cursor:
        assert cursor.has_current()
        assert backend.open_handles == 1
    assert backend.open_handles == 0
    assert not cursor.has_current()

    cursor = DirectoryEnumerator("src\\*", backend)
    cursor.close()
    assert backend.open_handles == 0
    assert backend.redundant_closes == 0


def test_releases_listing_on_garbage_collection():
    backend = MemoryListingBackend(_tree())
    cursor = DirectoryEnumerator("src\\*", backend)
    assert backend.open_handles == 1
    del cursor
    gc.collect()
    assert backend.open_handles == 0
    assert backend.released == ["src\\*"]


def test_no_match_releases_listing():
    backend = MemoryListingBackend(_tree())
    cursor = DirectoryEnumerator("src\\*.py", backend)
    assert not cursor.has_current()
    assert backend.opened == ["src\\*.py"]
    assert backend.released == ["src\\*.py"]


def test_host_listing(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    (tmp_path / "a.txt").write_text("hello")
    (tmp_path / "b.txt").write_text("hi")
    (tmp_path / "c.md").write_text("# c")
    (tmp_path / "sub.txt").mkdir()
    monkeypatch.chdir(tmp_path)

    entries = {entry.spec.full_path: entry.attrib for entry in DirectoryEnumerator("*.txt")}
    assert entries == {
        "a.txt": FileAttrib(is_folder=False, size=5),
        "b.txt": FileAttrib(is_folder=False, size=2),
        "sub.txt": FileAttrib(is_folder=True, size=0),
    }


def test_host_listing_absolute(tmp_path: Path):
    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "guide.md").write_text("# Guide")
    pattern = FileSpec.from_path(docs / "*.md")

    cursor = DirectoryEnumerator(pattern)
    assert cursor.current().file == "guide.md"
    assert cursor.current().directory == pattern.directory


def test_host_listing_missing_directory(tmp_path: Path):
    cursor = DirectoryEnumerator(FileSpec.from_path(tmp_path / "missing" / "*"))
    assert not cursor.has_current()
    assert cursor.network_available
