"""
In-memory listing backend over a synthetic directory tree.

The tree is a nested dict: folder names map to dicts, file names map to their
size in bytes. Volumes are accepted and ignored, and rooted and relative
directories both resolve from the top of the tree. Names match without regard
to case, as on Windows. Every open and release is recorded so callers can
check that listings are released exactly once.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Union

from filespec.listing.matching import NameMatcher
from filespec.listing.types import FileAttrib, ListingEntry, ListingUnavailableError
from filespec.path_spec.parsing import DIR_SEP, parse_spans

Tree = Mapping[str, Union["Tree", int]]


class _MemoryListing:
    def __init__(self, backend: MemoryListingBackend, pattern: str, entries: list[ListingEntry]):
        self._backend = backend
        self._pattern = pattern
        self._entries: Iterator[ListingEntry] | None = iter(entries)

    def next_entry(self) -> ListingEntry | None:
        if self._entries is None:
            return None
        return next(self._entries, None)

    def close(self) -> None:
        if self._entries is None:
            self._backend.redundant_closes += 1
            return
        self._entries = None
        self._backend.released.append(self._pattern)


class MemoryListingBackend:
    """
    Listing backend for a fixed tree. Listings include `.` and `..` records
    first when the pattern matches them, as the Windows listing API does.

    `unreachable` names directories (as written in patterns, e.g. `"net\\"`)
    whose listings fail as offline network shares.
    """

    def __init__(
        self,
        tree: Tree,
        *,
        dot_entries: bool = True,
        unreachable: frozenset[str] = frozenset(),
    ) -> None:
        self.tree = tree
        self.dot_entries = dot_entries
        self.unreachable = unreachable
        self.opened: list[str] = []
        self.released: list[str] = []
        self.failed: list[str] = []
        self.redundant_closes = 0

    @property
    def open_handles(self) -> int:
        return len(self.opened) - len(self.released)

    def open_listing(self, pattern: str) -> _MemoryListing:
        spans = parse_spans(pattern)
        directory = pattern[spans.vol_end : spans.dir_end]
        name_pattern = pattern[spans.dir_end :]

        if directory in self.unreachable:
            self.failed.append(pattern)
            raise ListingUnavailableError(pattern, network_unreachable=True)
        folder = self._find_folder(directory)
        if folder is None or not name_pattern:
            self.failed.append(pattern)
            raise ListingUnavailableError(pattern)

        matcher = NameMatcher(name_pattern)
        entries: list[ListingEntry] = []
        if self.dot_entries:
            for dot in (".", ".."):
                if matcher.matches(dot):
                    entries.append(ListingEntry(dot, FileAttrib(is_folder=True)))
        for name, value in folder.items():
            if not matcher.matches(name):
                continue
            if isinstance(value, Mapping):
                entries.append(ListingEntry(name, FileAttrib(is_folder=True)))
            else:
                entries.append(ListingEntry(name, FileAttrib(is_folder=False, size=value)))

        self.opened.append(pattern)
        return _MemoryListing(self, pattern, entries)

    def path_exists(self, path: str) -> bool:
        try:
            listing = self.open_listing(path)
        except ListingUnavailableError:
            return False
        try:
            return listing.next_entry() is not None
        finally:
            listing.close()

    def _find_folder(self, directory: str) -> Tree | None:
        stack: list[Tree] = [self.tree]
        for part in directory.split(DIR_SEP):
            if part in ("", "."):
                continue
            if part == "..":
                if len(stack) == 1:
                    return None
                stack.pop()
                continue
            child = _lookup(stack[-1], part)
            if not isinstance(child, Mapping):
                return None
            stack.append(child)
        return stack[-1]


def _lookup(folder: Tree, name: str) -> Tree | int | None:
    """Child of `folder` by name, ignoring case as Windows does."""
    if name in folder:
        return folder[name]
    folded = name.casefold()
    for key, value in folder.items():
        if key.casefold() == folded:
            return value
    return None
