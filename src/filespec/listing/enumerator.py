"""
Cursor over the entries of one directory level.

Usage::

    # Every C++ source file in the current folder
    with DirectoryEnumerator(FileSpec("*.cpp")) as entries:
        for entry in entries:
            print(entry.spec, entry.attrib.size)
"""

from __future__ import annotations

import logging
import weakref
from collections.abc import Iterator
from enum import Enum
from types import TracebackType

from filespec.listing.types import (
    DirectoryEntry,
    FileAttrib,
    Listing,
    ListingBackend,
    ListingUnavailableError,
)
from filespec.path_spec import DIR_SEP, FileSpec

log = logging.getLogger(__name__)

_SPECIAL_NAMES = frozenset({".", ".."})


class EnumeratorState(str, Enum):
    """Lifecycle of a `DirectoryEnumerator`."""

    uninitialized = "uninitialized"
    positioned = "positioned"  # holds a current entry
    exhausted = "exhausted"  # no current entry, listing released


class EnumeratorStateError(RuntimeError):
    """The enumerator was asked for an entry while not positioned on one."""


class DirectoryEnumerator:
    """
    Walks the entries matching a pattern such as `src\\*.cpp`, one at a time.

    The enumerator opens its listing on construction and is positioned on the
    first match, if any. `.` and `..` are skipped. A listing that can't be
    opened leaves the enumerator exhausted; `network_available` then tells an
    offline network share apart from a path that doesn't exist.

    The listing handle is released exactly once: when the entries run out, on
    `close()`, or when the enumerator is garbage collected.
    """

    def __init__(self, pattern: FileSpec | str, backend: ListingBackend | None = None) -> None:
        if backend is None:
            from filespec.listing.os_backend import OsListingBackend

            backend = OsListingBackend()
        self._backend: ListingBackend = backend
        self._state = EnumeratorState.uninitialized
        self._listing: Listing | None = None
        self._release: weakref.finalize | None = None
        self._entry: DirectoryEntry | None = None
        self._network_available = True

        spec = pattern if isinstance(pattern, FileSpec) else FileSpec(pattern)
        # Listing APIs reject a trailing directory separator.
        if spec.full_path.endswith(DIR_SEP):
            spec = spec.assign(spec.full_path[:-1])
        self._pattern = spec
        self._volume, self._directory, _ = spec.split()
        self._open()

    @property
    def pattern(self) -> FileSpec:
        return self._pattern

    @property
    def state(self) -> EnumeratorState:
        return self._state

    @property
    def network_available(self) -> bool:
        """False only when the listing failed because a network share was offline."""
        return self._network_available

    def has_current(self) -> bool:
        return self._state is EnumeratorState.positioned

    def current(self) -> FileSpec:
        return self.current_entry().spec

    def current_attributes(self) -> FileAttrib:
        """Attributes from the listing record, without a separate filesystem query."""
        return self.current_entry().attrib

    def current_entry(self) -> DirectoryEntry:
        if self._entry is None:
            raise EnumeratorStateError(f"No current entry ({self._state.value}): {self._pattern}")
        return self._entry

    def advance(self) -> DirectoryEnumerator:
        """Move to the next matching entry, or become exhausted."""
        if self._state is not EnumeratorState.positioned:
            raise EnumeratorStateError(f"Cannot advance ({self._state.value}): {self._pattern}")
        self._next()
        return self

    def close(self) -> None:
        self._close_listing()
        self._entry = None
        self._state = EnumeratorState.exhausted

    def __iter__(self) -> Iterator[DirectoryEntry]:
        while self._entry is not None:
            yield self._entry
            if self._state is EnumeratorState.positioned:
                self._next()

    def __enter__(self) -> DirectoryEnumerator:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _open(self) -> None:
        try:
            listing = self._backend.open_listing(self._pattern.full_path)
        except ListingUnavailableError as e:
            log.debug("Listing unavailable for %s: %s", self._pattern, e)
            self._network_available = not e.network_unreachable
            self._state = EnumeratorState.exhausted
            return
        self._listing = listing
        self._release = weakref.finalize(self, listing.close)
        self._next()

    def _next(self) -> None:
        while self._listing is not None:
            raw = self._listing.next_entry()
            if raw is None:
                break
            if raw.name in _SPECIAL_NAMES:
                continue
            spec = FileSpec.from_parts(self._volume, self._directory, raw.name)
            self._entry = DirectoryEntry(spec, raw.attrib)
            self._state = EnumeratorState.positioned
            return
        self.close()

    def _close_listing(self) -> None:
        if self._release is not None:
            # A finalizer runs its callback at most once.
            self._release()
        self._listing = None
