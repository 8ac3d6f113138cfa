"""Listing backend protocol and the value types it produces."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from filespec.path_spec import FileSpec


@dataclass(frozen=True)
class FileAttrib:
    """Attributes read straight from a listing record."""

    is_folder: bool = False
    size: int = 0


@dataclass(frozen=True)
class ListingEntry:
    """One raw record from a directory listing: a bare name plus attributes."""

    name: str
    attrib: FileAttrib


@dataclass(frozen=True)
class DirectoryEntry:
    """A listing record resolved to a full spec (volume + directory + name)."""

    spec: FileSpec
    attrib: FileAttrib

    @property
    def is_folder(self) -> bool:
        return self.attrib.is_folder


class ListingUnavailableError(OSError):
    """
    A directory listing could not be opened. `network_unreachable` is set when
    the path is on a network share that is offline, as opposed to a path that
    simply doesn't exist or can't be read.
    """

    def __init__(self, pattern: str, *, network_unreachable: bool = False) -> None:
        what = "network path unavailable" if network_unreachable else "cannot list"
        super().__init__(f"{what}: {pattern}")
        self.pattern = pattern
        self.network_unreachable = network_unreachable


class Listing(Protocol):
    """An open listing handle. `close()` must be safe to call more than once."""

    def next_entry(self) -> ListingEntry | None: ...

    def close(self) -> None: ...


class ListingBackend(Protocol):
    """Directory listing primitives the enumerator is built on."""

    def open_listing(self, pattern: str) -> Listing:
        """
        Open a listing of the names matching the final segment of `pattern`.
        Raises `ListingUnavailableError` if the directory can't be read.
        """
        ...

    def path_exists(self, path: str) -> bool: ...
