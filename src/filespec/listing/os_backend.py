"""Listing backend over the host filesystem, built on `os.scandir()`."""

from __future__ import annotations

import errno
import logging
import os
from collections.abc import Iterator

from filespec.listing.matching import NameMatcher
from filespec.listing.types import FileAttrib, ListingEntry, ListingUnavailableError
from filespec.path_spec.parsing import DIR_SEP, parse_spans
from filespec.path_spec.validation import bad_name_chars

log = logging.getLogger(__name__)

# Windows error codes for shares that can't be reached.
_NETWORK_WINERRORS = frozenset({51, 53, 67})  # REM_NOT_LIST, BAD_NETPATH, BAD_NET_NAME
_NETWORK_ERRNOS = frozenset(
    {errno.ENETUNREACH, errno.ENETDOWN, errno.EHOSTUNREACH, errno.EHOSTDOWN}
)


def _is_network_error(e: OSError) -> bool:
    if getattr(e, "winerror", None) in _NETWORK_WINERRORS:
        return True
    return e.errno in _NETWORK_ERRNOS


def to_host_dir(volume: str, directory: str) -> str | None:
    """
    Map the volume and directory of a spec to a host directory path, or `None`
    if the host can't represent it (a drive letter on a non-Windows host).
    """
    if volume and os.name != "nt":
        return None
    host = volume + directory.replace(DIR_SEP, os.sep)
    return host or os.curdir


class _ScandirListing:
    def __init__(self, entries: Iterator[os.DirEntry[str]], matcher: NameMatcher) -> None:
        self._entries: Iterator[os.DirEntry[str]] | None = entries
        self._matcher = matcher

    def next_entry(self) -> ListingEntry | None:
        if self._entries is None:
            return None
        for entry in self._entries:
            if not self._matcher.matches(entry.name):
                continue
            if bad_name_chars(entry.name, allow_wildcards=False):
                log.warning("Skipping entry not representable as a path spec: %r", entry.name)
                continue
            return ListingEntry(entry.name, _read_attrib(entry))
        return None

    def close(self) -> None:
        if self._entries is not None:
            self._entries.close()  # pyright: ignore[reportAttributeAccessIssue]
            self._entries = None


def _read_attrib(entry: os.DirEntry[str]) -> FileAttrib:
    """Folder flag and size from a scandir record. Symbolic links are not followed."""
    try:
        if entry.is_dir(follow_symlinks=False):
            return FileAttrib(is_folder=True, size=0)
        return FileAttrib(is_folder=False, size=entry.stat(follow_symlinks=False).st_size)
    except OSError:
        return FileAttrib()


class OsListingBackend:
    """
    Lists the host filesystem. The final segment of a pattern is matched
    against the names in its parent directory; earlier segments are literal.
    """

    def open_listing(self, pattern: str) -> _ScandirListing:
        spans = parse_spans(pattern)
        name_pattern = pattern[spans.dir_end :]
        host_dir = to_host_dir(pattern[: spans.vol_end], pattern[spans.vol_end : spans.dir_end])
        if not name_pattern or host_dir is None:
            raise ListingUnavailableError(pattern)
        try:
            entries = os.scandir(host_dir)
        except OSError as e:
            raise ListingUnavailableError(
                pattern, network_unreachable=_is_network_error(e)
            ) from e
        log.debug("Opened listing %s (host directory %s)", pattern, host_dir)
        return _ScandirListing(entries, NameMatcher(name_pattern))

    def path_exists(self, path: str) -> bool:
        try:
            listing = self.open_listing(path)
        except ListingUnavailableError:
            return False
        try:
            return listing.next_entry() is not None
        finally:
            listing.close()
