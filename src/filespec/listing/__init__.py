"""
Directory listings: the backend protocol, host and in-memory backends, and the
`DirectoryEnumerator` cursor built on them.

Usage::

    from filespec.listing import DirectoryEnumerator

    for entry in DirectoryEnumerator("docs\\*.md"):
        print(entry.spec, entry.attrib.size)
"""

from filespec.listing.enumerator import (
    DirectoryEnumerator,
    EnumeratorState,
    EnumeratorStateError,
)
from filespec.listing.matching import NameMatcher, compile_excludes
from filespec.listing.memory import MemoryListingBackend
from filespec.listing.os_backend import OsListingBackend
from filespec.listing.types import (
    DirectoryEntry,
    FileAttrib,
    Listing,
    ListingBackend,
    ListingEntry,
    ListingUnavailableError,
)

__all__ = [
    "DirectoryEntry",
    "DirectoryEnumerator",
    "EnumeratorState",
    "EnumeratorStateError",
    "FileAttrib",
    "Listing",
    "ListingBackend",
    "ListingEntry",
    "ListingUnavailableError",
    "MemoryListingBackend",
    "NameMatcher",
    "OsListingBackend",
    "compile_excludes",
]
