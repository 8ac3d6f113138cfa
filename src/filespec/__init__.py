"""
Windows-style path specs and recursive directory walks built on them.

Usage::

    from filespec import FileSpec, Mode, for_each

    spec = FileSpec("c:\\src\\main.cpp")
    spec.split_all()  # ("c:", "\\src\\", "main", "cpp")

    for_each("src\\*.cpp", print, Mode.include_subfolders)
"""

from filespec.dir_tree import Mode, for_each, walk
from filespec.listing import (
    DirectoryEntry,
    DirectoryEnumerator,
    FileAttrib,
    ListingUnavailableError,
    MemoryListingBackend,
    OsListingBackend,
)
from filespec.path_spec import FileSpec, MalformedPathError

__all__ = [
    "DirectoryEntry",
    "DirectoryEnumerator",
    "FileAttrib",
    "FileSpec",
    "ListingUnavailableError",
    "MalformedPathError",
    "MemoryListingBackend",
    "Mode",
    "OsListingBackend",
    "for_each",
    "walk",
]
