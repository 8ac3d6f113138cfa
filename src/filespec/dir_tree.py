"""
Recursive traversal of directory trees driven by a listing pattern.

Each level is scanned in two passes. The match pass lists the caller's pattern
(e.g. `src\\*.cpp`) and visits every entry it yields. The descend pass lists
the same directory with a plain `*`, so that subfolders are found whether or
not their names match the caller's pattern, and repeats the whole procedure
with the pattern re-rooted under each subfolder.

Subfolder contents are therefore visited after all direct matches at a level,
depth first. Recursion depth follows the real tree depth; there is no depth
limit and no cycle detection. Symbolic links are not followed by the host
backend, but a backend that reports a link cycle as folders would recurse
until the interpreter's recursion limit.

Examples::

    for_each("*.cpp", print)                                # each C++ file, this level only
    for_each("*", print, Mode.include_subfolders)           # every entry, whole tree
    for entry in walk("docs\\*.md", Mode.include_subfolders):
        if entry.attrib.size > limit:
            break                                           # stops the walk
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from enum import Enum

import pathspec

from filespec.listing.enumerator import DirectoryEnumerator
from filespec.listing.matching import compile_excludes, is_excluded
from filespec.listing.types import DirectoryEntry, ListingBackend
from filespec.path_spec import FileSpec

log = logging.getLogger(__name__)


class Mode(str, Enum):
    """Whether a walk stays at one level or descends into subfolders."""

    shallow_only = "shallow_only"
    include_subfolders = "include_subfolders"


def walk(
    pattern: FileSpec | str,
    mode: Mode = Mode.shallow_only,
    *,
    backend: ListingBackend | None = None,
    exclude: Iterable[str] | None = None,
) -> Iterator[DirectoryEntry]:
    """
    Lazily yield every entry matching `pattern`, descending into subfolders
    when `mode` is `Mode.include_subfolders`.

    `exclude` takes gitignore-style patterns: matching entries are skipped and
    matching folders (`name/` patterns) are not descended. Levels that can't be
    listed contribute nothing. Closing the generator early releases every open
    listing.
    """
    spec = pattern if isinstance(pattern, FileSpec) else FileSpec(pattern)
    if backend is None:
        from filespec.listing.os_backend import OsListingBackend

        backend = OsListingBackend()
    excludes = compile_excludes(exclude) if exclude is not None else None
    return _walk(spec, mode, backend, excludes)


def for_each(
    pattern: FileSpec | str,
    visitor: Callable[[FileSpec], object],
    mode: Mode = Mode.shallow_only,
    *,
    backend: ListingBackend | None = None,
    exclude: Iterable[str] | None = None,
) -> None:
    """Call `visitor` with the spec of every entry `walk()` would yield."""
    for entry in walk(pattern, mode, backend=backend, exclude=exclude):
        visitor(entry.spec)


def _walk(
    spec: FileSpec,
    mode: Mode,
    backend: ListingBackend,
    excludes: pathspec.PathSpec | None,
) -> Iterator[DirectoryEntry]:
    # Match pass: the caller's filter, folder flag ignored.
    with DirectoryEnumerator(spec, backend) as matches:
        for entry in matches:
            if is_excluded(excludes, entry.spec.file, entry.is_folder):
                continue
            yield entry

    if mode is Mode.shallow_only:
        return

    # Descend pass: a full wildcard, so folder discovery ignores the caller's filter.
    volume, directory, file = spec.split()
    with DirectoryEnumerator(FileSpec.from_parts(volume, directory, "*"), backend) as folders:
        for entry in folders:
            if not entry.is_folder:
                continue
            name = entry.spec.file
            if is_excluded(excludes, name, is_folder=True):
                log.debug("Not descending into excluded folder %s", entry.spec)
                continue
            child = FileSpec.from_parts(volume, directory + name, file)
            log.debug("Descending into %s", child)
            yield from _walk(child, mode, backend, excludes)
