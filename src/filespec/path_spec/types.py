"""The `FileSpec` value type."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import PureWindowsPath
from typing import TYPE_CHECKING

from filespec.path_spec.parsing import (
    DIR_SEP,
    EXT_SEP,
    Spans,
    join_parts,
    parse_spans,
    split_text,
)
from filespec.path_spec.validation import (
    MalformedPathError,
    bad_name_chars,
    is_extended_ascii,
    is_good_volume,
    is_printable,
)

if TYPE_CHECKING:
    from filespec.listing.types import ListingBackend


@dataclass(frozen=True)
class FileSpec:
    """
    A validated path string in the `volume:\\directory\\file.ext` grammar.

    The string is the only stored state. Components are recomputed from it on
    each access, so they can never disagree with `full_path`. Construction
    raises `MalformedPathError` rather than producing a partially valid spec.

    `allow_wildcards` permits `*` and `?` in the directory and file names,
    which patterns handed to a directory listing need.
    """

    full_path: str = ""
    allow_wildcards: bool = field(default=True, compare=False, repr=False)

    def __post_init__(self) -> None:
        self._validate()

    @classmethod
    def from_parts(
        cls,
        volume: str,
        directory: str,
        file: str,
        extension: str = "",
        *,
        allow_wildcards: bool = True,
    ) -> FileSpec:
        """Assemble a spec from components, adding separators only where missing."""
        return cls(join_parts(volume, directory, file, extension), allow_wildcards)

    @classmethod
    def from_path(cls, path: str | os.PathLike[str], *, allow_wildcards: bool = True) -> FileSpec:
        """Build a spec from a filesystem path, converting `/` to `\\`."""
        return cls(str(PureWindowsPath(path)), allow_wildcards)

    def assign(self, text: str | FileSpec) -> FileSpec:
        """Return a new spec holding `text`, validated under this spec's rules."""
        if isinstance(text, FileSpec):
            text = text.full_path
        return FileSpec(text, self.allow_wildcards)

    def copy(self) -> FileSpec:
        return FileSpec(self.full_path, self.allow_wildcards)

    def __str__(self) -> str:
        return self.full_path

    # Component queries

    def split(self) -> tuple[str, str, str]:
        """Return `(volume, directory, file)`, where file includes any extension."""
        s = self._spans()
        text = self.full_path
        return text[: s.vol_end], text[s.vol_end : s.dir_end], text[s.dir_end :]

    def split_all(self) -> tuple[str, str, str, str]:
        """Return `(volume, directory, stem, extension)`."""
        return split_text(self.full_path)

    @property
    def volume(self) -> str:
        return self.split_all()[0]

    @property
    def directory(self) -> str:
        return self.split_all()[1]

    @property
    def file(self) -> str:
        """Stem plus extension, including the separator between them."""
        return self.split()[2]

    @property
    def stem(self) -> str:
        return self.split_all()[2]

    @property
    def extension(self) -> str:
        """Extension without its leading separator."""
        return self.split_all()[3]

    def to_path(self) -> PureWindowsPath:
        return PureWindowsPath(self.full_path)

    # Classification

    def is_folder(self) -> bool:
        """True if there is no stem or extension but there is a volume or directory."""
        volume, directory, stem, extension = self.split_all()
        if stem or extension:
            return False
        return bool(volume or directory)

    def is_file(self) -> bool:
        """True if there is a file portion."""
        return bool(self.stem)

    def is_printable(self) -> bool:
        return is_printable(self.full_path)

    def is_extended_ascii(self) -> bool:
        return is_extended_ascii(self.full_path)

    def exists(self, backend: ListingBackend | None = None) -> bool:
        """
        Single-shot existence probe through a listing backend (the host
        filesystem by default). A trailing directory separator is ignored.
        """
        from filespec.listing.os_backend import OsListingBackend

        backend = backend or OsListingBackend()
        path = self.full_path
        if path.endswith(DIR_SEP):
            path = path[:-1]
        return bool(path) and backend.path_exists(path)

    # Validation

    def _spans(self) -> Spans:
        return parse_spans(self.full_path)

    def _validate(self) -> None:
        text = self.full_path
        if not isinstance(text, str):
            raise TypeError(f"FileSpec expects a string, got {type(text).__name__}")

        spans = parse_spans(text)
        volume = text[: spans.vol_end]
        directory = text[spans.vol_end : spans.dir_end]
        stem = text[spans.dir_end : spans.stem_end]
        extension = text[spans.ext_start :]

        if not is_good_volume(volume):
            raise MalformedPathError(text, f"bad volume {volume!r}")

        bad = bad_name_chars(directory, self.allow_wildcards, allow_dir_sep=True)
        if bad:
            raise MalformedPathError(text, f"illegal characters in directory: {_fmt(bad)}")

        file = text[spans.dir_end :]
        bad = bad_name_chars(file, self.allow_wildcards)
        if bad:
            raise MalformedPathError(text, f"illegal characters in file name: {_fmt(bad)}")

        rebuilt = volume + directory + stem + (EXT_SEP if spans.has_ext_sep else "") + extension
        if rebuilt != text:
            raise MalformedPathError(text, f"components reassemble to {rebuilt!r}")


def _fmt(chars: set[str]) -> str:
    return " ".join(repr(c) for c in sorted(chars))
