"""
Decomposition of Windows-style path strings into volume, directory, stem and
extension spans.

The grammar is `volume:\\directory\\file.ext`, where every component is
optional. Parsing is a single pass over three landmarks: the volume separator
(only at index 1), the last directory separator, and the last extension
separator (only when it follows the last directory separator).

Examples:

    text                  volume  directory   stem     extension
    --------------------------------------------------------------
    "a:"                  a:
    "a:file"              a:                  file
    "a:\\file"            a:      \\           file
    "\\dir\\"                     \\dir\\
    "..\\..\\file"                ..\\..\\      file
    "a:\\dir\\file.ext"   a:      \\dir\\       file     ext
    "dir.ext\\file"               dir.ext\\    file
    "file.ex.longext"                         file.ex  longext
    ""
"""

from __future__ import annotations

from dataclasses import dataclass

VOLUME_SEP = ":"
DIR_SEP = "\\"
EXT_SEP = "."


@dataclass(frozen=True)
class Spans:
    """
    Boundary offsets of the four components within a path string.

    `ext_start` is the index just past the extension separator, or `len(text)`
    when there is no extension separator. `has_ext_sep` records whether a valid
    separator was found, which distinguishes `"file."` from `"file"`.
    """

    vol_end: int
    dir_end: int
    stem_end: int
    ext_start: int
    has_ext_sep: bool


def parse_spans(text: str) -> Spans:
    """Locate the component boundaries of `text`."""
    has_vol_sep = len(text) > 1 and text[1] == VOLUME_SEP
    last_dir_sep = text.rfind(DIR_SEP)
    last_ext_sep = text.rfind(EXT_SEP)

    # A period inside a directory segment is not an extension marker.
    has_ext_sep = last_ext_sep != -1 and last_ext_sep > last_dir_sep

    vol_end = 2 if has_vol_sep else 0
    dir_end = last_dir_sep + 1 if last_dir_sep != -1 else vol_end
    # Malformed volumes such as "\\:" can put a landmark inside the volume span.
    dir_end = max(dir_end, vol_end)

    if has_ext_sep and last_ext_sep >= dir_end:
        return Spans(vol_end, dir_end, last_ext_sep, last_ext_sep + 1, True)
    return Spans(vol_end, dir_end, len(text), len(text), False)


def split_text(text: str) -> tuple[str, str, str, str]:
    """Split `text` into `(volume, directory, stem, extension)`."""
    spans = parse_spans(text)
    return (
        text[: spans.vol_end],
        text[spans.vol_end : spans.dir_end],
        text[spans.dir_end : spans.stem_end],
        text[spans.ext_start :],
    )


def join_parts(volume: str, directory: str, file: str, extension: str = "") -> str:
    """
    Concatenate components, inserting separators only where missing.

    A directory separator is appended to a non-empty `directory` that doesn't
    already end in one; an extension separator is prepended to a non-empty
    `extension` that doesn't already start with one.
    """
    parts = [volume, directory]
    if directory and not directory.endswith(DIR_SEP):
        parts.append(DIR_SEP)
    parts.append(file)
    if extension and not extension.startswith(EXT_SEP):
        parts.append(EXT_SEP)
    parts.append(extension)
    return "".join(parts)
