"""Character rules for Windows path components."""

from __future__ import annotations

from filespec.path_spec.parsing import DIR_SEP

# Characters never allowed in a Windows file or directory name.
_RESERVED_CHARS = frozenset('<>:"/|')
_WILDCARD_CHARS = frozenset("*?")
# Lone surrogates: host bytes that did not decode, as `os.fsdecode` escapes them.
_SURROGATES = range(0xD800, 0xE000)


class MalformedPathError(ValueError):
    """A path string does not satisfy the volume/directory/file grammar."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Malformed path {path!r}: {reason}")
        self.path = path
        self.reason = reason


def is_good_volume(volume: str) -> bool:
    """True for an empty volume or an ASCII letter followed by `:`."""
    if not volume:
        return True
    return len(volume) == 2 and volume[0].isascii() and volume[0].isalpha() and volume[1] == ":"


def bad_name_chars(name: str, allow_wildcards: bool, allow_dir_sep: bool = False) -> set[str]:
    """Return the characters of `name` that are illegal in a file or directory name."""
    bad: set[str] = set()
    for c in name:
        if c in _RESERVED_CHARS or ord(c) < 0x20 or ord(c) in _SURROGATES:
            bad.add(c)
        elif c in _WILDCARD_CHARS and not allow_wildcards:
            bad.add(c)
        elif c == DIR_SEP and not allow_dir_sep:
            bad.add(c)
    return bad


def is_printable(text: str) -> bool:
    """True if every character is printable ASCII (0x20 through 0x7E)."""
    return all(0x20 <= ord(c) <= 0x7E for c in text)


def is_extended_ascii(text: str) -> bool:
    """True if any character falls in the extended ASCII range (0x80 through 0xFF)."""
    return any(0x80 <= ord(c) <= 0xFF for c in text)
