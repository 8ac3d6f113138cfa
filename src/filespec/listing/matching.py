"""
Name matching for directory listings and exclusion rules.

Listing patterns follow the Windows convention: `*` matches any run of
characters, `?` matches one character, `*.*` matches every name, comparison
ignores case, and everything else is literal.

Exclusion rules use gitignore syntax, compiled with `pathspec`. Directory
patterns end with `/`.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

import pathspec


def _translate(pattern: str) -> re.Pattern[str]:
    parts: list[str] = []
    for c in pattern:
        if c == "*":
            parts.append(".*")
        elif c == "?":
            parts.append(".")
        else:
            parts.append(re.escape(c))
    return re.compile("".join(parts), re.IGNORECASE | re.DOTALL)


class NameMatcher:
    """Case-insensitive matcher for the final segment of a listing pattern."""

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        self._regex = _translate("*" if pattern == "*.*" else pattern) if pattern else None

    def matches(self, name: str) -> bool:
        if self._regex is None or not name:
            return False
        return self._regex.fullmatch(name) is not None


def compile_excludes(patterns: Iterable[str]) -> pathspec.PathSpec | None:
    """
    Compile gitignore-style exclusion patterns, or return `None` when there are
    none.
    """
    lines = [line for line in patterns if line.strip() and not line.strip().startswith("#")]
    if not lines:
        return None
    return pathspec.GitIgnoreSpec.from_lines(lines)


def is_excluded(exclude: pathspec.PathSpec | None, name: str, is_folder: bool) -> bool:
    """Check a bare entry name against compiled exclusion patterns."""
    if exclude is None:
        return False
    if is_folder:
        return exclude.match_file(name + "/")
    return exclude.match_file(name)
