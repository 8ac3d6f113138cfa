"""
TOML config for the filespec command.

A config is a flat table of listing defaults:

    recursive = true
    sizes = false
    exclude = ["build/", "*.tmp"]
    allow-wildcards = true

It lives in `.filespec.toml`, `filespec.toml`, or the `[tool.filespec]` table of
`pyproject.toml`, in the working directory or any parent. Values are checked
against the expected type when loaded, and explicit CLI flags override them.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, TypeVar, cast

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]

log = logging.getLogger(__name__)


class ConfigError(ValueError):
    """A config file was found but can't be used."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Invalid config {path}: {reason}")
        self.path = path
        self.reason = reason


@dataclass
class FilespecConfig:
    """
    Listing defaults from a config file. A field is `None` when the file
    doesn't set it, so the merge can tell "unset" from "set to the default".
    """

    recursive: bool | None = None
    sizes: bool | None = None
    exclude: list[str] | None = None
    allow_wildcards: bool | None = None


def _is_bool(value: Any) -> bool:
    return isinstance(value, bool)


def _is_str_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


# TOML key -> (config field, type check, expected type for error messages)
_KEYS: dict[str, tuple[str, Callable[[Any], bool], str]] = {
    "recursive": ("recursive", _is_bool, "a boolean"),
    "sizes": ("sizes", _is_bool, "a boolean"),
    "exclude": ("exclude", _is_str_list, "a list of strings"),
    "allow-wildcards": ("allow_wildcards", _is_bool, "a boolean"),
}

_STANDALONE_NAMES = (".filespec.toml", "filespec.toml")


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        return tomllib.loads(path.read_text())
    except (tomllib.TOMLDecodeError, OSError) as e:
        raise ConfigError(path, str(e)) from e


def _pyproject_table(data: dict[str, Any]) -> dict[str, Any] | None:
    table = data.get("tool", {}).get("filespec")
    return cast(dict[str, Any], table) if isinstance(table, dict) else None


def find_config_file(start_dir: Path) -> Path | None:
    """
    Nearest config file at or above `start_dir`. In each directory
    `.filespec.toml` wins over `filespec.toml`, which wins over a
    `pyproject.toml` with a `[tool.filespec]` table.
    """
    start = start_dir.resolve()
    for directory in (start, *start.parents):
        for name in _STANDALONE_NAMES:
            if (directory / name).is_file():
                return directory / name
        pyproject = directory / "pyproject.toml"
        if pyproject.is_file():
            try:
                if _pyproject_table(_read_toml(pyproject)) is not None:
                    return pyproject
            except ConfigError:
                # Someone else's broken pyproject.toml isn't ours to report.
                log.debug("Ignoring unreadable %s", pyproject)
    return None


def load_config(config_path: Path) -> FilespecConfig:
    """
    Read and check a config file. Raises `ConfigError` if the file can't be
    parsed or a known key has a value of the wrong type. Unknown keys are
    logged and ignored.
    """
    data = _read_toml(config_path)
    if config_path.name == "pyproject.toml":
        data = _pyproject_table(data) or {}
    return _parse_config_data(config_path, data)


def _parse_config_data(path: Path, data: dict[str, Any]) -> FilespecConfig:
    values: dict[str, Any] = {}
    for key, value in data.items():
        if key not in _KEYS:
            log.warning("%s: ignoring unknown key %r", path, key)
            continue
        field_name, check, expected = _KEYS[key]
        if not check(value):
            raise ConfigError(path, f"{key!r} must be {expected}, not {value!r}")
        values[field_name] = value
    return FilespecConfig(**values)


_T = TypeVar("_T")


def merge_cli_with_config(
    cli_opts: _T,
    config: FilespecConfig | None,
    explicit_flags: set[str],
) -> _T:
    """
    Options with config values filled in for every flag the user didn't pass.
    `cli_opts` is a dataclass with fields named like `FilespecConfig`'s.
    """
    if config is None:
        return cli_opts

    updates = {
        f.name: getattr(config, f.name)
        for f in fields(FilespecConfig)
        if getattr(config, f.name) is not None and f.name not in explicit_flags
    }
    if not updates:
        return cli_opts
    return replace(cast(Any, cli_opts), **updates)
