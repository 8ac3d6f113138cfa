#!/usr/bin/env python3
"""
filespec: List files matching Windows-style path patterns

Common usage:
  filespec '*.py'
  filespec -r 'src\\*.py'
  filespec -r --sizes --exclude 'build/' '*'
  filespec --split 'c:\\dir\\file.ext'

Patterns use `\\` as the directory separator; `/` is accepted and converted.
Only the last segment of a pattern may contain `*` or `?`.
"""

from __future__ import annotations

import argparse
import importlib.metadata
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from filespec.config import ConfigError, find_config_file, load_config, merge_cli_with_config
from filespec.dir_tree import Mode, walk
from filespec.path_spec import DIR_SEP, FileSpec, MalformedPathError


@dataclass
class Options:
    """Command-line options for the filespec tool."""

    patterns: list[str]
    recursive: bool
    sizes: bool
    exclude: list[str] | None
    allow_wildcards: bool
    split: bool
    verbose: bool
    version: bool


def _parse_args(args: list[str] | None = None) -> tuple[Options, set[str]]:
    """
    Parse command-line arguments.

    Returns a tuple of (options, explicit_flags) where `explicit_flags` tracks
    which flags the user explicitly passed (for config merge precedence).
    """
    module_doc = __doc__ or ""
    doc_parts = module_doc.split("\n\n")
    description = doc_parts[0]
    epilog = "\n\n".join(doc_parts[1:])

    parser = argparse.ArgumentParser(
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "patterns",
        nargs="*",
        type=str,
        default=[],
        help="Path patterns to list (or, with --split, paths to decompose)",
    )
    parser.add_argument(
        "-r",
        "--recursive",
        action="store_true",
        default=False,
        help="Also search every subfolder below each pattern's directory",
    )
    parser.add_argument(
        "--sizes",
        action="store_true",
        default=False,
        help="Print the size in bytes before each path",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=None,
        metavar="PATTERN",
        help="Gitignore-style pattern for entries to skip (e.g., 'build/'). Can be repeated",
    )
    parser.add_argument(
        "--no-wildcards",
        action="store_true",
        dest="no_wildcards",
        help="Reject `*` and `?` in --split arguments",
    )
    parser.add_argument(
        "--split",
        action="store_true",
        help="Print the volume, directory, stem and extension of each argument",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log listing and traversal details to stderr",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version information and exit",
    )
    opts = parser.parse_args(args)

    # Re-parse with sentinel defaults to detect which flags were actually supplied.
    _SENTINEL = object()
    _tracked_flags: dict[str, str] = {
        # argparse dest name -> Options field name
        "recursive": "recursive",
        "sizes": "sizes",
        "exclude": "exclude",
        "no_wildcards": "allow_wildcards",
    }
    sentinel_parser = argparse.ArgumentParser(add_help=False)
    sentinel_parser.add_argument("-r", "--recursive", action="store_true", default=_SENTINEL)
    sentinel_parser.add_argument("--sizes", action="store_true", default=_SENTINEL)
    sentinel_parser.add_argument("--exclude", action="append", default=None)
    sentinel_parser.add_argument(
        "--no-wildcards", dest="no_wildcards", action="store_true", default=_SENTINEL
    )
    sentinel_opts, _ = sentinel_parser.parse_known_args(args if args is not None else sys.argv[1:])

    explicit_flags: set[str] = set()
    for dest_name, field_name in _tracked_flags.items():
        val = getattr(sentinel_opts, dest_name, _SENTINEL)
        # For append actions, None means not supplied; a list means supplied
        if dest_name == "exclude":
            if val is not None:
                explicit_flags.add(field_name)
        elif val is not _SENTINEL:
            explicit_flags.add(field_name)

    return (
        Options(
            patterns=opts.patterns,
            recursive=opts.recursive,
            sizes=opts.sizes,
            exclude=opts.exclude,
            allow_wildcards=not opts.no_wildcards,
            split=opts.split,
            verbose=opts.verbose,
            version=opts.version,
        ),
        explicit_flags,
    )


def _to_spec_text(arg: str) -> str:
    """Accept `/` on the command line as a directory separator."""
    return arg.replace("/", DIR_SEP)


def _print_split(spec: FileSpec) -> None:
    volume, directory, stem, extension = spec.split_all()
    if spec.is_file():
        kind = "file"
    elif spec.is_folder():
        kind = "folder"
    else:
        kind = "empty"
    print(f"path:      {spec}")
    print(f"volume:    {volume}")
    print(f"directory: {directory}")
    print(f"stem:      {stem}")
    print(f"extension: {extension}")
    print(f"kind:      {kind}")


def _list_pattern(spec: FileSpec, options: Options) -> None:
    """Walk one pattern, printing each match."""
    mode = Mode.include_subfolders if options.recursive else Mode.shallow_only
    for entry in walk(spec, mode, exclude=options.exclude):
        if options.sizes:
            print(f"{entry.attrib.size}\t{entry.spec}")
        else:
            print(entry.spec)


def main(args: list[str] | None = None) -> int:
    """
    Main entry point for the filespec CLI.

    Args:
        args: Command-line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    options, explicit_flags = _parse_args(args)

    if options.version:
        try:
            version = importlib.metadata.version("filespec")
            print(f"v{version}")
        except importlib.metadata.PackageNotFoundError:
            print("unknown (package not installed)")
        return 0

    logging.basicConfig(
        level=logging.DEBUG if options.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if not options.patterns:
        print(
            "Error: No input specified. Provide one or more path patterns"
            " (e.g. '*.py'). Use --help for more options.",
            file=sys.stderr,
        )
        return 1

    # Load and merge config file settings
    config_path = find_config_file(Path.cwd())
    if config_path:
        try:
            config = load_config(config_path)
        except ConfigError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        options = merge_cli_with_config(options, config, explicit_flags)

    try:
        specs = [
            FileSpec(_to_spec_text(arg), allow_wildcards=options.allow_wildcards or not options.split)
            for arg in options.patterns
        ]
    except MalformedPathError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if options.split:
        for i, spec in enumerate(specs):
            if i:
                print()
            _print_split(spec)
        return 0

    try:
        for spec in specs:
            _list_pattern(spec, options)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
