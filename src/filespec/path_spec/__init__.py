"""
Windows-style path specs: decomposition into volume, directory, stem and
extension, plus validity checks.

Usage::

    from filespec.path_spec import FileSpec

    spec = FileSpec("c:\\src\\main.cpp")
    spec.volume      # "c:"
    spec.directory   # "\\src\\"
    spec.stem        # "main"
    spec.extension   # "cpp"
"""

from filespec.path_spec.parsing import DIR_SEP, EXT_SEP, VOLUME_SEP, split_text
from filespec.path_spec.types import FileSpec
from filespec.path_spec.validation import MalformedPathError

__all__ = [
    "DIR_SEP",
    "EXT_SEP",
    "VOLUME_SEP",
    "FileSpec",
    "MalformedPathError",
    "split_text",
]
