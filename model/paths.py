"""Path identity helpers shared by the scanner and the exporters."""

import os
from pathlib import Path
from typing import Union


PathLike = Union[str, os.PathLike]


def canonical_path(path: PathLike) -> Path:
    """
    Return the canonical form of a path.
    
    The result is absolute with symlinks, '.' and '..' resolved. Paths that
    do not exist are still absolutized and normalized as far as possible.
    """
    return Path(os.path.realpath(os.path.abspath(path)))


def pretty_path(path: PathLike) -> str:
    """Return a display string for a path, always using forward slashes."""
    return os.fspath(path).replace("\\", "/")


def path_key(path: PathLike) -> str:
    """
    Return the identity key of a path.
    
    Two paths share a key iff their canonical forms are identical, compared
    case-sensitively on every platform.
    """
    return pretty_path(canonical_path(path))
