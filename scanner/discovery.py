"""File discovery utilities for collecting C/C++ sources and headers."""

import logging
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Tuple

from model.paths import canonical_path

logger = logging.getLogger(__name__)

CPP_EXTENSIONS = (".h", ".hpp", ".hxx", ".hh", ".c", ".cpp", ".cxx")


def is_cpp_file(name: str, extensions: Sequence[str] = CPP_EXTENSIONS) -> bool:
    """Check whether a file name ends with one of the source/header extensions."""
    return name.endswith(tuple(extensions))


def iter_source_files(
    root: Path,
    extensions: Sequence[str] = CPP_EXTENSIONS,
) -> Iterator[Path]:
    """
    Iterate over source files in a directory tree.

    Args:
        root: Root directory to scan.
        extensions: File name suffixes to accept.

    Yields:
        Canonical paths of matching files, in sorted traversal order.
    """

    def _walk(current: Path) -> Iterator[Path]:
        try:
            entries = sorted(current.iterdir())
        except OSError as e:
            logger.warning("Cannot list directory %s: %s", current, e)
            return

        for entry in entries:
            try:
                is_dir = entry.is_dir()
                is_file = not is_dir and entry.is_file()
            except OSError as e:
                logger.warning("Cannot stat %s: %s", entry, e)
                continue

            if is_dir:
                yield from _walk(entry)
            elif is_file and is_cpp_file(entry.name, extensions):
                yield canonical_path(entry)

    yield from _walk(canonical_path(root))


def collect_source_files(
    directories: Sequence[Path],
    extensions: Sequence[str] = CPP_EXTENSIONS,
) -> Tuple[List[Path], List[Path]]:
    """
    Collect source files under several directories.

    Directories that do not exist are not an error; they are returned
    separately so the caller can report them.

    Args:
        directories: Directories to scan, in order.
        extensions: File name suffixes to accept.

    Returns:
        (files, invalid_directories) where files keeps discovery order.
    """
    files: List[Path] = []
    invalid: List[Path] = []

    for directory in directories:
        directory = Path(directory)
        if existing_directory(directory) is None:
            logger.warning("Skipping invalid directory: %s", directory)
            invalid.append(directory)
            continue
        files.extend(iter_source_files(directory, extensions))

    logger.debug("Collected %s files from %s directories", len(files), len(directories))
    return files, invalid


def existing_directory(path: Path) -> Optional[Path]:
    """Return the canonical form of `path` if it is an existing directory."""
    try:
        if Path(path).is_dir():
            return canonical_path(path)
    except OSError as e:
        logger.warning("Cannot stat %s: %s", path, e)
    return None
