"""
Include resolution engine.

Scans source files for #include directives, following every include it can
resolve, and works out which directories must be on the include path so that
each include resolves to exactly one file.
"""

import logging
import sys
from collections import defaultdict
from pathlib import Path, PurePosixPath
from types import MappingProxyType
from typing import Callable, Dict, List, Optional, Set, TextIO

from model.paths import canonical_path, path_key, pretty_path
from model.result import (
    ConflictedInclude,
    IncludeLocation,
    ResolutionResult,
    UnresolvedInclude,
)
from .discovery import collect_source_files, existing_directory
from .parser import scan_includes
from .settings import ResolverSettings

logger = logging.getLogger(__name__)

# (current 1-based index, current worklist size, file about to be scanned)
ParseStatusCallback = Callable[[int, int, Path], None]


def no_parse_status(current: int, total: int, file_path: Path) -> None:
    """Default progress callback: does nothing."""


def print_parse_status(
    current: int,
    total: int,
    file_path: Path,
    stream: Optional[TextIO] = None,
) -> None:
    """Progress callback printing '[current/total] path'."""
    if stream is None:
        stream = sys.stdout
    print(f"[{current}/{total}] {pretty_path(file_path)}", file=stream)


class IncludeResolver:
    """
    A single resolution pass.

    All state lives on the instance and is only touched by `run()`. Create a
    new instance for every pass.
    """

    def __init__(
        self,
        settings: ResolverSettings,
        parse_status_callback: ParseStatusCallback = no_parse_status,
    ):
        self._settings = settings
        self._parse_status = parse_status_callback

        self._to_parse: List[Path] = []
        self._to_parse_keys: Set[str] = set()
        self._known_dirs: Dict[str, Path] = {}
        self._candidate_pool: Dict[str, List[Path]] = defaultdict(list)
        self._conflicts: Dict[str, ConflictedInclude] = {}
        # include text -> the single directory it collapsed to
        self._collapsed: Dict[str, Path] = {}
        self._unresolved: Set[UnresolvedInclude] = set()
        self._invalid: Set[Path] = set()
        self._done = False

    def run(self) -> ResolutionResult:
        """
        Run the pass and return its result.

        Raises:
            RuntimeError: If the pass was already run on this instance.
        """
        if self._done:
            raise RuntimeError("IncludeResolver instances are single-use")
        self._done = True

        self._seed()

        # The worklist grows while we walk it, so index it instead of iterating.
        index = 0
        while index < len(self._to_parse):
            file_path = self._to_parse[index]
            index += 1
            self._parse_status(index, len(self._to_parse), file_path)
            self._parse_file(file_path)

        logger.info(
            "Scanned %s files: %s include dirs, %s unresolved, %s conflicted",
            len(self._to_parse),
            len(self._known_dirs),
            len(self._unresolved),
            len(self._conflicts),
        )

        return ResolutionResult(
            invalid_paths=frozenset(self._invalid),
            unresolved=frozenset(self._unresolved),
            conflicted=MappingProxyType(dict(self._conflicts)),
            include_dirs=frozenset(self._known_dirs.values()),
            files_scanned=tuple(self._to_parse),
        )

    # -- setup -------------------------------------------------------------

    def _seed(self) -> None:
        settings = self._settings

        files, invalid = collect_source_files(settings.parse_dirs)
        self._invalid.update(invalid)
        for file_path in files:
            self._enqueue(file_path)

        for include_dir in settings.include_dirs:
            directory = existing_directory(include_dir)
            if directory is None:
                logger.warning("Skipping invalid include directory: %s", include_dir)
                self._invalid.add(Path(include_dir))
            else:
                self._known_dirs[path_key(directory)] = directory

        pool_files, invalid = collect_source_files(settings.resolve_dirs)
        self._invalid.update(invalid)
        seen: Set[str] = set()
        for file_path in pool_files:
            key = path_key(file_path)
            if key not in seen:
                seen.add(key)
                self._candidate_pool[file_path.name].append(file_path)

        logger.debug(
            "Seeded %s files to parse, %s known include dirs, %s candidate files",
            len(self._to_parse),
            len(self._known_dirs),
            len(seen),
        )

    def _enqueue(self, file_path: Path) -> None:
        canonical = canonical_path(file_path)
        key = pretty_path(canonical)
        if key not in self._to_parse_keys:
            self._to_parse_keys.add(key)
            self._to_parse.append(canonical)

    # -- per file ----------------------------------------------------------

    def _parse_file(self, file_path: Path) -> None:
        logger.debug("Scanning %s", file_path)
        try:
            includes = list(scan_includes(file_path))
        except OSError as e:
            logger.warning("Cannot read %s: %s", file_path, e)
            self._invalid.add(file_path)
            return

        for line, include in includes:
            self._resolve_include(file_path, line, include)

    def _resolve_include(self, file_path: Path, line: int, include: str) -> None:
        # 1. Next to the including file
        relative = file_path.parent / include
        if _is_file(relative):
            self._enqueue(relative)
            return

        # 2. Already known to be ambiguous
        conflict = self._conflicts.get(include)
        if conflict is not None:
            self._conflicts[include] = conflict.with_location(IncludeLocation(file_path, line))
            return

        # Already collapsed to a single directory earlier in the pass
        collapsed_dir = self._collapsed.get(include)
        if collapsed_dir is not None:
            target = collapsed_dir / include
            if _is_file(target):
                self._enqueue(target)
                return

        # 3. Candidate pool
        directories = self._find_resolving_dirs(include)
        if len(directories) == 1:
            directory = next(iter(directories.values()))
            self._known_dirs[path_key(directory)] = directory
            self._collapsed[include] = directory
            self._enqueue(directory / include)
            return
        if len(directories) > 1:
            logger.debug("Ambiguous include '%s' at %s:%s", include, file_path, line)
            self._conflicts[include] = ConflictedInclude(
                locations=frozenset({IncludeLocation(file_path, line)}),
                directories=frozenset(directories.values()),
            )
            for directory in directories.values():
                self._enqueue(directory / include)
            return

        # 4. Directories already on the include path
        found = self._find_in_known_dirs(include)
        if found is not None:
            self._enqueue(found)
            return

        # 5. Give up
        logger.debug("Unresolved include '%s' at %s:%s", include, file_path, line)
        self._unresolved.add(UnresolvedInclude(file_path, line, include))

    # -- lookups -----------------------------------------------------------

    def _find_resolving_dirs(self, include: str) -> Dict[str, Path]:
        """
        Find every pool directory D such that D/include is a pool file.

        Returns:
            Mapping of directory key -> directory.
        """
        normalized = include.replace("\\", "/")
        base_name = PurePosixPath(normalized).name
        if not base_name:
            return {}

        suffix = "/" + normalized
        directories: Dict[str, Path] = {}
        for candidate in self._candidate_pool.get(base_name, ()):
            candidate_str = pretty_path(candidate)
            if candidate_str.endswith(suffix):
                prefix = candidate_str[: -len(suffix)] or "/"
                directories[prefix] = Path(prefix)
        return directories

    def _find_in_known_dirs(self, include: str) -> Optional[Path]:
        for directory in sorted(self._known_dirs.values()):
            candidate = directory / include
            if _is_file(candidate):
                return candidate
        return None


def _is_file(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError as e:
        logger.warning("Cannot stat %s: %s", path, e)
        return False


def compute_include_resolve(
    settings: ResolverSettings,
    parse_status_callback: ParseStatusCallback = no_parse_status,
) -> ResolutionResult:
    """
    Compute the directories needed to resolve every include.

    Args:
        settings: Directories to parse, known include directories and
                  candidate pool directories.
        parse_status_callback: Called once per file before it is scanned with
                               (current, total, file). `total` may grow
                               between calls.

    Returns:
        ResolutionResult for the whole pass.
    """
    return IncludeResolver(settings, parse_status_callback).run()
