"""Result types produced by a single include resolution pass."""

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Callable, FrozenSet, Iterator, List, Mapping, Tuple

from .paths import pretty_path

# Turns a path into the string shown in reports
PathFormatter = Callable[[Path], str]


@dataclass(frozen=True, order=True)
class IncludeLocation:
    """Where an include directive textually occurs (1-based line)."""

    file_path: Path
    line: int

    def display(self, format_path: PathFormatter = pretty_path) -> str:
        return f"{format_path(self.file_path)}:{self.line}"

    def __str__(self) -> str:
        return self.display()


@dataclass(frozen=True, order=True)
class UnresolvedInclude:
    """An include directive that no strategy could match to a file."""

    file_path: Path
    line: int
    include: str

    @property
    def location(self) -> IncludeLocation:
        return IncludeLocation(self.file_path, self.line)

    def display(self, format_path: PathFormatter = pretty_path) -> str:
        return f"{self.location.display(format_path)} : {self.include}"

    def __str__(self) -> str:
        return self.display()


@dataclass(frozen=True)
class ConflictedInclude:
    """
    An include text that more than one directory can resolve.

    Instances are immutable; the resolution pass replaces an entry with
    `with_location()` each time another occurrence of the same include
    text is found.
    """

    locations: FrozenSet[IncludeLocation] = frozenset()
    directories: FrozenSet[Path] = frozenset()

    def with_location(self, location: IncludeLocation) -> "ConflictedInclude":
        """Return a copy that also records `location`."""
        return ConflictedInclude(
            locations=self.locations | {location},
            directories=self.directories,
        )

    def sorted_locations(self) -> List[IncludeLocation]:
        return sorted(self.locations)

    def sorted_directories(self) -> List[Path]:
        return sorted(self.directories, key=pretty_path)

    def display_lines(self, format_path: PathFormatter = pretty_path) -> List[str]:
        """Tab-indented "included by" and "can be resolved by" blocks."""
        lines = ["\tincluded by:", "\t["]
        lines.extend(f"\t\t{loc.display(format_path)}" for loc in self.sorted_locations())
        lines.extend(["\t]", "\tcan be resolved by:", "\t["])
        lines.extend(f"\t\t{format_path(d)}" for d in self.sorted_directories())
        lines.append("\t]")
        return lines

    def __str__(self) -> str:
        return "\n".join(self.display_lines())


@dataclass(frozen=True)
class ResolutionResult:
    """
    Snapshot of everything a resolution pass found.

    Attributes:
        invalid_paths: Configured paths that do not exist, plus source files
                       that could not be opened.
        unresolved: Include directives with no resolution at all.
        conflicted: Include text -> ConflictedInclude for ambiguous includes.
        include_dirs: Directories that must be on the include path.
        files_scanned: Every file scanned, in scan order.
    """

    invalid_paths: FrozenSet[Path] = frozenset()
    unresolved: FrozenSet[UnresolvedInclude] = frozenset()
    conflicted: Mapping[str, ConflictedInclude] = field(
        default_factory=lambda: MappingProxyType({}),
        hash=False,
    )
    include_dirs: FrozenSet[Path] = frozenset()
    files_scanned: Tuple[Path, ...] = ()

    @property
    def is_clean(self) -> bool:
        """True when every include resolved to exactly one file."""
        return not self.unresolved and not self.conflicted

    def sorted_invalid_paths(self) -> List[Path]:
        return sorted(self.invalid_paths, key=pretty_path)

    def sorted_unresolved(self) -> List[UnresolvedInclude]:
        """Unresolved includes ordered by (file path, line)."""
        return sorted(self.unresolved)

    def sorted_include_dirs(self) -> List[Path]:
        return sorted(self.include_dirs, key=pretty_path)

    def iter_conflicted(self) -> Iterator[Tuple[str, ConflictedInclude]]:
        """Iterate over (include text, conflict) pairs sorted by include text."""
        for include in sorted(self.conflicted):
            yield include, self.conflicted[include]

    def __repr__(self) -> str:
        return (
            f"ResolutionResult(invalid={len(self.invalid_paths)}, "
            f"unresolved={len(self.unresolved)}, "
            f"conflicted={len(self.conflicted)}, "
            f"include_dirs={len(self.include_dirs)}, "
            f"files_scanned={len(self.files_scanned)})"
        )
