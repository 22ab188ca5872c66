"""Plain text exporter for resolution results (human-friendly format)."""

import functools
from pathlib import Path
from typing import List, Optional

from model.paths import pretty_path
from model.result import ResolutionResult


def to_text(
    result: ResolutionResult,
    base: Optional[Path] = None,
) -> str:
    """
    Convert a resolution result to a plain text report.

    Sections are only emitted when they have content, except the list of
    include directories which is always present.

    Args:
        result: The result to export.
        base: Optional base path; paths under it are shown relative to it.

    Returns:
        Report text.
    """
    lines: List[str] = []
    format_path = functools.partial(get_display_path, base=base)

    if result.invalid_paths:
        lines.append("invalid paths:")
        for path in result.sorted_invalid_paths():
            lines.append(f"\t{get_display_path(path, base)}")
        lines.append("")

    if result.unresolved:
        lines.append("unresolved includes:")
        for unresolved in result.sorted_unresolved():
            lines.append(f"\t{unresolved.display(format_path)}")
        lines.append("")

    if result.conflicted:
        lines.append("conflicted includes:")
        for include, conflict in result.iter_conflicted():
            lines.append(include)
            lines.extend(conflict.display_lines(format_path))
        lines.append("")

    lines.append("include directories:")
    for directory in result.sorted_include_dirs():
        lines.append(f"\t{get_display_path(directory, base)}")

    return "\n".join(lines)


def get_display_path(path: Path, base: Optional[Path] = None) -> str:
    """Get the display path, relative to `base` when the path is under it."""
    if base is not None:
        try:
            rel_path = Path(path).relative_to(base)
            return pretty_path(rel_path)
        except ValueError:
            pass
    return pretty_path(path)
