"""JSON exporter for resolution results (machine-friendly format)."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from model.result import ResolutionResult
from .text_exporter import get_display_path


def to_json(
    result: ResolutionResult,
    base: Optional[Path] = None,
    indent: int = 2,
) -> str:
    """
    Convert a resolution result to JSON format.

    Args:
        result: The result to export.
        base: Optional base path; paths under it are shown relative to it.
        indent: JSON indentation level.

    Returns:
        JSON string representation of the result.
    """
    unresolved: List[Dict[str, Any]] = []
    for item in result.sorted_unresolved():
        unresolved.append({
            "file": get_display_path(item.file_path, base),
            "line": item.line,
            "include": item.include,
        })

    conflicted: Dict[str, Dict[str, Any]] = {}
    for include, conflict in result.iter_conflicted():
        conflicted[include] = {
            "included_by": [
                {"file": get_display_path(location.file_path, base), "line": location.line}
                for location in conflict.sorted_locations()
            ],
            "resolved_by": [
                get_display_path(directory, base)
                for directory in conflict.sorted_directories()
            ],
        }

    data: Dict[str, Any] = {
        "invalid_paths": [get_display_path(p, base) for p in result.sorted_invalid_paths()],
        "unresolved": unresolved,
        "conflicted": conflicted,
        "include_dirs": [get_display_path(d, base) for d in result.sorted_include_dirs()],
        "files_scanned": [get_display_path(f, base) for f in result.files_scanned],
    }

    return json.dumps(data, indent=indent)
