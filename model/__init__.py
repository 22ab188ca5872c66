"""Data model for include resolution results."""

from .paths import canonical_path, path_key, pretty_path
from .result import (
    IncludeLocation,
    UnresolvedInclude,
    ConflictedInclude,
    ResolutionResult,
)

__all__ = [
    "canonical_path",
    "path_key",
    "pretty_path",
    "IncludeLocation",
    "UnresolvedInclude",
    "ConflictedInclude",
    "ResolutionResult",
]
