"""Scanner module for source discovery, include extraction and resolution."""

from .discovery import iter_source_files, collect_source_files
from .parser import parse_include_line, scan_includes
from .resolver import (
    IncludeResolver,
    compute_include_resolve,
    print_parse_status,
)
from .settings import ResolverSettings, SettingsError, load_settings

__all__ = [
    "iter_source_files",
    "collect_source_files",
    "parse_include_line",
    "scan_includes",
    "IncludeResolver",
    "compute_include_resolve",
    "print_parse_status",
    "ResolverSettings",
    "SettingsError",
    "load_settings",
]
