"""Resolver settings and the optional YAML settings file."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List

import yaml


SETTINGS_KEYS = {
    "parse": "parse_dirs",
    "include": "include_dirs",
    "resolve": "resolve_dirs",
}


class SettingsError(ValueError):
    """Raised when a settings file cannot be used."""


@dataclass
class ResolverSettings:
    """
    Directories driving one resolution pass.

    Attributes:
        parse_dirs: Directories whose sources are scanned for includes.
        include_dirs: Directories already known to be on the include path.
        resolve_dirs: Directories searched for candidate files.
    """

    parse_dirs: List[Path] = field(default_factory=list)
    include_dirs: List[Path] = field(default_factory=list)
    resolve_dirs: List[Path] = field(default_factory=list)

    def merged(self, other: "ResolverSettings") -> "ResolverSettings":
        """Return new settings with `other`'s directories appended to ours."""
        return ResolverSettings(
            parse_dirs=self.parse_dirs + other.parse_dirs,
            include_dirs=self.include_dirs + other.include_dirs,
            resolve_dirs=self.resolve_dirs + other.resolve_dirs,
        )


def load_settings(path: Path) -> ResolverSettings:
    """
    Load settings from a YAML file.

    The document is a mapping with optional `parse`, `include` and `resolve`
    lists. Relative entries are taken relative to the file's directory.

    Example:
        parse: [src]
        include: [include]
        resolve: [third_party, ../sdk]

    Raises:
        SettingsError: If the file is missing or not a valid settings document.
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SettingsError(f"cannot read settings file '{path}': {e}") from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SettingsError(f"invalid YAML in '{path}': {e}") from e

    if data is None:
        return ResolverSettings()
    if not isinstance(data, dict):
        raise SettingsError(f"'{path}' must contain a mapping at top level")

    unknown = sorted(str(key) for key in data if key not in SETTINGS_KEYS)
    if unknown:
        raise SettingsError(f"unknown key(s) in '{path}': {', '.join(unknown)}")

    base = path.resolve().parent
    values = {
        attr: _read_dir_list(data.get(key), key, base, path)
        for key, attr in SETTINGS_KEYS.items()
    }
    return ResolverSettings(**values)


def _read_dir_list(value: Any, key: str, base: Path, source: Path) -> List[Path]:
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise SettingsError(f"'{key}' in '{source}' must be a list of paths")
    return [base / Path(v).expanduser() for v in value]
