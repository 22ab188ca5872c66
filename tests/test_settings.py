"""Tests for resolver settings loading."""

import tempfile
from pathlib import Path

import pytest

from model.paths import canonical_path
from scanner.settings import ResolverSettings, SettingsError, load_settings


@pytest.fixture
def root():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield canonical_path(tmpdir)


class TestLoadSettings:
    """Tests for load_settings."""
    
    def test_full_document(self, root):
        """Test all three lists, relative to the settings file."""
        config = root / "cfg" / "resolver.yaml"
        config.parent.mkdir()
        config.write_text(
            "parse:\n"
            "  - ../src\n"
            "include: [inc]\n"
            "resolve:\n"
            "  - /opt/sdk\n",
            encoding="utf-8",
        )
        
        settings = load_settings(config)
        
        assert settings.parse_dirs == [root / "cfg" / ".." / "src"]
        assert settings.include_dirs == [root / "cfg" / "inc"]
        assert settings.resolve_dirs == [Path("/opt/sdk")]
    
    def test_missing_keys_default_to_empty(self, root):
        """Test a document with a single key."""
        config = root / "resolver.yaml"
        config.write_text("parse: src\n", encoding="utf-8")
        
        settings = load_settings(config)
        
        assert settings.parse_dirs == [root / "src"]
        assert settings.include_dirs == []
        assert settings.resolve_dirs == []
    
    def test_empty_document(self, root):
        """Test an empty file."""
        config = root / "resolver.yaml"
        config.write_text("", encoding="utf-8")
        
        assert load_settings(config) == ResolverSettings()
    
    def test_missing_file(self, root):
        """Test that a missing file is a SettingsError."""
        with pytest.raises(SettingsError):
            load_settings(root / "nope.yaml")
    
    def test_invalid_yaml(self, root):
        """Test malformed YAML."""
        config = root / "resolver.yaml"
        config.write_text("parse: [src\n", encoding="utf-8")
        
        with pytest.raises(SettingsError, match="invalid YAML"):
            load_settings(config)
    
    def test_not_a_mapping(self, root):
        """Test a top-level list."""
        config = root / "resolver.yaml"
        config.write_text("- src\n", encoding="utf-8")
        
        with pytest.raises(SettingsError, match="mapping"):
            load_settings(config)
    
    def test_unknown_key(self, root):
        """Test that typos are reported."""
        config = root / "resolver.yaml"
        config.write_text("parse: [src]\nincludes: [inc]\n", encoding="utf-8")
        
        with pytest.raises(SettingsError, match="includes"):
            load_settings(config)
    
    def test_bad_value_type(self, root):
        """Test a non-list value."""
        config = root / "resolver.yaml"
        config.write_text("resolve: {a: 1}\n", encoding="utf-8")
        
        with pytest.raises(SettingsError, match="resolve"):
            load_settings(config)


class TestMerged:
    """Tests for ResolverSettings.merged."""
    
    def test_lists_are_concatenated_in_order(self):
        """Test merging keeps order and does not mutate inputs."""
        first = ResolverSettings(parse_dirs=[Path("a")], resolve_dirs=[Path("r1")])
        second = ResolverSettings(parse_dirs=[Path("b")], include_dirs=[Path("i")])
        
        merged = first.merged(second)
        
        assert merged.parse_dirs == [Path("a"), Path("b")]
        assert merged.include_dirs == [Path("i")]
        assert merged.resolve_dirs == [Path("r1")]
        assert first.parse_dirs == [Path("a")]
