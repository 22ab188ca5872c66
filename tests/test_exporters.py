"""Tests for exporters."""

import json
from pathlib import Path
from types import MappingProxyType

import pytest

from model.result import (
    ConflictedInclude,
    IncludeLocation,
    ResolutionResult,
    UnresolvedInclude,
)
from exporters.text_exporter import to_text, get_display_path
from exporters.json_exporter import to_json


@pytest.fixture
def result():
    root = Path("/repo")
    return ResolutionResult(
        invalid_paths=frozenset({Path("missing_dir")}),
        unresolved=frozenset({
            UnresolvedInclude(root / "src" / "main.cpp", 9, "gone.h"),
            UnresolvedInclude(root / "src" / "main.cpp", 2, "absent.h"),
        }),
        conflicted=MappingProxyType({
            "config.h": ConflictedInclude(
                locations=frozenset({
                    IncludeLocation(root / "src" / "b.cpp", 4),
                    IncludeLocation(root / "src" / "a.cpp", 1),
                }),
                directories=frozenset({root / "pool" / "y", root / "pool" / "x"}),
            ),
        }),
        include_dirs=frozenset({root / "pool" / "lib", root / "include"}),
        files_scanned=(root / "src" / "a.cpp", root / "src" / "b.cpp"),
    )


class TestTextExporter:
    """Tests for the text exporter."""
    
    def test_empty_result(self):
        """Test exporting an empty result."""
        output = to_text(ResolutionResult())
        
        assert output == "include directories:"
    
    def test_sections(self, result):
        """Test that every section is present."""
        output = to_text(result)
        
        assert "invalid paths:\n\tmissing_dir" in output
        assert "unresolved includes:" in output
        assert "conflicted includes:" in output
        assert output.endswith("include directories:\n\t/repo/include\n\t/repo/pool/lib")
    
    def test_unresolved_ordered_by_line(self, result):
        """Test unresolved includes are ordered by location."""
        output = to_text(result)
        
        first = output.index("\t/repo/src/main.cpp:2 : absent.h")
        second = output.index("\t/repo/src/main.cpp:9 : gone.h")
        assert first < second
    
    def test_conflict_block(self, result):
        """Test the layout of a conflicted include."""
        output = to_text(result)
        
        expected = "\n".join([
            "config.h",
            "\tincluded by:",
            "\t[",
            "\t\t/repo/src/a.cpp:1",
            "\t\t/repo/src/b.cpp:4",
            "\t]",
            "\tcan be resolved by:",
            "\t[",
            "\t\t/repo/pool/x",
            "\t\t/repo/pool/y",
            "\t]",
        ])
        assert expected in output
    
    def test_base_relative_paths(self, result):
        """Test display relative to a base directory."""
        output = to_text(result, base=Path("/repo"))
        
        assert "\tsrc/main.cpp:2 : absent.h" in output
        assert "\t\tpool/x" in output
        assert "/repo" not in output
    
    def test_get_display_path_outside_base(self):
        """Test that paths outside base keep their full form."""
        assert get_display_path(Path("/elsewhere/a.h"), Path("/repo")) == "/elsewhere/a.h"
        assert get_display_path(Path("/repo/a.h"), Path("/repo")) == "a.h"
        assert get_display_path(Path("/repo/a.h")) == "/repo/a.h"


class TestJSONExporter:
    """Tests for the JSON exporter."""
    
    def test_empty_result(self):
        """Test exporting an empty result."""
        data = json.loads(to_json(ResolutionResult()))
        
        assert data == {
            "invalid_paths": [],
            "unresolved": [],
            "conflicted": {},
            "include_dirs": [],
            "files_scanned": [],
        }
    
    def test_full_result(self, result):
        """Test all keys of a populated result."""
        data = json.loads(to_json(result, base=Path("/repo")))
        
        assert data["invalid_paths"] == ["missing_dir"]
        assert data["unresolved"] == [
            {"file": "src/main.cpp", "line": 2, "include": "absent.h"},
            {"file": "src/main.cpp", "line": 9, "include": "gone.h"},
        ]
        assert data["conflicted"] == {
            "config.h": {
                "included_by": [
                    {"file": "src/a.cpp", "line": 1},
                    {"file": "src/b.cpp", "line": 4},
                ],
                "resolved_by": ["pool/x", "pool/y"],
            },
        }
        assert data["include_dirs"] == ["include", "pool/lib"]
        assert data["files_scanned"] == ["src/a.cpp", "src/b.cpp"]
    
    def test_indent(self, result):
        """Test custom indentation."""
        output = to_json(result, indent=4)
        
        assert '\n    "invalid_paths"' in output
