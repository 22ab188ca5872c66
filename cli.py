#!/usr/bin/env python3
"""
Include Resolver CLI

A tool for finding the directories that must be added to the include path so
that every #include in a set of C/C++ sources resolves to exactly one file.
"""

import argparse
import functools
import logging
import sys
from pathlib import Path

from exporters import to_json, to_text
from model.paths import canonical_path
from scanner.resolver import compute_include_resolve, no_parse_status, print_parse_status
from scanner.settings import ResolverSettings, SettingsError, load_settings


def parse_args(args=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="incresolve",
        description="Compute the include directories needed to resolve every #include.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  incresolve src                          # Parse src, no candidate pool
  incresolve src -r third_party           # Search third_party for headers
  incresolve src -I include -r external   # include/ is already on the path
  incresolve -c resolver.yaml -f json     # Settings from a YAML file, JSON output
  incresolve src -r sdk --strict -q       # Fail if anything is unresolved
        """,
    )

    # Positional arguments
    parser.add_argument(
        "parse",
        nargs="*",
        default=[],
        help="Directories whose sources are scanned for includes",
    )

    # Resolution options
    parser.add_argument(
        "-I", "--include",
        action="append",
        default=[],
        metavar="DIR",
        help="Directory already on the include path (repeatable)",
    )

    parser.add_argument(
        "-r", "--resolve",
        action="append",
        default=[],
        metavar="DIR",
        help="Directory searched for candidate headers (repeatable)",
    )

    parser.add_argument(
        "-c", "--config",
        type=str,
        default=None,
        help="YAML settings file with 'parse', 'include' and 'resolve' lists",
    )

    # Output options
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Output file (default: stdout)",
    )

    parser.add_argument(
        "-f", "--format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )

    parser.add_argument(
        "--base",
        type=str,
        default=None,
        help="Base path for relative path display",
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Do not print per-file progress to stderr",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 2 if any include is unresolved or conflicted",
    )

    return parser.parse_args(args)


def build_settings(parsed) -> ResolverSettings:
    """
    Build resolver settings from parsed arguments.

    Directories from the settings file come first, command line directories
    are appended after them.

    Raises:
        SettingsError: If the settings file cannot be loaded.
    """
    settings = ResolverSettings()
    if parsed.config:
        settings = load_settings(Path(parsed.config))

    return settings.merged(ResolverSettings(
        parse_dirs=[Path(p) for p in parsed.parse],
        include_dirs=[Path(p) for p in parsed.include],
        resolve_dirs=[Path(p) for p in parsed.resolve],
    ))


def main(args=None):
    """Main entry point."""
    parsed = parse_args(args)

    logging.basicConfig(
        level=logging.DEBUG if parsed.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        settings = build_settings(parsed)
    except SettingsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not settings.parse_dirs:
        print("Error: no directory to parse", file=sys.stderr)
        return 1

    base = canonical_path(parsed.base) if parsed.base else None

    if parsed.quiet:
        callback = no_parse_status
    else:
        callback = functools.partial(print_parse_status, stream=sys.stderr)

    result = compute_include_resolve(settings, callback)

    # Generate output
    if parsed.format == "json":
        output = to_json(result, base=base)
    else:
        output = to_text(result, base=base)

    # Write output
    if parsed.output:
        try:
            output_path = Path(parsed.output)
            output_path.write_text(output + "\n", encoding="utf-8")
            print(f"Output written to: {output_path}", file=sys.stderr)
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
    else:
        print(output)

    if parsed.strict and not result.is_clean:
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
