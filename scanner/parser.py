"""Extraction of #include directives from C/C++ source files."""

import re
from pathlib import Path
from typing import Iterator, Optional, Tuple


# '#include ' at column 0, then the text between the first opening
# delimiter (" or <) and the next closing delimiter (" or >).
INCLUDE_PATTERN = re.compile(r'^#include [^"<]*["<]([^">]*)[">]')


def parse_include_line(line: str) -> Optional[str]:
    """
    Extract the include text from a single source line.

    Args:
        line: One line of source text.

    Returns:
        The raw include text, or None if the line is not a well-formed
        include directive.
    """
    match = INCLUDE_PATTERN.match(line)
    if match is None:
        return None
    return match.group(1)


def scan_includes(file_path: Path) -> Iterator[Tuple[int, str]]:
    """
    Scan a file for include directives.

    The file stays open only while the generator is being consumed.
    Undecodable bytes are replaced instead of aborting the scan.

    Args:
        file_path: File to scan.

    Yields:
        (line_number, include_text) tuples with 1-based line numbers.

    Raises:
        OSError: If the file cannot be opened.
    """
    with open(file_path, "r", encoding="utf-8", errors="replace") as f:
        for line_number, line in enumerate(f, start=1):
            include = parse_include_line(line)
            if include is not None:
                yield line_number, include
