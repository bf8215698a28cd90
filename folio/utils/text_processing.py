"""
Text processing utilities for formatting and display.
"""

import re
from pathlib import Path


def truncate_display(text: str, max_len: int) -> str:
    """
    Truncate text for display with ellipsis if needed.

    Args:
        text: Text to truncate
        max_len: Maximum length including ellipsis

    Returns:
        Original text if within max_len, otherwise truncated with "..."

    Example:
        >>> truncate_display("short", 10)
        'short'
        >>> truncate_display("this is a very long string", 10)
        'this is...'
    """
    return text if len(text) <= max_len else text[: max_len - 3] + "..."


def collapse_whitespace(text: str) -> str:
    """
    Collapse every run of whitespace (including newlines) to a single space.

    Example:
        >>> collapse_whitespace("  Senior   Engineer\\n Acme ")
        'Senior Engineer Acme'
    """
    return re.sub(r"\s+", " ", text).strip()


def read_text_lenient(path: Path) -> str:
    """
    Read a UTF-8 text file, replacing undecodable bytes instead of failing.

    Replacement characters (U+FFFD) are later dropped by the sanitizer.
    """
    return Path(path).read_text(encoding="utf-8", errors="replace")
