"""
Layout context logger.

Provides logging interface for layout context with automatic [layout] prefix.
All layout modules should import from this module, not from utils.logger directly.
Layout runs inside a rendering session, so there is no separate setup function.
"""

from loguru import logger

CONTEXT_PREFIX = "[layout]"


# Wrapper functions with automatic [layout] prefix


def _log_info(message: str) -> None:
    """Log info message with [layout] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [layout] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level layout-specific logging helpers


def log_layout_result(line_count: int, block_count: int, page_count: int) -> None:
    """Log the size of a finished render plan."""
    _log_info(f"Laid out {line_count} lines as {block_count} blocks on {page_count} page(s)")


def log_page_break(page: int, role: str) -> None:
    _log_debug(f"  page break -> page {page + 1} (before {role})")
