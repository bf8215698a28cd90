"""
Targeting context logger.

Provides logging interface for targeting context with automatic [target] prefix.
All targeting modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from folio.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[target]"


def setup_targeting_logger(log_dir: Path) -> Path:
    """
    Setup logger for targeting context.

    Args:
        log_dir: Directory for this targeting session

    Returns:
        Path to log file
    """
    return _setup_logger(context_name="target", log_dir=log_dir)


# Wrapper functions with automatic [target] prefix


def _log_info(message: str) -> None:
    """Log info message with [target] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [target] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level targeting-specific logging helpers


def log_match(score: int, matched: int, total: int) -> None:
    _log_debug(f"Keyword match: {matched}/{total} job keywords ({score}%)")


def log_optimization(section_count: int, change_count: int) -> None:
    """Log a finished rule-based optimization."""
    _log_info(f"Rule-based optimization: {change_count} change(s) across {section_count} section(s)")
