"""
Intake context logger.

Provides logging interface for intake context with automatic [intake] prefix.
All intake modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from folio.utils.logger import setup_logger as _setup_logger
from folio.utils.text_processing import truncate_display

CONTEXT_PREFIX = "[intake]"


def setup_intake_logger(log_dir: Path) -> Path:
    """
    Setup logger for intake context.

    Args:
        log_dir: Directory for this intake session

    Returns:
        Path to log file
    """
    return _setup_logger(context_name="intake", log_dir=log_dir)


# Wrapper functions with automatic [intake] prefix


def _log_info(message: str) -> None:
    """Log info message with [intake] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [intake] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [intake] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level intake-specific logging helpers


def log_classification_summary(role_counts: dict, source: str) -> None:
    """
    Log how many lines landed in each role.

    Args:
        role_counts: Mapping of role value -> count
        source: "heuristic" or "hint"
    """
    total = sum(role_counts.values())
    breakdown = ", ".join(f"{role}={count}" for role, count in sorted(role_counts.items()))
    _log_debug(f"Classified {total} lines ({source}): {breakdown}")


def log_hint_rejected(reason: str) -> None:
    """Log a rejected structuring hint; heuristics take over."""
    _log_warning(f"Structuring hint rejected, using heuristic classification: {reason}")


def log_line_decision(index: int, role: str, text: str) -> None:
    """Trace a single classification decision."""
    _log_debug(f"  line {index:03d} -> {role:<14} | {truncate_display(text, 60)}")
