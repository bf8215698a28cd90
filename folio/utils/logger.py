"""
Session logging for folio scripts.

Every script run gets its own directory under FOLIO_LOGS_PATH holding one
log file per context. The file receives DEBUG and above; the console only
shows console_level and above. Each session starts with a provenance block
so a log can be traced back to the command and environment that wrote it.

Context-specific wrappers live in contexts/{context}/logger.py.
"""

import os
import platform
import sys
from datetime import datetime
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

load_dotenv()
LOGS_PATH = Path(os.getenv("FOLIO_LOGS_PATH", "outs/logs"))

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"

# Console colors per level
LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}


def default_log_dir(session_name: str) -> Path:
    """
    Timestamped session directory under FOLIO_LOGS_PATH.

    Example:
        >>> default_log_dir("render")
        PosixPath('outs/logs/render_20251114_123456')
    """
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return LOGS_PATH / f"{session_name}_{stamp}"


def _package_version() -> str:
    try:
        return version("folio")
    except PackageNotFoundError:
        return "unknown (not installed)"


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: dict = None,
    level_colors: dict = None,
    console_level: str = "INFO",
) -> Path:
    """
    Point loguru at a session log file and the console.

    Args:
        context_name: Context identifier, used as the log file name (e.g., "render")
        log_dir: Session directory (created if missing)
        extra_provenance: Extra key-value pairs for the provenance block
        level_colors: Console color overrides (e.g., {"INFO": "<cyan>"})
        console_level: Minimum level echoed to stdout

    Returns:
        Path to the log file

    Example:
        log_file = setup_logger(
            context_name="render",
            log_dir=default_log_dir("render"),
            extra_provenance={"Presets": "page_a4, margins_narrow"},
        )
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()

    for level_name, color in {**LEVEL_COLORS, **(level_colors or {})}.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG")
    logger.add(sys.stdout, format=CONSOLE_FORMAT, level=console_level, colorize=True)

    log_provenance({"Context": context_name, **(extra_provenance or {})})

    return log_file


def log_provenance(extra_context: dict = None) -> None:
    """Log the command, environment and folio version, plus any extra pairs."""
    logger.info("=" * 80)
    logger.info(f"Command: {' '.join(sys.argv)}")
    logger.info(f"Working directory: {Path.cwd()}")
    logger.info(f"Python: {platform.python_version()} ({platform.system()})")
    logger.info(f"folio: {_package_version()}")

    for key, value in (extra_context or {}).items():
        logger.info(f"{key}: {value}")

    logger.info("=" * 80)
