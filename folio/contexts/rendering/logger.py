"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from folio.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Path, backend: str = "reportlab", preset_names: list = None) -> Path:
    """
    Setup logger for rendering context.

    Configures loguru with provenance tracking and rendering-specific context.

    Args:
        log_dir: Directory for this rendering session
        backend: Name of the drawing backend (recorded in provenance)
        preset_names: Layout presets applied for this run (recorded in provenance)

    Returns:
        Path to log file

    Example:
        from folio.contexts.rendering.logger import setup_rendering_logger

        log_file = setup_rendering_logger(log_dir)
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_provenance={
            "Backend": backend,
            "Presets": ", ".join(preset_names) if preset_names else "(defaults)",
        },
    )


# Wrapper functions with automatic [render] prefix


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_render_result(output: str, page_count: int, block_count: int, elapsed_time: float) -> None:
    """Log a finished PDF render."""
    _log_success(f"Rendered {output}: {page_count} page(s), {block_count} blocks ({elapsed_time:.2f}s)")


def log_docx_result(output: str, paragraph_count: int, elapsed_time: float) -> None:
    """Log a finished Word document (pagination is left to the word processor)."""
    _log_success(f"Wrote {output}: {paragraph_count} paragraph(s) ({elapsed_time:.2f}s)")


def log_diagnostics(issues: list, verbose: bool = False) -> None:
    """
    Log plan diagnostics.

    Args:
        issues: Issue messages from PlanDiagnostics.get_inherited_issues()
        verbose: Show every issue instead of the first few
    """
    if not issues:
        _log_success("Render plan diagnostics: no issues")
        return

    _log_warning(f"Render plan diagnostics: {len(issues)} issue(s)")
    limit = len(issues) if verbose else 5
    for i, issue in enumerate(issues[:limit], 1):
        _log_warning(f"  Issue {i}: {issue}")
    if len(issues) > limit:
        _log_warning(f"  ... and {len(issues) - limit} more issues")
