"""Custom exceptions for rendering context with output references."""

from pathlib import Path
from typing import Optional


class RenderBackendError(Exception):
    """
    Exception raised when the drawing backend fails to produce a document.

    Attributes:
        message: Error description
        output_path: Where the document was being written (None for in-memory renders)
        original_error: The original backend error
    """

    def __init__(
        self,
        message: str,
        output_path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.output_path = output_path
        self.original_error = original_error

        parts = [message]

        if output_path:
            parts.append(f"\nOutput: {output_path}")

        if original_error:
            parts.append(f"\nOriginal error: {str(original_error)}")

        super().__init__("\n".join(parts))
