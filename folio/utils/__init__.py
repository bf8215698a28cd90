"""
Shared utilities for FOLIO.

Common functionality used across contexts:
- Logger setup
- LLM provider access
- Text helpers
"""

from folio.utils.text_processing import collapse_whitespace, truncate_display

__all__ = ["collapse_whitespace", "truncate_display"]
