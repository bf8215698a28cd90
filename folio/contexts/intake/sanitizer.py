"""
Résumé text sanitizer for the Intake context.

Maps typographic punctuation and decorative symbols to characters every
rendering backend can draw, then drops anything else outside the supported
Latin range. Runs before classification so that patterns only ever see
straight quotes, plain hyphens and a single canonical bullet glyph.
"""

import re
import unicodedata
from typing import Iterable, List

CANONICAL_BULLET = "\u2022"

# Unicode replacements: problematic char -> renderable equivalent
UNICODE_REPLACEMENTS = {
    # Spaces
    "\u00a0": " ",  # non-breaking space
    "\u202f": " ",  # narrow no-break space
    "\u2007": " ",  # figure space
    "\u2009": " ",  # thin space
    # Zero-width characters -> remove
    "\u200b": "",  # zero-width space
    "\u200c": "",  # zero-width non-joiner
    "\u200d": "",  # zero-width joiner
    "\u2060": "",  # word joiner
    "\ufeff": "",  # BOM / zero-width no-break space
    "\u00ad": "",  # soft hyphen
    # Quotes
    "\u2018": "'",  # left single quote
    "\u2019": "'",  # right single quote
    "\u201a": "'",  # single low-9 quote
    "\u2032": "'",  # prime
    "\u201c": '"',  # left double quote
    "\u201d": '"',  # right double quote
    "\u201e": '"',  # double low-9 quote
    "\u2033": '"',  # double prime
    # Dashes
    "\u2010": "-",  # hyphen
    "\u2011": "-",  # non-breaking hyphen
    "\u2012": "-",  # figure dash
    "\u2013": "-",  # en dash
    "\u2014": "-",  # em dash
    "\u2015": "-",  # horizontal bar
    "\u2212": "-",  # minus sign
    # Ellipsis
    "\u2026": "...",
    # Fraction slash (NFKC output for vulgar fractions)
    "\u2044": "/",
    # Checkmarks and crosses
    "\u2713": "[x]",  # check mark
    "\u2714": "[x]",  # heavy check mark
    "\u2611": "[x]",  # ballot box with check
    "\u2717": "[ ]",  # ballot x
    "\u2718": "[ ]",  # heavy ballot x
    "\u2610": "[ ]",  # ballot box
}

# Decorative bullet glyphs folded into the canonical bullet
BULLET_GLYPHS = (
    "\u25b8",  # small right triangle
    "\u25ba",  # right pointer
    "\u25c6",  # black diamond
    "\u25c7",  # white diamond
    "\u25a0",  # black square
    "\u25a1",  # white square
    "\u25cf",  # black circle
    "\u25cb",  # white circle
    "\u25aa",  # small black square
    "\u25e6",  # white bullet
    "\u2023",  # triangular bullet
    "\u2043",  # hyphen bullet
    "\u00b7",  # middle dot
    "\u2219",  # bullet operator
)

# Anything outside printable ASCII, printable Latin-1, tab, newline and the bullet
_DISALLOWED = re.compile(r"[^\t\n\x20-\x7e\xa1-\xff\u2022]")


def sanitize(text: str) -> str:
    """
    Normalize résumé text to safe, renderable characters.

    Applies NFKC normalization (ligatures, full-width forms, exotic spaces),
    explicit replacements for quotes, dashes, ellipses, checkmarks and bullets,
    and strips every remaining character outside the supported range.
    Line breaks are normalized to "\\n" and preserved.

    The function is total and idempotent: sanitize(sanitize(x)) == sanitize(x).

    Args:
        text: Raw text possibly containing problematic unicode

    Returns:
        Sanitized text

    Example:
        >>> sanitize("“Led” teams — 2019–2021 ✔")
        '"Led" teams - 2019-2021 [x]'
    """
    if not text:
        return ""

    text = text.replace("\r\n", "\n").replace("\r", "\n")

    # NFKC normalization handles many compatibility characters
    text = unicodedata.normalize("NFKC", text)

    for char, replacement in UNICODE_REPLACEMENTS.items():
        text = text.replace(char, replacement)

    for glyph in BULLET_GLYPHS:
        text = text.replace(glyph, CANONICAL_BULLET)

    return _DISALLOWED.sub("", text)


def sanitize_lines(lines: Iterable[str]) -> List[str]:
    """Sanitize each line independently."""
    return [sanitize(line) for line in lines]
