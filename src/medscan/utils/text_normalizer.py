# ============================================================================
# src/medscan/utils/text_normalizer.py
# ============================================================================
"""
Text Normalization Utilities

Cleans up recognized text before any entity extraction:
- Lowercases and rewrites unit symbols (µg -> mcg) while they still exist
- Drops thousands separators inside numbers (1,000 -> 1000)
- Replaces everything outside [a-z0-9% /.-] with a space
- Collapses whitespace
- Drops lines too short to carry information (stray OCR artifacts)

normalize_line() is idempotent: cleaning a cleaned line returns it unchanged.
"""

import re
import logging
from typing import Iterable, List

from ..constants.dosage_units import UNIT_SYMBOL_REPLACEMENTS

logger = logging.getLogger(__name__)

_THOUSANDS_SEPARATOR = re.compile(r"(?<=\d),(?=\d{3}(?!\d))")
_DISALLOWED_CHARS = re.compile(r"[^a-z0-9% /.\-]+")
_WHITESPACE = re.compile(r"\s+")
_SIGNIFICANT_CHARS = re.compile(r"[a-z0-9%]")

DEFAULT_MIN_LINE_LENGTH = 3


def canonicalize_unit_symbols(text: str) -> str:
    """Rewrite unit symbols that the character filter would otherwise destroy."""
    for symbol, replacement in UNIT_SYMBOL_REPLACEMENTS:
        text = text.replace(symbol, replacement)
    return text


def normalize_line(line: str) -> str:
    """
    Clean a single recognized line.

    Examples:
        "  Metformin HCl, 500 MG  " -> "metformin hcl 500 mg"
        "Vit-D3 1000 I.U."          -> "vit-d3 1000 iu"
        "Cyanocobalamin 50µg"       -> "cyanocobalamin 50mcg"
        "Vitamin D3 1,000 IU"       -> "vitamin d3 1000 iu"
    """
    if not line:
        return ""

    cleaned = canonicalize_unit_symbols(line.lower())
    cleaned = _THOUSANDS_SEPARATOR.sub("", cleaned)
    cleaned = _DISALLOWED_CHARS.sub(" ", cleaned)
    cleaned = _WHITESPACE.sub(" ", cleaned)
    return cleaned.strip()


def normalize_lines(
    lines: Iterable[str],
    min_length: int = DEFAULT_MIN_LINE_LENGTH
) -> List[str]:
    """
    Clean every line and drop the ones shorter than min_length.

    Order of the surviving lines is preserved.
    """
    cleaned_lines = []
    dropped = 0

    for line in lines:
        cleaned = normalize_line(line)
        if len(cleaned) < min_length:
            dropped += 1
            continue
        cleaned_lines.append(cleaned)

    if dropped:
        logger.debug(f"Dropped {dropped} noise line(s) shorter than {min_length} chars")

    return cleaned_lines


def significant_length(text: str) -> int:
    """Number of letters, digits and percent signs left after cleaning."""
    return len(_SIGNIFICANT_CHARS.findall(normalize_line(text)))


def title_case(text: str) -> str:
    """
    Capitalize every word and join with single spaces.

    Unlike str.title() only the first letter of each space-separated word
    changes, so "l-arginine" becomes "L-arginine" rather than "L-Arginine".
    """
    return " ".join(word[:1].upper() + word[1:] for word in text.split())
