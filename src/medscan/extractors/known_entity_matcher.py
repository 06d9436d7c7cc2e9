# ============================================================================
# src/medscan/extractors/known_entity_matcher.py
# ============================================================================
"""
Known-Entity Matcher

Dictionary lookup of common medication names against the whole cleaned
text (all lines joined), not line by line, so a name split across two OCR
lines can still be found.

Entries are checked in dictionary order and the first one that occurs as a
substring wins. This is a fixed priority, not longest-match: with the
default dictionary "calcium with vitamin d" resolves to "Vitamin D" because
that entry comes before "calcium".
"""

import logging
from typing import Iterable, Optional, Sequence, Tuple

from ..constants.medication_names import KNOWN_MEDICATIONS
from ..utils.text_normalizer import normalize_line, title_case

logger = logging.getLogger(__name__)


class KnownEntityMatcher:
    """First-hit substring search over a fixed-order dictionary."""

    def __init__(self, known_medications: Optional[Sequence[str]] = None):
        entries = KNOWN_MEDICATIONS if known_medications is None else known_medications
        # Entries go through the same cleaning as the text they are matched against
        self.entries: Tuple[str, ...] = tuple(
            cleaned for cleaned in (normalize_line(entry) for entry in entries) if cleaned
        )

    def match(self, lines: Iterable[str]) -> Optional[str]:
        """
        Return the first dictionary entry found in the text, Title-Cased.

        Args:
            lines: Normalized lines; they are joined with single spaces

        Returns:
            e.g. "Vitamin D", or None when no entry occurs
        """
        text = " ".join(lines)
        if not text:
            return None

        for entry in self.entries:
            if entry in text:
                logger.debug(f"Dictionary hit: '{entry}'")
                return title_case(entry)

        return None

    def __len__(self) -> int:
        return len(self.entries)
