# ============================================================================
# src/medscan/extractors/dosage_extractor.py
# ============================================================================
"""
Dosage Extractor

Finds the first "<amount><unit>" token in cleaned text, scanning lines
top-to-bottom and left-to-right. No attempt is made to pick between several
dosage-looking tokens: the first one wins.

Every surface spelling is mapped to a CanonicalUnit through
UNIT_SURFACE_FORMS, so "500 MG", "500mg" and "500 milligrams" all come back
as DosageValue(500, mg).
"""

import re
import logging
from decimal import Decimal, InvalidOperation
from typing import Dict, Iterable, Optional

from ..constants.dosage_units import UNIT_SURFACE_FORMS
from ..core.context.enums import CanonicalUnit
from ..core.context.extraction_result import DosageValue

logger = logging.getLogger(__name__)


def build_dosage_pattern(surface_forms: Iterable[str]) -> "re.Pattern":
    """
    Compile the amount+unit regex for a set of unit spellings.

    Longer spellings are tried first so "units" is preferred over "unit", and
    a unit must not run into further letters ("5 gabapentin" is not five
    grams).
    """
    alternation = "|".join(
        re.escape(form).replace(r"\ ", r"\s+")
        for form in sorted(surface_forms, key=len, reverse=True)
    )
    return re.compile(
        rf"(?<![\d.])(\d+(?:\.\d+)?)\s*({alternation})(?![a-z])",
        re.IGNORECASE
    )


class DosageExtractor:
    """
    Regex-driven amount + unit detection.

    Pure: the same lines always produce the same DosageValue.
    """

    def __init__(self, unit_forms: Optional[Dict[str, CanonicalUnit]] = None):
        self.unit_forms = dict(unit_forms or UNIT_SURFACE_FORMS)
        self._pattern = build_dosage_pattern(self.unit_forms)

    def extract(self, lines: Iterable[str]) -> Optional[DosageValue]:
        """
        Return the first dosage found in the cleaned lines, or None.

        Args:
            lines: Normalized lines in reading order
        """
        for line_index, line in enumerate(lines):
            for match in self._pattern.finditer(line):
                dosage = self._to_dosage(match.group(1), match.group(2))
                if dosage is not None:
                    logger.debug(
                        f"Dosage '{match.group(0)}' on line {line_index} -> {dosage.display()}"
                    )
                    return dosage

        return None

    def canonical_unit(self, surface: str) -> Optional[CanonicalUnit]:
        """Map one unit spelling to its canonical unit."""
        key = re.sub(r"\s+", " ", surface.strip().lower())
        return self.unit_forms.get(key)

    def _to_dosage(self, amount_text: str, unit_text: str) -> Optional[DosageValue]:
        unit = self.canonical_unit(unit_text)
        if unit is None:
            return None

        try:
            amount = Decimal(amount_text)
        except InvalidOperation:
            return None

        # "0 mg" style artifacts violate amount > 0; keep scanning
        if amount <= 0:
            return None

        return DosageValue(amount=amount, unit=unit)
