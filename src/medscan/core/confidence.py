# ============================================================================
# src/medscan/core/confidence.py
# ============================================================================
"""
Confidence Policy

The engine's self-assessment is binary: a result is Confident when it has a
name of at least MIN_NAME_LENGTH characters, Uncertain otherwise. Uncertain
results still travel back to the caller (a dosage on its own is useful on
a manual-entry form) but tell it to ask the user for the name.
"""

from dataclasses import dataclass
from typing import Optional

from .context.enums import ConfidenceLevel
from ..config.thresholds_config import ThresholdSettings, threshold_settings


@dataclass
class ConfidenceThresholds:
    """Confidence thresholds"""
    min_name_length: int = 3

    @classmethod
    def from_settings(cls, settings: Optional[ThresholdSettings] = None) -> "ConfidenceThresholds":
        settings = settings or threshold_settings
        return cls(min_name_length=settings.MIN_NAME_LENGTH)

    def get_level(self, name: Optional[str]) -> ConfidenceLevel:
        """
        Get confidence level for an extracted name.

        Args:
            name: Extracted name, or None/"" when nothing was found
        """
        if name and len(name) >= self.min_name_length:
            return ConfidenceLevel.CONFIDENT
        return ConfidenceLevel.UNCERTAIN


def assess_confidence(
    name: Optional[str],
    thresholds: Optional[ConfidenceThresholds] = None
) -> ConfidenceLevel:
    """Confident iff the name is non-empty and long enough."""
    thresholds = thresholds or ConfidenceThresholds.from_settings()
    return thresholds.get_level(name)
