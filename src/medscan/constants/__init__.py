# ============================================================================
# src/medscan/constants/__init__.py
# ============================================================================
"""
Convenient imports for all constants
"""

from .medication_names import KNOWN_MEDICATIONS
from .noise_words import NOISE_WORDS
from .dosage_units import UNIT_SURFACE_FORMS, UNIT_SYMBOL_REPLACEMENTS

__all__ = [
    "KNOWN_MEDICATIONS",
    "NOISE_WORDS",
    "UNIT_SURFACE_FORMS",
    "UNIT_SYMBOL_REPLACEMENTS",
]
