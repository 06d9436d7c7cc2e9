# ============================================================================
# src/medscan/constants/dosage_units.py
# ============================================================================
"""
Dosage Unit Tables
- Surface spellings of a unit -> CanonicalUnit
- Symbol rewrites applied before text cleaning strips non-ASCII characters
"""

from ..core.context.enums import CanonicalUnit

UNIT_SURFACE_FORMS = {
    "mg": CanonicalUnit.MG,
    "milligram": CanonicalUnit.MG,
    "milligrams": CanonicalUnit.MG,

    "mcg": CanonicalUnit.MCG,
    "µg": CanonicalUnit.MCG,
    "μg": CanonicalUnit.MCG,
    "ug": CanonicalUnit.MCG,
    "microgram": CanonicalUnit.MCG,
    "micrograms": CanonicalUnit.MCG,

    "g": CanonicalUnit.G,
    "gram": CanonicalUnit.G,
    "grams": CanonicalUnit.G,

    "ml": CanonicalUnit.ML,
    "milliliter": CanonicalUnit.ML,
    "milliliters": CanonicalUnit.ML,
    "millilitre": CanonicalUnit.ML,
    "millilitres": CanonicalUnit.ML,

    "iu": CanonicalUnit.IU,
    "international unit": CanonicalUnit.IU,
    "international units": CanonicalUnit.IU,

    "unit": CanonicalUnit.UNIT,
    "units": CanonicalUnit.UNIT,

    "tablet": CanonicalUnit.TABLET,
    "tablets": CanonicalUnit.TABLET,
    "capsule": CanonicalUnit.TABLET,
    "capsules": CanonicalUnit.TABLET,

    "%": CanonicalUnit.PERCENT,
}

# Applied to lowercased text, in order
UNIT_SYMBOL_REPLACEMENTS = (
    ("µg", "mcg"),     # micro sign U+00B5
    ("μg", "mcg"),     # greek mu U+03BC
    ("i.u.", "iu"),
    ("％", "%"),
)
