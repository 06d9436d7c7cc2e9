# ============================================================================
# src/medscan/constants/noise_words.py
# ============================================================================
"""
Noise Words
- Terms that never form part of a medication name candidate
- Packaging, dosage forms, regulatory boilerplate, filler words and the
  spoken commands people use when dictating a medicine
"""

PACKAGING_TERMS = frozenset({
    "pack", "box", "bottle", "strip", "blister", "carton", "sachet",
    "contents", "contains", "each", "net", "label", "leaflet",
})

DOSAGE_FORM_TERMS = frozenset({
    "tablet", "tablets", "tab", "tabs", "capsule", "capsules", "caps",
    "syrup", "injection", "cream", "gel", "drops", "solution", "suspension",
    "ointment", "pill", "pills", "oral", "film", "coated", "release",
    "extended", "chewable", "dispersible",
    "mcg", "milligram", "milligrams", "microgram", "micrograms", "gram",
    "grams", "milliliter", "milliliters", "millilitre", "millilitres",
    "unit", "units", "international",
})

REGULATORY_TERMS = frozenset({
    "store", "keep", "expiry", "expire", "expires", "exp", "mfg", "mfd",
    "manufactured", "manufacturer", "batch", "lot", "pharma",
    "pharmaceutical", "pharmaceuticals", "ltd", "pvt", "limited", "company",
    "corp", "inc", "laboratories", "labs", "healthcare", "generic", "brand",
    "prescription", "usp", "only", "warning", "children", "reach",
    "temperature", "below", "dry", "place", "date",
})

FILLER_TERMS = frozenset({
    "use", "take", "dose", "dosage", "daily", "twice", "once", "three",
    "times", "morning", "evening", "night", "noon", "clock", "every", "day",
    "days", "hours", "before", "after", "meals", "food", "water", "needed",
    "the", "and", "for", "with", "from", "this", "that", "per",
})

SPOKEN_COMMAND_TERMS = frozenset({
    "add", "medicine", "medication", "please", "remind", "need", "want",
})

NOISE_WORDS = (
    PACKAGING_TERMS
    | DOSAGE_FORM_TERMS
    | REGULATORY_TERMS
    | FILLER_TERMS
    | SPOKEN_COMMAND_TERMS
)
