# ============================================================================
# src/medscan/constants/medication_names.py
# ============================================================================
"""
Known Medication Dictionary
- Lowercase names of common medications and supplements
- Tuple order is match priority: the first entry found in the text wins,
  even when a later entry is longer
"""

KNOWN_MEDICATIONS = (
    # Analgesics / anti-inflammatories
    "paracetamol",
    "acetaminophen",
    "ibuprofen",
    "aspirin",

    # Antibiotics
    "amoxicillin",

    # Cardiometabolic
    "metformin",
    "lisinopril",
    "atorvastatin",
    "omeprazole",
    "levothyroxine",
    "amlodipine",
    "simvastatin",
    "losartan",

    # Neuro / psych / pain
    "gabapentin",
    "sertraline",
    "tramadol",

    # Respiratory / diuretics
    "albuterol",
    "furosemide",

    "pantoprazole",
    "hydrochlorothiazide",
    "montelukast",
    "escitalopram",
    "rosuvastatin",
    "trazodone",

    # Supplements
    "vitamin d",
    "vitamin c",
    "vitamin b",
    "calcium",
    "iron",
    "magnesium",
    "zinc",
    "omega 3",
    "omega",
)
