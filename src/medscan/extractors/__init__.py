# src/medscan/extractors/__init__.py
"""
Extraction Module

Stages of the text-to-medication pipeline:
- Dosage detection (amount + canonical unit)
- Known medication dictionary matching
- Candidate name generation and scoring
- Frequency / time-of-day parsing for speech
- Gateways around the injected OCR / speech / region capabilities
"""

from .dosage_extractor import DosageExtractor, build_dosage_pattern
from .known_entity_matcher import KnownEntityMatcher
from .candidate_extractor import CandidateExtractor
from .speech_modifiers import (
    SpeechModifierExtractor,
    FREQUENCY_KEYWORDS,
    parse_frequency,
    parse_time,
)
from .recognition import (
    RecognitionGateway,
    RegionDetectionGateway,
    TextRecognizer,
    SpeechRecognizer,
    RegionDetector,
)

__all__ = [
    "DosageExtractor",
    "build_dosage_pattern",
    "KnownEntityMatcher",
    "CandidateExtractor",
    "SpeechModifierExtractor",
    "FREQUENCY_KEYWORDS",
    "parse_frequency",
    "parse_time",
    "RecognitionGateway",
    "RegionDetectionGateway",
    "TextRecognizer",
    "SpeechRecognizer",
    "RegionDetector",
]
