# ============================================================================
# src/medscan/core/extraction_engine.py
# ============================================================================
"""
Medication Extraction Engine

Turns one RawText into one ExtractionResult:

    normalize lines
      ├── dosage extractor            (always)
      ├── known-entity matcher        (name, first choice)
      │     └── candidate scorer      (name, only when the dictionary misses)
      └── speech modifiers            (speech transcripts only)
    confidence policy

Synchronous and side-effect free. The known-medication dictionary and the
noise-word list are constructor parameters so tests and deployments can
swap them without touching module constants.
"""

import logging
from typing import Dict, Iterable, Optional, Sequence, Tuple

from .confidence import ConfidenceThresholds
from .context.enums import CanonicalUnit, CaptureSource, Frequency
from .context.extraction_result import ExtractionResult
from .context.raw_text import RawText
from ..config.thresholds_config import ThresholdSettings, threshold_settings
from ..extractors.candidate_extractor import CandidateExtractor
from ..extractors.dosage_extractor import DosageExtractor
from ..extractors.known_entity_matcher import KnownEntityMatcher
from ..extractors.speech_modifiers import FREQUENCY_KEYWORDS, SpeechModifierExtractor
from ..utils.exceptions import NameNotDetectedError, NoTextDetectedError
from ..utils.logging import log_performance
from ..utils.text_normalizer import normalize_lines, significant_length

logger = logging.getLogger(__name__)


class MedicationExtractionEngine:
    """
    Consolidated text-to-medication pipeline.

    Args:
        known_medications: Ordered dictionary of lowercase names (priority = order)
        noise_words: Words excluded from name candidates
        settings: Threshold settings
        unit_forms: Unit spelling -> CanonicalUnit table
        frequency_keywords: Ordered (keyword, Frequency) pairs for speech
    """

    def __init__(
        self,
        known_medications: Optional[Sequence[str]] = None,
        noise_words: Optional[Iterable[str]] = None,
        settings: Optional[ThresholdSettings] = None,
        unit_forms: Optional[Dict[str, CanonicalUnit]] = None,
        frequency_keywords: Sequence[Tuple[str, Frequency]] = FREQUENCY_KEYWORDS,
    ):
        self.settings = settings or threshold_settings
        self.thresholds = ConfidenceThresholds.from_settings(self.settings)

        self.dosage_extractor = DosageExtractor(unit_forms)
        self.entity_matcher = KnownEntityMatcher(known_medications)
        self.candidate_extractor = CandidateExtractor(noise_words, self.settings)
        self.speech_extractor = SpeechModifierExtractor(frequency_keywords)

    def has_text(self, raw_text: RawText) -> bool:
        """False when the recognizer returned (near-)empty text."""
        return significant_length(raw_text.full_text) >= self.settings.MIN_SIGNIFICANT_CHARS

    @log_performance(logger, "Medication extraction")
    def extract(self, raw_text: RawText) -> ExtractionResult:
        """
        Run the full pipeline over one piece of recognized text.

        Always returns a result; an Uncertain result may still carry a dosage.
        """
        lines = normalize_lines(raw_text.lines, self.settings.MIN_LINE_LENGTH)

        dosage = self.dosage_extractor.extract(lines)

        name = self.entity_matcher.match(lines)
        name_method = "dictionary" if name else None
        if name is None:
            name = self.candidate_extractor.extract(lines, raw_text.source)
            name_method = "candidate" if name else None

        if raw_text.source is CaptureSource.SPEECH:
            frequency, time = self.speech_extractor.extract(raw_text.full_text)
        else:
            frequency, time = Frequency.UNSPECIFIED, None

        result = ExtractionResult(
            name=name,
            dosage=dosage,
            frequency=frequency,
            time=time,
            confidence=self.thresholds.get_level(name),
            source=raw_text.source,
            name_method=name_method,
        )

        logger.info(
            f"Extracted from {raw_text.source.value}: name={result.name!r} "
            f"({name_method or 'none'}), dosage={result.dosage_display}, "
            f"confidence={result.confidence.value}"
        )
        return result

    def extract_text(self, text: str, source: CaptureSource) -> ExtractionResult:
        """Convenience wrapper for a plain recognizer string."""
        return self.extract(RawText.from_text(text, source))

    def extract_strict(self, raw_text: RawText) -> ExtractionResult:
        """
        Like extract(), but only returns Confident results.

        Raises:
            NoTextDetectedError: recognized text is (near-)empty
            NameNotDetectedError: text present but no name cleared the bar;
                the partial result is attached as ``error.result``
        """
        if not self.has_text(raw_text):
            raise NoTextDetectedError(
                f"Fewer than {self.settings.MIN_SIGNIFICANT_CHARS} significant characters "
                f"from {raw_text.source.value}"
            )

        result = self.extract(raw_text)
        if not result.is_confident:
            raise NameNotDetectedError(
                f"No medication name detected in {raw_text.source.value} text",
                result=result
            )
        return result
