# ============================================================================
# src/medscan/core/context/enums.py
# ============================================================================
"""
Scan Enums
- Capture sources (in fallback priority order)
- Canonical dosage units
- Frequency / confidence / failure reasons
- Orchestrator states
"""

from enum import Enum


class CaptureSource(str, Enum):
    # Declaration order is fallback priority: highest fidelity first
    REGION_OCR = "region-ocr"
    FRAME_OCR = "frame-ocr"
    SPEECH = "speech"

    @property
    def is_ocr(self) -> bool:
        return self is not CaptureSource.SPEECH

    @property
    def priority(self) -> int:
        return list(CaptureSource).index(self)


class CanonicalUnit(str, Enum):
    MG = "mg"
    MCG = "mcg"
    G = "g"
    ML = "ml"
    IU = "IU"
    TABLET = "tablet"
    PERCENT = "percent"
    UNIT = "unit"

    @property
    def symbol(self) -> str:
        return "%" if self is CanonicalUnit.PERCENT else self.value


class Frequency(str, Enum):
    ONCE_DAILY = "OnceDaily"
    TWICE_DAILY = "TwiceDaily"
    THREE_TIMES_DAILY = "ThreeTimesDaily"
    AS_NEEDED = "AsNeeded"
    UNSPECIFIED = "Unspecified"

    @property
    def label(self) -> str:
        return _FREQUENCY_LABELS[self]


_FREQUENCY_LABELS = {
    Frequency.ONCE_DAILY: "Once daily",
    Frequency.TWICE_DAILY: "Twice daily",
    Frequency.THREE_TIMES_DAILY: "Three times daily",
    Frequency.AS_NEEDED: "As needed",
    Frequency.UNSPECIFIED: "",
}


class ConfidenceLevel(str, Enum):
    CONFIDENT = "confident"
    UNCERTAIN = "uncertain"     # caller routes the name to manual entry


class FailureReason(str, Enum):
    NO_TEXT_DETECTED = "NoTextDetected"
    NAME_NOT_DETECTED = "NameNotDetected"
    RECOGNITION_UNAVAILABLE = "RecognitionUnavailable"
    RECOGNITION_FAILED = "RecognitionFailed"

    @property
    def rank(self) -> int:
        """Higher rank = more informative for the user when all sources fail."""
        return _FAILURE_RANKS[self]


_FAILURE_RANKS = {
    FailureReason.NAME_NOT_DETECTED: 3,
    FailureReason.NO_TEXT_DETECTED: 2,
    FailureReason.RECOGNITION_FAILED: 1,
    FailureReason.RECOGNITION_UNAVAILABLE: 0,
}


class ExtractionState(str, Enum):
    IDLE = "Idle"
    AWAITING_TEXT = "AwaitingText"
    EXTRACTING = "Extracting"
    SUCCEEDED = "Succeeded"
    INSUFFICIENT_CONFIDENCE = "InsufficientConfidence"
