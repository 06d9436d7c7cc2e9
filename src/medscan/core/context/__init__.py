# src/medscan/core/context/__init__.py

from .enums import (
    CanonicalUnit,
    CaptureSource,
    ConfidenceLevel,
    ExtractionState,
    FailureReason,
    Frequency,
)
from .raw_text import RawText, Candidate
from .extraction_result import (
    DosageValue,
    ExtractionResult,
    ExtractionFailure,
    SourceAttempt,
    ScanOutcome,
)

__all__ = [
    "CanonicalUnit",
    "CaptureSource",
    "ConfidenceLevel",
    "ExtractionState",
    "FailureReason",
    "Frequency",
    "RawText",
    "Candidate",
    "DosageValue",
    "ExtractionResult",
    "ExtractionFailure",
    "SourceAttempt",
    "ScanOutcome",
]
