# ============================================================================
# src/medscan/__init__.py
# ============================================================================
"""
MedScan extraction engine.

Turns OCR output from a medicine package, or a dictated transcript, into a
structured medication record (name, dosage, frequency, time of day).

    from medscan import ScanOrchestrator, CaptureSource

    orchestrator = ScanOrchestrator()
    outcome = orchestrator.process_text("Paracetamol 500mg once daily", CaptureSource.SPEECH)
"""

from .core import (
    CanonicalUnit,
    CaptureSource,
    ConfidenceLevel,
    ExtractionState,
    FailureReason,
    Frequency,
    RawText,
    DosageValue,
    ExtractionResult,
    ExtractionFailure,
    SourceAttempt,
    ScanOutcome,
    MedicationExtractionEngine,
    ScanOrchestrator,
    assess_confidence,
)
from .utils.exceptions import MedScanError

__version__ = "0.1.0"

__all__ = [
    "CanonicalUnit",
    "CaptureSource",
    "ConfidenceLevel",
    "ExtractionState",
    "FailureReason",
    "Frequency",
    "RawText",
    "DosageValue",
    "ExtractionResult",
    "ExtractionFailure",
    "SourceAttempt",
    "ScanOutcome",
    "MedicationExtractionEngine",
    "ScanOrchestrator",
    "assess_confidence",
    "MedScanError",
]
