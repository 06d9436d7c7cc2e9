# ============================================================================
# src/medscan/core/__init__.py
# ============================================================================
"""
Core components for the medication scan engine.
"""

# context has no intra-package imports and must load first
from .context import (
    CanonicalUnit,
    CaptureSource,
    ConfidenceLevel,
    ExtractionState,
    FailureReason,
    Frequency,
    RawText,
    Candidate,
    DosageValue,
    ExtractionResult,
    ExtractionFailure,
    SourceAttempt,
    ScanOutcome,
)
from .confidence import ConfidenceThresholds, assess_confidence
from .state import ScanStateMachine, TRANSITIONS
from .extraction_engine import MedicationExtractionEngine
from .orchestrator import ScanOrchestrator

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
    "ConfidenceThresholds",
    "assess_confidence",
    "ScanStateMachine",
    "TRANSITIONS",
    "MedicationExtractionEngine",
    "ScanOrchestrator",
]
