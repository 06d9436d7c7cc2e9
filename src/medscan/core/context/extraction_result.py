# ============================================================================
# src/medscan/core/context/extraction_result.py
# ============================================================================
"""
Values returned to the caller
- DosageValue: amount + canonical unit
- ExtractionResult: the structured medication record
- ExtractionFailure: typed failure signal with a user-facing message
- SourceAttempt / ScanOutcome: what the orchestrator hands back per scan
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from .enums import (
    CanonicalUnit,
    CaptureSource,
    ConfidenceLevel,
    ExtractionState,
    FailureReason,
    Frequency,
)


@dataclass(frozen=True)
class DosageValue:
    amount: Decimal
    unit: CanonicalUnit

    def __post_init__(self):
        if not isinstance(self.unit, CanonicalUnit):
            raise ValueError(f"Dosage unit must be a CanonicalUnit, got {self.unit!r}")
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, "amount", Decimal(str(self.amount)))
        if self.amount <= 0:
            raise ValueError(f"Dosage amount must be positive, got {self.amount}")

    def display(self) -> str:
        """Compact form used on prompts and announcements, e.g. 500mg."""
        amount = self.amount.normalize()
        # normalize() turns 500 into 5E+2
        text = format(amount, "f")
        return f"{text}{self.unit.symbol}"

    def to_dict(self) -> Dict[str, str]:
        return {"amount": str(self.amount), "unit": self.unit.value}


@dataclass(frozen=True)
class ExtractionResult:
    name: Optional[str]
    dosage: Optional[DosageValue]
    frequency: Frequency
    time: Optional[str]
    confidence: ConfidenceLevel
    source: CaptureSource
    name_method: Optional[str] = None  # "dictionary" or "candidate"

    @property
    def is_confident(self) -> bool:
        return self.confidence is ConfidenceLevel.CONFIDENT

    @property
    def has_dosage(self) -> bool:
        return self.dosage is not None

    @property
    def is_empty(self) -> bool:
        return not self.name and self.dosage is None

    @property
    def dosage_display(self) -> str:
        return self.dosage.display() if self.dosage else "Not specified"

    def announcement(self) -> str:
        """Sentence the caller can speak back to the user for confirmation."""
        if not self.name:
            return "Could not detect medicine name. Please enter it manually."
        dosage = f" {self.dosage.display()}" if self.dosage else ""
        return f"Medicine detected: {self.name}{dosage}. Please verify the details."

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name or "",
            "dosage": self.dosage.to_dict() if self.dosage else None,
            "frequency": self.frequency.value,
            "time": self.time,
            "confidence": self.confidence.value,
            "source": self.source.value,
            "name_method": self.name_method,
        }


_FAILURE_MESSAGES = {
    FailureReason.NO_TEXT_DETECTED: (
        "No readable text was found. Please ensure the label is clear and well-lit, "
        "or enter the medicine manually."
    ),
    FailureReason.NAME_NOT_DETECTED: (
        "Could not detect medicine name. Please ensure the text is clear and well-lit, "
        "or enter it manually."
    ),
    FailureReason.RECOGNITION_UNAVAILABLE: (
        "Recognition is not available on this device. Please enter the medicine manually."
    ),
    FailureReason.RECOGNITION_FAILED: (
        "Recognition failed. Please try again or enter the medicine manually."
    ),
}


@dataclass(frozen=True)
class ExtractionFailure:
    reason: FailureReason
    detail: Optional[str] = None

    @property
    def message(self) -> str:
        base = _FAILURE_MESSAGES[self.reason]
        if self.reason is FailureReason.RECOGNITION_FAILED and self.detail:
            return f"{base} ({self.detail})"
        return base

    def to_dict(self) -> Dict[str, Any]:
        return {"reason": self.reason.value, "detail": self.detail, "message": self.message}


@dataclass(frozen=True)
class SourceAttempt:
    """One capture source evaluated within a scan."""
    source: CaptureSource
    result: Optional[ExtractionResult] = None
    failure: Optional[ExtractionFailure] = None

    @property
    def is_confident(self) -> bool:
        return self.result is not None and self.result.is_confident


@dataclass(frozen=True)
class ScanOutcome:
    state: ExtractionState
    result: Optional[ExtractionResult] = None
    failure: Optional[ExtractionFailure] = None
    attempts: Tuple[SourceAttempt, ...] = field(default_factory=tuple)

    @property
    def succeeded(self) -> bool:
        return self.state is ExtractionState.SUCCEEDED

    @property
    def sources_tried(self) -> List[CaptureSource]:
        return [attempt.source for attempt in self.attempts]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state.value,
            "result": self.result.to_dict() if self.result else None,
            "failure": self.failure.to_dict() if self.failure else None,
            "sources_tried": [source.value for source in self.sources_tried],
        }
