# ============================================================================
# src/medscan/utils/exceptions.py
# ============================================================================
"""
Custom exceptions for the medication scan engine.

Recognition and extraction errors carry the FailureReason they map to.
The orchestrator converts them into ExtractionFailure values before
anything reaches the caller.
"""

from typing import Any, Optional

from ..core.context.enums import FailureReason


class MedScanError(Exception):
    """Base exception for all medication scan errors."""
    pass


class ConfigurationError(MedScanError):
    """Invalid configuration."""
    pass


class InvalidStateTransitionError(MedScanError):
    """Scan state machine was driven through an illegal transition."""
    def __init__(self, current: str, target: str):
        super().__init__(f"Illegal scan state transition: {current} -> {target}")
        self.current = current
        self.target = target


class RecognitionError(MedScanError):
    """Error obtaining text from an OCR or speech capability."""
    reason: FailureReason = FailureReason.RECOGNITION_FAILED

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.detail = detail or message


class RecognitionUnavailableError(RecognitionError):
    """Recognition capability was never provided or initialized."""
    reason = FailureReason.RECOGNITION_UNAVAILABLE


class RecognitionFailedError(RecognitionError):
    """Recognition capability raised or timed out."""
    reason = FailureReason.RECOGNITION_FAILED


class ExtractionError(MedScanError):
    """Text was obtained but no usable medication could be extracted."""
    reason: FailureReason = FailureReason.NAME_NOT_DETECTED

    def __init__(self, message: str, result: Optional[Any] = None):
        super().__init__(message)
        # Partial ExtractionResult (e.g. dosage without name), if any
        self.result = result


class NoTextDetectedError(ExtractionError):
    """Recognized text is below the minimum significant length."""
    reason = FailureReason.NO_TEXT_DETECTED


class NameNotDetectedError(ExtractionError):
    """No dictionary or candidate match cleared the confidence bar."""
    reason = FailureReason.NAME_NOT_DETECTED
