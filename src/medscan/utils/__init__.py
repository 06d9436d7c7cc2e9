# ============================================================================
# src/medscan/utils/__init__.py
# ============================================================================
"""
Utility modules for the medication scan engine.
"""

from .exceptions import (
    MedScanError,
    ConfigurationError,
    InvalidStateTransitionError,
    RecognitionError,
    RecognitionUnavailableError,
    RecognitionFailedError,
    ExtractionError,
    NoTextDetectedError,
    NameNotDetectedError,
)

from .logging import (
    setup_logging,
    configure_from_settings,
    log_performance,
    JsonFormatter,
)

from .text_normalizer import (
    normalize_line,
    normalize_lines,
    canonicalize_unit_symbols,
    significant_length,
    title_case,
)

__all__ = [
    # Exceptions
    'MedScanError',
    'ConfigurationError',
    'InvalidStateTransitionError',
    'RecognitionError',
    'RecognitionUnavailableError',
    'RecognitionFailedError',
    'ExtractionError',
    'NoTextDetectedError',
    'NameNotDetectedError',
    # Logging
    'setup_logging',
    'configure_from_settings',
    'log_performance',
    'JsonFormatter',
    # Text normalization
    'normalize_line',
    'normalize_lines',
    'canonicalize_unit_symbols',
    'significant_length',
    'title_case',
]
