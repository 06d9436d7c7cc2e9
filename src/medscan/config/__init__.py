# ============================================================================
# src/medscan/config/__init__.py
# ============================================================================
"""
Convenient imports for all settings
"""

from .thresholds_config import ThresholdSettings, threshold_settings
from .recognition_config import RecognitionSettings, recognition_settings
from .logging_config import LoggingSettings, logging_settings

__all__ = [
    "ThresholdSettings",
    "threshold_settings",
    "RecognitionSettings",
    "recognition_settings",
    "LoggingSettings",
    "logging_settings",
]
