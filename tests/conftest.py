# ============================================================================
# FILE: tests/conftest.py
# ============================================================================
"""
Pytest configuration and shared fixtures for testing.
"""

import pytest

from medscan.config import RecognitionSettings, ThresholdSettings
from medscan.core.extraction_engine import MedicationExtractionEngine
from medscan.core.orchestrator import ScanOrchestrator


@pytest.fixture
def threshold_config():
    """Default thresholds, independent of the developer's environment"""
    return ThresholdSettings(_env_file=None)


@pytest.fixture
def engine(threshold_config):
    return MedicationExtractionEngine(settings=threshold_config)


@pytest.fixture
def fast_recognition_config():
    return RecognitionSettings(_env_file=None, RECOGNITION_TIMEOUT_SECONDS=0.05)


@pytest.fixture
def make_orchestrator(engine):
    """Build an orchestrator around the default engine with given capabilities"""
    def _make(**kwargs):
        kwargs.setdefault("engine", engine)
        kwargs.setdefault("settings", RecognitionSettings(_env_file=None))
        return ScanOrchestrator(**kwargs)
    return _make


@pytest.fixture
def packaging_lines():
    """OCR lines from a typical metformin box"""
    return ["ABC PHARMA LTD", "Metformin 500 mg", "Take twice daily"]


@pytest.fixture
def noise_lines():
    """Boilerplate printed on most packs"""
    return [
        "Store below 25C",
        "Keep out of reach of children",
        "MFG 01/2024 EXP 12/2026",
        "Batch No 12345",
        "|",
        "~~",
    ]


@pytest.fixture
def recorder():
    """Sync OCR capability that looks frames up in a table and records calls"""
    class Recorder:
        def __init__(self):
            self.calls = []
            self.texts = {}

        def __call__(self, frame):
            self.calls.append(frame)
            return self.texts.get(frame, "")

    return Recorder()
