# ============================================================================
# FILE: tests/unit/test_orchestrator.py
# ============================================================================
"""
Tests for the capture-source fallback chain
"""

import asyncio
import time

import pytest

from medscan.core.context.enums import (
    CaptureSource,
    ExtractionState,
    FailureReason,
    Frequency,
)
from medscan.core.context.extraction_result import ExtractionFailure, SourceAttempt
from medscan.core.orchestrator import ScanOrchestrator
from medscan.extractors.recognition import RecognitionGateway, RegionDetectionGateway
from medscan.utils.exceptions import ConfigurationError


def regions(*crops):
    """Region detector that always returns the given crops"""
    def detect(frame):
        return list(crops)
    return detect


class TestRegionOcr:
    """Assisted region OCR is tried first"""

    @pytest.mark.asyncio
    async def test_confident_region_skips_frame(self, make_orchestrator, recorder):
        recorder.texts = {"crop-1": "Metformin 500 mg", "frame": "Paracetamol 500 mg"}
        orchestrator = make_orchestrator(recognize_text=recorder, detect_regions=regions("crop-1"))

        outcome = await orchestrator.scan(frame="frame")

        assert outcome.succeeded
        assert outcome.result.name == "Metformin"
        assert outcome.result.source is CaptureSource.REGION_OCR
        assert outcome.sources_tried == [CaptureSource.REGION_OCR]
        assert recorder.calls == ["crop-1"]

    @pytest.mark.asyncio
    async def test_longest_name_across_regions(self, make_orchestrator, recorder):
        recorder.texts = {
            "crop-1": "Metformin 500 mg",
            "crop-2": "Amoxicillin 250 mg",
            "crop-3": "ABC PHARMA LTD",
        }
        orchestrator = make_orchestrator(
            recognize_text=recorder,
            detect_regions=regions("crop-1", "crop-2", "crop-3")
        )

        outcome = await orchestrator.scan_frame("frame")

        assert outcome.result.name == "Amoxicillin"
        assert recorder.calls == ["crop-1", "crop-2", "crop-3"]

    @pytest.mark.asyncio
    async def test_equal_length_names_keep_first_region(self, make_orchestrator, recorder):
        recorder.texts = {"crop-1": "Losartan 50 mg", "crop-2": "Tramadol 50 mg"}
        orchestrator = make_orchestrator(
            recognize_text=recorder,
            detect_regions=regions("crop-1", "crop-2")
        )

        outcome = await orchestrator.scan_frame("frame")

        assert outcome.result.name == "Losartan"

    @pytest.mark.asyncio
    async def test_region_count_is_capped(self, make_orchestrator, recorder):
        crops = [f"crop-{i}" for i in range(5)]
        orchestrator = make_orchestrator(recognize_text=recorder, detect_regions=regions(*crops))

        await orchestrator.scan_frame("frame")

        # three regions, then the whole frame
        assert recorder.calls == ["crop-0", "crop-1", "crop-2", "frame"]

    @pytest.mark.asyncio
    async def test_async_detector(self, make_orchestrator, recorder):
        async def detect(frame):
            return ["crop-1"]

        recorder.texts = {"crop-1": "Omeprazole 20 mg"}
        orchestrator = make_orchestrator(recognize_text=recorder, detect_regions=detect)

        outcome = await orchestrator.scan_frame("frame")

        assert outcome.result.name == "Omeprazole"

    @pytest.mark.asyncio
    async def test_no_detector_goes_straight_to_frame(self, make_orchestrator, recorder):
        recorder.texts = {"frame": "Metformin 500 mg"}
        orchestrator = make_orchestrator(recognize_text=recorder)

        outcome = await orchestrator.scan_frame("frame")

        assert outcome.succeeded
        assert outcome.sources_tried == [CaptureSource.FRAME_OCR]


class ArrayLikeRegions:
    """Detector output that can be iterated but has no truth value"""

    def __init__(self, *crops):
        self.crops = crops

    def __bool__(self):
        raise ValueError("The truth value of an array with more than one element is ambiguous")

    def __iter__(self):
        return iter(self.crops)


class TestFallback:
    """Falling through to lower-priority sources"""

    @pytest.mark.asyncio
    async def test_empty_regions_fall_through_to_frame(self, make_orchestrator, recorder):
        recorder.texts = {"frame": "Metformin 500 mg"}
        orchestrator = make_orchestrator(recognize_text=recorder, detect_regions=regions("crop-1"))

        outcome = await orchestrator.scan_frame("frame")

        assert outcome.succeeded
        assert outcome.result.source is CaptureSource.FRAME_OCR
        assert outcome.sources_tried == [CaptureSource.REGION_OCR, CaptureSource.FRAME_OCR]
        assert outcome.attempts[0].failure.reason is FailureReason.NO_TEXT_DETECTED

    @pytest.mark.asyncio
    async def test_no_regions_detected(self, make_orchestrator, recorder):
        recorder.texts = {"frame": "Metformin 500 mg"}
        orchestrator = make_orchestrator(recognize_text=recorder, detect_regions=regions())

        outcome = await orchestrator.scan_frame("frame")

        assert outcome.succeeded
        assert outcome.attempts[0].failure == ExtractionFailure(
            FailureReason.NO_TEXT_DETECTED, "no text regions detected"
        )

    @pytest.mark.asyncio
    async def test_failing_detector_falls_through(self, make_orchestrator, recorder):
        def detect(frame):
            raise RuntimeError("detector crashed")

        recorder.texts = {"frame": "Metformin 500 mg"}
        orchestrator = make_orchestrator(recognize_text=recorder, detect_regions=detect)

        outcome = await orchestrator.scan_frame("frame")

        assert outcome.succeeded
        assert outcome.attempts[0].failure.reason is FailureReason.RECOGNITION_FAILED
        assert outcome.attempts[0].failure.detail == "detector crashed"

    @pytest.mark.asyncio
    async def test_array_like_detector_output(self, make_orchestrator, recorder):
        recorder.texts = {"crop-1": "Metformin 500 mg"}
        orchestrator = make_orchestrator(
            recognize_text=recorder,
            detect_regions=lambda frame: ArrayLikeRegions("crop-1", "crop-2")
        )

        outcome = await orchestrator.scan_frame("frame")

        assert outcome.succeeded
        assert outcome.result.source is CaptureSource.REGION_OCR
        assert recorder.calls == ["crop-1", "crop-2"]

    @pytest.mark.asyncio
    async def test_non_iterable_detector_output_falls_through(self, make_orchestrator, recorder):
        recorder.texts = {"frame": "Metformin 500 mg"}
        orchestrator = make_orchestrator(recognize_text=recorder, detect_regions=lambda frame: 5)

        outcome = await orchestrator.scan_frame("frame")

        assert outcome.succeeded
        assert outcome.result.source is CaptureSource.FRAME_OCR
        assert outcome.attempts[0].failure == ExtractionFailure(
            FailureReason.RECOGNITION_FAILED, "expected a sequence of regions, got int"
        )

    @pytest.mark.asyncio
    async def test_ocr_then_speech(self, make_orchestrator, recorder):
        recorder.texts = {"frame": "asdf qwer"}
        orchestrator = make_orchestrator(
            recognize_text=recorder,
            recognize_speech=lambda: "add ibuprofen 200 mg twice daily"
        )

        outcome = await orchestrator.scan(frame="frame", include_speech=True)

        assert outcome.succeeded
        assert outcome.result.name == "Ibuprofen"
        assert outcome.result.frequency is Frequency.TWICE_DAILY
        assert outcome.sources_tried == [CaptureSource.FRAME_OCR, CaptureSource.SPEECH]

    @pytest.mark.asyncio
    async def test_all_sources_fail_with_partial_result(self, make_orchestrator, recorder):
        recorder.texts = {"frame": "500 mg"}
        orchestrator = make_orchestrator(
            recognize_text=recorder,
            recognize_speech=lambda: ""
        )

        outcome = await orchestrator.scan(frame="frame", include_speech=True)

        assert outcome.state is ExtractionState.INSUFFICIENT_CONFIDENCE
        # NameNotDetected is more useful to the user than NoTextDetected
        assert outcome.failure.reason is FailureReason.NAME_NOT_DETECTED
        assert outcome.result.name is None
        assert outcome.result.dosage.display() == "500mg"
        assert outcome.result.source is CaptureSource.FRAME_OCR


class TestCapabilityErrors:
    """Unavailable, failing and slow recognizers"""

    @pytest.mark.asyncio
    async def test_no_ocr_capability(self, make_orchestrator):
        orchestrator = make_orchestrator()

        outcome = await orchestrator.scan_frame("frame")

        assert not outcome.succeeded
        assert outcome.failure.reason is FailureReason.RECOGNITION_UNAVAILABLE
        assert outcome.sources_tried == [CaptureSource.FRAME_OCR]

    @pytest.mark.asyncio
    async def test_raising_ocr(self, make_orchestrator):
        def broken_ocr(frame):
            raise RuntimeError("camera busy")

        orchestrator = make_orchestrator(recognize_text=broken_ocr)

        outcome = await orchestrator.scan_frame("frame")

        assert outcome.failure.reason is FailureReason.RECOGNITION_FAILED
        assert outcome.failure.detail == "camera busy"
        assert outcome.failure.message.endswith("(camera busy)")

    @pytest.mark.asyncio
    async def test_non_text_output(self, make_orchestrator):
        orchestrator = make_orchestrator(recognize_text=lambda frame: 42)

        outcome = await orchestrator.scan_frame("frame")

        assert outcome.failure.reason is FailureReason.RECOGNITION_FAILED
        assert outcome.failure.detail == "expected text, got int"

    @pytest.mark.asyncio
    async def test_none_output_counts_as_no_text(self, make_orchestrator):
        orchestrator = make_orchestrator(recognize_text=lambda frame: None)

        outcome = await orchestrator.scan_frame("frame")

        assert outcome.failure.reason is FailureReason.NO_TEXT_DETECTED

    @pytest.mark.asyncio
    async def test_timeout(self, make_orchestrator, fast_recognition_config):
        async def slow_ocr(frame):
            await asyncio.sleep(1)
            return "Metformin 500 mg"

        orchestrator = make_orchestrator(
            recognize_text=slow_ocr,
            settings=fast_recognition_config
        )

        outcome = await orchestrator.scan_frame("frame")

        assert outcome.failure.reason is FailureReason.RECOGNITION_FAILED
        assert outcome.failure.detail == "timed out after 0.05s"

    @pytest.mark.asyncio
    async def test_timeout_with_blocking_ocr(self, make_orchestrator, fast_recognition_config):
        def blocking_ocr(frame):
            time.sleep(0.5)
            return "Metformin 500 mg"

        orchestrator = make_orchestrator(
            recognize_text=blocking_ocr,
            settings=fast_recognition_config
        )

        started = time.monotonic()
        outcome = await orchestrator.scan_frame("frame")

        assert outcome.failure.reason is FailureReason.RECOGNITION_FAILED
        assert outcome.failure.detail == "timed out after 0.05s"
        assert time.monotonic() - started < 0.4

    @pytest.mark.asyncio
    async def test_blocking_ocr_leaves_event_loop_free(self, make_orchestrator):
        ticks = []
        finished = []

        def blocking_ocr(frame):
            time.sleep(0.2)
            finished.append(time.monotonic())
            return "Metformin 500 mg"

        async def ticker():
            for _ in range(5):
                ticks.append(time.monotonic())
                await asyncio.sleep(0.01)

        orchestrator = make_orchestrator(recognize_text=blocking_ocr)
        outcome, _ = await asyncio.gather(orchestrator.scan_frame("frame"), ticker())

        assert outcome.succeeded
        # The loop kept running while OCR was blocked in its worker thread
        assert ticks[1] < finished[0]

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self, make_orchestrator):
        started = asyncio.Event()

        async def hanging_ocr(frame):
            started.set()
            await asyncio.sleep(10)
            return ""

        orchestrator = make_orchestrator(recognize_text=hanging_ocr)
        task = asyncio.ensure_future(orchestrator.scan_frame("frame"))
        await started.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

    @pytest.mark.asyncio
    async def test_nothing_to_scan(self, make_orchestrator):
        outcome = await make_orchestrator().scan()

        assert outcome.state is ExtractionState.INSUFFICIENT_CONFIDENCE
        assert outcome.failure == ExtractionFailure(
            FailureReason.RECOGNITION_UNAVAILABLE, "no capture source was available"
        )
        assert outcome.attempts == ()


class TestSpeech:
    """Single-shot dictation"""

    @pytest.mark.asyncio
    async def test_capture_speech(self, make_orchestrator):
        async def dictation():
            return "Paracetamol 500mg once daily at 8 am"

        orchestrator = make_orchestrator(recognize_speech=dictation)

        outcome = await orchestrator.capture_speech()

        assert outcome.succeeded
        assert outcome.result.source is CaptureSource.SPEECH
        assert outcome.result.frequency is Frequency.ONCE_DAILY
        assert outcome.result.time == "08:00"

    @pytest.mark.asyncio
    async def test_no_speech_capability(self, make_orchestrator):
        outcome = await make_orchestrator().capture_speech()

        assert outcome.failure.reason is FailureReason.RECOGNITION_UNAVAILABLE
        assert outcome.sources_tried == [CaptureSource.SPEECH]


class TestResolve:
    """Choosing between attempts from several sources"""

    def test_highest_priority_confident_source_wins(self, make_orchestrator, engine):
        frame = SourceAttempt(
            CaptureSource.FRAME_OCR,
            result=engine.extract_text("Metformin", CaptureSource.FRAME_OCR)
        )
        speech = SourceAttempt(
            CaptureSource.SPEECH,
            result=engine.extract_text("Paracetamol", CaptureSource.SPEECH)
        )

        outcome = make_orchestrator().resolve([speech, frame])

        assert outcome.succeeded
        assert outcome.result.name == "Metformin"

    def test_failure_rank(self, make_orchestrator):
        attempts = [
            SourceAttempt(CaptureSource.REGION_OCR, failure=ExtractionFailure(FailureReason.RECOGNITION_FAILED)),
            SourceAttempt(CaptureSource.FRAME_OCR, failure=ExtractionFailure(FailureReason.NO_TEXT_DETECTED)),
            SourceAttempt(CaptureSource.SPEECH, failure=ExtractionFailure(FailureReason.RECOGNITION_UNAVAILABLE)),
        ]

        outcome = make_orchestrator().resolve(attempts)

        assert outcome.failure.reason is FailureReason.NO_TEXT_DETECTED
        assert outcome.result is None


class TestProcessText:
    """Text the caller already recognized"""

    def test_lines(self, make_orchestrator, packaging_lines):
        outcome = make_orchestrator().process_text(packaging_lines, CaptureSource.FRAME_OCR)

        assert outcome.succeeded
        assert outcome.result.name == "Metformin"

    def test_source_as_string(self, make_orchestrator):
        outcome = make_orchestrator().process_text("Aspirin 81 mg", "speech")

        assert outcome.result.source is CaptureSource.SPEECH

    def test_name_not_detected(self, make_orchestrator):
        outcome = make_orchestrator().process_text("asdf qwer", CaptureSource.FRAME_OCR)

        assert outcome.failure.reason is FailureReason.NAME_NOT_DETECTED
        assert outcome.result is None

    @pytest.mark.asyncio
    async def test_scans_are_independent(self, make_orchestrator, recorder):
        recorder.texts = {"frame": "Metformin 500 mg"}
        orchestrator = make_orchestrator(recognize_text=recorder)

        first = await orchestrator.scan_frame("frame")
        orchestrator.process_text("asdf qwer", CaptureSource.FRAME_OCR)
        second = await orchestrator.scan_frame("frame")

        assert first == second

    def test_default_engine(self):
        orchestrator = ScanOrchestrator()

        outcome = orchestrator.process_text("Paracetamol 500mg once daily", CaptureSource.SPEECH)

        assert outcome.to_dict()["result"]["name"] == "Paracetamol"


class TestGatewayConfiguration:
    """Gateways built directly by the caller"""

    def test_timeout_must_be_positive(self):
        with pytest.raises(ConfigurationError):
            RecognitionGateway(lambda frame: "", "ocr", timeout=0)

    def test_region_count_must_be_positive(self):
        with pytest.raises(ConfigurationError):
            RegionDetectionGateway(regions("crop-1"), max_regions=0)

    @pytest.mark.asyncio
    async def test_none_from_detector_means_no_regions(self):
        gateway = RegionDetectionGateway(lambda frame: None)

        assert await gateway.detect("frame") == []
