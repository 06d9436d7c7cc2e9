# ============================================================================
# src/medscan/core/orchestrator.py
# ============================================================================
"""
Scan Orchestrator

This is the MAIN entry point for scanning a medication.

Flow:
1. Obtain text from the best capture source available
   (assisted region OCR -> whole-frame OCR -> speech)
2. Run the extraction engine over it
3. Stop at the first Confident result
4. Otherwise fall through to the next source
5. If every source falls short, report the most useful failure reason and
   the best partial result so the caller can open manual entry pre-filled

Each call is independent: nothing about earlier scans is remembered, and
identical input always yields an identical outcome. Recognition calls are
awaited one at a time, never concurrently.
"""

import logging
from typing import Any, List, Optional, Sequence, Union

from .context.enums import CaptureSource, ExtractionState, FailureReason
from .context.extraction_result import ExtractionFailure, ScanOutcome, SourceAttempt
from .context.raw_text import RawText
from .extraction_engine import MedicationExtractionEngine
from .state import ScanStateMachine
from ..config.recognition_config import RecognitionSettings, recognition_settings
from ..extractors.recognition import (
    RecognitionGateway,
    RegionDetectionGateway,
    RegionDetector,
    SpeechRecognizer,
    TextRecognizer,
)
from ..utils.exceptions import ExtractionError, RecognitionError

logger = logging.getLogger(__name__)


class ScanOrchestrator:
    """
    Drives the capture-source fallback chain around the extraction engine.

    Args:
        recognize_text: OCR capability, frame/crop -> text (sync or async)
        recognize_speech: Speech capability, () -> transcript (sync or async)
        detect_regions: Optional assisted region detection, frame -> crops
        engine: Extraction engine (default dictionary / noise words if omitted)
        settings: Recognition settings (timeout, region count)

    Example:
        orchestrator = ScanOrchestrator(recognize_text=tesseract_ocr)
        outcome = await orchestrator.scan(frame=camera_frame)
        if outcome.succeeded:
            save(outcome.result)
        else:
            open_manual_entry(prefill=outcome.result, hint=outcome.failure.message)
    """

    def __init__(
        self,
        recognize_text: Optional[TextRecognizer] = None,
        recognize_speech: Optional[SpeechRecognizer] = None,
        detect_regions: Optional[RegionDetector] = None,
        engine: Optional[MedicationExtractionEngine] = None,
        settings: Optional[RecognitionSettings] = None,
    ):
        self.settings = settings or recognition_settings
        self.engine = engine or MedicationExtractionEngine()

        timeout = self.settings.RECOGNITION_TIMEOUT_SECONDS
        self.text_gateway = RecognitionGateway(recognize_text, "ocr", timeout)
        self.speech_gateway = RecognitionGateway(recognize_speech, "speech", timeout)
        self.region_gateway = RegionDetectionGateway(
            detect_regions,
            timeout=timeout,
            max_regions=self.settings.MAX_TEXT_REGIONS
        )

    # ========================================================================
    # PUBLIC ENTRY POINTS
    # ========================================================================

    async def scan(self, frame: Any = None, include_speech: bool = False) -> ScanOutcome:
        """
        Run the full fallback chain.

        Args:
            frame: Camera frame handed to the OCR capabilities; None skips OCR
            include_speech: Fall through to a speech capture after OCR

        Returns:
            ScanOutcome; never raises for recognition or extraction problems
        """
        machine = ScanStateMachine()
        machine.transition(ExtractionState.AWAITING_TEXT)
        attempts: List[SourceAttempt] = []

        stages = []
        if frame is not None:
            stages.append(self._region_stage)
            stages.append(self._frame_stage)
        if include_speech:
            stages.append(self._speech_stage)

        for stage in stages:
            if machine.can_retry():
                machine.transition(ExtractionState.AWAITING_TEXT)

            attempt = await stage(frame)
            if attempt is None:
                continue

            attempts.append(attempt)
            self._advance(machine, attempt)
            if machine.state is ExtractionState.SUCCEEDED:
                break

        return self._finish(machine, attempts)

    async def scan_frame(self, frame: Any) -> ScanOutcome:
        """Region OCR, then whole-frame OCR."""
        return await self.scan(frame=frame, include_speech=False)

    async def capture_speech(self) -> ScanOutcome:
        """Single-shot speech capture."""
        return await self.scan(frame=None, include_speech=True)

    def process_text(
        self,
        text: Union[str, Sequence[str]],
        source: CaptureSource
    ) -> ScanOutcome:
        """
        Evaluate text the caller already obtained from a capture source.

        Args:
            text: Recognizer output, as one string or as lines
            source: Where the text came from
        """
        if isinstance(text, str):
            raw_text = RawText.from_text(text, source)
        else:
            raw_text = RawText.from_lines(text, source)

        machine = ScanStateMachine()
        machine.transition(ExtractionState.AWAITING_TEXT)
        attempt = self.evaluate(raw_text)
        self._advance(machine, attempt)
        return self._finish(machine, [attempt])

    def evaluate(self, raw_text: RawText) -> SourceAttempt:
        """Extract from one RawText and classify the attempt."""
        try:
            result = self.engine.extract_strict(raw_text)
        except ExtractionError as e:
            logger.info(
                f"{raw_text.source.value}: {e.reason.value} ({e})",
                extra={"scan_source": raw_text.source.value}
            )
            return SourceAttempt(
                source=raw_text.source,
                result=e.result,
                failure=ExtractionFailure(e.reason, str(e))
            )

        return SourceAttempt(source=raw_text.source, result=result)

    def resolve(self, attempts: Sequence[SourceAttempt]) -> ScanOutcome:
        """
        Pick the outcome from attempts made against several capture sources.

        The highest-priority source wins if it is Confident; otherwise the
        next Confident one. With no Confident attempt the outcome carries the
        most informative failure and the best partial result.
        """
        ordered = sorted(attempts, key=lambda a: a.source.priority)

        for attempt in ordered:
            if attempt.is_confident:
                return ScanOutcome(
                    state=ExtractionState.SUCCEEDED,
                    result=attempt.result,
                    attempts=tuple(attempts)
                )

        failures = [a.failure for a in ordered if a.failure is not None]
        failure = max(
            failures,
            key=lambda f: f.reason.rank,
            default=ExtractionFailure(
                FailureReason.RECOGNITION_UNAVAILABLE,
                "no capture source was available"
            )
        )
        partial = next(
            (a.result for a in ordered if a.result is not None and not a.result.is_empty),
            None
        )

        return ScanOutcome(
            state=ExtractionState.INSUFFICIENT_CONFIDENCE,
            result=partial,
            failure=failure,
            attempts=tuple(attempts)
        )

    # ========================================================================
    # CAPTURE STAGES
    # ========================================================================

    async def _region_stage(self, frame: Any) -> Optional[SourceAttempt]:
        """
        Assisted region OCR: recognize up to MAX_TEXT_REGIONS crops one by
        one and keep the attempt with the longest name.

        Skipped (None) when no region detector or OCR capability is injected.
        """
        if not self.region_gateway.available or not self.text_gateway.available:
            logger.debug("Region OCR skipped: no region detector or OCR capability")
            return None

        try:
            regions = await self.region_gateway.detect(frame)
        except RecognitionError as e:
            return self._recognition_failure(CaptureSource.REGION_OCR, e)

        if not regions:
            return SourceAttempt(
                source=CaptureSource.REGION_OCR,
                failure=ExtractionFailure(
                    FailureReason.NO_TEXT_DETECTED,
                    "no text regions detected"
                )
            )

        region_attempts = []
        for region in regions:
            region_attempts.append(
                await self._recognize(self.text_gateway, CaptureSource.REGION_OCR, region)
            )

        return self._best_region_attempt(region_attempts)

    async def _frame_stage(self, frame: Any) -> SourceAttempt:
        return await self._recognize(self.text_gateway, CaptureSource.FRAME_OCR, frame)

    async def _speech_stage(self, frame: Any = None) -> SourceAttempt:
        return await self._recognize(self.speech_gateway, CaptureSource.SPEECH)

    async def _recognize(
        self,
        gateway: RecognitionGateway,
        source: CaptureSource,
        *args
    ) -> SourceAttempt:
        try:
            text = await gateway.recognize(*args)
        except RecognitionError as e:
            return self._recognition_failure(source, e)

        return self.evaluate(RawText.from_text(text, source))

    @staticmethod
    def _recognition_failure(source: CaptureSource, error: RecognitionError) -> SourceAttempt:
        logger.warning(
            f"{source.value}: {error.reason.value} ({error.detail})",
            extra={"scan_source": source.value}
        )
        return SourceAttempt(
            source=source,
            failure=ExtractionFailure(error.reason, error.detail)
        )

    @staticmethod
    def _best_region_attempt(attempts: List[SourceAttempt]) -> SourceAttempt:
        best = None
        for attempt in attempts:
            if attempt.result is None:
                continue
            # Strictly longer only: earlier regions win ties
            if best is None or len(attempt.result.name or "") > len(best.result.name or ""):
                best = attempt

        if best is not None:
            return best

        return max(attempts, key=lambda a: a.failure.reason.rank)

    # ========================================================================
    # STATE HANDLING
    # ========================================================================

    @staticmethod
    def _advance(machine: ScanStateMachine, attempt: SourceAttempt) -> None:
        if attempt.result is None:
            # Recognition produced nothing to extract from
            machine.transition(ExtractionState.INSUFFICIENT_CONFIDENCE)
            return

        machine.transition(ExtractionState.EXTRACTING)
        if attempt.is_confident:
            machine.transition(ExtractionState.SUCCEEDED)
        else:
            machine.transition(ExtractionState.INSUFFICIENT_CONFIDENCE)

    def _finish(self, machine: ScanStateMachine, attempts: List[SourceAttempt]) -> ScanOutcome:
        if machine.state is ExtractionState.AWAITING_TEXT:
            # Every stage was skipped
            machine.transition(ExtractionState.INSUFFICIENT_CONFIDENCE)

        outcome = self.resolve(attempts)

        if outcome.succeeded:
            logger.info(
                f"Scan succeeded via {outcome.result.source.value}: {outcome.result.name}",
                extra={"scan_state": outcome.state.value}
            )
        else:
            logger.info(
                f"Scan needs manual entry: {outcome.failure.reason.value} "
                f"after {[s.value for s in outcome.sources_tried]}",
                extra={"scan_state": outcome.state.value}
            )
        return outcome
