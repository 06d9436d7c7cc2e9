# ============================================================================
# src/medscan/extractors/recognition.py
# ============================================================================
"""
Recognition Capabilities

The engine never talks to a camera, an OCR library or a microphone. The
embedding application injects plain callables instead:

- recognize_text(frame) -> str       OCR over an image/crop
- recognize_speech() -> str          single-shot speech-to-text
- detect_regions(frame) -> [crop]    optional assisted text-region detection

Each may be sync or async. Sync capabilities run in a worker thread so a
slow OCR engine never blocks the event loop. RecognitionGateway wraps one
capability, applies a timeout and turns every way it can go wrong into RecognitionUnavailableError
or RecognitionFailedError. Cancellation is never converted: if the scan task
is cancelled, CancelledError propagates and the in-flight call is abandoned.
"""

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, List, Optional, Sequence, Union

from ..utils.exceptions import (
    ConfigurationError,
    RecognitionFailedError,
    RecognitionUnavailableError,
)

logger = logging.getLogger(__name__)

TextRecognizer = Callable[[Any], Union[str, Awaitable[str]]]
SpeechRecognizer = Callable[[], Union[str, Awaitable[str]]]
RegionDetector = Callable[[Any], Union[Sequence[Any], Awaitable[Sequence[Any]]]]


async def _call_capability(func: Callable, *args) -> Any:
    if inspect.iscoroutinefunction(func):
        return await func(*args)

    # Blocking recognizers run in the default thread pool
    result = await asyncio.to_thread(func, *args)
    if inspect.isawaitable(result):
        result = await result
    return result


class RecognitionGateway:
    """
    Timeout + error translation around one injected capability.

    Args:
        capability: The injected callable, or None if the platform has none
        name: Used in log lines and error details ("ocr", "speech", ...)
        timeout: Seconds before the call counts as failed
    """

    def __init__(self, capability: Optional[Callable], name: str, timeout: float = 30.0):
        if timeout <= 0:
            raise ConfigurationError(f"{name} timeout must be positive, got {timeout}")
        self.capability = capability
        self.name = name
        self.timeout = timeout

    @property
    def available(self) -> bool:
        return self.capability is not None

    async def call(self, *args) -> Any:
        if self.capability is None:
            raise RecognitionUnavailableError(f"{self.name} capability is not available")

        try:
            return await asyncio.wait_for(
                _call_capability(self.capability, *args),
                timeout=self.timeout
            )
        except asyncio.TimeoutError as e:
            logger.warning(f"{self.name} recognition timed out after {self.timeout}s")
            raise RecognitionFailedError(
                f"{self.name} recognition timed out",
                detail=f"timed out after {self.timeout:g}s"
            ) from e
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.warning(f"{self.name} recognition failed: {e}")
            raise RecognitionFailedError(
                f"{self.name} recognition failed",
                detail=str(e) or type(e).__name__
            ) from e

    async def recognize(self, *args) -> str:
        """Call the capability and coerce its output to text."""
        text = await self.call(*args)
        if text is None:
            return ""
        if not isinstance(text, str):
            raise RecognitionFailedError(
                f"{self.name} recognition returned {type(text).__name__}",
                detail=f"expected text, got {type(text).__name__}"
            )
        return text


class RegionDetectionGateway(RecognitionGateway):
    """Gateway for the optional region detector; yields at most max_regions crops."""

    def __init__(
        self,
        capability: Optional[RegionDetector],
        timeout: float = 30.0,
        max_regions: int = 3
    ):
        super().__init__(capability, name="region detection", timeout=timeout)
        if max_regions < 1:
            raise ConfigurationError(f"max_regions must be at least 1, got {max_regions}")
        self.max_regions = max_regions

    async def detect(self, frame: Any) -> List[Any]:
        regions = await self.call(frame)
        if regions is None:
            return []

        # Array-like detector output has no usable truth value; only iterate it
        try:
            regions = list(regions)
        except Exception as e:
            logger.warning(f"{self.name} returned unusable output: {e}")
            raise RecognitionFailedError(
                f"{self.name} returned {type(regions).__name__}",
                detail=f"expected a sequence of regions, got {type(regions).__name__}"
            ) from e

        return regions[:self.max_regions]
