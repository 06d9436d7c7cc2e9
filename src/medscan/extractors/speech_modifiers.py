# ============================================================================
# src/medscan/extractors/speech_modifiers.py
# ============================================================================
"""
Speech Modifiers Extractor

Frequency and time-of-day from dictated transcripts ("add paracetamol
500mg twice daily at 9 pm"). Only used for the speech source; packaging
text rarely states when the user takes a dose.

Frequency keywords are searched in a fixed order and the first hit wins, so
a transcript mentioning both "once" and "twice" resolves to once daily.
Times are converted to 24-hour HH:00; minutes are dropped.
"""

import re
import logging
from typing import Optional, Sequence, Tuple

from ..core.context.enums import Frequency

logger = logging.getLogger(__name__)

# Substring keyword -> frequency, in priority order
FREQUENCY_KEYWORDS: Tuple[Tuple[str, Frequency], ...] = (
    ("once", Frequency.ONCE_DAILY),
    ("twice", Frequency.TWICE_DAILY),
    ("three times", Frequency.THREE_TIMES_DAILY),
    ("as needed", Frequency.AS_NEEDED),
    ("when needed", Frequency.AS_NEEDED),
    ("prn", Frequency.AS_NEEDED),
)

TIME_PATTERN = re.compile(
    r"(?<!\d)(\d{1,2})(?::\d{2})?\s*(am|pm|a\.m\.|p\.m\.|o['’]?\s?clock)(?![a-z])"
)


def parse_time(transcript: str) -> Optional[str]:
    """
    First valid clock time in a transcript as "HH:00".

    Examples:
        "at 9 pm"        -> "21:00"
        "12 am"          -> "00:00"
        "12 pm"          -> "12:00"
        "7 o'clock"      -> "07:00"
        "9:30 p.m."      -> "21:00"
        "take it daily"  -> None
    """
    text = (transcript or "").lower()

    for match in TIME_PATTERN.finditer(text):
        hour = int(match.group(1))
        period = match.group(2).replace(".", "")

        if period in ("am", "pm"):
            if hour > 12:
                continue
            if period == "am":
                hour = 0 if hour == 12 else hour
            else:
                hour = hour if hour == 12 else hour + 12

        if 0 <= hour <= 23:
            return f"{hour:02d}:00"

    return None


def parse_frequency(
    transcript: str,
    keywords: Sequence[Tuple[str, Frequency]] = FREQUENCY_KEYWORDS
) -> Frequency:
    """First frequency keyword found in the transcript, else Unspecified."""
    text = (transcript or "").lower()

    for keyword, frequency in keywords:
        if keyword in text:
            return frequency

    return Frequency.UNSPECIFIED


class SpeechModifierExtractor:
    """Frequency + time-of-day for speech transcripts."""

    def __init__(self, frequency_keywords: Sequence[Tuple[str, Frequency]] = FREQUENCY_KEYWORDS):
        self.frequency_keywords = tuple(frequency_keywords)

    def extract(self, transcript: str) -> Tuple[Frequency, Optional[str]]:
        """
        Args:
            transcript: Raw (not normalized) transcript text

        Returns:
            (frequency, "HH:00" or None)
        """
        frequency = parse_frequency(transcript, self.frequency_keywords)
        time = parse_time(transcript)
        logger.debug(f"Speech modifiers: frequency={frequency.value}, time={time}")
        return frequency, time
