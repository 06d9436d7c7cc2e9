# ============================================================================
# src/medscan/extractors/candidate_extractor.py
# ============================================================================
"""
Candidate Generator & Scorer

Fallback name detection for when the dictionary has no hit. Medication
names on packaging and in dictation tend to be the longest clean run of
words once boilerplate is removed, so:

1. Split each cleaned line into alphabetic words
2. Drop short words and noise words (packaging, dosage forms, regulatory
   text, fillers, spoken commands)
3. Every contiguous window of 1..N surviving words is a candidate
4. Score = character length of the candidate; ties go to the
   alphabetically earlier one
5. OCR candidates must also look like a medication name (one long word, or
   a shorter one with x/y/z) so random OCR garbage does not pass

Cheap and explainable; there is no trained language model to lean on.
"""

import re
import logging
from typing import Iterable, List, Optional

from ..config.thresholds_config import ThresholdSettings, threshold_settings
from ..constants.noise_words import NOISE_WORDS
from ..core.context.enums import CaptureSource
from ..core.context.raw_text import Candidate
from ..utils.text_normalizer import title_case

logger = logging.getLogger(__name__)

_WORD = re.compile(r"[a-z]+")
_XYZ = re.compile(r"[xyz]")


class CandidateExtractor:
    """
    N-gram word-window candidates over cleaned lines.

    Args:
        noise_words: Words never allowed in a candidate (defaults to NOISE_WORDS)
        settings: Threshold settings (word length, window size, OCR gate)
    """

    def __init__(
        self,
        noise_words: Optional[Iterable[str]] = None,
        settings: Optional[ThresholdSettings] = None
    ):
        self.noise_words = frozenset(
            word.lower() for word in (NOISE_WORDS if noise_words is None else noise_words)
        )
        self.settings = settings or threshold_settings

    def words(self, line: str) -> List[str]:
        """Alphabetic words of a cleaned line that survive the filters."""
        return [
            word for word in _WORD.findall(line.lower())
            if len(word) >= self.settings.MIN_WORD_LENGTH and word not in self.noise_words
        ]

    def generate(self, lines: Iterable[str]) -> List[Candidate]:
        """All 1..MAX_CANDIDATE_WINDOW word windows, line by line."""
        candidates = []
        max_window = self.settings.MAX_CANDIDATE_WINDOW

        for line_index, line in enumerate(lines):
            words = self.words(line)
            for size in range(1, max_window + 1):
                for start in range(0, len(words) - size + 1):
                    end = start + size
                    candidates.append(Candidate(
                        text=" ".join(words[start:end]),
                        source_line=line_index,
                        word_span=(start, end)
                    ))

        return candidates

    def is_medicine_like(self, candidate: Candidate) -> bool:
        """At least one long word, or a medium word containing x, y or z."""
        for word in candidate.text.split():
            if len(word) >= self.settings.MEDICINE_LIKE_MIN_LENGTH:
                return True
            if len(word) >= self.settings.MEDICINE_LIKE_XYZ_MIN_LENGTH and _XYZ.search(word):
                return True
        return False

    @staticmethod
    def select(candidates: Iterable[Candidate]) -> Optional[Candidate]:
        """Highest score wins; equal scores resolve alphabetically."""
        return min(candidates, key=lambda c: c.sort_key, default=None)

    def extract(self, lines: Iterable[str], source: CaptureSource) -> Optional[str]:
        """
        Pick a name from the cleaned lines.

        Args:
            lines: Normalized lines in reading order
            source: Capture source; OCR sources go through the medicine-likeness gate

        Returns:
            Title-Cased candidate, or None if nothing qualifies
        """
        candidates = self.generate(lines)

        if source.is_ocr and self.settings.REQUIRE_MEDICINE_LIKE_OCR_CANDIDATES:
            eligible = [c for c in candidates if self.is_medicine_like(c)]
            if len(eligible) < len(candidates):
                logger.debug(
                    f"Medicine-likeness gate kept {len(eligible)}/{len(candidates)} OCR candidates"
                )
            candidates = eligible

        best = self.select(candidates)
        if best is None:
            return None

        logger.debug(f"Selected candidate '{best.text}' (score={best.score}, line={best.source_line})")
        return title_case(best.text)
