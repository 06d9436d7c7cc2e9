# ============================================================================
# src/medscan/core/context/raw_text.py
# ============================================================================
"""
Recognized text as handed over by a capture source, and the ephemeral
name candidates derived from it.
"""

import re
from dataclasses import dataclass
from typing import Iterable, Tuple

from .enums import CaptureSource

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class RawText:
    lines: Tuple[str, ...]
    source: CaptureSource

    @classmethod
    def from_text(cls, text: str, source: CaptureSource) -> "RawText":
        """Split a recognizer's output on line breaks."""
        return cls(lines=tuple(_LINE_BREAK.split(text or "")), source=CaptureSource(source))

    @classmethod
    def from_lines(cls, lines: Iterable[str], source: CaptureSource) -> "RawText":
        return cls(lines=tuple(lines), source=CaptureSource(source))

    @property
    def full_text(self) -> str:
        return "\n".join(self.lines)


@dataclass(frozen=True)
class Candidate:
    text: str
    source_line: int
    word_span: Tuple[int, int]      # [start, end) over the filtered word list

    @property
    def score(self) -> int:
        return len(self.text)

    @property
    def sort_key(self) -> Tuple[int, str]:
        # Highest score first, then alphabetical
        return (-self.score, self.text)
