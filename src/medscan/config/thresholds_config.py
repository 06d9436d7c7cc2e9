# ============================================================================
# src/medscan/config/thresholds_config.py
# ============================================================================
"""
Extraction Thresholds
- Noise line / word filtering
- Candidate window size
- Medicine-likeness gate for OCR candidates
- Confidence bar for names
"""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ThresholdSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    MIN_LINE_LENGTH: int = Field(
        default=3,
        ge=0,
        description="Cleaned lines shorter than this are dropped as OCR noise"
    )
    MIN_WORD_LENGTH: int = Field(
        default=3,
        ge=1,
        description="Words shorter than this never take part in name candidates"
    )
    MIN_NAME_LENGTH: int = Field(
        default=3,
        ge=1,
        description="A result is Confident only when its name has at least this many characters"
    )
    MIN_SIGNIFICANT_CHARS: int = Field(
        default=3,
        ge=1,
        description="Recognized text with fewer letters/digits counts as no text at all"
    )
    MAX_CANDIDATE_WINDOW: int = Field(
        default=3,
        ge=1, le=6,
        description="Longest contiguous word window considered as a name candidate"
    )
    MEDICINE_LIKE_MIN_LENGTH: int = Field(
        default=7,
        ge=1,
        description="An OCR candidate is medicine-like when one of its words is at least this long"
    )
    MEDICINE_LIKE_XYZ_MIN_LENGTH: int = Field(
        default=5,
        ge=1,
        description="Shorter alternative: a word of at least this length containing x, y or z"
    )
    REQUIRE_MEDICINE_LIKE_OCR_CANDIDATES: bool = Field(
        default=True,
        description="Apply the medicine-likeness gate to OCR candidates (speech is never gated)"
    )

    @model_validator(mode="after")
    def _check_lengths(self):
        if self.MEDICINE_LIKE_XYZ_MIN_LENGTH > self.MEDICINE_LIKE_MIN_LENGTH:
            raise ValueError(
                "MEDICINE_LIKE_XYZ_MIN_LENGTH must not exceed MEDICINE_LIKE_MIN_LENGTH"
            )
        return self


threshold_settings = ThresholdSettings()
