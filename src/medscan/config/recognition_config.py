# ============================================================================
# src/medscan/config/recognition_config.py
# ============================================================================
"""
Recognition Settings
- Timeout applied to OCR / speech capabilities
- Number of assisted text regions recognized per frame
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RecognitionSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    RECOGNITION_TIMEOUT_SECONDS: float = Field(
        default=30.0,
        gt=0.0,
        description="Upper bound for a single recognize_text / recognize_speech call"
    )
    MAX_TEXT_REGIONS: int = Field(
        default=3,
        ge=1,
        description="Detected text regions recognized per frame, in detector order"
    )


recognition_settings = RecognitionSettings()
