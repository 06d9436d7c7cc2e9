# ============================================================================
# src/medscan/config/logging_config.py
# ============================================================================
"""
Logging Settings
- Log level
- Output format
- Optional log file
"""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level"
    )
    LOG_FORMAT_JSON: bool = Field(
        default=False,
        description="Emit JSON log lines instead of plain text"
    )
    LOG_FILE: Optional[Path] = Field(
        default=None,
        description="Also write logs to this file"
    )


logging_settings = LoggingSettings()
