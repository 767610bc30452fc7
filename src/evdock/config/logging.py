"""Logging settings consumed by ``evdock.utils.logging.configure_logging``."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


class LoggingSettings(BaseModel):
    level: str = Field(default="INFO", description="Root log level name")
    format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="logging.Formatter format string",
    )
    file: Optional[Path] = Field(default=None, description="Optional log file; stderr is always kept")
