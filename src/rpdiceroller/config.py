"""
Session settings.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator

BANNER = (
    "Input your roll or q to quit\n"
    "Format: XdY(khZ|klZ)(+XdY...)(+M|-M)(ra|rd|rQ), s<seed> to reseed"
)


class RollerSettings(BaseModel):
    """Session configuration, built from command-line options."""

    seed: Optional[int] = Field(None, description="Initial seed; None derives one from the clock")
    debug: bool = Field(False, description="Debug logging")
    log_level: str = Field("WARNING", description="Log level when debug is off")
    prompt: str = Field(">", description="Prompt printed before each line")

    @field_validator("seed")
    @classmethod
    def non_negative_seed(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value < 0:
            raise ValueError("seed must be non-negative")
        # 0 at startup derives a seed from the clock.
        return value or None

    @field_validator("log_level")
    @classmethod
    def known_level(cls, value: str) -> str:
        value = value.upper()
        if value not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level {value!r}")
        return value
