"""Base configuration settings."""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Union of every bit ReorderFlag defines
KNOWN_FLAG_BITS = 0x00070703

# SHAPE_MIRRORING | REORDER_NSM | REMOVE_SPECIALS
DEFAULT_FLAGS = 0x00040003


class Settings(BaseSettings):
    """Package settings, read from ``UNIBIDI_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="UNIBIDI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "unibidi"
    environment: str = "development"
    log_level: str = "INFO"
    log_format: Literal["console", "json"] = "console"

    # Bidi defaults
    default_direction: Literal["ltr", "rtl", "on", "wltr", "wrtl"] = Field(
        default="on",
        description="Paragraph direction used when the caller passes none",
    )
    default_flags: int = Field(
        default=DEFAULT_FLAGS,
        description="Reorder flags used when the caller passes none",
    )
    carry_paragraph_direction: bool = Field(
        default=True,
        description="Use each paragraph's resolved direction as the next paragraph's weak hint",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize the level name and reject unknown ones."""
        level = v.upper()
        if level not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("default_direction", mode="before")
    @classmethod
    def normalize_direction(cls, v: object) -> object:
        """Accept direction names in any case."""
        return v.lower() if isinstance(v, str) else v

    @field_validator("default_flags")
    @classmethod
    def validate_flags(cls, v: int) -> int:
        """Reject bits that no reorder flag defines."""
        if v < 0 or v & ~KNOWN_FLAG_BITS:
            raise ValueError(f"Unknown reorder flag bits: {v:#x}")
        return v
