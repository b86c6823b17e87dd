"""
Configuration Module
====================

Loads runtime settings from environment variables and the ``.env`` file:
input size limits, batch limits, logging level and the default rewrite profile.
The parsing/rewrite engine itself takes no settings; only the batch, CLI and
API layers read them.
"""

import logging
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    """
    Application settings, populated from ``EMLKIT_*`` environment variables.

    Attributes:
        MAX_MESSAGE_BYTES: largest accepted message, in bytes (10 MiB)
        MAX_FILES: largest accepted batch size per request
        LOG_LEVEL: logging level name for the ``emlkit`` logger
        DEFAULT_PROFILE: optional YAML rewrite profile used when none is given
        INPUT_EXTENSIONS: comma separated extensions picked up in directory scans
        FILE_ENCODING: character encoding used to read message files
    """

    model_config = SettingsConfigDict(
        env_prefix="EMLKIT_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    MAX_MESSAGE_BYTES: int = 10 * 1024 * 1024
    MAX_FILES: int = 50
    LOG_LEVEL: str = "INFO"
    DEFAULT_PROFILE: Optional[str] = None
    INPUT_EXTENSIONS: str = ".eml,.txt"
    FILE_ENCODING: str = "utf-8"

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Accept only level names known to :mod:`logging`."""
        name = (v or "").strip().upper()
        if not isinstance(logging.getLevelName(name), int):
            raise ValueError(f"Unknown log level: {v!r}")
        return name

    @field_validator("MAX_MESSAGE_BYTES", "MAX_FILES")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("limits must be positive")
        return v

    def input_extensions(self) -> List[str]:
        """Normalized, lower-cased extension list (each with a leading dot)."""
        out: List[str] = []
        for raw in self.INPUT_EXTENSIONS.split(","):
            ext = raw.strip().lower()
            if not ext:
                continue
            if not ext.startswith("."):
                ext = "." + ext
            out.append(ext)
        return out


# Global singleton, avoids reloading the environment on every call
_settings_instance: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Return the cached settings instance, creating it on first call.
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings_instance
    _settings_instance = None
