from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from shared.protocol.constants import BYTE_ORDERS, DEFAULT_BYTE_ORDER
from shared.protocol.errors import ConfigError


@dataclass
class Settings:
    """Process settings shared by both peer roles."""

    log_level: str = "WARNING"
    byte_order: str = DEFAULT_BYTE_ORDER
    listen_host: str = "0.0.0.0"
    prompt: str = "Message > "


SETTINGS = Settings()


def load_settings(env_path: str = ".env") -> Settings:
    """Load settings from env/.env."""
    if Path(env_path).exists():
        load_dotenv(env_path)
    SETTINGS.log_level = os.getenv("CHAT_LOG_LEVEL", SETTINGS.log_level).upper()
    SETTINGS.byte_order = os.getenv("CHAT_BYTE_ORDER", SETTINGS.byte_order).lower()
    SETTINGS.listen_host = os.getenv("CHAT_LISTEN_HOST", SETTINGS.listen_host)
    SETTINGS.prompt = os.getenv("CHAT_PROMPT", SETTINGS.prompt)
    _validate_settings(SETTINGS)
    return SETTINGS


def _validate_settings(settings: Settings) -> None:
    if settings.byte_order not in BYTE_ORDERS:
        raise ConfigError(f"CHAT_BYTE_ORDER must be one of {', '.join(BYTE_ORDERS)}, got {settings.byte_order!r}")
    if not isinstance(logging.getLevelName(settings.log_level), int):
        raise ConfigError(f"CHAT_LOG_LEVEL {settings.log_level!r} is not a logging level")


__all__ = ["Settings", "SETTINGS", "load_settings"]
