"""Converter settings."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

_FALSE_WORDS = frozenset({"0", "false", "no", "off"})


@dataclass
class ConverterSettings:
    """All user-configurable settings."""

    # Output
    atomic_write: bool = True
    overwrite: bool = True
    text_encoding: str = "utf-8"

    # Diagnostics
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> ConverterSettings:
        """Defaults overridden by ``ASCNCONV_*`` environment variables."""
        settings = cls()
        level = os.environ.get("ASCNCONV_LOG_LEVEL")
        if level:
            settings.log_level = level.strip().upper()
        atomic = os.environ.get("ASCNCONV_ATOMIC_WRITE")
        if atomic is not None:
            settings.atomic_write = atomic.strip().lower() not in _FALSE_WORDS
        return settings

    @property
    def log_level_value(self) -> int:
        """Numeric logging level; unknown names fall back to WARNING."""
        value = logging.getLevelName(self.log_level)
        return value if isinstance(value, int) else logging.WARNING
