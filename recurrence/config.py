# recurrence/config.py
"""
Engine configuration.

The occurrence cap is engine policy: it bounds open-ended rules so a preview
is always finite. It is not exposed to end users.
"""

import os
from dataclasses import dataclass

DEFAULT_MAX_OCCURRENCES = 365


@dataclass
class EngineSettings:
    """Settings for the recurrence engine."""

    # Ceiling on dates emitted for rules without an end date
    max_occurrences: int = DEFAULT_MAX_OCCURRENCES

    # Logging
    log_level: str = "INFO"

    def __post_init__(self):
        if self.max_occurrences < 1:
            raise ValueError("max_occurrences must be at least 1")

    @classmethod
    def from_environment(cls) -> "EngineSettings":
        """Create settings from environment variables."""
        return cls(
            max_occurrences=int(os.environ.get("RECURRENCE_MAX_OCCURRENCES", str(DEFAULT_MAX_OCCURRENCES))),
            log_level=os.environ.get("RECURRENCE_LOG_LEVEL", "INFO"),
        )

    @classmethod
    def from_dict(cls, config_dict: dict) -> "EngineSettings":
        """Create settings from dictionary."""
        return cls(
            max_occurrences=config_dict.get("max_occurrences", DEFAULT_MAX_OCCURRENCES),
            log_level=config_dict.get("log_level", "INFO"),
        )


_settings = None


def get_settings() -> EngineSettings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = EngineSettings.from_environment()
    return _settings


def reset_settings() -> None:
    """Forget cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
