"""Engine configuration using environment variables."""
import logging
import os
from functools import lru_cache
from dotenv import load_dotenv

from choice_engine.core.errors import ConfigurationError

load_dotenv()


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, str(default))
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(
            message=f"{name} must be an integer",
            details={"variable": name, "value": raw},
        )


class Settings:
    """Engine settings loaded from environment variables."""

    def __init__(self):
        # Nested choices built from "X or Y" option text
        self.NESTED_CHOICE_ID: str = os.getenv("CHOICE_ENGINE_NESTED_CHOICE_ID", "nested_choice")
        self.NESTED_ID_MAX_LENGTH: int = _int_env("CHOICE_ENGINE_NESTED_ID_MAX_LENGTH", 30)

        # Logging
        self.LOG_LEVEL: str = os.getenv("CHOICE_ENGINE_LOG_LEVEL", "WARNING").upper()
        self.DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

        if self.NESTED_ID_MAX_LENGTH < 1:
            raise ConfigurationError(
                message="CHOICE_ENGINE_NESTED_ID_MAX_LENGTH must be positive",
                details={"value": self.NESTED_ID_MAX_LENGTH},
            )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(settings: Settings = None) -> logging.Logger:
    """Apply the configured log level to the choice_engine logger hierarchy."""
    settings = settings or get_settings()
    level = logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL, logging.WARNING)
    logger = logging.getLogger("choice_engine")
    logger.setLevel(level)
    return logger
