import logging
import os
from dataclasses import dataclass

DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_LIMIT = 50


@dataclass(frozen=True)
class Settings:
    log_level: str
    default_limit: int


def _positive_int(raw: str | None, default: int) -> int:
    try:
        value = int(raw) if raw is not None else default
    except ValueError:
        return default
    return value if value > 0 else default


def get_settings() -> Settings:
    level = os.getenv("DATALIST_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
    if not isinstance(logging.getLevelName(level), int):
        level = DEFAULT_LOG_LEVEL
    return Settings(
        log_level=level,
        default_limit=_positive_int(os.getenv("DATALIST_DEFAULT_LIMIT"), DEFAULT_LIMIT),
    )
