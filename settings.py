from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


_DATA_PATH_ENV = "WEATHER_DATA_PATH"
_READINGS_PER_DAY_ENV = "WEATHER_READINGS_PER_DAY"
_APPROVED_QUALITY_ENV = "WEATHER_APPROVED_QUALITY"
_LOG_LEVEL_ENV = "LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    data_path: Optional[str]
    readings_per_day: int
    approved_quality: str
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_optional_env(name: str, default: Optional[str]) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or None


def _read_readings_per_day(default: int) -> int:
    value = os.getenv(_READINGS_PER_DAY_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        data_path=_read_optional_env(_DATA_PATH_ENV, None),
        readings_per_day=_read_readings_per_day(24),
        approved_quality=_read_str_env(_APPROVED_QUALITY_ENV, "G"),
        log_level=_read_log_level("INFO"),
    )
