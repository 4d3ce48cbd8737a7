from __future__ import annotations

import logging
from typing import Iterator, List

import pytest

import logging_config
from settings import get_settings


def _day(day: str, temperatures: List[float], qualities: List[str], skip_hour: int | None = None) -> List[str]:
    hours = [hour for hour in range(24) if hour != skip_hour]
    return [
        f"{day};{hour:02d}:00:00;{temperature};{quality}"
        for hour, temperature, quality in zip(hours, temperatures, qualities)
    ]


def build_sample_lines() -> List[str]:
    """Three days of readings: one complete day, two days missing one hour."""

    first = _day("2000-01-01", [0.0, 0.84] * 12, ["G"] * 23 + ["Y"])
    second = _day("2000-01-02", [2.26] * 23, ["Y"] * 23, skip_hour=5)
    third = _day("2000-01-03", [2.78] * 23, ["Y"] * 23, skip_hour=17)
    return first + second + third


@pytest.fixture()
def sample_lines() -> List[str]:
    return build_sample_lines()


@pytest.fixture()
def sample_file(tmp_path, sample_lines):
    path = tmp_path / "weather.csv"
    path.write_text("\n".join(sample_lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _isolated_settings_and_logging(monkeypatch) -> Iterator[None]:
    for name in (
        "WEATHER_DATA_PATH",
        "WEATHER_READINGS_PER_DAY",
        "WEATHER_APPROVED_QUALITY",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    monkeypatch.setattr(logging_config, "_configured", False)
    root = logging.getLogger()
    level = root.level
    yield
    get_settings.cache_clear()
    root.setLevel(level)
    for handler in list(root.handlers):
        if isinstance(handler.formatter, logging_config.ContextualFormatter):
            root.removeHandler(handler)
