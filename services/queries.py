"""Date range queries over a loaded record store."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterator, List, Optional

from services.record_store import RecordStore
from settings import get_settings

logger = logging.getLogger(__name__)

DEFAULT_READINGS_PER_DAY = 24
DEFAULT_APPROVED_QUALITY = "G"


@dataclass(frozen=True)
class DailyAverage:
    day: date
    reading_count: int
    mean: Optional[float]


@dataclass(frozen=True)
class DailyMissing:
    day: date
    missing: Optional[int]


@dataclass(frozen=True)
class ApprovalSummary:
    total: int
    approved: int

    @property
    def percentage(self) -> float:
        """Share of approved readings, 0.0 when the range held no readings."""
        if not self.total:
            return 0.0
        return self.approved / self.total * 100


def iter_dates(date_from: date, date_to: date) -> Iterator[date]:
    """Yield every date from ``date_from`` to ``date_to`` inclusive, ascending."""
    for offset in range((date_to - date_from).days + 1):
        yield date_from + timedelta(days=offset)


def _no_data_line(day: date) -> str:
    return f"{day} No data available"


class QueryEngine:
    """Read-only aggregate queries that can be unit tested in isolation."""

    def __init__(
        self,
        store: RecordStore,
        readings_per_day: int = DEFAULT_READINGS_PER_DAY,
        approved_quality: str = DEFAULT_APPROVED_QUALITY,
    ) -> None:
        self.store = store
        self.readings_per_day = readings_per_day
        self.approved_quality = approved_quality

    def daily_averages(self, date_from: date, date_to: date) -> List[DailyAverage]:
        averages: List[DailyAverage] = []
        for day in iter_dates(date_from, date_to):
            readings = self.store.get(day)
            if not readings:
                averages.append(DailyAverage(day=day, reading_count=0, mean=None))
                continue
            total = sum(reading.temperature for reading in readings)
            averages.append(
                DailyAverage(day=day, reading_count=len(readings), mean=total / len(readings))
            )
        return averages

    def daily_missing(self, date_from: date, date_to: date) -> List[DailyMissing]:
        """Missing counts ordered by descending count, dates without data last.

        Ties keep ascending date order. Counts are not clamped, so a day with
        more readings than expected reports a negative number.
        """

        counted: List[DailyMissing] = []
        absent: List[DailyMissing] = []
        for day in iter_dates(date_from, date_to):
            readings = self.store.get(day)
            if not readings:
                absent.append(DailyMissing(day=day, missing=None))
                continue
            counted.append(DailyMissing(day=day, missing=self.readings_per_day - len(readings)))

        counted.sort(key=lambda entry: entry.missing, reverse=True)
        return counted + absent

    def approval_summary(self, date_from: date, date_to: date) -> ApprovalSummary:
        total = 0
        approved = 0
        for day in iter_dates(date_from, date_to):
            for reading in self.store.get(day) or ():
                total += 1
                if reading.is_approved(self.approved_quality):
                    approved += 1
        return ApprovalSummary(total=total, approved=approved)

    def average_temperatures(self, date_from: date, date_to: date) -> List[str]:
        lines: List[str] = []
        for entry in self.daily_averages(date_from, date_to):
            if entry.mean is None:
                lines.append(_no_data_line(entry.day))
                continue
            lines.append(f"{entry.day} average temperature: {entry.mean:.2f} degrees Celsius")
        return lines

    def missing_values(self, date_from: date, date_to: date) -> List[str]:
        lines: List[str] = []
        for entry in self.daily_missing(date_from, date_to):
            if entry.missing is None:
                lines.append(_no_data_line(entry.day))
                continue
            lines.append(f"{entry.day} missing {entry.missing} values")
        return lines

    def approved_values(self, date_from: date, date_to: date) -> List[str]:
        summary = self.approval_summary(date_from, date_to)
        if summary.total == 0:
            logger.warning(
                "No readings in range, reporting 0 % approved",
                extra={"date_from": date_from, "date_to": date_to},
            )
        return [
            f"Approved values between {date_from} and {date_to}: {summary.percentage:.2f} %"
        ]


def build_default_engine(store: RecordStore) -> QueryEngine:
    """Factory that wires a query engine with the configured thresholds."""
    settings = get_settings()
    return QueryEngine(
        store=store,
        readings_per_day=settings.readings_per_day,
        approved_quality=settings.approved_quality,
    )
