"""In-memory index of station readings grouped by calendar date."""

from __future__ import annotations

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

from models.records import Reading
from storage.line_source import open_lines

logger = logging.getLogger(__name__)

_FIELD_SEPARATOR = ";"
_FIELD_COUNT = 4


class RecordParseError(ValueError):
    """Raised when an input line cannot be turned into a reading."""

    def __init__(self, line_number: int, line: str, reason: str) -> None:
        super().__init__(f"line {line_number}: {reason}")
        self.line_number = line_number
        self.line = line
        self.reason = reason


class RecordStore:
    """Maps each calendar date to the readings recorded on it.

    Buckets are only ever handed out as tuples, so once loading is done the
    store can be shared freely between readers.
    """

    def __init__(self) -> None:
        self._buckets: Dict[date, Tuple[Reading, ...]] = {}
        self._reading_count = 0

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "RecordStore":
        store = cls()
        store.load(lines)
        return store

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "RecordStore":
        store = cls()
        with open_lines(path) as lines:
            store.load(lines, source=str(path))
        return store

    def load(self, lines: Iterable[str], source: Optional[str] = None) -> int:
        """Parse ``lines`` and add their readings to the store.

        Nothing is added unless every line parses; on the first bad line a
        :class:`RecordParseError` is raised and the store is left untouched.
        Returns the number of readings loaded.
        """

        staged: Dict[date, List[Reading]] = {}
        loaded = 0
        iterator = iter(lines)
        line_number = 0
        while True:
            line_number += 1
            try:
                raw = next(iterator, None)
            except UnicodeDecodeError as exc:
                undecoded = exc.object.decode(exc.encoding, errors="replace")
                raise _parse_failure(
                    line_number, undecoded, f"undecodable bytes ({exc.reason})", source
                ) from exc
            if raw is None:
                break
            try:
                day, reading = parse_line(raw)
            except ValueError as exc:
                raise _parse_failure(line_number, raw, str(exc), source) from exc
            staged.setdefault(day, []).append(reading)
            loaded += 1

        for day, readings in staged.items():
            self._buckets[day] = self._buckets.get(day, ()) + tuple(readings)
        self._reading_count += loaded

        logger.info(
            "Loaded weather readings",
            extra={"source": source, "reading_count": loaded, "date_count": len(staged)},
        )
        return loaded

    def get(self, day: date) -> Optional[Tuple[Reading, ...]]:
        """Return the bucket for ``day`` or ``None`` when nothing was recorded."""
        return self._buckets.get(day)

    def dates(self) -> List[date]:
        return sorted(self._buckets)

    @property
    def reading_count(self) -> int:
        return self._reading_count

    @property
    def first_date(self) -> Optional[date]:
        return min(self._buckets) if self._buckets else None

    @property
    def last_date(self) -> Optional[date]:
        return max(self._buckets) if self._buckets else None

    def __contains__(self, day: object) -> bool:
        return day in self._buckets

    def __len__(self) -> int:
        return len(self._buckets)


def _parse_failure(
    line_number: int, raw: str, reason: str, source: Optional[str]
) -> RecordParseError:
    logger.error(
        "Aborting load on unparseable line",
        extra={"source": source, "line_number": line_number, "reason": reason},
    )
    return RecordParseError(line_number, raw.rstrip("\r\n"), reason)


def parse_line(line: str) -> Tuple[date, Reading]:
    """Split a ``date;time;temperature;quality`` line into its date and reading."""

    fields = line.rstrip("\r\n").split(_FIELD_SEPARATOR)
    if len(fields) < _FIELD_COUNT:
        raise ValueError(f"expected {_FIELD_COUNT} fields, found {len(fields)}")

    date_raw, time_raw, temperature_raw, quality = fields[:_FIELD_COUNT]
    try:
        day = datetime.strptime(date_raw, "%Y-%m-%d").date()
    except ValueError as exc:
        raise ValueError(f"invalid date {date_raw!r}") from exc
    try:
        observed_at = datetime.strptime(time_raw, "%H:%M:%S").time()
    except ValueError as exc:
        raise ValueError(f"invalid time {time_raw!r}") from exc
    try:
        temperature = float(temperature_raw)
    except ValueError as exc:
        raise ValueError(f"invalid temperature {temperature_raw!r}") from exc

    return day, Reading(time=observed_at, temperature=temperature, quality=quality)
