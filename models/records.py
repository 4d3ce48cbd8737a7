"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import time


@dataclass(frozen=True, slots=True)
class Reading:
    """A single station observation parsed from an input line."""

    time: time
    temperature: float
    quality: str

    def is_approved(self, marker: str) -> bool:
        return self.quality == marker
