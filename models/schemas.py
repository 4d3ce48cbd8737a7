"""Pydantic schemas for machine-readable CLI output."""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class QueryName(str, Enum):
    """Queries exposed by the command line interface."""

    average = "average"
    missing = "missing"
    approved = "approved"


class StoreSummary(BaseModel):
    """Shape of a loaded record store."""

    source: Optional[str] = Field(default=None, description="Path the records were read from.")
    reading_count: int = Field(..., ge=0)
    date_count: int = Field(..., ge=0)
    first_date: Optional[date] = None
    last_date: Optional[date] = None


class QueryResult(BaseModel):
    """Formatted output lines of a single query."""

    query: QueryName
    date_from: date
    date_to: date
    lines: List[str] = Field(default_factory=list)
