"""
Pydantic data models for the data receiver.

A Record is the only persisted entity: one submitted data item, stored as a
single row of the received_data table. Field names mirror the column names so
rows map onto the model without translation.
"""

import datetime
from typing import Optional

from pydantic import BaseModel, Field


# Column order of the received_data table; shared by the store and the views.
RECORD_COLUMNS = ("id", "origin", "mime_data", "datetime")


def utc_now_iso() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a Z suffix."""
    now = datetime.datetime.now(datetime.timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


# ---------------------------------------------------------------------------
# Core Entities
# ---------------------------------------------------------------------------

class Record(BaseModel):
    """
    A persisted data submission.

    Attributes:
        id: Caller-supplied identifier, unique across all records
        origin: Free-form label identifying the submitter
        mime_data: Opaque payload, stored as text without format checks
        datetime: Server-assigned insertion time (ISO-8601)
    """
    id: str
    origin: str
    mime_data: str
    datetime: str = Field(default_factory=utc_now_iso)

    def as_row(self) -> tuple:
        return tuple(getattr(self, col) for col in RECORD_COLUMNS)


class RecordFilter(BaseModel):
    """Optional query filters. Empty strings are treated as absent."""
    origin: Optional[str] = None
    date: Optional[str] = None  # YYYY-MM-DD, matched against DATE(datetime)


def build_predicates(filters: RecordFilter) -> tuple[str, list]:
    """
    Map a RecordFilter onto a parameterized WHERE clause.

    Returns:
        (clause, params) where clause is "" when no filter is set, otherwise
        " WHERE ..." joining equality predicates with AND.
    """
    conditions = []
    params = []

    if filters.origin:
        conditions.append("origin = ?")
        params.append(filters.origin)

    if filters.date:
        conditions.append("DATE(datetime) = ?")
        params.append(filters.date)

    if not conditions:
        return "", params
    return " WHERE " + " AND ".join(conditions), params
