"""Shared schema types.

Invariants:
    - UtcDatetime values are always timezone-aware UTC (naive input is read as UTC)
    - OffsetMinutes spans real-world offsets, UTC-14:00 to UTC+14:00
"""

from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, Field

from aurora.core.event_rules import as_utc

UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]

OffsetMinutes = Annotated[int, Field(ge=-840, le=840)]
