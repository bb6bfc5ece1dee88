"""
Time-related utilities for the application.

All generated timestamps are UTC and serialized as ISO-8601 with timezone
information. Stored gallery timestamps may be BSON datetimes, strings or
epoch numbers depending on the ingestion path that wrote them.
"""

from datetime import datetime, timezone
from typing import Any


def utc_now_iso() -> str:
    """Return current UTC time in ISO-8601 format.

    Example:
        2024-01-15T10:42:31.123456+00:00
    """
    return datetime.now(timezone.utc).isoformat()


def to_json_timestamp(value: Any) -> Any:
    """Serialize a stored timestamp for a JSON response.

    Datetimes become ISO-8601 strings (naive values are treated as UTC, which
    is how pymongo returns BSON dates). Strings and numbers pass through.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat()
    return value
