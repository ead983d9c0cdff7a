"""
Row (de)serialization helpers shared by the Supabase adapters.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Optional

from domain.errors import StoreError
from domain.time import require_utc_timestamp


def to_iso_utc(dt: Optional[datetime], *, name: str) -> Optional[str]:
    """Serialize a UTC datetime to ISO-8601 (timezone-aware, offset 0)."""

    if dt is None:
        return None
    require_utc_timestamp(name, dt)
    return dt.astimezone(timezone.utc).isoformat()


def parse_utc_datetime(value: Any) -> datetime:
    """
    Parse a Supabase timestamp into a timezone-aware UTC datetime.

    Supabase commonly returns ISO-8601 strings, sometimes with a trailing 'Z'.
    """

    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str):
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    else:
        raise TypeError(f"Unsupported timestamp type: {type(value)!r}")

    if dt.tzinfo is None or dt.utcoffset() is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_optional_datetime(value: Any) -> Optional[datetime]:
    return parse_utc_datetime(value) if value else None


def to_decimal(value: Any) -> Decimal:
    # str() first so floats coming back from PostgREST keep their printed value
    return Decimal(str(value))


def rows_or_raise(response: Any, action: str) -> list:
    """Return response rows, raising StoreError if Supabase reported an error."""

    error = getattr(response, "error", None)
    if error:
        raise StoreError(f"Failed to {action}: {error}")
    return getattr(response, "data", None) or []
