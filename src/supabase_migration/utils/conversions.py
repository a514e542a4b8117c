"""Conversion of Firestore values into Supabase-compatible row values."""

import uuid
from datetime import datetime, date, timezone
from decimal import Decimal
from typing import Any, Dict, Optional

from google.cloud.firestore_v1 import DocumentReference, GeoPoint

# Firestore fields re-emitted under snake_case names as ISO strings
TIMESTAMP_FIELDS = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}


def to_iso_timestamp(value: Any) -> Optional[str]:
    """Format a Firestore timestamp as an ISO-8601 UTC string.

    Firestore returns timestamps as ``DatetimeWithNanoseconds``, a datetime
    subclass. Naive datetimes are taken to be UTC. ``None`` stays ``None`` and
    strings are assumed to be formatted already.
    """
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        value = value.astimezone(timezone.utc)
        return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")
    raise TypeError(f"Unsupported timestamp value: {value!r}")


def convert_value(value: Any) -> Any:
    """Convert a single Firestore value to a JSON-serializable value."""
    if value is None:
        return None
    elif isinstance(value, datetime):
        return to_iso_timestamp(value)
    elif isinstance(value, date):
        return value.isoformat()
    elif isinstance(value, Decimal):
        return float(value)
    elif isinstance(value, uuid.UUID):
        return str(value)
    elif isinstance(value, bytes):
        return value.hex()
    elif isinstance(value, GeoPoint):
        return {"latitude": value.latitude, "longitude": value.longitude}
    elif isinstance(value, DocumentReference):
        return value.path
    elif isinstance(value, dict):
        return {key: convert_value(item) for key, item in value.items()}
    elif isinstance(value, (list, tuple)):
        return [convert_value(item) for item in value]
    return value


def document_to_row(doc_id: str, data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Build the destination row for a Firestore document."""
    data = data or {}

    row: Dict[str, Any] = {"id": doc_id}
    for key, value in data.items():
        if key in TIMESTAMP_FIELDS:
            continue
        row[key] = convert_value(value)

    for source_key, row_key in TIMESTAMP_FIELDS.items():
        row[row_key] = to_iso_timestamp(data.get(source_key))

    return row
