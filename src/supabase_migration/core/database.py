"""Generic record helpers over the Supabase query builder.

Every helper takes the client explicitly and lets client errors propagate;
postgrest raises ``APIError`` for any failed request.
"""

from typing import Any, Dict, List, Optional, Tuple, Union

from postgrest.exceptions import APIError
from supabase import Client

from ..models.filters import FilterSpec, OrderBy, apply_filters

RecordId = Union[str, int]

DEFAULT_PAGE_SIZE = 10


def _returned_row(rows: List[Dict[str, Any]], table: str, returning: str) -> Dict[str, Any]:
    """Pick the single affected row from a write response."""
    if not rows:
        raise APIError({
            "message": f"No row returned from {table}",
            "code": "PGRST116",
            "hint": None,
            "details": "The result contains 0 rows",
        })

    row = rows[0]
    if returning == "minimal":
        return {"id": row.get("id")}
    return row


def create_record(
    client: Client,
    table: str,
    data: Dict[str, Any],
    returning: str = "representation"
) -> Dict[str, Any]:
    """Insert one row, returning the row or only its ``id`` when ``returning="minimal"``."""
    response = client.table(table).insert(data).execute()
    return _returned_row(response.data, table, returning)


def get_record(
    client: Client,
    table: str,
    record_id: RecordId,
    columns: str = "*"
) -> Dict[str, Any]:
    """Fetch exactly one row by ``id``; raises when zero or several rows match."""
    response = client.table(table).select(columns).eq("id", record_id).single().execute()
    return response.data


def update_record(
    client: Client,
    table: str,
    record_id: RecordId,
    data: Dict[str, Any],
    returning: str = "representation"
) -> Dict[str, Any]:
    """Update one row by ``id``; raises ``APIError`` when no row matched."""
    response = client.table(table).update(data).eq("id", record_id).execute()
    return _returned_row(response.data, table, returning)


def delete_record(client: Client, table: str, record_id: RecordId) -> None:
    client.table(table).delete().eq("id", record_id).execute()


def page_range(offset: int, limit: Optional[int] = None) -> Tuple[int, int]:
    """Inclusive row range for an offset page.

    Without a limit the window is ``DEFAULT_PAGE_SIZE`` rows, not unbounded.
    """
    return offset, offset + (limit or DEFAULT_PAGE_SIZE) - 1


def list_records(
    client: Client,
    table: str,
    columns: str = "*",
    filters: Optional[FilterSpec] = None,
    order_by: Optional[Union[OrderBy, Dict[str, Any]]] = None,
    limit: Optional[int] = None,
    offset: Optional[int] = None
) -> List[Dict[str, Any]]:
    """Fetch rows matching ``filters`` with optional ordering and pagination."""
    query = client.table(table).select(columns)
    query = apply_filters(query, filters)

    if order_by:
        if isinstance(order_by, dict):
            order_by = OrderBy(**order_by)
        query = query.order(order_by.column, desc=not order_by.ascending)

    # range() sets its own limit parameter
    if offset:
        start, end = page_range(offset, limit)
        query = query.range(start, end)
    elif limit:
        query = query.limit(limit)

    response = query.execute()
    return response.data


def count_records(
    client: Client,
    table: str,
    filters: Optional[FilterSpec] = None
) -> int:
    """Count rows matching ``filters`` without fetching them."""
    query = client.table(table).select("*", count="exact", head=True)
    query = apply_filters(query, filters)

    response = query.execute()
    return response.count
