"""Query filter models and their translation onto the PostgREST builder."""

from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Union
from pydantic import BaseModel


class FilterOp(str, Enum):
    """Comparison operators understood by the list and count helpers."""
    EQ = "eq"
    IN = "in"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    LIKE = "like"
    ILIKE = "ilike"


# Operators accepted inside a ``{column: {operator: operand}}`` filter.
# Anything else is treated as equality.
OPERAND_OPERATORS = {
    "gt": FilterOp.GT,
    "gte": FilterOp.GTE,
    "lt": FilterOp.LT,
    "lte": FilterOp.LTE,
    "like": FilterOp.LIKE,
    "ilike": FilterOp.ILIKE,
}


class ColumnFilter(BaseModel):
    """A single filter applied to one column."""
    column: str
    op: FilterOp = FilterOp.EQ
    value: Any = None


class OrderBy(BaseModel):
    """Ordering applied to a list query."""
    column: str
    ascending: bool = True


FilterSpec = Union[Dict[str, Any], Iterable[ColumnFilter]]


def parse_filters(filters: Optional[FilterSpec]) -> List[ColumnFilter]:
    """Convert the generic ``{column: value}`` form into column filters.

    A list, tuple or set value becomes a membership test, a dict becomes one
    filter per operator/operand pair and any other value is an equality test.
    Lists of ``ColumnFilter`` are returned unchanged.
    """
    if not filters:
        return []

    if not isinstance(filters, dict):
        return list(filters)

    parsed = []
    for column, value in filters.items():
        if isinstance(value, (list, tuple, set)):
            parsed.append(ColumnFilter(column=column, op=FilterOp.IN, value=list(value)))
        elif isinstance(value, dict):
            for operator, operand in value.items():
                op = OPERAND_OPERATORS.get(operator, FilterOp.EQ)
                parsed.append(ColumnFilter(column=column, op=op, value=operand))
        else:
            parsed.append(ColumnFilter(column=column, op=FilterOp.EQ, value=value))

    return parsed


def apply_filter(query, column_filter: ColumnFilter):
    """Apply one filter to a PostgREST query builder and return the builder."""
    column = column_filter.column
    op = column_filter.op
    value = column_filter.value

    if op == FilterOp.IN:
        return query.in_(column, list(value))
    if op == FilterOp.GT:
        return query.gt(column, value)
    if op == FilterOp.GTE:
        return query.gte(column, value)
    if op == FilterOp.LT:
        return query.lt(column, value)
    if op == FilterOp.LTE:
        return query.lte(column, value)
    if op == FilterOp.LIKE:
        return query.like(column, f"%{value}%")
    if op == FilterOp.ILIKE:
        return query.ilike(column, f"%{value}%")

    if value is None:
        return query.is_(column, "null")
    return query.eq(column, value)


def apply_filters(query, filters: Optional[FilterSpec]):
    """Apply every filter in ``filters`` to ``query``."""
    for column_filter in parse_filters(filters):
        query = apply_filter(query, column_filter)
    return query
