# src/tabula/core/query/composer.py
from typing import List

from tabula.core.models.query import (
    CountPlan,
    Pagination,
    QueryIntent,
    QueryPlan,
    RetrievalPlan,
    SortField,
    Window,
)
from tabula.core.models.tables import TableDescriptor
from tabula.core.query.filters import FilterBuilder
from tabula.core.types import INT64_MAX


def _bounded(value: int) -> int:
    return min(max(0, value), INT64_MAX)


def compute_window(pagination: Pagination) -> Window:
    """
    Resolve pagination parameters to an offset/limit window.

    Range parameters always win over page parameters:
    `_start`+`_end` first, then `_start`+`_limit`, then `_page`/`_per_page`.
    Offset and limit are clamped to what a SQL LIMIT/OFFSET accepts.
    """
    start, end, limit = pagination.start, pagination.end, pagination.limit

    if start is not None and end is not None:
        offset = _bounded(start)
        return Window(offset=offset, limit=_bounded(max(offset, end) - offset))

    if start is not None and limit is not None:
        return Window(offset=_bounded(start), limit=_bounded(limit))

    per_page = max(1, pagination.per_page)
    return Window(offset=_bounded((pagination.page - 1) * per_page), limit=per_page)


def valid_sort(sort: List[SortField], table: TableDescriptor) -> List[SortField]:
    """Drops fields that do not name a column; the rest keep their order."""
    return [field for field in sort if table.has_column(field.column)]


def plan_query(intent: QueryIntent, table: TableDescriptor) -> QueryPlan:
    predicates = FilterBuilder(table).build(intent.filters)
    return QueryPlan(
        retrieval=RetrievalPlan(
            table=table.name,
            predicates=predicates,
            sort=valid_sort(intent.sort, table),
            window=compute_window(intent.pagination),
        ),
        count=CountPlan(table=table.name, predicates=predicates),
    )
