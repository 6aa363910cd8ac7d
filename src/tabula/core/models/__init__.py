"""Metadata and query models shared across tabula."""

from tabula.core.models.query import (
    CountPlan,
    Operator,
    Pagination,
    Predicate,
    QueryIntent,
    QueryPlan,
    QueryResult,
    RetrievalPlan,
    SortField,
    Window,
)
from tabula.core.models.tables import (
    ColumnDescriptor,
    ColumnReference,
    ColumnType,
    RelationDescriptor,
    RelationKind,
    TableDescriptor,
)

__all__ = [
    "ColumnDescriptor",
    "ColumnReference",
    "ColumnType",
    "CountPlan",
    "Operator",
    "Pagination",
    "Predicate",
    "QueryIntent",
    "QueryPlan",
    "QueryResult",
    "RelationDescriptor",
    "RelationKind",
    "RetrievalPlan",
    "SortField",
    "TableDescriptor",
    "Window",
]
