# src/tabula/core/models/query.py
"""Per-request query structures: parsed intent, predicates and plans."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

RawValue = Union[str, List[str]]


class Operator(str, Enum):
    EQ = "eq"
    NE = "ne"
    LIKE = "like"
    GTE = "gte"
    LTE = "lte"
    IN = "in"


@dataclass(frozen=True)
class SortField:
    column: str
    descending: bool = False


@dataclass(frozen=True)
class Pagination:
    """Raw pagination values; `start`/`end`/`limit` are None when absent."""

    page: int = 1
    per_page: int = 10
    start: Optional[int] = None
    end: Optional[int] = None
    limit: Optional[int] = None


@dataclass
class QueryIntent:
    """Typed view of a GET_MANY request's query string."""

    pagination: Pagination = field(default_factory=Pagination)
    sort: List[SortField] = field(default_factory=list)
    embed: List[str] = field(default_factory=list)
    filters: Dict[str, RawValue] = field(default_factory=dict)


@dataclass(frozen=True)
class Predicate:
    """One atomic comparison. For `Operator.IN`, `value` is a tuple."""

    column: str
    operator: Operator
    value: Any


@dataclass(frozen=True)
class Window:
    offset: int
    limit: int

    @property
    def end(self) -> int:
        return self.offset + self.limit


@dataclass(frozen=True)
class RetrievalPlan:
    table: str
    predicates: List[Predicate]
    sort: List[SortField]
    window: Window


@dataclass(frozen=True)
class CountPlan:
    table: str
    predicates: List[Predicate]


@dataclass(frozen=True)
class QueryPlan:
    retrieval: RetrievalPlan
    count: CountPlan


@dataclass
class QueryResult:
    rows: List[Dict[str, Any]]
    total_count: int
