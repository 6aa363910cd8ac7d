# src/tabula/core/query/protocols.py
from typing import Any, Dict, List, Optional, Protocol, Sequence

from tabula.core.models.query import CountPlan, RetrievalPlan


class Store(Protocol):
    """The three call shapes the query engine needs from a storage backend."""

    def fetch(self, plan: RetrievalPlan) -> List[Dict[str, Any]]: ...

    def count(self, plan: CountPlan) -> int: ...

    def fetch_related(
        self,
        table_name: str,
        column: Optional[str] = None,
        values: Optional[Sequence[Any]] = None,
    ) -> List[Dict[str, Any]]: ...
