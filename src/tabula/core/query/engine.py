# src/tabula/core/query/engine.py
from typing import Any, Dict, Iterable, Mapping, Optional

from tabula.core.config import QueryConfig
from tabula.core.introspection.naming import NamingConvention
from tabula.core.logging import color_palette, log
from tabula.core.models.query import QueryIntent, QueryResult
from tabula.core.models.tables import TableDescriptor
from tabula.core.query.composer import plan_query
from tabula.core.query.embed import EmbedResolver
from tabula.core.query.parser import parse_query_params
from tabula.core.query.protocols import Store


class QueryEngine:
    """
    Runs GET_MANY queries: parse, plan, retrieve, count, embed.

    Holds only immutable descriptors and the store, so one instance can serve
    any number of concurrent requests.
    """

    def __init__(
        self,
        store: Store,
        tables: Iterable[TableDescriptor],
        config: Optional[QueryConfig] = None,
        naming: Optional[NamingConvention] = None,
    ):
        self.store = store
        self.tables: Dict[str, TableDescriptor] = {t.name: t for t in tables}
        self.config = config or QueryConfig()
        self.embed_resolver = EmbedResolver(store, self.tables, naming)

    def parse(self, raw_params: Any) -> QueryIntent:
        return parse_query_params(raw_params, self.config)

    def get_many(self, resource: str, raw_params: Mapping[str, Any]) -> QueryResult:
        return self.execute(self.tables[resource], self.parse(raw_params))

    def execute(self, table: TableDescriptor, intent: QueryIntent) -> QueryResult:
        plan = plan_query(intent, table)
        log.debug(
            f"{color_palette['table'](table.name)}: {len(plan.retrieval.predicates)} predicate(s), "
            f"sort={[(s.column, 'desc' if s.descending else 'asc') for s in plan.retrieval.sort]}, "
            f"window=[{plan.retrieval.window.offset}, {plan.retrieval.window.end})"
        )

        rows = self.store.fetch(plan.retrieval)
        total_count = self.store.count(plan.count)
        rows = self.embed_resolver.resolve(rows, table, intent.embed)
        return QueryResult(rows=rows, total_count=total_count)
