# src/tabula/core/query/embed.py
"""
Relation embedding (`_embed=user,comments`).

Each embed key costs at most one extra store call. Rows come back in the same
order and count as they went in, each with one new property per resolved key:
the related row (or None) for `belongs_to`, a list (possibly empty) for
`has_many`. Keys that match no relation are left out silently.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence

from tabula.core.introspection.naming import DEFAULT_NAMING, NamingConvention
from tabula.core.logging import color_palette, log
from tabula.core.models.tables import RelationDescriptor, RelationKind, TableDescriptor
from tabula.core.query.protocols import Store

Row = Dict[str, Any]


def _distinct(values: Sequence[Any]) -> List[Any]:
    return list(dict.fromkeys(v for v in values if v is not None))


class EmbedResolver:
    def __init__(
        self,
        store: Store,
        tables: Mapping[str, TableDescriptor],
        naming: Optional[NamingConvention] = None,
    ):
        self.store = store
        self.tables = tables
        self.naming = naming or DEFAULT_NAMING

    # ===== Key resolution =====

    def embed_key_for(self, relation: RelationDescriptor) -> str:
        """Canonical key: `userId` -> `user` for belongs_to, table name for has_many."""
        if relation.kind is RelationKind.BELONGS_TO:
            return self.naming.strip_fk_suffix(relation.foreign_key) or relation.foreign_key.lower()
        return relation.related_table

    def find_relation(
        self, table: TableDescriptor, embed_key: str
    ) -> Optional[RelationDescriptor]:
        for relation in table.relations:
            if self.embed_key_for(relation) == embed_key:
                return relation
        for relation in table.relations:
            if relation.related_table in self.naming.name_variants(embed_key):
                return relation
        return None

    # ===== Resolution =====

    def resolve(
        self, rows: List[Row], table: TableDescriptor, embed_keys: Sequence[str]
    ) -> List[Row]:
        if not embed_keys:
            return rows

        result = [dict(row) for row in rows]
        for embed_key in embed_keys:
            relation = self.find_relation(table, embed_key)
            if relation is None:
                log.debug(
                    f"No relation found for embed key '{embed_key}' "
                    f"in table {color_palette['table'](table.name)}"
                )
                continue

            if relation.kind is RelationKind.BELONGS_TO:
                values = self._belongs_to(rows, relation)
            else:
                values = self._has_many(rows, table, relation)

            for row, value in zip(result, values):
                row[embed_key] = value
        return result

    def _belongs_to(self, rows: List[Row], relation: RelationDescriptor) -> List[Optional[Row]]:
        related = self.tables.get(relation.related_table)
        if related is None:
            log.warn(f"Related table '{relation.related_table}' not found in schema")
            return [None] * len(rows)

        keys = _distinct([row.get(relation.foreign_key) for row in rows])
        if not keys:
            return [None] * len(rows)

        records = self.store.fetch_related(related.name, related.primary_key, keys)
        lookup = {record[related.primary_key]: record for record in records}
        return [lookup.get(row.get(relation.foreign_key)) for row in rows]

    def _has_many(
        self, rows: List[Row], table: TableDescriptor, relation: RelationDescriptor
    ) -> List[List[Row]]:
        if relation.related_table not in self.tables:
            log.warn(f"Related table '{relation.related_table}' not found in schema")
            return [[] for _ in rows]

        source_keys = _distinct([row.get(table.primary_key) for row in rows])
        if not source_keys:
            return [[] for _ in rows]

        # Whole related table; grouped in memory by foreign key
        groups: Dict[Any, List[Row]] = {}
        for record in self.store.fetch_related(relation.related_table):
            groups.setdefault(record.get(relation.foreign_key), []).append(record)

        return [list(groups.get(row.get(table.primary_key), [])) for row in rows]
