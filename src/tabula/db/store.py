# src/tabula/db/store.py
"""
SQLAlchemy-backed store for the query engine and the generated CRUD routes.

Every call opens its own connection; reads use `engine.connect()` and writes
run inside `engine.begin()`. Errors raised by SQLAlchemy propagate unchanged.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from sqlalchemy import Table, func, select
from sqlalchemy.engine import Engine, RowMapping
from sqlalchemy.sql.elements import ColumnElement

from tabula.core.introspection.inspector import iter_schema
from tabula.core.models.query import (
    CountPlan,
    Operator,
    Predicate,
    RetrievalPlan,
    SortField,
)
from tabula.core.models.tables import TableDescriptor
from tabula.core.query.operators import LIST_OPERATORS, OPERATOR_MAP

Row = Dict[str, Any]


class SqlStore:
    """Executes retrieval, count and embed fetches against a SQLAlchemy engine."""

    def __init__(
        self,
        engine: Engine,
        schema: Any,
        descriptors: Iterable[TableDescriptor],
    ):
        self.engine = engine
        self.descriptors: Dict[str, TableDescriptor] = {d.name: d for d in descriptors}
        self.tables: Dict[str, Table] = {
            name: table for name, table in iter_schema(schema) if name in self.descriptors
        }

    # ===== Query engine interface =====

    def fetch(self, plan: RetrievalPlan) -> List[Row]:
        table = self.tables[plan.table]
        stmt = select(table).where(*self._where(table, plan.predicates))
        order_by = self._order_by(table, plan.sort)
        if order_by:
            stmt = stmt.order_by(*order_by)
        stmt = stmt.limit(plan.window.limit).offset(plan.window.offset)
        return self._all(table, stmt)

    def count(self, plan: CountPlan) -> int:
        table = self.tables[plan.table]
        stmt = (
            select(func.count())
            .select_from(table)
            .where(*self._where(table, plan.predicates))
        )
        with self.engine.connect() as conn:
            return int(conn.execute(stmt).scalar_one())

    def fetch_related(
        self,
        table_name: str,
        column: Optional[str] = None,
        values: Optional[Sequence[Any]] = None,
    ) -> List[Row]:
        """Fetch rows of `table_name`, optionally restricted to `column IN values`."""
        table = self.tables[table_name]
        stmt = select(table)
        if column is not None and values is not None:
            stmt = stmt.where(table.c[column].in_(list(values)))
        return self._all(table, stmt)

    # ===== Single-record operations =====

    def get_one(self, table_name: str, record_id: Any) -> Optional[Row]:
        table = self.tables[table_name]
        stmt = select(table).where(self._pk(table_name) == record_id)
        rows = self._all(table, stmt)
        return rows[0] if rows else None

    def insert(self, table_name: str, data: Mapping[str, Any]) -> Row:
        table = self.tables[table_name]
        pk_name = self.descriptors[table_name].primary_key
        with self.engine.begin() as conn:
            result = conn.execute(table.insert().values(**data))
            record_id = data.get(pk_name)
            if record_id is None:
                record_id = result.inserted_primary_key[0]
            row = conn.execute(
                select(table).where(self._pk(table_name) == record_id)
            ).mappings().one()
        return self._to_dict(table, row)

    def update(self, table_name: str, record_id: Any, data: Mapping[str, Any]) -> Optional[Row]:
        table = self.tables[table_name]
        pk = self._pk(table_name)
        with self.engine.begin() as conn:
            if data:
                conn.execute(table.update().where(pk == record_id).values(**data))
            row = conn.execute(select(table).where(pk == record_id)).mappings().first()
        return self._to_dict(table, row) if row is not None else None

    def delete(self, table_name: str, record_id: Any) -> bool:
        table = self.tables[table_name]
        with self.engine.begin() as conn:
            result = conn.execute(table.delete().where(self._pk(table_name) == record_id))
        return result.rowcount > 0

    def ping(self) -> bool:
        with self.engine.connect() as conn:
            conn.execute(select(1))
        return True

    # ===== Helpers =====

    def _pk(self, table_name: str) -> ColumnElement:
        return self.tables[table_name].c[self.descriptors[table_name].primary_key]

    def _where(self, table: Table, predicates: Sequence[Predicate]) -> List[ColumnElement]:
        return [self._clause(table, p) for p in predicates]

    def _clause(self, table: Table, predicate: Predicate) -> ColumnElement:
        column = table.c[predicate.column]
        if predicate.operator is Operator.LIKE:
            return self._like(column, str(predicate.value))
        method = getattr(column, OPERATOR_MAP[predicate.operator])
        if predicate.operator in LIST_OPERATORS:
            return method(list(predicate.value))
        return method(predicate.value)

    def _like(self, column: ColumnElement, value: str) -> ColumnElement:
        # SQLite's LIKE ignores ASCII case, instr() does not
        if self.engine.dialect.name == "sqlite":
            return func.instr(column, value) > 0
        return column.contains(value, autoescape=True)

    @staticmethod
    def _order_by(table: Table, sort: Sequence[SortField]) -> List[ColumnElement]:
        return [
            table.c[field.column].desc() if field.descending else table.c[field.column].asc()
            for field in sort
        ]

    def _all(self, table: Table, stmt) -> List[Row]:
        with self.engine.connect() as conn:
            return [self._to_dict(table, row) for row in conn.execute(stmt).mappings()]

    @staticmethod
    def _to_dict(table: Table, row: RowMapping) -> Row:
        return {col.key: row[col] for col in table.columns}
