# src/tabula/core/query/filters.py
from typing import Dict, List, Optional, Tuple

from tabula.core.logging import log
from tabula.core.models.query import Operator, Predicate, RawValue
from tabula.core.models.tables import ColumnDescriptor, TableDescriptor
from tabula.core.query.operators import SUFFIX_OPERATORS, VALUE_SEPARATOR
from tabula.core.types import coerce_value


def split_filter_key(
    key: str, table: TableDescriptor
) -> Optional[Tuple[ColumnDescriptor, Optional[Operator]]]:
    """
    Resolve a filter key to (column, suffix operator).

    A key naming a column exactly is an equality filter even if it happens to
    end in an operator suffix. Unknown columns resolve to None.
    """
    column = table.column(key)
    if column is not None:
        return column, None
    for suffix, operator in SUFFIX_OPERATORS.items():
        if key.endswith(suffix):
            column = table.column(key[: -len(suffix)])
            if column is not None:
                return column, operator
    return None


def _equality_values(value: RawValue) -> List[str]:
    parts = value if isinstance(value, list) else [value]
    values = []
    for part in parts:
        if VALUE_SEPARATOR in part:
            values.extend(v.strip() for v in part.split(VALUE_SEPARATOR))
        else:
            values.append(part)
    return [v for v in values if v != ""]


class FilterBuilder:
    """Builds AND-combined predicates for one table from raw filter parameters."""

    def __init__(self, table: TableDescriptor):
        self.table = table

    def build(self, filters: Dict[str, RawValue]) -> List[Predicate]:
        predicates = []
        for key, value in filters.items():
            predicate = self.build_predicate(key, value)
            if predicate is not None:
                predicates.append(predicate)
        return predicates

    def build_predicate(self, key: str, value: RawValue) -> Optional[Predicate]:
        resolved = split_filter_key(key, self.table)
        if resolved is None:
            return None
        column, operator = resolved

        try:
            if operator is None:
                return self._equality(column, value)
            if operator is Operator.LIKE:
                return Predicate(column.name, Operator.LIKE, self._scalar(value))
            return Predicate(column.name, operator, self._coerce(column, self._scalar(value)))
        except ValueError as e:
            log.debug(f"Dropping filter '{key}' on {self.table.name}: {e}")
            return None

    def _equality(self, column: ColumnDescriptor, value: RawValue) -> Optional[Predicate]:
        multi = isinstance(value, list) or VALUE_SEPARATOR in value
        if not multi:
            return Predicate(column.name, Operator.EQ, self._coerce(column, value))

        values = _equality_values(value)
        if not values:
            return None
        if len(values) == 1:
            return Predicate(column.name, Operator.EQ, self._coerce(column, values[0]))
        coerced = tuple(dict.fromkeys(self._coerce(column, v) for v in values))
        return Predicate(column.name, Operator.IN, coerced)

    @staticmethod
    def _scalar(value: RawValue) -> str:
        # Repeated keys for single-value operators keep the last occurrence
        return value[-1] if isinstance(value, list) else value

    def _coerce(self, column: ColumnDescriptor, value: str):
        return coerce_value(column.type, value)


def build_predicates(filters: Dict[str, RawValue], table: TableDescriptor) -> List[Predicate]:
    return FilterBuilder(table).build(filters)
