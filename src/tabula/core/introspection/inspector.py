# src/tabula/core/introspection/inspector.py
"""
Schema inspection: turns SQLAlchemy tables into read-only descriptors.

The build runs in two phases. Phase one extracts columns, the primary key and
convention-based references for every table on its own; phase two walks the
accepted tables once and records both directions of every reference.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from sqlalchemy import MetaData

from tabula.core.errors import SchemaError
from tabula.core.introspection.naming import DEFAULT_NAMING, NamingConvention
from tabula.core.logging import color_palette, log
from tabula.core.models.tables import (
    ColumnDescriptor,
    ColumnReference,
    ColumnType,
    RelationDescriptor,
    RelationKind,
    TableDescriptor,
)
from tabula.core.types import get_type_tag

_COLUMN_ATTRS = ("name", "type", "nullable", "primary_key")


def is_table(value: Any) -> bool:
    """Structural check: a name plus an iterable of column-like objects."""
    if not isinstance(getattr(value, "name", None), str):
        return False
    columns = getattr(value, "columns", None)
    if columns is None or isinstance(columns, (str, bytes)):
        return False
    try:
        return all(
            all(hasattr(col, attr) for attr in _COLUMN_ATTRS) for col in columns
        )
    except TypeError:
        return False


def iter_schema(schema: Any) -> Iterable[Tuple[str, Any]]:
    """Yields (resource name, table) pairs from a MetaData or a mapping."""
    if isinstance(schema, MetaData):
        for table in schema.tables.values():
            yield table.name, table
        return
    for name, value in schema.items():
        # Declarative classes carry their Table on `__table__`
        table = getattr(value, "__table__", value)
        if is_table(table):
            yield name, table


def infer_reference(
    column_name: str,
    table_keys: Mapping[str, str],
    naming: NamingConvention = DEFAULT_NAMING,
) -> Optional[ColumnReference]:
    """
    Guess the table a column points at from its name alone.

    `table_keys` maps every exposed table name to its primary key column.
    `authorId` / `author_id` resolve to `author` or `authors`, first match wins.
    """
    stem = naming.strip_fk_suffix(column_name)
    if not stem:
        return None
    for candidate in naming.table_candidates(stem):
        if candidate in table_keys:
            return ColumnReference(table=candidate, column=table_keys[candidate])
    return None


def _resolve_primary_key(name: str, columns: List[ColumnDescriptor]) -> str:
    flagged = [col.name for col in columns if col.is_primary_key]
    if len(flagged) > 1:
        raise SchemaError(
            name, f"composite primary keys are not supported ({', '.join(flagged)})"
        )
    if flagged:
        return flagged[0]
    if any(col.name == "id" for col in columns):
        log.warn(
            f"No explicit primary key found for table {color_palette['table'](name)}, "
            "assuming 'id' column"
        )
        return "id"
    raise SchemaError(name, "no primary key found")


def _extract_columns(table: Any) -> List[ColumnDescriptor]:
    columns = []
    for col in table.columns:
        key = getattr(col, "key", None) or col.name
        columns.append(
            ColumnDescriptor(
                name=key,
                db_name=col.name,
                type=get_type_tag(col.type),
                sql_type=str(col.type),
                nullable=bool(col.nullable),
                is_primary_key=bool(col.primary_key),
                has_default=_has_default(col),
            )
        )
    return columns


def _has_default(col: Any) -> bool:
    if getattr(col, "default", None) is not None:
        return True
    if getattr(col, "server_default", None) is not None:
        return True
    # Integer primary keys are generated by the database
    return bool(col.primary_key) and get_type_tag(col.type) is ColumnType.INTEGER


def extract_table(name: str, table: Any) -> TableDescriptor:
    """Phase one for a single table, without references or relations."""
    columns = _extract_columns(table)
    primary_key = _resolve_primary_key(name, columns)
    columns = [
        col.model_copy(update={"is_primary_key": True})
        if col.name == primary_key and not col.is_primary_key
        else col
        for col in columns
    ]
    return TableDescriptor(
        name=name,
        table_name=table.name,
        columns=tuple(columns),
        primary_key=primary_key,
    )


def _with_references(
    table: TableDescriptor,
    table_keys: Mapping[str, str],
    naming: NamingConvention,
) -> TableDescriptor:
    columns = []
    for col in table.columns:
        reference = None
        if not col.is_primary_key:
            reference = infer_reference(col.name, table_keys, naming)
        columns.append(col.model_copy(update={"references": reference}) if reference else col)
    return table.model_copy(update={"columns": tuple(columns)})


def build_relations(
    table: TableDescriptor, all_tables: Iterable[TableDescriptor]
) -> Tuple[RelationDescriptor, ...]:
    """Phase two: outgoing `belongs_to` plus the converse `has_many` of others."""
    relations: List[RelationDescriptor] = []
    for col in table.columns:
        if col.references:
            relations.append(
                RelationDescriptor(
                    kind=RelationKind.BELONGS_TO,
                    related_table=col.references.table,
                    foreign_key=col.name,
                    related_column=col.references.column,
                )
            )
    for other in all_tables:
        for col in other.columns:
            if col.references and col.references.table == table.name:
                relations.append(
                    RelationDescriptor(
                        kind=RelationKind.HAS_MANY,
                        related_table=other.name,
                        foreign_key=col.name,
                        related_column=col.references.column,
                    )
                )
    return tuple(relations)


def extract_tables(
    schema: Any,
    naming: Optional[NamingConvention] = None,
    strict: bool = False,
) -> List[TableDescriptor]:
    """
    Build descriptors for every table in `schema`.

    Args:
        schema: a `MetaData` or a mapping of resource name to table-like objects.
            Entries that are not tables are ignored.
        naming: convention used for reference inference.
        strict: raise the first SchemaError instead of skipping the table.
    """
    naming = naming or DEFAULT_NAMING

    drafts: Dict[str, TableDescriptor] = {}
    for name, table in iter_schema(schema):
        try:
            drafts[name] = extract_table(name, table)
        except SchemaError as e:
            if strict:
                raise
            log.warn(f"Skipping table {color_palette['table'](name)}: {e.reason}")

    table_keys = {name: draft.primary_key for name, draft in drafts.items()}
    referenced = [
        _with_references(draft, table_keys, naming) for draft in drafts.values()
    ]

    return [
        table.model_copy(update={"relations": build_relations(table, referenced)})
        for table in referenced
    ]
