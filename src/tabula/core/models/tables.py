# src/tabula/core/models/tables.py
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict


class ColumnType(str, Enum):
    """Coarse type tags used for value coercion and documentation."""

    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    TEXT = "text"
    TIMESTAMP = "timestamp"
    JSON = "json"


class RelationKind(str, Enum):
    BELONGS_TO = "belongs_to"
    HAS_MANY = "has_many"


class ColumnReference(BaseModel):
    """Inferred reference from a column to another table's key column."""

    model_config = ConfigDict(frozen=True)

    table: str
    column: str


class ColumnDescriptor(BaseModel):
    """Column metadata for an exposed table."""

    model_config = ConfigDict(frozen=True)

    name: str  # API-facing key (e.g. `fullName`)
    db_name: str  # SQL column name (e.g. `full_name`)
    type: ColumnType
    sql_type: str
    nullable: bool
    is_primary_key: bool = False
    has_default: bool = False
    references: Optional[ColumnReference] = None


class RelationDescriptor(BaseModel):
    """
    One side of a relation between two tables.

    `foreign_key` is always the column on the *referencing* table, so a
    `belongs_to` and its converse `has_many` share the same foreign key.
    """

    model_config = ConfigDict(frozen=True)

    kind: RelationKind
    related_table: str
    foreign_key: str
    related_column: str


class TableDescriptor(BaseModel):
    """Table structure metadata, built once at startup and shared read-only."""

    model_config = ConfigDict(frozen=True)

    name: str  # resource name
    table_name: str  # SQL table name
    columns: Tuple[ColumnDescriptor, ...]
    primary_key: str
    relations: Tuple[RelationDescriptor, ...] = ()

    @property
    def column_names(self) -> List[str]:
        return [col.name for col in self.columns]

    def has_column(self, name: str) -> bool:
        return any(col.name == name for col in self.columns)

    def column(self, name: str) -> Optional[ColumnDescriptor]:
        return next((col for col in self.columns if col.name == name), None)

    @property
    def primary_key_column(self) -> ColumnDescriptor:
        return next(col for col in self.columns if col.name == self.primary_key)
