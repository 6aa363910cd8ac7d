# src/tabula/api/models.py
"""Request body models generated from table descriptors."""

from datetime import date, datetime, time
from typing import Any, Dict, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, create_model

from tabula.core.models.tables import ColumnDescriptor, ColumnType, TableDescriptor

_PYTHON_TYPES: Dict[ColumnType, Any] = {
    ColumnType.INTEGER: int,
    ColumnType.NUMBER: float,
    ColumnType.BOOLEAN: bool,
    ColumnType.TEXT: str,
    ColumnType.JSON: Any,
}


class TabulaBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


def get_python_type(column: ColumnDescriptor) -> Any:
    if column.type is ColumnType.TIMESTAMP:
        sql_type = column.sql_type.upper()
        if sql_type == "DATE":
            return date
        if sql_type.startswith("TIME") and not sql_type.startswith("TIMESTAMP"):
            return time
        return datetime
    return _PYTHON_TYPES[column.type]


def _field(column: ColumnDescriptor, required: bool) -> Tuple[Any, Any]:
    python_type = get_python_type(column)
    if column.nullable:
        python_type = Optional[python_type]
    return (python_type, ... if required else None)


def create_insert_model(table: TableDescriptor, partial: bool = False) -> Type[BaseModel]:
    """
    Body model for POST/PUT (`partial=False`) or PATCH (`partial=True`).

    A column is required when it is not nullable, has no default and is not
    the primary key. Partial models make every column optional.
    """
    fields = {}
    for col in table.columns:
        required = not (partial or col.nullable or col.has_default or col.is_primary_key)
        fields[col.name] = _field(col, required)

    suffix = "Patch" if partial else "Insert"
    return create_model(
        f"{table.name.capitalize()}{suffix}",
        __base__=TabulaBaseModel,
        **fields,
    )
