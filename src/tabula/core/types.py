# src/tabula/core/types.py
"""Mapping between SQL column types, type tags and Python values."""

from datetime import datetime, time
from typing import Any

from sqlalchemy import types as sqltypes

from tabula.core.models.tables import ColumnType

_TRUE = {"true", "1", "yes", "on", "t"}
_FALSE = {"false", "0", "no", "off", "f"}

# Signed 64-bit range accepted by SQL INTEGER / BIGINT columns
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def get_type_tag(sql_type: Any) -> ColumnType:
    """
    Reduce a SQLAlchemy type (or anything with a usable `str()`) to a tag.

    TypeDecorators are unwrapped to their implementation type first.
    """
    if isinstance(sql_type, sqltypes.TypeDecorator):
        sql_type = sql_type.impl_instance

    if isinstance(sql_type, sqltypes.TypeEngine):
        if isinstance(sql_type, sqltypes.Boolean):
            return ColumnType.BOOLEAN
        if isinstance(sql_type, sqltypes.Integer):
            return ColumnType.INTEGER
        if isinstance(sql_type, sqltypes.Numeric):
            return ColumnType.NUMBER
        if isinstance(sql_type, (sqltypes.DateTime, sqltypes.Date, sqltypes.Time)):
            return ColumnType.TIMESTAMP
        if isinstance(sql_type, sqltypes.JSON):
            return ColumnType.JSON
        return ColumnType.TEXT

    type_str = str(sql_type).upper()
    if "BOOL" in type_str:
        return ColumnType.BOOLEAN
    if "INT" in type_str or "SERIAL" in type_str:
        return ColumnType.INTEGER
    if any(t in type_str for t in ("NUMERIC", "DECIMAL", "FLOAT", "DOUBLE", "REAL")):
        return ColumnType.NUMBER
    if any(t in type_str for t in ("TIMESTAMP", "DATE", "TIME")):
        return ColumnType.TIMESTAMP
    if "JSON" in type_str:
        return ColumnType.JSON
    return ColumnType.TEXT


def coerce_value(tag: ColumnType, raw: Any) -> Any:
    """
    Convert a raw query-string value to the Python type of a column.

    Raises ValueError when the value cannot represent the column type.
    """
    if not isinstance(raw, str):
        return raw
    value = raw.strip()

    if tag is ColumnType.INTEGER:
        number = int(value)
        if not INT64_MIN <= number <= INT64_MAX:
            raise ValueError(f"Integer out of range: {raw!r}")
        return number
    if tag is ColumnType.NUMBER:
        return float(value)
    if tag is ColumnType.BOOLEAN:
        lowered = value.lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
        raise ValueError(f"Invalid boolean: {raw!r}")
    if tag is ColumnType.TIMESTAMP:
        return _parse_temporal(value)
    return raw


def _parse_temporal(value: str) -> Any:
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        # Bare times (`12:30`) are the only other ISO form worth accepting
        return time.fromisoformat(value)
