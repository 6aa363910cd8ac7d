from datetime import datetime, time

import pytest
from sqlalchemy import JSON, Boolean, Date, DateTime, Float, Integer, Numeric, String, Text
from sqlalchemy.types import TypeDecorator

from tabula.core.models.tables import ColumnType
from tabula.core.types import coerce_value, get_type_tag


class LowerString(TypeDecorator):
    impl = String
    cache_ok = True


@pytest.mark.parametrize(
    "sql_type, expected",
    [
        (Integer(), ColumnType.INTEGER),
        (Numeric(10, 2), ColumnType.NUMBER),
        (Float(), ColumnType.NUMBER),
        (Boolean(), ColumnType.BOOLEAN),
        (DateTime(), ColumnType.TIMESTAMP),
        (Date(), ColumnType.TIMESTAMP),
        (JSON(), ColumnType.JSON),
        (Text(), ColumnType.TEXT),
        (LowerString(), ColumnType.TEXT),
        ("BIGSERIAL", ColumnType.INTEGER),
        ("jsonb", ColumnType.JSON),
        ("character varying", ColumnType.TEXT),
    ],
)
def test_get_type_tag(sql_type, expected):
    assert get_type_tag(sql_type) is expected


def test_coerce_value():
    assert coerce_value(ColumnType.INTEGER, " 42 ") == 42
    assert coerce_value(ColumnType.NUMBER, "1.5") == 1.5
    assert coerce_value(ColumnType.BOOLEAN, "Yes") is True
    assert coerce_value(ColumnType.BOOLEAN, "0") is False
    assert coerce_value(ColumnType.TEXT, " keep ") == " keep "
    assert coerce_value(ColumnType.TIMESTAMP, "2024-01-02T03:04:05Z") == datetime.fromisoformat(
        "2024-01-02T03:04:05+00:00"
    )
    assert coerce_value(ColumnType.TIMESTAMP, "12:30") == time(12, 30)
    assert coerce_value(ColumnType.INTEGER, 7) == 7


@pytest.mark.parametrize(
    "tag, raw",
    [
        (ColumnType.INTEGER, "1.5"),
        (ColumnType.NUMBER, "many"),
        (ColumnType.BOOLEAN, "maybe"),
        (ColumnType.TIMESTAMP, "yesterday"),
    ],
)
def test_coerce_value_rejects(tag, raw):
    with pytest.raises(ValueError):
        coerce_value(tag, raw)


@pytest.mark.parametrize("raw", ["9223372036854775808", "-9223372036854775809"])
def test_integers_outside_int64_are_rejected(raw):
    with pytest.raises(ValueError):
        coerce_value(ColumnType.INTEGER, raw)


def test_int64_bounds_are_accepted():
    assert coerce_value(ColumnType.INTEGER, "9223372036854775807") == 2**63 - 1
    assert coerce_value(ColumnType.INTEGER, "-9223372036854775808") == -(2**63)
