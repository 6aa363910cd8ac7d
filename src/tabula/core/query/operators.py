# src/tabula/core/query/operators.py
from tabula.core.models.query import Operator

# Maps predicate operators to SQLAlchemy column methods.
# For example, `?age_gte=18` becomes a `gte` predicate that calls `Column.__ge__(18)`.
# `Operator.LIKE` is absent: stores build substring matches per dialect.
OPERATOR_MAP = {
    Operator.EQ: "__eq__",  # Equal
    Operator.NE: "__ne__",  # Not Equal
    Operator.GTE: "__ge__",  # Greater Than or Equal
    Operator.LTE: "__le__",  # Less Than or Equal
    Operator.IN: "in_",  # In a list of values
}

# JSON-Server style key suffixes, checked in order against filter keys.
SUFFIX_OPERATORS = {
    "_like": Operator.LIKE,
    "_ne": Operator.NE,
    "_gte": Operator.GTE,
    "_lte": Operator.LTE,
}

# Operators that expect a list of values, typically comma-separated.
LIST_OPERATORS = {Operator.IN}

# Separator for multi-value equality (`?id=1,2,3`).
VALUE_SEPARATOR = ","
