"""Schema introspection and relation inference."""

from tabula.core.introspection.inspector import (
    build_relations,
    extract_table,
    extract_tables,
    infer_reference,
    is_table,
)
from tabula.core.introspection.naming import DEFAULT_NAMING, NamingConvention

__all__ = [
    "DEFAULT_NAMING",
    "NamingConvention",
    "build_relations",
    "extract_table",
    "extract_tables",
    "infer_reference",
    "is_table",
]
