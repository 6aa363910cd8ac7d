"""
tabula: JSON-Server compatible REST routes generated from SQLAlchemy schemas.
"""

from tabula.core.config import ApiConfig, Endpoint, Hooks, QueryConfig, TableOptions
from tabula.core.errors import SchemaError
from tabula.core.introspection import NamingConvention, extract_tables
from tabula.core.query import QueryEngine, parse_query_params
from tabula.db import SqlStore
from tabula.tabula import Tabula

__version__ = "0.1.0"

__all__ = [
    "ApiConfig",
    "Endpoint",
    "Hooks",
    "NamingConvention",
    "QueryConfig",
    "QueryEngine",
    "SchemaError",
    "SqlStore",
    "TableOptions",
    "Tabula",
    "extract_tables",
    "parse_query_params",
]
