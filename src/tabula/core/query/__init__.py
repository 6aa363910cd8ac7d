"""Query translation: parsing, filtering, planning and embedding."""

from tabula.core.query.composer import compute_window, plan_query, valid_sort
from tabula.core.query.embed import EmbedResolver
from tabula.core.query.engine import QueryEngine
from tabula.core.query.filters import FilterBuilder, build_predicates
from tabula.core.query.parser import RESERVED_PARAMS, parse_query_params
from tabula.core.query.protocols import Store

__all__ = [
    "EmbedResolver",
    "FilterBuilder",
    "QueryEngine",
    "RESERVED_PARAMS",
    "Store",
    "build_predicates",
    "compute_window",
    "parse_query_params",
    "plan_query",
    "valid_sort",
]
