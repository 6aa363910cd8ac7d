# src/tabula/core/query/parser.py
"""
JSON-Server query string parsing.

`parse_query_params` never raises: malformed pagination, sort or embed values
fall back to their defaults and everything that is not a reserved key is
passed through untouched as a filter candidate.
"""

import re
from typing import Any, Dict, List, Mapping, Optional, Union

from tabula.core.config import QueryConfig
from tabula.core.models.query import Pagination, QueryIntent, RawValue, SortField

RESERVED_PARAMS = frozenset(
    {"_page", "_per_page", "_start", "_end", "_limit", "_sort", "_embed"}
)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

DEFAULT_QUERY_CONFIG = QueryConfig()


def _normalize(raw: Any) -> Dict[str, RawValue]:
    """Collapse a mapping or Starlette `QueryParams` into str / list[str] values."""
    grouped: Dict[str, List[str]] = {}
    if hasattr(raw, "multi_items"):
        items = raw.multi_items()
    else:
        items = []
        for key, value in raw.items():
            if isinstance(value, (list, tuple)):
                items.extend((key, v) for v in value)
            else:
                items.append((key, value))

    for key, value in items:
        if value is None:
            continue
        grouped.setdefault(str(key), []).append(str(value))

    return {k: v[0] if len(v) == 1 else v for k, v in grouped.items()}


def _last(value: Optional[RawValue]) -> Optional[str]:
    if isinstance(value, list):
        return value[-1] if value else None
    return value


def parse_int(value: Optional[RawValue]) -> Optional[int]:
    """Strict int first, then the leading integer of the token, else None."""
    token = _last(value)
    if token is None:
        return None
    try:
        return int(token)
    except ValueError:
        pass
    match = _LEADING_INT.match(token)
    if match is None:
        return None
    try:
        return int(match.group(1))
    except ValueError:
        # Digit strings past the interpreter's conversion limit
        return None


def parse_pagination(
    params: Mapping[str, RawValue], config: QueryConfig = DEFAULT_QUERY_CONFIG
) -> Pagination:
    page = parse_int(params.get("_page"))
    per_page = parse_int(params.get("_per_page"))

    page = max(1, page) if page is not None else 1
    if per_page is None:
        per_page = config.default_per_page
    per_page = min(max(1, per_page), config.max_per_page)

    return Pagination(
        page=page,
        per_page=per_page,
        start=parse_int(params.get("_start")),
        end=parse_int(params.get("_end")),
        limit=parse_int(params.get("_limit")),
    )


def _split_csv(value: Optional[RawValue]) -> List[str]:
    if value is None:
        return []
    parts = value if isinstance(value, list) else [value]
    return [token.strip() for part in parts for token in part.split(",") if token.strip()]


def parse_sort(value: Optional[RawValue]) -> List[SortField]:
    """`_sort=name,-createdAt` -> [name asc, createdAt desc]."""
    fields = []
    for token in _split_csv(value):
        if token.startswith("-"):
            column = token[1:].strip()
            if column:
                fields.append(SortField(column=column, descending=True))
        else:
            fields.append(SortField(column=token))
    return fields


def parse_embed(value: Optional[RawValue]) -> List[str]:
    return list(dict.fromkeys(_split_csv(value)))


def parse_filters(params: Mapping[str, RawValue]) -> Dict[str, RawValue]:
    return {k: v for k, v in params.items() if k not in RESERVED_PARAMS}


def parse_query_params(
    raw: Union[Mapping[str, Any], Any],
    config: QueryConfig = DEFAULT_QUERY_CONFIG,
) -> QueryIntent:
    params = _normalize(raw)
    return QueryIntent(
        pagination=parse_pagination(params, config),
        sort=parse_sort(params.get("_sort")),
        embed=parse_embed(params.get("_embed")),
        filters=parse_filters(params),
    )
