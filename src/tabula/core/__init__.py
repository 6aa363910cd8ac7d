"""Core utilities for the tabula query engine."""

from tabula.core.config import ApiConfig, Endpoint, Hooks, QueryConfig, TableOptions
from tabula.core.errors import HookError, RecordNotFound, SchemaError, TabulaError
from tabula.core.logging import Logger, color_palette, log

__all__ = [
    "ApiConfig",
    "Endpoint",
    "HookError",
    "Hooks",
    "Logger",
    "QueryConfig",
    "RecordNotFound",
    "SchemaError",
    "TableOptions",
    "TabulaError",
    "color_palette",
    "log",
]
