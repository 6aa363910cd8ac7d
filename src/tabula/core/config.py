# src/tabula/core/config.py
"""Configuration models for the API and per-table behaviour."""

from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional, Set, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class QueryConfig(BaseModel):
    """Pagination bounds applied by the query parameter parser."""

    model_config = ConfigDict(frozen=True)

    default_per_page: int = Field(default=10, ge=1)
    max_per_page: int = Field(default=100, ge=1)

    @model_validator(mode="after")
    def _check_bounds(self) -> "QueryConfig":
        if self.default_per_page > self.max_per_page:
            raise ValueError("default_per_page cannot exceed max_per_page")
        return self


class ApiConfig(BaseModel):
    """Top-level settings for a generated API."""

    project_name: str = "Tabula API"
    version: str = "0.1.0"
    description: Optional[str] = None
    author: Optional[str] = None
    email: Optional[str] = None
    license_info: Optional[Dict[str, str]] = None
    prefix: str = ""
    debug_mode: bool = False
    log_level: str = "INFO"
    query: QueryConfig = QueryConfig()


class Endpoint(str, Enum):
    GET_MANY = "GET_MANY"
    GET_ONE = "GET_ONE"
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    REPLACE = "REPLACE"
    DELETE = "DELETE"


BeforeHook = Callable[[Any], Union[None, Awaitable[None]]]
AfterHook = Callable[[Any, Any], Any]


class Hooks(BaseModel):
    """Optional callables run around every generated operation of a table."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    before_operation: Optional[BeforeHook] = None
    after_operation: Optional[AfterHook] = None


class TableOptions(BaseModel):
    disabled_endpoints: Set[Endpoint] = set()
    hooks: Hooks = Hooks()

    def is_enabled(self, endpoint: Endpoint) -> bool:
        return endpoint not in self.disabled_endpoints
