"""API generation components for tabula."""

from tabula.api.errors import configure_error_handlers
from tabula.api.hooks import HookContext, OperationType
from tabula.api.routers import CrudGenerator, HealthGenerator, MetadataGenerator

__all__ = [
    "CrudGenerator",
    "HealthGenerator",
    "HookContext",
    "MetadataGenerator",
    "OperationType",
    "configure_error_handlers",
]
