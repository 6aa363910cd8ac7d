"""Route generators for tables, metadata and health."""

from tabula.api.routers.crud import CrudGenerator
from tabula.api.routers.health import HealthGenerator
from tabula.api.routers.metadata import MetadataGenerator

__all__ = ["CrudGenerator", "HealthGenerator", "MetadataGenerator"]
