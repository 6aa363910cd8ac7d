"""Main tabula API generator."""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine

from tabula.api.errors import REQUEST_ID_HEADER, configure_error_handlers
from tabula.api.routers.crud import TOTAL_COUNT_HEADER, CrudGenerator
from tabula.api.routers.health import HealthGenerator
from tabula.api.routers.metadata import MetadataGenerator
from tabula.core.config import ApiConfig, TableOptions
from tabula.core.introspection.inspector import extract_tables
from tabula.core.introspection.naming import NamingConvention
from tabula.core.logging import color_palette, log
from tabula.core.models.tables import TableDescriptor
from tabula.core.query.engine import QueryEngine
from tabula.db.store import SqlStore
from tabula.ui import display_table_structure, print_welcome


class Tabula:
    """Builds a JSON-Server compatible API from a SQLAlchemy schema."""

    def __init__(
        self,
        config: ApiConfig,
        engine: Engine,
        schema: Any,
        table_options: Optional[Dict[str, TableOptions]] = None,
        naming: Optional[NamingConvention] = None,
        app: Optional[FastAPI] = None,
    ):
        """
        Inspect `schema` once and prepare the store and query engine.

        Args:
            config: API settings
            engine: SQLAlchemy engine the generated routes query
            schema: `MetaData` or mapping of resource name to tables / models
            table_options: per-resource disabled endpoints and hooks
            naming: singular/plural convention for relation inference
            app: existing FastAPI app to attach to; a new one is created otherwise
        """
        self.config = config
        self.table_options = table_options or {}
        self.app = app or FastAPI()
        self.routers: Dict[str, APIRouter] = {}
        log.set_level(config.log_level)

        log.section("Inspecting Schema")
        with log.timed("Schema inspection"):
            self.tables: List[TableDescriptor] = extract_tables(schema, naming)
        with log.indented():
            for table in self.tables:
                log.success(
                    f"Found {color_palette['table'](table.name)} "
                    f"({len(table.columns)} columns, {len(table.relations)} relations)"
                )

        self.store = SqlStore(engine, schema, self.tables)
        self.query_engine = QueryEngine(self.store, self.tables, config.query, naming)
        self._initialize_app()

    def _initialize_app(self) -> None:
        """Initialize FastAPI app configuration."""
        self.app.title = self.config.project_name
        self.app.version = self.config.version
        if self.config.description:
            self.app.description = self.config.description

        if self.config.author:
            self.app.contact = {"name": self.config.author, "email": self.config.email}

        if self.config.license_info:
            self.app.license_info = self.config.license_info

        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=[TOTAL_COUNT_HEADER, REQUEST_ID_HEADER],
        )
        configure_error_handlers(self.app, self.config.debug_mode)

    def print_welcome(self, host: str = "127.0.0.1", port: int = 8000) -> None:
        print_welcome(self.config.project_name, self.config.version, host, port)

    def gen_table_routes(self) -> None:
        """Generate JSON-Server routes for every exposed table."""
        log.section("Generating Table Routes")

        router = self.routers.setdefault(
            "tables", APIRouter(prefix=self.config.prefix, tags=["Tables"])
        )
        for table in self.tables:
            log.info(f"Generating CRUD for: {color_palette['table'](table.name)}")
            if log.logger.isEnabledFor(logging.DEBUG):
                display_table_structure(table)

            CrudGenerator(
                table=table,
                engine=self.query_engine,
                store=self.store,
                router=router,
                options=self.table_options.get(table.name),
            ).generate_routes()

        self.app.include_router(router)
        log.success(f"Generated table routes for {len(self.tables)} tables")

    def gen_metadata_routes(self) -> None:
        log.section("Generating Metadata Routes")
        MetadataGenerator(self.app, self.tables, self.config.prefix).generate_routes()
        log.success("Generated metadata routes")

    def gen_health_routes(self) -> None:
        log.section("Generating Health Routes")
        HealthGenerator(
            self.app, self.store, self.config.version, self.config.prefix
        ).generate_routes()
        log.success("Generated health routes")

    def generate_all_routes(self) -> FastAPI:
        """Generate every route group in the recommended order and return the app."""
        self.gen_metadata_routes()
        self.gen_health_routes()
        self.gen_table_routes()
        return self.app
