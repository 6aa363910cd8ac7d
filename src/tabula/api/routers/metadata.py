# src/tabula/api/routers/metadata.py
from typing import Dict, List

from fastapi import APIRouter, FastAPI, HTTPException
from pydantic import BaseModel

from tabula.core.models.tables import RelationDescriptor, TableDescriptor


class TableRelations(BaseModel):
    table: str
    primary_key: str
    relations: List[RelationDescriptor]


class MetadataGenerator:
    """Generates metadata routes for schema inspection."""

    def __init__(self, app: FastAPI, tables: List[TableDescriptor], prefix: str = ""):
        self.app = app
        self.tables: Dict[str, TableDescriptor] = {t.name: t for t in tables}
        self.router = APIRouter(prefix=f"{prefix}/dt", tags=["Metadata"])

    def generate_routes(self):
        """Creates and registers all metadata-related endpoints."""

        @self.router.get(
            "/tables",
            response_model=List[TableDescriptor],
            summary="List all exposed tables",
        )
        def get_tables() -> List[TableDescriptor]:
            return list(self.tables.values())

        @self.router.get(
            "/tables/{resource}",
            response_model=TableDescriptor,
            summary="Describe one exposed table",
        )
        def get_table(resource: str) -> TableDescriptor:
            if resource not in self.tables:
                raise HTTPException(
                    status_code=404,
                    detail=f"Table '{resource}' not found or not exposed.",
                )
            return self.tables[resource]

        @self.router.get(
            "/relations",
            response_model=List[TableRelations],
            summary="List inferred relations per table",
        )
        def get_relations() -> List[TableRelations]:
            return [
                TableRelations(
                    table=t.name, primary_key=t.primary_key, relations=list(t.relations)
                )
                for t in self.tables.values()
            ]

        # Register the completed router with the main FastAPI application
        self.app.include_router(self.router)
