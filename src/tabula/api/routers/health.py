# src/tabula/api/routers/health.py
from datetime import datetime

from fastapi import APIRouter, FastAPI
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from tabula.core.logging import log
from tabula.db.store import SqlStore


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    timestamp: datetime
    version: str
    uptime: float
    database_connected: bool
    tables: int


class HealthGenerator:
    """Generates `/health` routes for API monitoring."""

    def __init__(self, app: FastAPI, store: SqlStore, version: str, prefix: str = ""):
        self.app = app
        self.store = store
        self.version = version
        self.start_time = datetime.now()
        self.router = APIRouter(prefix=f"{prefix}/health", tags=["Health"])

    def generate_routes(self):
        @self.router.get(
            "",
            response_model=HealthResponse,
            summary="Health check",
            description="Get the current health status of the API",
        )
        async def health_check() -> HealthResponse:
            try:
                is_connected = await run_in_threadpool(self.store.ping)
            except SQLAlchemyError as e:
                log.warn(f"Health check could not reach the database: {e}")
                is_connected = False

            return HealthResponse(
                status="healthy" if is_connected else "degraded",
                timestamp=datetime.now(),
                version=self.version,
                uptime=(datetime.now() - self.start_time).total_seconds(),
                database_connected=is_connected,
                tables=len(self.store.tables),
            )

        @self.router.get(
            "/ping",
            response_class=PlainTextResponse,
            summary="Ping",
            description="Simple ping endpoint for load balancers",
        )
        async def ping():
            return "pong"

        self.app.include_router(self.router)
