# src/tabula/api/routers/crud.py
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Request, Response
from fastapi.concurrency import run_in_threadpool

from tabula.api.hooks import OperationType, create_hook_context, run_after, run_before
from tabula.api.models import create_insert_model
from tabula.core.config import Endpoint, TableOptions
from tabula.core.errors import RecordNotFound
from tabula.core.logging import color_palette, log
from tabula.core.models.tables import TableDescriptor
from tabula.core.query.engine import QueryEngine
from tabula.core.types import coerce_value
from tabula.db.store import SqlStore

TOTAL_COUNT_HEADER = "X-Total-Count"


class CrudGenerator:
    """Generates JSON-Server style routes for a single table."""

    def __init__(
        self,
        table: TableDescriptor,
        engine: QueryEngine,
        store: SqlStore,
        router: APIRouter,
        options: Optional[TableOptions] = None,
    ):
        self.table = table
        self.engine = engine
        self.store = store
        self.router = router
        self.options = options or TableOptions()

        self.insert_model = create_insert_model(table)
        self.patch_model = create_insert_model(table, partial=True)

    @property
    def resource_path(self) -> str:
        return f"/{self.table.name}"

    @property
    def item_path(self) -> str:
        return f"/{self.table.name}/{{record_id}}"

    def generate_routes(self) -> None:
        generators = {
            Endpoint.GET_MANY: self._add_get_many_route,
            Endpoint.GET_ONE: self._add_get_one_route,
            Endpoint.CREATE: self._add_create_route,
            Endpoint.UPDATE: self._add_update_route,
            Endpoint.REPLACE: self._add_replace_route,
            Endpoint.DELETE: self._add_delete_route,
        }
        enabled = []
        for endpoint, add_route in generators.items():
            if self.options.is_enabled(endpoint):
                add_route()
                enabled.append(endpoint.value)
        log.success(
            f"Generated {len(enabled)} route(s) for {color_palette['table'](self.table.name)}"
        )

    # ===== Helpers =====

    def _record_id(self, raw: str) -> Any:
        """Path value coerced to the primary key type; unusable ids are 404s."""
        try:
            return coerce_value(self.table.primary_key_column.type, raw)
        except ValueError as e:
            raise RecordNotFound(self.table.name, raw) from e

    def _writable(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return {k: v for k, v in data.items() if k != self.table.primary_key}

    # ===== Routes =====

    def _add_get_many_route(self) -> None:
        table = self.table

        @self.router.get(
            self.resource_path,
            response_model=None,
            summary=f"Get {table.name} resources",
            description=(
                f"Retrieve {table.name} records. Supports `_page`, `_per_page`, "
                "`_start`, `_end`, `_limit`, `_sort`, `_embed` and column filters "
                "with `_like`, `_ne`, `_gte` and `_lte` suffixes."
            ),
        )
        async def get_many(request: Request, response: Response) -> List[Dict[str, Any]]:
            intent = self.engine.parse(request.query_params)
            context = create_hook_context(
                request, OperationType.GET_MANY, table, filters=intent.filters
            )
            await run_before(self.options.hooks, context)

            result = await run_in_threadpool(self.engine.execute, table, intent)
            rows = await run_after(self.options.hooks, context, result.rows)

            response.headers[TOTAL_COUNT_HEADER] = str(result.total_count)
            return rows

    def _add_get_one_route(self) -> None:
        table = self.table

        @self.router.get(
            self.item_path,
            response_model=None,
            summary=f"Get one {table.name} resource",
        )
        async def get_one(record_id: str, request: Request) -> Dict[str, Any]:
            context = create_hook_context(
                request, OperationType.GET_ONE, table, record_id=record_id
            )
            await run_before(self.options.hooks, context)

            record = await run_in_threadpool(
                self.store.get_one, table.name, self._record_id(record_id)
            )
            if record is None:
                raise RecordNotFound(table.name, record_id)
            return await run_after(self.options.hooks, context, record)

    def _add_create_route(self) -> None:
        table = self.table
        insert_model = self.insert_model

        @self.router.post(
            self.resource_path,
            status_code=201,
            response_model=None,
            summary=f"Create {table.name}",
        )
        async def create_resource(
            request: Request, resource: insert_model = Body(...)
        ) -> Dict[str, Any]:
            data = resource.model_dump(exclude_unset=True)
            context = create_hook_context(
                request, OperationType.CREATE, table, record=data
            )
            await run_before(self.options.hooks, context)

            created = await run_in_threadpool(self.store.insert, table.name, data)
            return await run_after(self.options.hooks, context, created)

    def _add_update_route(self) -> None:
        table = self.table
        patch_model = self.patch_model

        @self.router.patch(
            self.item_path,
            response_model=None,
            summary=f"Update {table.name}",
        )
        async def update_resource(
            record_id: str, request: Request, resource: patch_model = Body(...)
        ) -> Dict[str, Any]:
            data = self._writable(resource.model_dump(exclude_unset=True))
            context = create_hook_context(
                request, OperationType.UPDATE, table, record=data, record_id=record_id
            )
            await run_before(self.options.hooks, context)

            updated = await run_in_threadpool(
                self.store.update, table.name, self._record_id(record_id), data
            )
            if updated is None:
                raise RecordNotFound(table.name, record_id)
            return await run_after(self.options.hooks, context, updated)

    def _add_replace_route(self) -> None:
        table = self.table
        insert_model = self.insert_model

        @self.router.put(
            self.item_path,
            response_model=None,
            summary=f"Replace {table.name}",
        )
        async def replace_resource(
            record_id: str, request: Request, resource: insert_model = Body(...)
        ) -> Dict[str, Any]:
            data = self._writable(resource.model_dump(exclude_unset=True))
            context = create_hook_context(
                request, OperationType.REPLACE, table, record=data, record_id=record_id
            )
            await run_before(self.options.hooks, context)

            replaced = await run_in_threadpool(
                self.store.update, table.name, self._record_id(record_id), data
            )
            if replaced is None:
                raise RecordNotFound(table.name, record_id)
            return await run_after(self.options.hooks, context, replaced)

    def _add_delete_route(self) -> None:
        table = self.table

        @self.router.delete(
            self.item_path,
            status_code=204,
            response_class=Response,
            summary=f"Delete {table.name}",
        )
        async def delete_resource(record_id: str, request: Request) -> Response:
            context = create_hook_context(
                request, OperationType.DELETE, table, record_id=record_id
            )
            await run_before(self.options.hooks, context)

            deleted = await run_in_threadpool(
                self.store.delete, table.name, self._record_id(record_id)
            )
            if not deleted:
                raise RecordNotFound(table.name, record_id)
            await run_after(self.options.hooks, context, {"deleted": True})
            return Response(status_code=204)
