# src/tabula/api/hooks.py
"""Operation hooks: user callables that can veto or reshape CRUD operations."""

import inspect
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from fastapi import Request

from tabula.core.config import Endpoint, Hooks
from tabula.core.errors import HookError
from tabula.core.logging import color_palette, log
from tabula.core.models.tables import TableDescriptor

OperationType = Endpoint


@dataclass
class HookContext:
    request: Request
    operation: OperationType
    table: str
    record: Optional[Dict[str, Any]] = None
    record_id: Optional[Any] = None
    filters: Optional[Dict[str, Any]] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def user(self) -> Any:
        """Whatever the host application stored on `request.state.user`."""
        return getattr(self.request.state, "user", None)


def create_hook_context(
    request: Request,
    operation: OperationType,
    table: TableDescriptor,
    record: Optional[Dict[str, Any]] = None,
    record_id: Optional[Any] = None,
    filters: Optional[Dict[str, Any]] = None,
) -> HookContext:
    columns: List[str] = table.column_names
    return HookContext(
        request=request,
        operation=operation,
        table=table.name,
        record=record,
        record_id=record_id,
        filters=filters,
        metadata={
            "table_name": table.name,
            "primary_key": table.primary_key,
            "columns": columns,
        },
    )


async def _call(fn, *args) -> Any:
    result = fn(*args)
    if inspect.isawaitable(result):
        result = await result
    return result


async def run_before(hooks: Hooks, context: HookContext) -> None:
    if hooks.before_operation is None:
        return
    try:
        await _call(hooks.before_operation, context)
    except Exception as e:
        log.warn(
            f"beforeOperation hook blocked {color_palette['operation'](context.operation.value)} "
            f"on {color_palette['table'](context.table)}: {e}"
        )
        raise HookError("beforeOperation", e) from e


async def run_after(hooks: Hooks, context: HookContext, result: Any) -> Any:
    if hooks.after_operation is None:
        return result
    try:
        return await _call(hooks.after_operation, context, result)
    except Exception as e:
        log.error(
            f"afterOperation hook failed for {color_palette['operation'](context.operation.value)} "
            f"on {color_palette['table'](context.table)}: {e}"
        )
        raise HookError("afterOperation", e) from e
