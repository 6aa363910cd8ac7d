# src/tabula/api/errors.py
"""Maps tabula and validation errors to JSON responses."""

import uuid

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from tabula.core.errors import HookError, RecordNotFound
from tabula.core.logging import log

REQUEST_ID_HEADER = "X-Request-ID"


def _request_id(request: Request):
    return getattr(request.state, "request_id", None)


def configure_error_handlers(app: FastAPI, debug_mode: bool = False) -> None:
    """Install exception handlers and the request-id middleware on `app`."""

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next):
        request.state.request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request.state.request_id
        return response

    @app.exception_handler(HookError)
    async def hook_error_handler(request: Request, exc: HookError):
        status_code = 403 if exc.stage == "beforeOperation" else 500
        return JSONResponse(
            status_code=status_code,
            content={"error": str(exc), "requestId": _request_id(request)},
        )

    @app.exception_handler(RecordNotFound)
    async def not_found_handler(request: Request, exc: RecordNotFound):
        log.debug(str(exc))
        return JSONResponse(
            status_code=404,
            content={"error": "Not Found", "requestId": _request_id(request)},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        log.warn(f"Validation error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=400,
            content={
                "error": "Validation failed",
                "details": jsonable_encoder(exc.errors()),
                "requestId": _request_id(request),
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        log.error(f"Unhandled exception on {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal Server Error",
                "detail": str(exc) if debug_mode else None,
                "requestId": _request_id(request),
            },
        )
