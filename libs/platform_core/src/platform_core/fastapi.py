from __future__ import annotations

from fastapi import FastAPI
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from platform_core.errors import AppError, ErrorCode, error_body, log_app_error, log_unhandled
from platform_core.request_context import request_id_var

_HEADER = "x-request-id"


def _request_id(request: Request) -> str:
    """Return the id of the failing request.

    The generic 500 handler runs outside the request-id middleware, after the
    context variable has been reset, so fall back to the copy on the request
    state.
    """
    bound = request_id_var.get()
    if bound:
        return bound
    stored: object = getattr(request.state, "request_id", "")
    return stored if isinstance(stored, str) else ""


def install_exception_handlers_fastapi(app: FastAPI, *, logger_name: str = "app") -> None:
    """Install the platform error handlers on a FastAPI application.

    ``AppError`` becomes its structured body and status. Any other exception
    is logged with its traceback and answered with a generic 500 so internal
    details never reach the client.

    Example:
        app = FastAPI()
        install_exception_handlers_fastapi(app, logger_name="my-api")
    """

    async def _app_error_handler(request: Request, exc: Exception) -> Response:
        if not isinstance(exc, AppError):
            return await _unhandled_handler(request, exc)
        log_app_error(exc, logger_name=logger_name, path=request.url.path, method=request.method)
        return JSONResponse(
            content=error_body(exc.code, exc.message, request_id_var.get()),
            status_code=exc.http_status,
        )

    async def _unhandled_handler(request: Request, exc: Exception) -> Response:
        log_unhandled(exc, logger_name=logger_name, path=request.url.path, method=request.method)
        rid = _request_id(request)
        return JSONResponse(
            content=error_body(ErrorCode.INTERNAL_ERROR, "Internal server error", rid),
            status_code=500,
            headers={_HEADER: rid} if rid else None,
        )

    app.add_exception_handler(AppError, _app_error_handler)
    app.add_exception_handler(Exception, _unhandled_handler)


__all__ = ["install_exception_handlers_fastapi"]
