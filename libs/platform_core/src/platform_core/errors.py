from __future__ import annotations

from enum import Enum

from platform_core.logging import get_logger
from platform_core.request_context import request_id_var


class ErrorCode(str, Enum):
    """Platform error codes.

    Each member is also a ``str`` so it serializes as its value.
    """

    # Client errors (4xx)
    INVALID_INPUT = "INVALID_INPUT"  # 400 - validation failed
    INVALID_JSON = "INVALID_JSON"  # 400 - body is not JSON

    # Server errors (5xx)
    INTERNAL_ERROR = "INTERNAL_ERROR"  # 500 - unexpected failure


_ERROR_CODE_STATUS: dict[ErrorCode, int] = {
    ErrorCode.INVALID_INPUT: 400,
    ErrorCode.INVALID_JSON: 400,
    ErrorCode.INTERNAL_ERROR: 500,
}


class AppError(Exception):
    """Application error carrying a machine-readable code and an HTTP status.

    Example:
        >>> raise AppError(ErrorCode.INVALID_INPUT, "rules overlap")
    """

    def __init__(self, code: ErrorCode, message: str, http_status: int | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.http_status = (
            http_status if http_status is not None else _ERROR_CODE_STATUS.get(code, 500)
        )


def error_body(code: ErrorCode, message: str, request_id: str) -> dict[str, str]:
    """Standard error payload returned by every service."""
    value: str = code.value
    return {"code": value, "message": message, "request_id": request_id}


def log_app_error(exc: AppError, *, logger_name: str, path: str, method: str) -> None:
    """Log client errors at INFO without traceback, server errors at ERROR with one."""
    logger = get_logger(logger_name)
    fields = {
        "error_code": exc.code.value,
        "error_message": exc.message,
        "request_id": request_id_var.get(),
        "path": path,
        "method": method,
    }
    if exc.http_status < 500:
        logger.info("user_error", extra=fields)
    else:
        logger.error("system_error", extra=fields, exc_info=exc)


def log_unhandled(exc: Exception, *, logger_name: str, path: str, method: str) -> None:
    get_logger(logger_name).error(
        "unhandled_exception",
        extra={
            "error_type": type(exc).__name__,
            "error_message": str(exc),
            "request_id": request_id_var.get(),
            "path": path,
            "method": method,
        },
        exc_info=exc,
    )


__all__ = [
    "AppError",
    "ErrorCode",
    "error_body",
    "log_app_error",
    "log_unhandled",
]
