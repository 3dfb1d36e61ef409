from __future__ import annotations

import uuid
from contextvars import ContextVar
from typing import Protocol

# Request id for the request currently being served; "" outside a request.
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

_HEADER = "x-request-id"


class _HeadersMutable(Protocol):
    def __setitem__(self, key: str, value: str) -> None: ...


class _StateAdapter(Protocol):
    request_id: str


class _RequestAdapter(Protocol):
    @property
    def headers(self) -> _HeadersGet: ...

    @property
    def state(self) -> _StateAdapter: ...


class _HeadersGet(Protocol):
    def get(self, key: str) -> str | None: ...


class _ResponseAdapter(Protocol):
    @property
    def headers(self) -> _HeadersMutable: ...


class _CallNext(Protocol):
    async def __call__(self, request: _RequestAdapter) -> _ResponseAdapter: ...


class _CallNextMiddleware(Protocol):
    async def __call__(
        self, request: _RequestAdapter, call_next: _CallNext
    ) -> _ResponseAdapter: ...


class _MiddlewareDecorator(Protocol):
    def __call__(self, func: _CallNextMiddleware) -> _CallNextMiddleware: ...


class _FastAPIAppProto(Protocol):
    def middleware(self, name: str) -> _MiddlewareDecorator: ...


def resolve_request_id(header_value: str | None) -> str:
    """Use the caller's request id when it sent one, otherwise mint a UUID4."""
    if header_value is None or header_value.strip() == "":
        return str(uuid.uuid4())
    return header_value.strip()


def install_request_id_middleware(app: _FastAPIAppProto) -> None:
    """Bind ``request_id_var`` for each HTTP request and echo it back as a header.

    The id is also stored as ``request.state.request_id`` so the outermost
    500 handler, which runs after this middleware has unwound, can still
    report it.
    """

    decorator = app.middleware("http")

    @decorator
    async def _middleware(request: _RequestAdapter, call_next: _CallNext) -> _ResponseAdapter:
        rid = resolve_request_id(request.headers.get(_HEADER))
        # Kept on the request scope for handlers that run after the reset below.
        request.state.request_id = rid
        token = request_id_var.set(rid)
        try:
            response = await call_next(request)
            response.headers[_HEADER] = rid
            return response
        finally:
            request_id_var.reset(token)


__all__ = [
    "install_request_id_middleware",
    "request_id_var",
    "resolve_request_id",
]
