"""Correlation id por request de operador e por passada do poller."""

from __future__ import annotations

import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

CORRELATION_HEADER = "x-correlation-id"

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    return _correlation_id.get()


@contextmanager
def correlation_scope(prefix: str) -> Iterator[str]:
    """Vincula um correlation_id próprio a trabalho fora de request HTTP.

    Cada passada do poller recebe um id "poll-<hex>", de modo que as linhas
    de log de uma mesma verificação (derivação, entregas, falhas) se agrupam.
    Dentro de um request (check manual) o id do request é mantido.
    """
    current = _correlation_id.get()
    token = _correlation_id.set(current or f"{prefix}-{uuid.uuid4().hex[:12]}")
    try:
        yield _correlation_id.get()
    finally:
        _correlation_id.reset(token)


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Propaga o header do operador ou gera um id novo."""

    async def dispatch(self, request: Request, call_next) -> Response:  # type: ignore[override]
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        token = _correlation_id.set(correlation_id)
        try:
            response = await call_next(request)
        finally:
            _correlation_id.reset(token)

        response.headers[CORRELATION_HEADER] = correlation_id
        return response
