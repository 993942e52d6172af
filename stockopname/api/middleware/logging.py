"""Per-request access logging with a correlation id."""

import time
import uuid
from collections.abc import Awaitable, Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from stockopname.config import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
RESPONSE_TIME_HEADER = "X-Response-Time"


def _millis_since(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Tag each request with an id and log how it went.

    An incoming ``X-Request-ID`` is reused so a scanner client can correlate
    its own retries; otherwise a short random id is minted. The id is bound
    into the structlog context for every event logged while the request is
    handled, and echoed back alongside the handling time.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        request.state.request_id = request_id
        route = f"{request.method} {request.url.path}"
        start = time.perf_counter()

        with structlog.contextvars.bound_contextvars(request_id=request_id):
            try:
                response = await call_next(request)
            except Exception as exc:
                logger.error("request_failed", route=route, error=str(exc), duration_ms=_millis_since(start))
                raise
            elapsed = _millis_since(start)
            logger.info("request_handled", route=route, status=response.status_code, duration_ms=elapsed)

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers[RESPONSE_TIME_HEADER] = f"{elapsed:.2f}ms"
        return response
