"""
Readly Backend: Request Tracing Middleware
===========================================

What:  Gives every request an ID, answers unhandled errors, and writes one
       access-log line on the `readly.access` logger.
How:   A single BaseHTTPMiddleware wraps the whole route stack. The ID comes
       from the client's X-Request-ID header or a short UUID and is kept in a
       ContextVar for exception handlers and service loggers.
When:  Outermost user middleware (added last in create_app).

Unhandled errors:
    Exceptions with a registered handler (ReadlyError and subclasses) are
    turned into responses further in. Anything else reaches this middleware,
    which logs the traceback and answers with the generic 500 envelope. The
    failed request therefore keeps its X-Request-ID header and its access line.

Access line:
    "<METHOD> <path> <status> <ms>ms [<request id>] from <ip>"
    5xx → ERROR, 4xx → WARNING (a duplicate wish is a 409), else INFO.
    /health is not logged. Request bodies never are (wishes carry emails).
"""

import logging
import time
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

logger = logging.getLogger("readly.access")

REQUEST_ID_HEADER = "X-Request-ID"

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def unexpected_error_response(rid: str) -> JSONResponse:
    """Generic 500 body; the cause stays in the logs."""
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "message": "An unexpected error occurred. Please try again later.",
            "request_id": rid,
        },
    )


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestTracingMiddleware(BaseHTTPMiddleware):
    """Request ID, last-resort 500 and access log for every request."""

    QUIET_PATHS = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())[:8]
        request_id_var.set(rid)
        request.state.request_id = rid

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "[%s] Unhandled %s on %s %s: %s",
                rid,
                type(e).__name__,
                request.method,
                request.url.path,
                str(e),
                exc_info=True,
            )
            response = unexpected_error_response(rid)
        response.headers[REQUEST_ID_HEADER] = rid

        if request.url.path not in self.QUIET_PATHS:
            self._log_access(request, response.status_code, started, rid)
        return response

    @staticmethod
    def _log_access(request: Request, status: int, started: float, rid: str) -> None:
        duration_ms = (time.perf_counter() - started) * 1000
        client_ip = request.client.host if request.client else "unknown"
        logger.log(
            _level_for(status),
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            request.url.path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": request.url.path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
