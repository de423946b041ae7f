"""Request Context — request ids, lifecycle logging and per-request loggers.

Invariants:
    - Every response carries X-Request-ID (client value propagated when present)
    - Every request logs "Request started" and then "Request completed" or
      "Request failed" (unhandled exception, re-raised) with duration
    - Route loggers are bound per request — no logger state outlives the request

Design Decisions:
    - Pure ASGI-level middleware via @app.middleware("http"): one place for timing
    - request_logger as a FastAPI dependency so routes stay free of header parsing
"""

import logging
import time
import uuid

from fastapi import FastAPI, Request

from kbchat.infrastructure.observability import ContextLogger, bind_logger

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def register_request_logging(app: FastAPI) -> None:
    """Attach request-id and lifecycle logging middleware."""

    @app.middleware("http")
    async def request_lifecycle(request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        log = bind_logger(
            logger, request_id=request_id,
            http_method=request.method, path=request.url.path,
        )
        log.info("Request started")
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            log.error(
                "Request failed",
                extra={
                    "status_code": 500,
                    "duration_ms": round((time.perf_counter() - start) * 1000, 2),
                },
            )
            raise
        duration_ms = round((time.perf_counter() - start) * 1000, 2)
        response.headers[REQUEST_ID_HEADER] = request_id
        log.info(
            "Request completed",
            extra={"status_code": response.status_code, "duration_ms": duration_ms},
        )
        return response


def request_logger(request: Request) -> ContextLogger:
    """Dependency — route logger bound to the current request id."""
    request_id = getattr(request.state, "request_id", None)
    return bind_logger(logging.getLogger("kbchat.api"), request_id=request_id)
