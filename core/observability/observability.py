"""Observability helpers: structlog JSON + request context."""

import logging
import time
import typing
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from structlog.contextvars import bind_contextvars, clear_contextvars
from structlog.processors import TimeStamper
from structlog.stdlib import ExtraAdder, ProcessorFormatter


def setup_structlog_json(level: int = logging.INFO) -> None:
    """Configure structlog JSON output routed through the stdlib root logger."""
    shared_processors = [
        structlog.processors.add_log_level,
        TimeStamper(fmt="iso", utc=True),
        ExtraAdder(),  # include stdlib `extra` dict fields
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    formatter = ProcessorFormatter(
        processor=structlog.processors.JSONRenderer(),
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind request_id/method/path to logs and set X-Request-ID."""

    def __init__(self, app, header_name: str = "X-Request-ID") -> None:
        """Constructor."""
        super().__init__(app)
        self.header_name = header_name
        self._logger = logging.getLogger(__name__)

    async def dispatch(
        self,
        request: Request,
        call_next: typing.Callable[[Request], typing.Awaitable[Response]],
    ):
        """Bind request_id to logs and set X-Request-ID header."""
        request_id = request.headers.get(self.header_name) or str(uuid.uuid4())

        bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )
        start = time.perf_counter()
        try:
            self._logger.info(
                "http.request.start",
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "path": request.url.path,
                    "client_host": getattr(request.client, "host", None),
                },
            )
            response = await call_next(request)
        finally:
            clear_contextvars()

        duration_ms = int((time.perf_counter() - start) * 1000)
        self._logger.info(
            "http.request.end",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
                "client_id": getattr(request.state, "client_id", None),
            },
        )

        response.headers[self.header_name] = request_id
        return response
