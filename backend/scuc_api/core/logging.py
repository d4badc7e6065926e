"""Service logging: JSON records, request IDs and access lines.

Two kinds of record reach ``JSONFormatter`` with structured fields:

- access lines from ``RequestLoggingMiddleware`` (``scuc.access``)
- hourly warnings from ``scuc_engine.simulation.runner``, which attach
  the hour, the angle solution status, the overload alert count and the
  unserved load via ``extra``
"""

from __future__ import annotations

import json
import logging
import time
import uuid
from collections.abc import Sequence
from contextvars import ContextVar
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

ACCESS_LOGGER = "scuc.access"
ENGINE_LOGGER = "scuc_engine"

ACCESS_FIELDS: tuple[str, ...] = ("method", "path", "status_code", "duration_ms", "client_ip")
SIMULATION_FIELDS: tuple[str, ...] = (
    "hour", "angle_solution_status", "alert_count", "unserved_load",
)

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with the current request ID if any."""

    def __init__(
        self,
        fields: Sequence[str] = ACCESS_FIELDS + SIMULATION_FIELDS,
        datefmt: str | None = None,
    ) -> None:
        super().__init__(datefmt=datefmt)
        self.fields = tuple(fields)

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        rid = request_id_var.get()
        if rid:
            entry["request_id"] = rid
        entry.update(self.structured_fields(record))
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)

    def structured_fields(self, record: logging.LogRecord) -> dict[str, Any]:
        found = {}
        for key in self.fields:
            value = getattr(record, key, None)
            if value is not None:
                found[key] = value
        return found


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tag each request with an ID (``X-Request-ID``) and log its timing.

    Paths in ``quiet_paths`` still get the header but no access line.
    """

    def __init__(self, app: ASGIApp, quiet_paths: Sequence[str] = ()) -> None:
        super().__init__(app)
        self.quiet_paths = frozenset(quiet_paths)

    async def dispatch(self, request: Request, call_next) -> Response:  # type: ignore[override]
        rid = request.headers.get("x-request-id") or uuid.uuid4().hex[:12]
        token = request_id_var.set(rid)
        try:
            start = time.perf_counter()
            response: Response = await call_next(request)
            duration_ms = round((time.perf_counter() - start) * 1000, 1)
            response.headers["X-Request-ID"] = rid

            path = request.url.path
            if path not in self.quiet_paths:
                logging.getLogger(ACCESS_LOGGER).info(
                    "%s %s %d %.1fms",
                    request.method, path, response.status_code, duration_ms,
                    extra={
                        "method": request.method,
                        "path": path,
                        "status_code": response.status_code,
                        "duration_ms": duration_ms,
                        "client_ip": request.client.host if request.client else "unknown",
                    },
                )
            return response
        finally:
            request_id_var.reset(token)


def setup_logging(
    json_format: bool = False,
    level: str = "INFO",
    engine_level: str | None = None,
) -> None:
    """Install a single root handler.

    ``engine_level`` overrides the level of the ``scuc_engine`` loggers,
    e.g. ``"DEBUG"`` for per-hour dispatch lines.
    """
    handler = logging.StreamHandler()
    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper())

    logging.getLogger(ENGINE_LOGGER).setLevel(
        engine_level.upper() if engine_level else logging.NOTSET
    )
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
