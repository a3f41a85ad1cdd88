"""Observability — JSON log records and per-request access logging.

Invariants:
    - Every record carries timestamp, level, logger and message
    - Catalog extras (product_id, slug, principal_id, error_code, path, operation)
      appear only when set on the record
    - Each request gets an X-Request-ID (incoming value kept, else a new uuid4)
      and exactly one access-log line with status and duration
    - setup_logging is idempotent: calling it twice does not duplicate output

Design Decisions:
    - Stdlib logging with a local formatter: no logging dependency to configure
    - Access log as BaseHTTPMiddleware: sees the final status after error handlers ran
"""

import json
import logging
import time
import uuid
from datetime import datetime, timezone

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

EXTRA_FIELDS = (
    "request_id", "product_id", "slug", "principal_id", "error_code",
    "path", "operation", "method", "status_code", "duration_ms",
)

_HANDLER_NAME = "catalog-api"

access_logger = logging.getLogger("catalog_api.access")


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in EXTRA_FIELDS:
            val = getattr(record, key, None)
            if val is not None:
                log[key] = val if isinstance(val, (int, float)) else str(val)
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install the catalog handler on the root logger, replacing a previous one."""
    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    # our access log replaces uvicorn's
    logging.getLogger("uvicorn.access").propagate = False


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Tag each request with an id and log method, path, status and latency."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        response.headers["X-Request-ID"] = request_id
        access_logger.info(
            f"{request.method} {request.url.path} {response.status_code}",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )
        return response
