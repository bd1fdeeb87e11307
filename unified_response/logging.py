import logging
import sys
from typing import Any, Awaitable, Callable
from uuid import uuid4

import structlog
from structlog import contextvars
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from unified_response.core.config import get_settings

MAX_LOG_VALUE_LENGTH = 2048
TRUNCATION_SUFFIX = "...(truncated)"
REQUEST_ID_HEADER = "X-Request-ID"
_MAX_MASK_DEPTH = 4


def _truncate_large_values(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    for key, value in list(event_dict.items()):
        if isinstance(value, str) and len(value) > MAX_LOG_VALUE_LENGTH:
            event_dict[key] = f"{value[:MAX_LOG_VALUE_LENGTH]}{TRUNCATION_SUFFIX}"
    return event_dict


def _mask_sensitive_values(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    settings = get_settings()
    redacted_keys = set(settings.redact_fields)

    def _mask(value: Any, depth: int) -> Any:
        if depth > _MAX_MASK_DEPTH or not isinstance(value, dict):
            return value
        return {
            key: settings.redaction_placeholder
            if isinstance(key, str) and key.lower() in redacted_keys
            else _mask(item, depth + 1)
            for key, item in value.items()
        }

    return _mask(event_dict, 0)


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(level=level, handlers=[logging.StreamHandler(sys.stdout)], format="%(message)s")
    for logger_name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(logger_name).handlers = []

    structlog.configure(
        processors=[
            contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            _mask_sensitive_values,
            _truncate_large_values,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def bind_log_context(**params: Any) -> None:
    payload = {key: str(value) for key, value in params.items() if value is not None}
    if payload:
        contextvars.bind_contextvars(**payload)


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Tags every log line of a request with its ``X-Request-ID``."""

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:  # type: ignore[override]
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())

        contextvars.clear_contextvars()
        bind_log_context(request_id=request_id, method=request.method, path=request.url.path)
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def get_logger(name: str | None = None, **initial_values: Any) -> structlog.stdlib.BoundLogger:
    if name is not None:
        return structlog.get_logger(name, **initial_values)
    return structlog.get_logger(**initial_values)


__all__ = [
    "REQUEST_ID_HEADER",
    "RequestIdMiddleware",
    "bind_log_context",
    "configure_logging",
    "get_logger",
]
