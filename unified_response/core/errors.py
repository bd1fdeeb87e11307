from __future__ import annotations

import traceback
from typing import TYPE_CHECKING, Any, Mapping

from starlette.exceptions import HTTPException as StarletteHTTPException

if TYPE_CHECKING:
    from starlette.responses import Response


class ResponseException(Exception):
    """Base class for failures reported through the response envelope."""


class HttpResponseError(ResponseException):
    """Carries a fully built response up the call stack.

    Raised when ``error``/``fail`` are called without field errors; the
    registered exception handler renders :attr:`response` unchanged.
    """

    def __init__(self, response: Response) -> None:
        super().__init__(f"Escalated response with status {response.status_code}")
        self.response = response


class AuthenticationError(ResponseException):
    def __init__(self, message: str = "Unauthenticated.", redirect_to: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.redirect_to = redirect_to


class ValidationFailed(ResponseException):
    """Field-level validation failure, ``errors`` maps field -> messages."""

    def __init__(
        self,
        errors: Mapping[str, Any],
        message: str = "The given data was invalid.",
        status: int = 422,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self._errors = {key: _as_message_list(value) for key, value in errors.items()}

    def errors(self) -> dict[str, list[str]]:
        return dict(self._errors)


def _as_message_list(value: Any) -> list[str]:
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    return [str(value)]


def is_http_exception(exc: BaseException) -> bool:
    return isinstance(exc, StarletteHTTPException)


def describe_exception(exc: BaseException, debug: bool = False) -> dict[str, Any]:
    if debug:
        frames = traceback.extract_tb(exc.__traceback__)
        origin = frames[-1] if frames else None
        return {
            "message": _exception_message(exc),
            "exception": f"{type(exc).__module__}.{type(exc).__qualname__}",
            "file": origin.filename if origin else None,
            "line": origin.lineno if origin else None,
            "trace": [line.rstrip("\n") for line in traceback.format_tb(exc.__traceback__)],
        }
    if is_http_exception(exc):
        return {"message": _exception_message(exc)}
    return {"message": "Server Error"}


def _exception_message(exc: BaseException) -> str:
    if isinstance(exc, StarletteHTTPException):
        detail = exc.detail
        return detail if isinstance(detail, str) else str(detail)
    return str(exc)
