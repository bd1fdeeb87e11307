from __future__ import annotations

from typing import Any, Mapping

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler as default_http_exception_handler
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import PlainTextResponse, RedirectResponse, Response

from unified_response.api.responder import Responder, get_responder
from unified_response.core.errors import (
    AuthenticationError,
    HttpResponseError,
    ValidationFailed,
    describe_exception,
    is_http_exception,
)
from unified_response.logging import get_logger

logger = get_logger(__name__)

PRETTY_JSON_OPTIONS = {"indent": 4}
_JSON_MEDIA_MARKERS = ("/json", "+json")


def expects_json(request: Request) -> bool:
    if request.headers.get("x-requested-with", "").lower() == "xmlhttprequest":
        return True
    accept = request.headers.get("accept", "").lower()
    return any(marker in accept for marker in _JSON_MEDIA_MARKERS)


def validation_error_fields(errors: list[dict[str, Any]]) -> dict[str, list[str]]:
    fields: dict[str, list[str]] = {}
    for error in errors:
        location = ".".join(str(part) for part in error.get("loc", ())) or "__root__"
        fields.setdefault(location, []).append(str(error.get("msg", "Invalid value")))
    return fields


async def escalated_response_handler(request: Request, exc: HttpResponseError) -> Response:
    return exc.response


async def authentication_exception_handler(request: Request, exc: AuthenticationError) -> Response:
    responder = get_responder(request)
    if expects_json(request):
        message = responder.settings.code.unauthorized or exc.message
        return responder.error_outcome(message, Responder.HTTP_UNAUTHORIZED).response
    return RedirectResponse(exc.redirect_to or responder.settings.login_url, status_code=302)


async def validation_failed_handler(request: Request, exc: ValidationFailed) -> Response:
    return _validation_response(request, exc.status, exc.errors(), exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> Response:
    return _validation_response(
        request,
        Responder.HTTP_UNPROCESSABLE_ENTITY,
        validation_error_fields(list(exc.errors())),
        "The given data was invalid.",
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    responder = get_responder(request)
    if not responder.settings.is_unified_return_json:
        return await default_http_exception_handler(request, exc)
    return _unified_error_response(responder, exc, exc.status_code, exc.headers)


async def unhandled_exception_handler(request: Request, exc: Exception) -> Response:
    responder = get_responder(request)
    if not responder.settings.is_unified_return_json:
        logger.error("exception_unhandled", exception=type(exc).__name__, exc_info=exc)
        return PlainTextResponse("Internal Server Error", status_code=Responder.HTTP_INTERNAL_SERVER_ERROR)
    return _unified_error_response(responder, exc, Responder.HTTP_INTERNAL_SERVER_ERROR, None)


def _validation_response(request: Request, status: int, errors: Mapping[str, Any], fallback_message: str) -> Response:
    responder = get_responder(request)
    message = responder.settings.code.validation or fallback_message
    logger.info("exception_translated", exception="validation", status=status, fields=sorted(errors))
    return responder.fail_outcome(message, status, dict(errors)).response


def _unified_error_response(
    responder: Responder,
    exc: Exception,
    status: int,
    headers: Mapping[str, str] | None,
) -> Response:
    if status >= 500:
        logger.error("exception_translated", exception=type(exc).__name__, status=status, exc_info=exc)
    else:
        logger.info("exception_translated", exception=type(exc).__name__, status=status)
    errors = describe_exception(exc, responder.settings.debug)
    outcome = responder.error_outcome(
        "",
        status,
        errors,
        headers if is_http_exception(exc) else None,
        PRETTY_JSON_OPTIONS,
    )
    return outcome.response


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(HttpResponseError, escalated_response_handler)  # type: ignore[arg-type]
    app.add_exception_handler(AuthenticationError, authentication_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(ValidationFailed, validation_failed_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = [
    "expects_json",
    "register_exception_handlers",
    "validation_error_fields",
]
