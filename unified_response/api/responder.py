from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Mapping, Union

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.requests import Request

from unified_response.api.response import ResponseEnvelope, format_envelope
from unified_response.core.config import ResponseSettings, get_settings
from unified_response.core.errors import HttpResponseError
from unified_response.logging import get_logger
from unified_response.services.payloads import normalize_payload

logger = get_logger(__name__)

BODILESS_STATUSES = frozenset({204, 304})


class EnvelopeJSONResponse(JSONResponse):
    """JSON response that keeps the unserialized payload on ``original``.

    ``json_options`` are forwarded to :func:`json.dumps` when given. Responses
    with a 204 or 304 status are sent without a body.
    """

    def __init__(
        self,
        content: Any,
        status_code: int = 200,
        headers: Mapping[str, str] | None = None,
        json_options: Mapping[str, Any] | None = None,
        original: Any = None,
    ) -> None:
        self.json_options = dict(json_options or {})
        self.original = content if original is None else original
        super().__init__(content, status_code=status_code, headers=headers)

    def render(self, content: Any) -> bytes:
        if self.status_code in BODILESS_STATUSES:
            return b""
        if not self.json_options:
            return super().render(content)
        options: dict[str, Any] = {
            "ensure_ascii": False,
            "allow_nan": False,
            "indent": None,
            "separators": (",", ":"),
        }
        options.update(self.json_options)
        return json.dumps(content, **options).encode("utf-8")


@dataclass(frozen=True)
class Handled:
    response: EnvelopeJSONResponse

    def unwrap(self) -> EnvelopeJSONResponse:
        return self.response


@dataclass(frozen=True)
class Escalate:
    response: EnvelopeJSONResponse

    def unwrap(self) -> EnvelopeJSONResponse:
        raise HttpResponseError(self.response)


Outcome = Union[Handled, Escalate]


class Responder:
    HTTP_OK = 200
    HTTP_CREATED = 201
    HTTP_ACCEPTED = 202
    HTTP_NO_CONTENT = 204
    HTTP_BAD_REQUEST = 400
    HTTP_UNAUTHORIZED = 401
    HTTP_FORBIDDEN = 403
    HTTP_NOT_FOUND = 404
    HTTP_METHOD_NOT_ALLOWED = 405
    HTTP_UNPROCESSABLE_ENTITY = 422
    HTTP_INTERNAL_SERVER_ERROR = 500

    def __init__(self, settings: ResponseSettings | None = None, request: Request | None = None) -> None:
        self.settings = settings or get_settings()
        self.request = request

    def bind(self, request: Request) -> "Responder":
        return type(self)(self.settings, request)

    def success(
        self,
        data: Any = None,
        message: str = "",
        status: int = HTTP_OK,
        headers: Mapping[str, str] | None = None,
        options: Mapping[str, Any] | None = None,
        *,
        request: Request | None = None,
    ) -> EnvelopeJSONResponse:
        if request is None:
            request = self.request
        payload = normalize_payload(data, self.settings, request)
        envelope = format_envelope(payload.data, message, status, settings=self.settings)
        response = self.respond(envelope, status, headers, options)
        if payload.resource is not None:
            response.original = payload.original
            payload.resource.with_response(request, response)
        return response

    def fail(
        self,
        message: str = "",
        status: int = HTTP_BAD_REQUEST,
        errors: Any = None,
        headers: Mapping[str, str] | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> EnvelopeJSONResponse:
        return self.fail_outcome(message, status, errors, headers, options).unwrap()

    def error(
        self,
        message: str = "",
        status: int = HTTP_INTERNAL_SERVER_ERROR,
        errors: Any = None,
        headers: Mapping[str, str] | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> EnvelopeJSONResponse:
        """Build an error response.

        Without ``errors`` the response is escalated: :class:`HttpResponseError`
        is raised carrying it, so the exception handlers render it. With
        ``errors`` the response is returned.
        """
        return self.error_outcome(message, status, errors, headers, options).unwrap()

    def fail_outcome(
        self,
        message: str = "",
        status: int = HTTP_BAD_REQUEST,
        errors: Any = None,
        headers: Mapping[str, str] | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> Outcome:
        return self.error_outcome(message, status, errors, headers, options)

    def error_outcome(
        self,
        message: str = "",
        status: int = HTTP_INTERNAL_SERVER_ERROR,
        errors: Any = None,
        headers: Mapping[str, str] | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> Outcome:
        envelope = format_envelope(None, message, status, errors, settings=self.settings)
        response = self.respond(envelope, status, headers, options)
        if errors is None:
            logger.debug("response_escalated", status=status, code=envelope.code)
            return Escalate(response)
        return Handled(response)

    def created(self, data: Any = None, message: str = "", location: str = "") -> EnvelopeJSONResponse:
        response = self.success(data, message, self.HTTP_CREATED)
        if location:
            response.headers["Location"] = location
        return response

    def accepted(self, data: Any = None, message: str = "", location: str = "") -> EnvelopeJSONResponse:
        response = self.success(data, message, self.HTTP_ACCEPTED)
        if location:
            response.headers["Location"] = location
        return response

    def no_content(self, message: str = "") -> EnvelopeJSONResponse:
        return self.success(None, message, self.HTTP_NO_CONTENT)

    def error_unauthorized(self, message: str = "") -> EnvelopeJSONResponse:
        return self.error(message, self.HTTP_UNAUTHORIZED)

    def error_forbidden(self, message: str = "") -> EnvelopeJSONResponse:
        return self.error(message, self.HTTP_FORBIDDEN)

    def error_not_found(self, message: str = "") -> EnvelopeJSONResponse:
        return self.error(message, self.HTTP_NOT_FOUND)

    def error_method_not_allowed(self, message: str = "") -> EnvelopeJSONResponse:
        return self.fail(message, self.HTTP_METHOD_NOT_ALLOWED)

    def error_unprocessable_entity(self, message: str = "") -> EnvelopeJSONResponse:
        return self.fail(message, self.HTTP_UNPROCESSABLE_ENTITY)

    def respond(
        self,
        envelope: ResponseEnvelope | Mapping[str, Any],
        status: int = HTTP_OK,
        headers: Mapping[str, str] | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> EnvelopeJSONResponse:
        if not self.settings.is_restful:
            status = self.HTTP_OK
        return EnvelopeJSONResponse(
            jsonable_encoder(envelope),
            status_code=status,
            headers=dict(headers) if headers else None,
            json_options=options,
            original=envelope,
        )


def get_responder(request: Request) -> Responder:
    responder = getattr(request.app.state, "responder", None)
    if responder is None:
        responder = Responder()
        request.app.state.responder = responder
    return responder.bind(request)
