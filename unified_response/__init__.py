"""Uniform JSON response envelopes for FastAPI applications."""

__version__ = "0.1.0"

from unified_response.api.responder import (  # noqa: E402
    EnvelopeJSONResponse,
    Escalate,
    Handled,
    Responder,
    get_responder,
)
from unified_response.api.response import ResponseEnvelope, format_envelope  # noqa: E402
from unified_response.core.config import ResponseSettings, get_settings  # noqa: E402
from unified_response.core.errors import (  # noqa: E402
    AuthenticationError,
    HttpResponseError,
    ValidationFailed,
)
from unified_response.core.status import Category, classify  # noqa: E402
from unified_response.resources import JsonResource, Paginator, ResourceCollection  # noqa: E402

__all__ = [
    "AuthenticationError",
    "Category",
    "EnvelopeJSONResponse",
    "Escalate",
    "Handled",
    "HttpResponseError",
    "JsonResource",
    "Paginator",
    "ResourceCollection",
    "Responder",
    "ResponseEnvelope",
    "ResponseSettings",
    "ValidationFailed",
    "classify",
    "format_envelope",
    "get_responder",
    "get_settings",
]
