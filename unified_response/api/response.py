from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, Field

from unified_response.core.config import ResponseSettings, get_settings
from unified_response.core.status import Category, classify, resolve_message


class ResponseEnvelope(BaseModel):
    status: Category = Field(default=Category.SUCCESS)
    code: str = Field(default="200")
    message: str = Field(default="")
    data: Any = Field(default_factory=dict)
    errors: dict[str, Any] = Field(default_factory=dict)


def _object_or_empty(value: Any) -> dict[str, Any] | list[Any]:
    if not value:
        return {}
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _errors_or_empty(errors: Any) -> dict[str, Any]:
    if not errors:
        return {}
    if isinstance(errors, Mapping):
        return {str(key): value for key, value in errors.items()}
    if isinstance(errors, str):
        return {"message": errors}
    return {"details": errors}


def format_envelope(
    data: Any = None,
    message: str = "",
    status: int = 200,
    errors: Any = None,
    settings: ResponseSettings | None = None,
) -> ResponseEnvelope:
    settings = settings or get_settings()
    category = classify(status)
    resolved_message, business_code = resolve_message(message, category, settings)
    return ResponseEnvelope(
        status=category,
        code=str(business_code if business_code is not None else status),
        message=resolved_message or "",
        data=_object_or_empty(data),
        errors=_errors_or_empty(errors),
    )

