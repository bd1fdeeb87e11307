from __future__ import annotations

from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel


class PayloadKind(str, Enum):
    RAW = "raw"
    SERIALIZABLE = "serializable"
    RESOURCE = "resource"
    RESOURCE_COLLECTION = "resource_collection"
    PAGINATED = "paginated"


def payload_kind(value: Any) -> PayloadKind:
    """Return the payload tag declared by ``value``.

    Resource and paginator classes declare a ``payload_kind`` class attribute.
    Pydantic models and objects with a ``to_dict()`` method are serializable;
    everything else is a raw value.
    """
    kind = getattr(type(value), "payload_kind", None)
    if isinstance(kind, PayloadKind):
        return kind
    if isinstance(value, BaseModel) or callable(getattr(value, "to_dict", None)):
        return PayloadKind.SERIALIZABLE
    return PayloadKind.RAW


def to_plain(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return value


def wrap(value: Any) -> dict[str, Any] | list[Any]:
    if value is None:
        return []
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]
