from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Mapping

from unified_response.core.config import ResponseSettings
from unified_response.resources.base import PayloadKind, payload_kind, to_plain, wrap
from unified_response.services.payloads.merge import deep_merge

if TYPE_CHECKING:
    from starlette.requests import Request

    from unified_response.resources.resource import JsonResource, ResourceCollection


@dataclass(frozen=True)
class NormalizedPayload:
    """Envelope-ready data plus what the responder needs for resource hooks."""

    data: Any
    kind: PayloadKind
    resource: JsonResource | None = None
    original: Any = None


def pagination_meta(descriptor: Mapping[str, Any], settings: ResponseSettings) -> dict[str, dict[str, Any]]:
    pagination = settings.format.pagination
    return {
        pagination.meta_field: {
            field: descriptor[field] for field in pagination.return_fields if field in descriptor
        }
    }


def normalize_payload(
    payload: Any,
    settings: ResponseSettings,
    request: Request | None = None,
) -> NormalizedPayload:
    kind = payload_kind(payload)
    if kind is PayloadKind.RESOURCE_COLLECTION:
        return _normalize_resource_collection(payload, settings, request)
    if kind is PayloadKind.PAGINATED:
        return _normalize_paginated(payload, settings)
    if kind is PayloadKind.RESOURCE:
        return _normalize_resource(payload, request)
    if kind is PayloadKind.SERIALIZABLE:
        return NormalizedPayload(data=wrap(to_plain(payload)), kind=kind)
    return NormalizedPayload(data=wrap(payload), kind=kind)


def _normalize_resource_collection(
    collection: ResourceCollection,
    settings: ResponseSettings,
    request: Request | None,
) -> NormalizedPayload:
    data = deep_merge(
        {settings.format.collection_field: collection.resolve(request)},
        collection.with_(request),
        collection.additional,
    )
    if collection.is_paginated:
        data = deep_merge(data, pagination_meta(collection.resource.to_dict(), settings))
    return NormalizedPayload(
        data=data,
        kind=PayloadKind.RESOURCE_COLLECTION,
        resource=collection,
        original=collection.originals(),
    )


def _normalize_paginated(paginator: Any, settings: ResponseSettings) -> NormalizedPayload:
    descriptor = paginator.to_dict()
    data = deep_merge(
        {settings.format.collection_field: descriptor.get("data", [])},
        pagination_meta(descriptor, settings),
    )
    return NormalizedPayload(data=data, kind=PayloadKind.PAGINATED)


def _normalize_resource(resource: JsonResource, request: Request | None) -> NormalizedPayload:
    resolved = resource.resolve(request)
    if not isinstance(resolved, Mapping):
        resolved = {"data": resolved} if resolved is not None else {}
    data = deep_merge(resolved, resource.with_(request), resource.additional)
    return NormalizedPayload(
        data=data,
        kind=PayloadKind.RESOURCE,
        resource=resource,
        original=resource.resource,
    )
