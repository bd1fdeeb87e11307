from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar, Iterable, Mapping

from unified_response.resources.base import PayloadKind, payload_kind, to_plain

if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response


class JsonResource:
    """Transforms a single domain object into a plain mapping.

    Subclasses override :meth:`to_dict` to shape the object and may override
    :meth:`with_` to contribute top-level metadata, or :meth:`with_response`
    to customize the outgoing response.
    """

    payload_kind: ClassVar[PayloadKind] = PayloadKind.RESOURCE

    def __init__(self, resource: Any) -> None:
        self.resource = resource
        self.additional: dict[str, Any] = {}

    @classmethod
    def collect(cls, resources: Iterable[Any]) -> "ResourceCollection":
        return ResourceCollection(resources, collects=cls)

    def to_dict(self, request: Request | None = None) -> Any:
        if self.resource is None:
            return {}
        return to_plain(self.resource)

    def resolve(self, request: Request | None = None) -> Any:
        data = self.to_dict(request)
        if isinstance(data, Mapping):
            return dict(data)
        return data

    def with_(self, request: Request | None = None) -> dict[str, Any]:
        return {}

    def with_additional(self, data: Mapping[str, Any]) -> "JsonResource":
        self.additional = dict(data)
        return self

    def with_response(self, request: Request | None, response: Response) -> None:
        return None


class ResourceCollection(JsonResource):
    """A list of resources, optionally backed by a :class:`Paginator`."""

    payload_kind: ClassVar[PayloadKind] = PayloadKind.RESOURCE_COLLECTION
    collects: ClassVar[type[JsonResource] | None] = None

    def __init__(self, resource: Iterable[Any], collects: type[JsonResource] | None = None) -> None:
        super().__init__(resource)
        self._collects = collects or type(self).collects or JsonResource
        self.collection: list[JsonResource] = [self._wrap(item) for item in self._source_items()]

    @property
    def is_paginated(self) -> bool:
        return payload_kind(self.resource) is PayloadKind.PAGINATED

    def _source_items(self) -> list[Any]:
        if self.is_paginated:
            return list(self.resource.items)
        return list(self.resource)

    def _wrap(self, item: Any) -> JsonResource:
        if isinstance(item, JsonResource):
            return item
        return self._collects(item)

    def originals(self) -> list[Any]:
        return [item.resource for item in self.collection]

    def to_dict(self, request: Request | None = None) -> list[Any]:
        return [item.resolve(request) for item in self.collection]

    def resolve(self, request: Request | None = None) -> list[Any]:
        return list(self.to_dict(request))
