from unified_response.resources.base import PayloadKind, payload_kind, to_plain, wrap
from unified_response.resources.paginator import Paginator
from unified_response.resources.resource import JsonResource, ResourceCollection

__all__ = [
    "JsonResource",
    "Paginator",
    "PayloadKind",
    "ResourceCollection",
    "payload_kind",
    "to_plain",
    "wrap",
]
