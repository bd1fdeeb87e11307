from unified_response.services.payloads.merge import deep_merge
from unified_response.services.payloads.normalizer import NormalizedPayload, normalize_payload, pagination_meta

__all__ = ["NormalizedPayload", "deep_merge", "normalize_payload", "pagination_meta"]
