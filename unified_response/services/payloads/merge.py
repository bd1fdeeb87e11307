from __future__ import annotations

from typing import Any, Mapping

from unified_response.logging import get_logger

logger = get_logger(__name__)


def deep_merge(*mappings: Mapping[str, Any]) -> dict[str, Any]:
    """Merge mappings left to right into a new dict.

    Nested mappings merge recursively and lists under the same key are
    concatenated. Any other collision keeps the rightmost value and is
    logged. None of the inputs are mutated.
    """
    merged: dict[str, Any] = {}
    for mapping in mappings:
        _merge_into(merged, mapping, ())
    return merged


def _merge_into(target: dict[str, Any], source: Mapping[str, Any], path: tuple[str, ...]) -> None:
    for key, value in source.items():
        if key not in target:
            target[key] = value
            continue

        current = target[key]
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            nested = dict(current)
            _merge_into(nested, value, path + (str(key),))
            target[key] = nested
        elif isinstance(current, list) and isinstance(value, list):
            target[key] = current + value
        else:
            logger.warning("payload_merge_collision", path=".".join(path + (str(key),)))
            target[key] = value
