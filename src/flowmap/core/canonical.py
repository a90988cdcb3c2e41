# src/flowmap/core/canonical.py
"""
Canonical JSON serialization for byte-stable flow maps.

Two-phase approach:
1. Normalize: Convert tuples and enum members to JSON-safe primitives (our code)
2. Serialize: Produce deterministic JSON per RFC 8785/JCS (rfc8785 package)

Callers diff successive maps of the same project; identical input must
produce identical bytes, which json.dumps() alone does not promise.

IMPORTANT: NaN and Infinity are strictly REJECTED, not silently converted.
Python's json module happily parses them out of raw payloads, so they can
reach here through an included raw graph.
"""

from __future__ import annotations

import hashlib
import math
from enum import Enum
from typing import TYPE_CHECKING, Any

import rfc8785

if TYPE_CHECKING:
    from flowmap.contracts.flow import NormalizedFlowMap

CANONICAL_VERSION = "sha256-rfc8785-v1"


def _normalize_value(obj: Any) -> Any:
    """Convert a single value to a JSON-safe primitive.

    Raises:
        ValueError: If value is NaN or Infinity
    """
    if isinstance(obj, float):
        if math.isnan(obj) or math.isinf(obj):
            raise ValueError(f"Cannot canonicalize non-finite float: {obj}. Use None for missing values, not NaN.")
        return obj
    if isinstance(obj, Enum):
        return obj.value
    return obj


def _normalize_for_canonical(data: Any) -> Any:
    """Recursively normalize a data structure for canonical JSON."""
    if isinstance(data, dict):
        return {str(k): _normalize_for_canonical(v) for k, v in data.items()}
    if isinstance(data, list | tuple):
        return [_normalize_for_canonical(v) for v in data]
    return _normalize_value(data)


def canonical_json(obj: Any) -> str:
    """Produce canonical JSON (no whitespace, sorted keys).

    Args:
        obj: Data structure to serialize

    Returns:
        Canonical JSON string

    Raises:
        ValueError: If data contains NaN, Infinity, or other non-finite values
        TypeError: If data contains types that cannot be serialized
    """
    normalized = _normalize_for_canonical(obj)
    result: bytes = rfc8785.dumps(normalized)
    return result.decode("utf-8")


def stable_hash(obj: Any) -> str:
    """SHA-256 hex digest of canonical JSON."""
    canonical = canonical_json(obj)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def flow_map_digest(flow_map: NormalizedFlowMap) -> str:
    """Stable hash of a map's wire form, for change detection between calls."""
    return stable_hash(flow_map.to_dict())
