# src/flowmap/core/guards.py
"""Type narrowing for untrusted flow-graph payloads.

The raw graph is third-party JSON. Nothing here raises: every helper
returns a narrowed value or an empty fallback, and ``as_string_array``
records what it dropped in the caller's warnings list.

A key that is absent from the payload is distinct from a key holding
JSON ``null``. Look fields up with ``record.get(key, MISSING)``; only
``MISSING`` is silently empty.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final


class _Missing:
    """Marker for a key that is not present in a raw record."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Final = _Missing()


def as_record(value: Any) -> Mapping[str, Any] | None:
    """Return value if it is a JSON object (mapping), else None."""
    if isinstance(value, Mapping):
        return value
    return None


def as_string(value: Any) -> str | None:
    """Return value if it is a non-empty string, else None."""
    if isinstance(value, str) and value:
        return value
    return None


def as_string_array(value: Any, warnings: list[str], context: str) -> list[str]:
    """Coerce value to a list of non-empty strings.

    An absent field (``MISSING``) is silently empty. Any other non-list
    value, ``None`` included, is dropped with one warning naming
    ``context``; non-string items are dropped with one warning each.

    Args:
        value: Candidate array from the raw payload
        warnings: Accumulator, appended to in place
        context: Dotted path of the field, used in warning text

    Returns:
        Retained string items in input order
    """
    if value is MISSING:
        return []
    if not isinstance(value, list | tuple):
        warnings.append(f'Skipped non-array "{context}" field.')
        return []
    out: list[str] = []
    for item in value:
        if isinstance(item, str) and item:
            out.append(item)
        else:
            warnings.append(f'Skipped non-string item in "{context}".')
    return out
