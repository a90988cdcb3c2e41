# src/flowmap/core/inventory.py
"""Normalizer options from entity listing payloads.

The flow graph alone misses entities wired into no edge. Callers fetch
the project's managed-folder, dataset and recipe listings alongside it;
this module turns those untyped listings into NormalizeOptions.

Each listing is fetched independently and may fail. A failed listing is
passed as None and contributes nothing, so one unavailable listing does
not block the map.
"""

from __future__ import annotations

from typing import Any

from flowmap.contracts.flow import NormalizeOptions
from flowmap.core.guards import as_record, as_string


def _entries(listing: Any) -> list[Any]:
    if isinstance(listing, list | tuple):
        return list(listing)
    return []


def _names(listing: Any) -> list[str]:
    names: list[str] = []
    for entry in _entries(listing):
        record = as_record(entry)
        if record is None:
            continue
        name = as_string(record.get("name"))
        if name:
            names.append(name)
    return names


def inventory_options(
    folders: Any = None,
    datasets: Any = None,
    recipes: Any = None,
) -> NormalizeOptions:
    """Build NormalizeOptions from listing payloads.

    Args:
        folders: Managed-folder listing, ``[{id, name}]``, or None if unavailable
        datasets: Dataset listing, ``[{name}]``, or None if unavailable
        recipes: Recipe listing, ``[{name}]``, or None if unavailable

    Returns:
        Options where every folder with an id is enumerated and named
        (falling back to its id), plus all named datasets and recipes.
    """
    folder_names_by_id: dict[str, str] = {}
    all_folder_ids: list[str] = []
    for entry in _entries(folders):
        record = as_record(entry)
        if record is None:
            continue
        folder_id = as_string(record.get("id"))
        if not folder_id:
            continue
        all_folder_ids.append(folder_id)
        folder_names_by_id[folder_id] = as_string(record.get("name")) or folder_id

    return NormalizeOptions(
        folder_names_by_id=folder_names_by_id,
        all_dataset_names=tuple(_names(datasets)),
        all_recipe_names=tuple(_names(recipes)),
        all_folder_ids=tuple(all_folder_ids),
    )
