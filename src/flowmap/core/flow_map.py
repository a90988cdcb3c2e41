# src/flowmap/core/flow_map.py
"""Consumer-side flow-map pipeline.

Combines inventory listings, normalization and truncation under the
configured default caps. Performs no I/O: the raw graph and listings are
fetched by the caller and passed in as parsed JSON.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from flowmap.contracts.flow import NormalizedFlowMap, TruncationSummary
from flowmap.contracts.types import FlowMapResultDict
from flowmap.core.builder import normalize_flow_graph
from flowmap.core.config import MapLimitSettings
from flowmap.core.inventory import inventory_options
from flowmap.core.logging import get_logger
from flowmap.core.truncation import truncate_flow_map

logger = get_logger(__name__)

_NO_RAW = object()


@dataclass(frozen=True, slots=True)
class FlowMapResult:
    """Bounded map plus truncation summary, optionally carrying the raw payload."""

    flow_map: NormalizedFlowMap
    truncation: TruncationSummary
    raw: Any = _NO_RAW

    @property
    def includes_raw(self) -> bool:
        return self.raw is not _NO_RAW

    def to_dict(self) -> FlowMapResultDict:
        map_dict = self.flow_map.to_dict()
        if self.includes_raw:
            map_dict["raw"] = self.raw
        return {"map": map_dict, "truncation": self.truncation.to_dict()}


def build_flow_map(
    raw: Any,
    project_key: str,
    *,
    folders: Any = None,
    datasets: Any = None,
    recipes: Any = None,
    max_nodes: int | None = None,
    max_edges: int | None = None,
    limits: MapLimitSettings | None = None,
    include_raw: bool = False,
) -> FlowMapResult:
    """Normalize and bound a project's flow graph for transport.

    Args:
        raw: Parsed flow-graph payload
        project_key: Opaque project identifier
        folders: Managed-folder listing, or None if it could not be fetched
        datasets: Dataset listing, or None if it could not be fetched
        recipes: Recipe listing, or None if it could not be fetched
        max_nodes: Per-call node cap, overrides ``limits``
        max_edges: Per-call edge cap, overrides ``limits``
        limits: Default caps (300 nodes / 600 edges when omitted)
        include_raw: Carry the raw payload through to the result

    Returns:
        FlowMapResult

    Raises:
        ValueError: If an explicit cap is less than 1
    """
    options = inventory_options(folders=folders, datasets=datasets, recipes=recipes)
    normalized = normalize_flow_graph(raw, project_key, options)
    logger.debug(
        "flow_graph_normalized",
        project_key=project_key,
        node_count=normalized.stats.node_count,
        edge_count=normalized.stats.edge_count,
        warning_count=len(normalized.warnings),
    )

    effective_nodes, effective_edges = (limits or MapLimitSettings()).resolve(max_nodes, max_edges)
    bounded = truncate_flow_map(normalized, effective_nodes, effective_edges)
    summary = bounded.truncation
    if summary.truncated:
        logger.info(
            "flow_map_truncated",
            project_key=project_key,
            nodes_before=summary.node_count_before,
            nodes_after=summary.node_count_after,
            edges_before=summary.edge_count_before,
            edges_after=summary.edge_count_after,
        )

    if include_raw:
        return FlowMapResult(flow_map=bounded.flow_map, truncation=summary, raw=raw)
    return FlowMapResult(flow_map=bounded.flow_map, truncation=summary)
