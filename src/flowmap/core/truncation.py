# src/flowmap/core/truncation.py
"""Bounding a normalized map for transport.

Truncation keeps a prefix of the already-sorted node list, drops every
edge with an endpoint outside that prefix, then caps the remaining edges.
Roots, leaves and stats are recomputed from the retained view: a node
that lost all its inbound edges is a root of the truncated map even if it
was not one originally.
"""

from __future__ import annotations

from flowmap.contracts.flow import NormalizedFlowMap, TruncatedFlowMap, TruncationSummary
from flowmap.core.stats import assemble_flow_map


def _check_cap(name: str, value: int | None) -> None:
    if value is not None and value < 1:
        msg = f"{name} must be >= 1 or None for unbounded, got {value}"
        raise ValueError(msg)


def truncate_flow_map(
    flow_map: NormalizedFlowMap,
    max_nodes: int | None = None,
    max_edges: int | None = None,
) -> TruncatedFlowMap:
    """Cap node and edge counts while keeping the map edge-consistent.

    Node truncation can remove edges that ``max_edges`` alone would have
    kept, because one endpoint fell outside the node cutoff. The result
    never contains a dangling edge.

    Args:
        flow_map: Output of normalize_flow_graph()
        max_nodes: Node cap, None for unbounded
        max_edges: Edge cap applied after endpoint filtering, None for unbounded

    Returns:
        TruncatedFlowMap with the bounded map and a TruncationSummary

    Raises:
        ValueError: If a cap is given and is less than 1
    """
    _check_cap("max_nodes", max_nodes)
    _check_cap("max_edges", max_edges)

    nodes = flow_map.nodes if max_nodes is None else flow_map.nodes[:max_nodes]
    kept_ids = {node.id for node in nodes}
    edges_within = [edge for edge in flow_map.edges if edge.from_node in kept_ids and edge.to_node in kept_ids]
    edges = edges_within if max_edges is None else edges_within[:max_edges]

    node_count_before = len(flow_map.nodes)
    edge_count_before = len(flow_map.edges)
    truncation = TruncationSummary(
        truncated=len(nodes) < node_count_before or len(edges) < edge_count_before,
        max_nodes=max_nodes,
        max_edges=max_edges,
        node_count_before=node_count_before,
        node_count_after=len(nodes),
        edge_count_before=edge_count_before,
        edge_count_after=len(edges),
    )

    warnings = list(flow_map.warnings)
    if truncation.truncated:
        warnings.append(
            f"Flow map truncated (nodes {truncation.node_count_after}/{truncation.node_count_before}, "
            f"edges {truncation.edge_count_after}/{truncation.edge_count_before})."
        )

    bounded = assemble_flow_map(flow_map.project_key, nodes, edges, warnings)
    return TruncatedFlowMap(flow_map=bounded, truncation=truncation)
