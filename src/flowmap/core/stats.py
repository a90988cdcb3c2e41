# src/flowmap/core/stats.py
"""Degree-based roots/leaves and summary counts.

assemble_flow_map() is the single constructor for NormalizedFlowMap from a
node/edge view. Both the builder and truncation go through it, so roots,
leaves and stats are always derived from the view they describe.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import networkx as nx

from flowmap.contracts.enums import NodeKind
from flowmap.contracts.flow import FlowEdge, FlowMapStats, FlowNode, NormalizedFlowMap


def compute_roots_and_leaves(
    nodes: Sequence[FlowNode],
    edges: Iterable[FlowEdge],
) -> tuple[list[str], list[str]]:
    """Find nodes with no inbound edges (roots) and no outbound edges (leaves).

    Only ids present in ``nodes`` are reported. A pure cycle has neither.

    Returns:
        (roots, leaves), each sorted by id
    """
    graph: nx.DiGraph[str] = nx.DiGraph()
    graph.add_nodes_from(node.id for node in nodes)
    graph.add_edges_from((edge.from_node, edge.to_node) for edge in edges)

    roots = sorted(node.id for node in nodes if graph.in_degree(node.id) == 0)
    leaves = sorted(node.id for node in nodes if graph.out_degree(node.id) == 0)
    return roots, leaves


def compute_stats(
    nodes: Sequence[FlowNode],
    edges: Sequence[FlowEdge],
    roots: Sequence[str],
    leaves: Sequence[str],
) -> FlowMapStats:
    return FlowMapStats(
        node_count=len(nodes),
        edge_count=len(edges),
        datasets=sum(1 for node in nodes if node.kind == NodeKind.DATASET),
        recipes=sum(1 for node in nodes if node.kind == NodeKind.RECIPE),
        roots=len(roots),
        leaves=len(leaves),
    )


def assemble_flow_map(
    project_key: str,
    nodes: Sequence[FlowNode],
    edges: Sequence[FlowEdge],
    warnings: Iterable[str],
) -> NormalizedFlowMap:
    """Build a map whose derived fields come from exactly these nodes and edges.

    Args:
        project_key: Opaque project identifier, copied verbatim
        nodes: Already sorted by id
        edges: Already sorted by (from, to, relation)
        warnings: Diagnostics accumulated so far

    Returns:
        Immutable NormalizedFlowMap
    """
    roots, leaves = compute_roots_and_leaves(nodes, edges)
    return NormalizedFlowMap(
        project_key=project_key,
        nodes=tuple(nodes),
        edges=tuple(edges),
        stats=compute_stats(nodes, edges, roots, leaves),
        roots=tuple(roots),
        leaves=tuple(leaves),
        warnings=tuple(warnings),
    )
