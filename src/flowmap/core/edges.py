# src/flowmap/core/edges.py
"""Edge deduplication keyed on the ordered (from, to) pair."""

from __future__ import annotations

from flowmap.contracts.enums import EdgeRelation
from flowmap.contracts.flow import FlowEdge
from flowmap.core.inference import relation_rank


def edge_sort_key(edge: FlowEdge) -> tuple[str, str, str]:
    """Canonical edge order: from, then to, then relation."""
    return (edge.from_node, edge.to_node, edge.relation.value)


class EdgeSet:
    """Collects edges, keeping at most one per ordered node pair.

    When two edges share (from, to) but disagree on relation, the one with
    the higher relation_rank() is kept. Equal ranks keep the first seen.
    """

    def __init__(self) -> None:
        self._edges: dict[tuple[str, str], FlowEdge] = {}

    def __len__(self) -> int:
        return len(self._edges)

    def add(self, from_node: str, to_node: str, relation: EdgeRelation) -> None:
        key = (from_node, to_node)
        existing = self._edges.get(key)
        if existing is None or relation_rank(relation) > relation_rank(existing.relation):
            self._edges[key] = FlowEdge(from_node=from_node, to_node=to_node, relation=relation)

    def sorted_edges(self) -> list[FlowEdge]:
        return sorted(self._edges.values(), key=edge_sort_key)
