# src/flowmap/contracts/flow.py
"""Output and option types for flow-map normalization.

All output types are frozen. Collections are tuples so a returned map
cannot be mutated by the caller after the builder has released it.

Leaf module - imports only from contracts.enums and contracts.types.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from flowmap.contracts.enums import EdgeRelation, NodeKind
from flowmap.contracts.types import (
    FlowEdgeDict,
    FlowMapDict,
    FlowMapStatsDict,
    FlowNodeDict,
    TruncationSummaryDict,
)


@dataclass(frozen=True, slots=True)
class FlowNode:
    """A canonical node, one per resolved id."""

    id: str
    kind: NodeKind
    name: str | None = None
    subtype: str | None = None
    connection: str | None = None

    def to_dict(self) -> FlowNodeDict:
        """Convert to wire dict, omitting absent optional attributes."""
        out: FlowNodeDict = {"id": self.id, "kind": self.kind.value}
        if self.name is not None:
            out["name"] = self.name
        if self.subtype is not None:
            out["subtype"] = self.subtype
        if self.connection is not None:
            out["connection"] = self.connection
        return out


@dataclass(frozen=True, slots=True)
class FlowEdge:
    """A directed edge between two canonical node ids."""

    from_node: str
    to_node: str
    relation: EdgeRelation

    def to_dict(self) -> FlowEdgeDict:
        return {"from": self.from_node, "to": self.to_node, "relation": self.relation.value}


@dataclass(frozen=True, slots=True)
class FlowMapStats:
    """Counts derived from a node/edge view. Never copied between views."""

    node_count: int
    edge_count: int
    datasets: int
    recipes: int
    roots: int
    leaves: int

    def to_dict(self) -> FlowMapStatsDict:
        return {
            "nodeCount": self.node_count,
            "edgeCount": self.edge_count,
            "datasets": self.datasets,
            "recipes": self.recipes,
            "roots": self.roots,
            "leaves": self.leaves,
        }


EMPTY_STATS = FlowMapStats(node_count=0, edge_count=0, datasets=0, recipes=0, roots=0, leaves=0)


@dataclass(frozen=True, slots=True)
class NormalizedFlowMap:
    """Canonical connectivity map for one project.

    Invariants:
    - nodes sorted by id, no duplicate ids
    - edges sorted by (from, to, relation), at most one edge per ordered pair
    - every edge endpoint is present in nodes
    - roots/leaves/stats derived from exactly these nodes and edges
    - warnings are append-only diagnostics
    """

    project_key: str
    nodes: tuple[FlowNode, ...] = ()
    edges: tuple[FlowEdge, ...] = ()
    stats: FlowMapStats = EMPTY_STATS
    roots: tuple[str, ...] = ()
    leaves: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()

    def node_ids(self) -> list[str]:
        """Node ids in map order."""
        return [node.id for node in self.nodes]

    def to_dict(self) -> FlowMapDict:
        """Convert to the camelCase wire shape."""
        return {
            "projectKey": self.project_key,
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
            "stats": self.stats.to_dict(),
            "roots": list(self.roots),
            "leaves": list(self.leaves),
            "warnings": list(self.warnings),
        }


@dataclass(frozen=True, slots=True)
class TruncationSummary:
    """What truncation removed. Purely derived, never persisted.

    Fields:
        truncated: True iff the node or edge count shrank
        max_nodes: Node cap applied, None when unbounded
        max_edges: Edge cap applied, None when unbounded
    """

    truncated: bool
    max_nodes: int | None
    max_edges: int | None
    node_count_before: int
    node_count_after: int
    edge_count_before: int
    edge_count_after: int

    def to_dict(self) -> TruncationSummaryDict:
        return {
            "truncated": self.truncated,
            "maxNodes": self.max_nodes,
            "maxEdges": self.max_edges,
            "nodeCountBefore": self.node_count_before,
            "nodeCountAfter": self.node_count_after,
            "edgeCountBefore": self.edge_count_before,
            "edgeCountAfter": self.edge_count_after,
        }


@dataclass(frozen=True, slots=True)
class TruncatedFlowMap:
    """Pair returned by truncate_flow_map()."""

    flow_map: NormalizedFlowMap
    truncation: TruncationSummary


@dataclass(frozen=True, slots=True)
class NormalizeOptions:
    """Auxiliary lookups for normalize_flow_graph().

    Entities listed here are known to exist even when the raw graph never
    mentions them (disconnected datasets, unused folders).

    Fields:
        folder_names_by_id: Friendly display names for managed folders
        all_dataset_names: Full dataset population
        all_recipe_names: Full recipe population
        all_folder_ids: Full managed-folder population
    """

    folder_names_by_id: Mapping[str, str] = field(default_factory=dict)
    all_dataset_names: Sequence[str] = ()
    all_recipe_names: Sequence[str] = ()
    all_folder_ids: Sequence[str] = ()
