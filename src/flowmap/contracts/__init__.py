"""Shared contracts for flow-map normalization.

Re-exports the kinds, relations, output dataclasses and wire TypedDicts
so callers can import everything from ``flowmap.contracts``.
"""

from flowmap.contracts.enums import EdgeRelation, NodeKind
from flowmap.contracts.flow import (
    EMPTY_STATS,
    FlowEdge,
    FlowMapStats,
    FlowNode,
    NormalizedFlowMap,
    NormalizeOptions,
    TruncatedFlowMap,
    TruncationSummary,
)
from flowmap.contracts.types import (
    FlowEdgeDict,
    FlowMapDict,
    FlowMapResultDict,
    FlowMapStatsDict,
    FlowNodeDict,
    TruncationSummaryDict,
)

__all__ = [
    "EMPTY_STATS",
    "EdgeRelation",
    "FlowEdge",
    "FlowEdgeDict",
    "FlowMapDict",
    "FlowMapResultDict",
    "FlowMapStats",
    "FlowMapStatsDict",
    "FlowNode",
    "FlowNodeDict",
    "NodeKind",
    "NormalizeOptions",
    "NormalizedFlowMap",
    "TruncatedFlowMap",
    "TruncationSummary",
    "TruncationSummaryDict",
]
