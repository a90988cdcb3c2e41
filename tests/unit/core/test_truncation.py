# tests/unit/core/test_truncation.py
"""Tests for truncate_flow_map().

The truncated map must never carry a dangling edge and must derive its
roots, leaves and stats from the retained view only.
"""

from __future__ import annotations

from typing import Any

import pytest

from flowmap.contracts.flow import NormalizedFlowMap
from flowmap.core.builder import normalize_flow_graph
from flowmap.core.truncation import truncate_flow_map


@pytest.fixture
def chain_map(chain_graph: dict[str, Any]) -> NormalizedFlowMap:
    # nodes: ds1, ds2, ds3, r1, r2
    # edges: ds1->r1, ds2->r2, r1->ds2, r2->ds3
    return normalize_flow_graph(chain_graph, "TRUNC")


class TestUnbounded:
    def test_no_caps_keeps_everything(self, chain_map: NormalizedFlowMap) -> None:
        result = truncate_flow_map(chain_map)
        assert result.flow_map == chain_map
        assert result.truncation.truncated is False
        assert result.truncation.max_nodes is None
        assert result.truncation.max_edges is None

    def test_caps_at_or_above_size_do_not_truncate(self, chain_map: NormalizedFlowMap) -> None:
        result = truncate_flow_map(chain_map, max_nodes=5, max_edges=4)
        assert result.truncation.truncated is False
        assert result.flow_map.warnings == chain_map.warnings
        assert result.truncation.max_nodes == 5
        assert result.truncation.max_edges == 4


class TestNodeCap:
    def test_keeps_prefix_of_sorted_nodes(self, chain_map: NormalizedFlowMap) -> None:
        result = truncate_flow_map(chain_map, max_nodes=3)
        assert result.flow_map.node_ids() == ["ds1", "ds2", "ds3"]

    def test_drops_edges_with_excluded_endpoint(self, chain_map: NormalizedFlowMap) -> None:
        result = truncate_flow_map(chain_map, max_nodes=3)
        # Every edge touches a recipe, and both recipes fell outside the cutoff.
        assert result.flow_map.edges == ()
        assert result.truncation.edge_count_before == 4
        assert result.truncation.edge_count_after == 0

    def test_roots_and_leaves_recomputed(self, chain_map: NormalizedFlowMap) -> None:
        result = truncate_flow_map(chain_map, max_nodes=4)
        bounded = result.flow_map
        # ds1, ds2, ds3, r1 survive: edges ds1->r1 and r1->ds2
        assert [(e.from_node, e.to_node) for e in bounded.edges] == [("ds1", "r1"), ("r1", "ds2")]
        assert bounded.roots == ("ds1", "ds3")
        assert bounded.leaves == ("ds2", "ds3")
        assert bounded.stats.node_count == 4
        assert bounded.stats.edge_count == 2
        assert bounded.stats.datasets == 3
        assert bounded.stats.recipes == 1
        assert bounded.stats.roots == 2
        assert bounded.stats.leaves == 2


class TestEdgeCap:
    def test_keeps_prefix_of_sorted_edges(self, chain_map: NormalizedFlowMap) -> None:
        result = truncate_flow_map(chain_map, max_edges=2)
        assert [(e.from_node, e.to_node) for e in result.flow_map.edges] == [("ds1", "r1"), ("ds2", "r2")]
        assert result.flow_map.stats.node_count == 5
        assert result.truncation.truncated is True

    def test_node_that_lost_inbound_edges_becomes_root(self, chain_map: NormalizedFlowMap) -> None:
        assert "r2" not in chain_map.roots
        result = truncate_flow_map(chain_map, max_edges=1)
        # Only ds1->r1 survives.
        assert "r2" in result.flow_map.roots
        assert "ds3" in result.flow_map.roots

    def test_edge_cap_applied_after_endpoint_filter(self, chain_map: NormalizedFlowMap) -> None:
        result = truncate_flow_map(chain_map, max_nodes=4, max_edges=10)
        assert result.truncation.edge_count_after == 2


class TestSummaryAndWarnings:
    def test_summary_counts(self, chain_map: NormalizedFlowMap) -> None:
        summary = truncate_flow_map(chain_map, max_nodes=4, max_edges=1).truncation
        assert summary.truncated is True
        assert summary.max_nodes == 4
        assert summary.max_edges == 1
        assert summary.node_count_before == 5
        assert summary.node_count_after == 4
        assert summary.edge_count_before == 4
        assert summary.edge_count_after == 1

    def test_warning_appended_when_truncated(self, chain_map: NormalizedFlowMap) -> None:
        result = truncate_flow_map(chain_map, max_nodes=4, max_edges=1)
        assert result.flow_map.warnings[-1] == "Flow map truncated (nodes 4/5, edges 1/4)."
        assert result.flow_map.warnings[:-1] == chain_map.warnings

    def test_existing_warnings_preserved(self) -> None:
        flow_map = normalize_flow_graph({"nodes": {"bad": 1}, "datasets": ["a", "b"]}, "P")
        result = truncate_flow_map(flow_map, max_nodes=1)
        assert result.flow_map.warnings == (
            'Skipped node "bad" because it was not an object.',
            "Flow map truncated (nodes 1/2, edges 0/0).",
        )

    def test_original_map_untouched(self, chain_map: NormalizedFlowMap) -> None:
        before = chain_map.to_dict()
        truncate_flow_map(chain_map, max_nodes=1, max_edges=1)
        assert chain_map.to_dict() == before

    def test_project_key_carried(self, chain_map: NormalizedFlowMap) -> None:
        assert truncate_flow_map(chain_map, max_nodes=1).flow_map.project_key == "TRUNC"


class TestInvalidCaps:
    @pytest.mark.parametrize(("max_nodes", "max_edges"), [(0, None), (None, 0), (-1, 5)])
    def test_caps_below_one_rejected(self, chain_map: NormalizedFlowMap, max_nodes: int | None, max_edges: int | None) -> None:
        with pytest.raises(ValueError, match="must be >= 1"):
            truncate_flow_map(chain_map, max_nodes=max_nodes, max_edges=max_edges)
