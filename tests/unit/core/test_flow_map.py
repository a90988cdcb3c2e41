"""Tests for build_flow_map() orchestration."""

from __future__ import annotations

from typing import Any

import pytest

from flowmap.core.config import MapLimitSettings
from flowmap.core.flow_map import build_flow_map
from tests.conftest import raw_graph, raw_node


def _wide_graph(count: int) -> dict[str, Any]:
    """count isolated datasets named ds000..."""
    return raw_graph(datasets=[f"ds{i:03d}" for i in range(count)])


class TestBuildFlowMap:
    def test_default_caps_applied(self) -> None:
        result = build_flow_map(_wide_graph(305), "WIDE")
        assert result.truncation.max_nodes == 300
        assert result.truncation.max_edges == 600
        assert result.truncation.truncated is True
        assert result.flow_map.stats.node_count == 300

    def test_explicit_caps_override_defaults(self) -> None:
        result = build_flow_map(_wide_graph(10), "WIDE", max_nodes=4)
        assert result.truncation.max_nodes == 4
        assert result.truncation.max_edges == 600
        assert result.flow_map.node_ids() == ["ds000", "ds001", "ds002", "ds003"]

    def test_unbounded_limits(self) -> None:
        result = build_flow_map(_wide_graph(305), "WIDE", limits=MapLimitSettings(max_nodes=None, max_edges=None))
        assert result.truncation.truncated is False
        assert result.truncation.max_nodes is None
        assert result.flow_map.stats.node_count == 305

    def test_listings_feed_inventory(self) -> None:
        result = build_flow_map(
            raw_graph({"r": raw_node("RECIPE", "r", successors=["fld_1"])}),
            "INV",
            folders=[{"id": "fld_1", "name": "Landing"}],
            datasets=[{"name": "ds_orphan"}],
            recipes=[{"name": "r_orphan"}],
        )
        ids = result.flow_map.node_ids()
        assert ids == ["ds_orphan", "fld_1", "r", "r_orphan"]
        folder = result.flow_map.nodes[1]
        assert folder.name == "Landing"
        assert [(e.from_node, e.to_node, e.relation.value) for e in result.flow_map.edges] == [("r", "fld_1", "writes")]
        assert result.flow_map.warnings == ()

    def test_failed_listings_tolerated(self) -> None:
        result = build_flow_map(raw_graph(datasets=["a"]), "P", folders=None, datasets=None, recipes=None)
        assert result.flow_map.node_ids() == ["a"]

    def test_raw_omitted_by_default(self) -> None:
        result = build_flow_map(raw_graph(datasets=["a"]), "P")
        assert result.includes_raw is False
        assert "raw" not in result.to_dict()["map"]

    def test_raw_included_on_request(self) -> None:
        raw = raw_graph(datasets=["a"])
        result = build_flow_map(raw, "P", include_raw=True)
        assert result.includes_raw is True
        payload = result.to_dict()
        assert payload["map"]["raw"] is raw
        assert payload["truncation"]["truncated"] is False

    def test_raw_included_even_when_none(self) -> None:
        result = build_flow_map(None, "P", include_raw=True)
        assert result.includes_raw is True
        assert result.to_dict()["map"]["raw"] is None
        assert result.flow_map.warnings == ("Flow graph response was not an object.",)

    def test_invalid_explicit_cap(self) -> None:
        with pytest.raises(ValueError):
            build_flow_map(_wide_graph(3), "P", max_edges=0)
