# tests/conftest.py
"""Shared test fixtures and helpers.

Raw-graph builders:
- raw_node(): one raw node in the upstream shape (type/ref/predecessors/successors)
- raw_graph(): a full raw payload with nodes and enumeration lists

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

from __future__ import annotations

import os
from typing import Any

import pytest
from hypothesis import Phase, Verbosity, settings

# =============================================================================
# Hypothesis Configuration
# =============================================================================

# CI profile: Fast tests for continuous integration
settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Disable deadline for CI (timing varies)
)

# Nightly profile: Thorough testing for scheduled runs
settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Debug profile: Minimal examples with verbose output for debugging
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Load profile from environment, default to "ci"
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


# =============================================================================
# Raw Graph Builders
# =============================================================================


def raw_node(
    node_type: str | None,
    ref: str | None = None,
    *,
    predecessors: list[Any] | None = None,
    successors: list[Any] | None = None,
    **extra: Any,
) -> dict[str, Any]:
    """Build one raw node in the upstream flow-graph shape."""
    node: dict[str, Any] = {
        "predecessors": predecessors if predecessors is not None else [],
        "successors": successors if successors is not None else [],
    }
    if node_type is not None:
        node["type"] = node_type
    if ref is not None:
        node["ref"] = ref
    node.update(extra)
    return node


def raw_graph(
    nodes: dict[str, Any] | None = None,
    *,
    datasets: list[Any] | None = None,
    recipes: list[Any] | None = None,
    folders: list[Any] | None = None,
) -> dict[str, Any]:
    """Build a raw flow-graph payload with explicit enumeration lists."""
    return {
        "nodes": nodes if nodes is not None else {},
        "datasets": datasets if datasets is not None else [],
        "recipes": recipes if recipes is not None else [],
        "folders": folders if folders is not None else [],
    }


@pytest.fixture
def chain_graph() -> dict[str, Any]:
    """ds1 -> r1 -> ds2 -> r2 -> ds3, declared out of order."""
    return raw_graph(
        {
            "r2": raw_node("RECIPE", "r2", predecessors=["ds2"], successors=["ds3"], subType="sync"),
            "ds3": raw_node("DATASET", "ds3", predecessors=["r2"]),
            "ds1": raw_node("DATASET", "ds1", successors=["r1"]),
            "r1": raw_node("RECIPE", "r1", predecessors=["ds1"], successors=["ds2"], subType="python"),
            "ds2": raw_node("DATASET", "ds2", predecessors=["r1"], successors=["r2"]),
        },
        datasets=["ds3", "ds1", "ds2"],
        recipes=["r2", "r1"],
    )


@pytest.fixture
def folder_graph() -> dict[str, Any]:
    """Download recipe -> managed folder -> implicit recipe -> dataset."""
    return raw_graph(
        {
            "fld_123": raw_node("COMPUTABLE_FOLDER", "fld_123", successors=["FilesInFolder->PROJ.tx"]),
            "FilesInFolder->PROJ.tx": raw_node(
                "RUNNABLE_IMPLICIT_RECIPE",
                "FilesInFolder->PROJ.tx",
                predecessors=["fld_123"],
                successors=["tx"],
            ),
            "download_tx": raw_node("RUNNABLE_RECIPE", "download_tx", successors=["fld_123"], subType="download"),
            "tx": raw_node("DATASET", "tx", predecessors=["FilesInFolder->PROJ.tx"]),
        },
        datasets=["tx"],
        recipes=["FilesInFolder->PROJ.tx", "download_tx"],
        folders=["fld_123"],
    )
