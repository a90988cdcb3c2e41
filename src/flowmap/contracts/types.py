"""TypedDict definitions for the serialized flow-map payloads.

At runtime these are plain dicts and serialize identically via
json.dumps(). They pin the camelCase wire names handed to presentation
and transport collaborators.

Design decisions:
  - ``total=False`` + ``Required[]`` where optional node attributes are
    omitted rather than emitted as null
  - Functional TypedDict form for ``FlowEdgeDict`` (``"from"`` is a Python keyword)
"""

from typing import Any, NotRequired, Required, TypedDict


class FlowNodeDict(TypedDict, total=False):
    """A node in the normalized map."""

    id: Required[str]
    kind: Required[str]
    name: str
    subtype: str
    connection: str


# Functional form because "from" is a Python keyword
FlowEdgeDict = TypedDict(
    "FlowEdgeDict",
    {
        "from": str,
        "to": str,
        "relation": str,
    },
)


class FlowMapStatsDict(TypedDict):
    """Summary counts derived from the node and edge view."""

    nodeCount: int
    edgeCount: int
    datasets: int
    recipes: int
    roots: int
    leaves: int


class FlowMapDict(TypedDict):
    """Return shape of ``NormalizedFlowMap.to_dict``."""

    projectKey: str
    nodes: list[FlowNodeDict]
    edges: list[FlowEdgeDict]
    stats: FlowMapStatsDict
    roots: list[str]
    leaves: list[str]
    warnings: list[str]
    raw: NotRequired[Any]


class TruncationSummaryDict(TypedDict):
    """Return shape of ``TruncationSummary.to_dict``."""

    truncated: bool
    maxNodes: int | None
    maxEdges: int | None
    nodeCountBefore: int
    nodeCountAfter: int
    edgeCountBefore: int
    edgeCountAfter: int


class FlowMapResultDict(TypedDict):
    """Combined map and truncation payload."""

    map: FlowMapDict
    truncation: TruncationSummaryDict
