# src/flowmap/core/inference.py
"""Kind, subtype and relation inference from raw type tags.

Upstream tags are free text ("DATASET", "RUNNABLE_RECIPE",
"RUNNABLE_IMPLICIT_RECIPE", "COMPUTABLE_FOLDER", ...), so classification
uses substring containment on the uppercased tag rather than exact match.
"""

from __future__ import annotations

from flowmap.contracts.enums import EdgeRelation, NodeKind

# Checked in order: a tag naming both RECIPE and DATASET is a recipe.
_KIND_MARKERS: tuple[tuple[str, NodeKind], ...] = (
    ("RECIPE", NodeKind.RECIPE),
    ("DATASET", NodeKind.DATASET),
    ("FOLDER", NodeKind.FOLDER),
)

IMPLICIT_SUBTYPE = "implicit"

_ARTIFACT_KINDS = frozenset({NodeKind.DATASET, NodeKind.FOLDER})

_RELATION_RANKS: dict[EdgeRelation, int] = {
    EdgeRelation.READS: 3,
    EdgeRelation.WRITES: 3,
    EdgeRelation.DEPENDS_ON: 2,
    EdgeRelation.UNKNOWN: 1,
}


def infer_kind(node_type: str | None) -> NodeKind:
    """Map a raw type tag to a node kind."""
    if not node_type:
        return NodeKind.OTHER
    upper = node_type.upper()
    for marker, kind in _KIND_MARKERS:
        if marker in upper:
            return kind
    return NodeKind.OTHER


def infer_subtype_from_type(node_type: str | None) -> str | None:
    """Synthesize a subtype for auto-generated recipes.

    Implicit recipes carry no explicit subtype upstream; the only signal
    is the IMPLICIT_RECIPE fragment in the type tag.
    """
    if not node_type:
        return None
    if "IMPLICIT_RECIPE" in node_type.upper():
        return IMPLICIT_SUBTYPE
    return None


def infer_relation(from_kind: NodeKind, to_kind: NodeKind) -> EdgeRelation:
    """Decide edge semantics from endpoint kinds.

    Recipes consume upstream artifacts (reads) and produce downstream
    ones (writes). Links touching an unclassified node are unknown;
    everything else is a plain dependency.
    """
    if from_kind in _ARTIFACT_KINDS and to_kind == NodeKind.RECIPE:
        return EdgeRelation.READS
    if from_kind == NodeKind.RECIPE and to_kind in _ARTIFACT_KINDS:
        return EdgeRelation.WRITES
    if NodeKind.OTHER in (from_kind, to_kind):
        return EdgeRelation.UNKNOWN
    return EdgeRelation.DEPENDS_ON


def relation_rank(relation: EdgeRelation) -> int:
    """Priority used only to break ties between duplicate edges."""
    return _RELATION_RANKS[relation]


def preferred_kind(current: NodeKind, incoming: NodeKind) -> NodeKind:
    """Kind-merge reducer applied on every repeated declaration.

    Any classified kind replaces OTHER; otherwise the existing kind stays,
    so the first classified declaration wins.
    """
    if current == NodeKind.OTHER:
        return incoming
    return current
