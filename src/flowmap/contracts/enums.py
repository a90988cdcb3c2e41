"""Kinds and relations used across the flow-map boundary.

Values are the lowercase strings that appear on the wire, so a StrEnum
member can be serialized directly without a lookup table.
"""

from enum import StrEnum


class NodeKind(StrEnum):
    """Category of a node in the normalized flow map.

    Derived from the free-text type tag of a raw node by substring match.
    OTHER covers unknown tags and placeholder nodes synthesized for edge
    endpoints that were never declared.
    """

    DATASET = "dataset"
    RECIPE = "recipe"
    FOLDER = "folder"
    OTHER = "other"


class EdgeRelation(StrEnum):
    """Semantic label of an edge, derived from its endpoint kinds.

    Values:
        READS: Dataset or folder feeding a recipe
        WRITES: Recipe producing a dataset or folder
        DEPENDS_ON: Same-category link (recipe to recipe, dataset to dataset)
        UNKNOWN: At least one endpoint is of kind OTHER
    """

    READS = "reads"
    WRITES = "writes"
    DEPENDS_ON = "depends_on"
    UNKNOWN = "unknown"
