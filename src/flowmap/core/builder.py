# src/flowmap/core/builder.py
"""Flow-map construction from a raw pipeline graph.

The raw graph is third-party data the caller cannot control. Construction
therefore never raises: malformed sub-structures are skipped or patched
with placeholders and reported through the map's warnings.

Two passes over working tables owned by one _FlowGraphBuilder:
1. Declarations - raw nodes, enumeration lists and folder names populate
   the node table and the alias table.
2. Edges - adjacency references are resolved through the alias table;
   endpoints that were never declared get an OTHER placeholder via
   get_or_create().
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from flowmap.contracts.enums import NodeKind
from flowmap.contracts.flow import FlowNode, NormalizedFlowMap, NormalizeOptions
from flowmap.core.edges import EdgeSet
from flowmap.core.guards import MISSING, as_record, as_string, as_string_array
from flowmap.core.inference import (
    infer_kind,
    infer_relation,
    infer_subtype_from_type,
    preferred_kind,
)
from flowmap.core.stats import assemble_flow_map

NOT_AN_OBJECT_WARNING = "Flow graph response was not an object."


@dataclass
class _WorkingNode:
    """Mutable node record, private to one build."""

    id: str
    kind: NodeKind
    name: str | None = None
    subtype: str | None = None
    connection: str | None = None
    predecessors: list[str] = field(default_factory=list)
    successors: list[str] = field(default_factory=list)

    def merge(self, kind: NodeKind, name: str | None, subtype: str | None, connection: str | None) -> None:
        """Apply a repeated declaration: first non-empty attribute wins."""
        self.kind = preferred_kind(self.kind, kind)
        if not self.name and name:
            self.name = name
        if not self.subtype and subtype:
            self.subtype = subtype
        if not self.connection and connection:
            self.connection = connection

    def freeze(self) -> FlowNode:
        return FlowNode(
            id=self.id,
            kind=self.kind,
            name=self.name,
            subtype=self.subtype,
            connection=self.connection,
        )


def _connection_of(record: Mapping[str, Any]) -> str | None:
    direct = as_string(record.get("connection"))
    if direct:
        return direct
    params = as_record(record.get("params"))
    if params is None:
        return None
    return as_string(params.get("connection"))


def _merge_unique(*lists: Iterable[Any] | None) -> list[str]:
    """Union of string lists, first-seen order, empties dropped."""
    seen: dict[str, None] = {}
    for items in lists:
        if items is None:
            continue
        for item in items:
            text = as_string(item)
            if text:
                seen[text] = None
    return list(seen)


class _FlowGraphBuilder:
    """Working state for a single normalize_flow_graph() call."""

    def __init__(self, options: NormalizeOptions) -> None:
        self._options = options
        self._nodes: dict[str, _WorkingNode] = {}
        self._aliases: dict[str, str] = {}
        self.warnings: list[str] = []

    # --- node table -------------------------------------------------------

    def upsert(
        self,
        node_id: str,
        kind: NodeKind,
        *,
        name: str | None = None,
        subtype: str | None = None,
        connection: str | None = None,
    ) -> _WorkingNode:
        existing = self._nodes.get(node_id)
        if existing is None:
            node = _WorkingNode(id=node_id, kind=kind, name=name, subtype=subtype, connection=connection)
            self._nodes[node_id] = node
            return node
        existing.merge(kind, name, subtype, connection)
        return existing

    def get_or_create(self, node_id: str) -> _WorkingNode:
        """Return the node for node_id, inserting an OTHER placeholder if unseen."""
        existing = self._nodes.get(node_id)
        if existing is not None:
            return existing
        placeholder = _WorkingNode(id=node_id, kind=NodeKind.OTHER, name=node_id)
        self._nodes[node_id] = placeholder
        self.warnings.append(f'Added placeholder node for "{node_id}" referenced by an edge.')
        return placeholder

    def add_alias(self, alias: str | None, node_id: str) -> None:
        if alias:
            self._aliases[alias] = node_id

    def resolve(self, reference: str) -> str:
        return self._aliases.get(reference, reference)

    def folder_name(self, folder_id: str) -> str | None:
        names = self._options.folder_names_by_id
        if not names:
            return None
        return as_string(names.get(folder_id))

    # --- pass 1: declarations ---------------------------------------------

    def add_raw_nodes(self, raw_nodes: Any) -> None:
        if raw_nodes is MISSING:
            return
        entries = as_record(raw_nodes)
        if entries is None:
            self.warnings.append('Skipped "nodes" because it was not an object.')
            return

        for node_key, node_value in entries.items():
            key = str(node_key)
            record = as_record(node_value)
            if record is None:
                self.warnings.append(f'Skipped node "{key}" because it was not an object.')
                continue
            self._add_raw_node(key, record)

    def _add_raw_node(self, key: str, record: Mapping[str, Any]) -> None:
        ref = as_string(record.get("ref"))
        node_id = ref or key
        node_type = as_string(record.get("type"))
        kind = infer_kind(node_type)
        subtype = (
            as_string(record.get("subType"))
            or as_string(record.get("subtype"))
            or infer_subtype_from_type(node_type)
        )
        fallback_name = as_string(record.get("name")) or as_string(record.get("label")) or node_id
        friendly_name = self.folder_name(node_id) if kind == NodeKind.FOLDER else None

        node = self.upsert(
            node_id,
            kind,
            name=friendly_name or fallback_name,
            subtype=subtype,
            connection=_connection_of(record),
        )

        self.add_alias(key, node_id)
        self.add_alias(ref, node_id)
        self.add_alias(as_string(record.get("id")), node_id)

        # A later declaration resolving to the same id replaces these lists.
        node.predecessors = as_string_array(record.get("predecessors", MISSING), self.warnings, f"nodes.{key}.predecessors")
        node.successors = as_string_array(record.get("successors", MISSING), self.warnings, f"nodes.{key}.successors")

    def add_inventory(self, root: Mapping[str, Any]) -> None:
        """Ensure every enumerated dataset, recipe and folder has a node."""
        options = self._options
        datasets = _merge_unique(
            as_string_array(root.get("datasets", MISSING), self.warnings, "datasets"),
            options.all_dataset_names,
        )
        for dataset in datasets:
            self.upsert(dataset, NodeKind.DATASET, name=dataset)
            self.add_alias(dataset, dataset)

        recipes = _merge_unique(
            as_string_array(root.get("recipes", MISSING), self.warnings, "recipes"),
            options.all_recipe_names,
        )
        for recipe in recipes:
            self.upsert(recipe, NodeKind.RECIPE, name=recipe)
            self.add_alias(recipe, recipe)

        folders = _merge_unique(
            as_string_array(root.get("folders", MISSING), self.warnings, "folders"),
            options.all_folder_ids,
        )
        for folder in folders:
            self.upsert(folder, NodeKind.FOLDER, name=self.folder_name(folder) or folder)
            self.add_alias(folder, folder)

    def apply_folder_names(self) -> None:
        """Rename folders still showing their raw id once a friendly name is known."""
        for node_id, node in self._nodes.items():
            if node.kind != NodeKind.FOLDER:
                continue
            friendly = self.folder_name(node_id)
            if friendly and (not node.name or node.name == node_id):
                node.name = friendly

    # --- pass 2: edges ----------------------------------------------------

    def build_edges(self) -> EdgeSet:
        edges = EdgeSet()
        # Snapshot: get_or_create() may insert placeholders while we walk.
        for node in list(self._nodes.values()):
            for predecessor in node.predecessors:
                self._add_edge(edges, predecessor, node.id)
            for successor in node.successors:
                self._add_edge(edges, node.id, successor)
        return edges

    def _add_edge(self, edges: EdgeSet, from_ref: str, to_ref: str) -> None:
        from_node = self.get_or_create(self.resolve(from_ref))
        to_node = self.get_or_create(self.resolve(to_ref))
        edges.add(from_node.id, to_node.id, infer_relation(from_node.kind, to_node.kind))

    def sorted_nodes(self) -> list[FlowNode]:
        return [self._nodes[node_id].freeze() for node_id in sorted(self._nodes)]


def normalize_flow_graph(
    raw: Any,
    project_key: str,
    options: NormalizeOptions | None = None,
) -> NormalizedFlowMap:
    """Normalize a raw flow graph into a canonical connectivity map.

    Pure function of its inputs: identical input yields an identical map,
    including node, edge, root and leaf order.

    Args:
        raw: Parsed JSON, expected shape
            ``{nodes: {key: RawNode}, datasets: [...], recipes: [...], folders: [...]}``
        project_key: Opaque project identifier, copied verbatim
        options: Folder display names and full entity populations

    Returns:
        NormalizedFlowMap. Malformed input is reported in ``warnings``;
        a non-object ``raw`` yields an empty map with a single warning.
    """
    root = as_record(raw)
    if root is None:
        return NormalizedFlowMap(project_key=project_key, warnings=(NOT_AN_OBJECT_WARNING,))

    builder = _FlowGraphBuilder(options or NormalizeOptions())
    builder.add_raw_nodes(root.get("nodes", MISSING))
    builder.add_inventory(root)
    builder.apply_folder_names()
    edges = builder.build_edges()

    return assemble_flow_map(project_key, builder.sorted_nodes(), edges.sorted_edges(), builder.warnings)
