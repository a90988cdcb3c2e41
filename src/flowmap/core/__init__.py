"""Core flow-map subsystem: normalization, truncation, configuration, logging."""

from flowmap.core.builder import NOT_AN_OBJECT_WARNING, normalize_flow_graph
from flowmap.core.canonical import (
    CANONICAL_VERSION,
    canonical_json,
    flow_map_digest,
    stable_hash,
)
from flowmap.core.config import (
    FlowMapSettings,
    LoggingSettings,
    MapLimitSettings,
    load_settings,
)
from flowmap.core.flow_map import FlowMapResult, build_flow_map
from flowmap.core.inventory import inventory_options
from flowmap.core.logging import configure_logging, get_logger
from flowmap.core.stats import assemble_flow_map, compute_roots_and_leaves
from flowmap.core.truncation import truncate_flow_map

__all__ = [
    "CANONICAL_VERSION",
    "NOT_AN_OBJECT_WARNING",
    "FlowMapResult",
    "FlowMapSettings",
    "LoggingSettings",
    "MapLimitSettings",
    "assemble_flow_map",
    "build_flow_map",
    "canonical_json",
    "compute_roots_and_leaves",
    "configure_logging",
    "flow_map_digest",
    "get_logger",
    "inventory_options",
    "load_settings",
    "normalize_flow_graph",
    "stable_hash",
    "truncate_flow_map",
]
