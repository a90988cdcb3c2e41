"""
flowmap: Canonical connectivity maps from loosely typed pipeline graphs.

Normalizes third-party flow-graph payloads (aliased node keys, undeclared
edge endpoints, side inventories) into a deterministic node/edge map and
bounds it for transport without leaving dangling edges.
"""

__version__ = "0.1.0"
