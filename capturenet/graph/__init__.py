"""capturenet graph analysis engine.

Builds an undirected NetworkX projection over a snapshot of scored
entities and answers relationship questions about it: shortest and
bounded paths, neighborhoods, the route to the reference node with a
trust distance, and whole-network centralization metrics.

Usage::

    from capturenet.graph import GraphEngine

    result = GraphEngine().build_default()

    path = result.queries.find_shortest_path("usdt", "fbi")
    center = result.narrator.find_path_to_center("usdc")
    report = result.metrics.all_metrics()
"""

from capturenet.graph.classifier import EdgeType, classify_edge_type
from capturenet.graph.engine import GraphEngine, GraphResult
from capturenet.graph.exporters import GraphExporter
from capturenet.graph.metrics import NetworkMetrics
from capturenet.graph.narration import PathNarrator
from capturenet.graph.queries import GraphQueryEngine
from capturenet.graph.store import DatasetError, EntitySnapshot

__all__ = [
    "GraphEngine",
    "GraphResult",
    "GraphQueryEngine",
    "PathNarrator",
    "NetworkMetrics",
    "GraphExporter",
    "EntitySnapshot",
    "DatasetError",
    "EdgeType",
    "classify_edge_type",
]
