"""Graph engine — high-level orchestrator.

Builds the snapshot, its projection, and every analysis component over
it in one step, so callers never wire them by hand.

Usage::

    engine = GraphEngine()

    # Bundled dataset, a file, or raw records
    result = engine.build_default()
    result = engine.build_from_file("entities.json")
    result = engine.build_from_entities(records)

    # Query
    path = result.queries.find_shortest_path("usdt", "fbi")
    center = result.narrator.find_path_to_center("usdc")
    report = result.metrics.all_metrics()

    # Export
    result.exporter.to_d3_json(edge_type="custody")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable

import networkx as nx

from capturenet.config.settings import Settings, settings as default_settings
from capturenet.graph.exporters import GraphExporter
from capturenet.graph.metrics import NetworkMetrics
from capturenet.graph.narration import PathNarrator
from capturenet.graph.projection import ProjectionStats, build_projection
from capturenet.graph.queries import GraphQueryEngine
from capturenet.graph.store import EntitySnapshot, LoadStats, load_entities, read_dataset_file

logger = logging.getLogger(__name__)


@dataclass
class GraphResult:
    """Result of a graph build operation.

    Contains the snapshot, projection, analysis components and load
    stats, all wired together over the same immutable snapshot.
    """

    snapshot: EntitySnapshot
    graph: nx.Graph
    queries: GraphQueryEngine
    narrator: PathNarrator
    metrics: NetworkMetrics
    exporter: GraphExporter
    stats: LoadStats
    projection_stats: ProjectionStats

    @property
    def node_count(self) -> int:
        return self.graph.number_of_nodes()

    @property
    def edge_count(self) -> int:
        return self.graph.number_of_edges()

    def summary(self) -> dict[str, Any]:
        """Combined summary of graph shape and load stats."""
        return {
            "version": self.snapshot.version,
            "node_count": self.node_count,
            "edge_count": self.edge_count,
            "connected_components": nx.number_connected_components(self.graph)
            if self.node_count else 0,
            "load_stats": {
                "entities_loaded": self.stats.entities_loaded,
                "connections_loaded": self.stats.connections_loaded,
                "orphan_references": self.stats.orphan_references,
                "duplicate_ids": self.stats.duplicate_ids,
                "skipped_records": self.stats.skipped_records,
                "type_counts": self.stats.type_counts,
                "edge_type_counts": self.stats.edge_type_counts,
            },
            "projection": {
                "duplicate_pairs": self.projection_stats.duplicate_pairs,
                "self_loops": self.projection_stats.self_loops,
            },
        }


class GraphEngine:
    """Build analysis-ready graphs from entity datasets.

    Parameters
    ----------
    config:
        Settings to read thresholds and defaults from. Defaults to the
        process-wide settings.
    include_orphan_nodes:
        Keep dangling connection targets as placeholder nodes. Defaults
        to ``config.INCLUDE_ORPHAN_NODES``.
    """

    def __init__(
        self,
        config: Settings | None = None,
        include_orphan_nodes: bool | None = None,
    ) -> None:
        self._config = config or default_settings
        self._include_orphan_nodes = (
            self._config.INCLUDE_ORPHAN_NODES
            if include_orphan_nodes is None else include_orphan_nodes
        )

    def build_from_entities(self, records: Iterable[dict[str, Any]]) -> GraphResult:
        """Build a graph from raw entity records.

        This is the primary entry point. Records can come from the
        bundled dataset, a file, or any other source of entity dicts.
        """
        snapshot, stats = load_entities(records)
        return self.build_from_snapshot(snapshot, stats)

    def build_from_snapshot(
        self,
        snapshot: EntitySnapshot,
        stats: LoadStats | None = None,
    ) -> GraphResult:
        cfg = self._config
        graph, projection_stats = build_projection(
            snapshot, include_orphan_nodes=self._include_orphan_nodes,
        )
        queries = GraphQueryEngine(graph)

        result = GraphResult(
            snapshot=snapshot,
            graph=graph,
            queries=queries,
            narrator=PathNarrator(snapshot, queries, default_center_id=cfg.CENTER_ENTITY_ID),
            metrics=NetworkMetrics(
                snapshot,
                graph,
                hub_threshold=cfg.HUB_DEGREE_THRESHOLD,
                regulatory_ceiling=cfg.REGULATORY_CAPTURE_CEILING,
                top_n=cfg.TOP_HUBS,
                top_custodians=cfg.TOP_CUSTODIANS,
                ranking_limit=cfg.RANKING_LIMIT,
            ),
            exporter=GraphExporter(snapshot, graph),
            stats=stats or LoadStats(entities_loaded=len(snapshot)),
            projection_stats=projection_stats,
        )

        logger.info(
            "Graph built: %d nodes, %d edges (%d entities, %d orphan references)",
            result.node_count, result.edge_count,
            len(snapshot), projection_stats.orphan_references,
        )
        return result

    def build_from_file(self, path: str | Path) -> GraphResult:
        """Build a graph from a JSON or YAML dataset file."""
        return self.build_from_entities(read_dataset_file(path))

    def build_default(self) -> GraphResult:
        """Build from ``DATASET_PATH`` when set, else the bundled dataset."""
        if self._config.DATASET_PATH:
            return self.build_from_file(self._config.DATASET_PATH)

        from capturenet.data.demo_entities import get_demo_entities

        return self.build_from_entities(get_demo_entities())
