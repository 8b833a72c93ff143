"""Snapshot → undirected NetworkX projection.

Every directed connection A → B becomes one undirected edge {A, B}.
Centralization-risk paths are symmetric: if A controls B, that is just
as much a path from B toward A. The declared direction is kept as edge
metadata (``source`` / ``target``) so callers can still tell "issued by"
from "issues".

When several connections join the same pair, the first declared one
(entity order, then connection order) defines the edge. Endpoints are
always plain id strings here; nothing downstream needs to normalize.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import networkx as nx

from capturenet.graph.store import EntitySnapshot

logger = logging.getLogger(__name__)


@dataclass
class ProjectionStats:
    nodes: int = 0
    edges: int = 0
    duplicate_pairs: int = 0
    self_loops: int = 0
    orphan_references: int = 0


def build_projection(
    snapshot: EntitySnapshot,
    include_orphan_nodes: bool = False,
) -> tuple[nx.Graph, ProjectionStats]:
    """Fold the snapshot into an undirected simple graph.

    Parameters
    ----------
    snapshot:
        The entity snapshot to project.
    include_orphan_nodes:
        Create placeholder nodes (``orphan=True``) for connection targets
        missing from the snapshot. Off by default: dangling references
        are left out of traversal entirely.
    """
    graph = nx.Graph()
    stats = ProjectionStats()

    # Pass 1: nodes, in declaration order
    for entity in snapshot:
        graph.add_node(
            entity.id,
            name=entity.name,
            type=entity.type.value,
            score=entity.score,
            orphan=False,
        )

    # Pass 2: edges
    for entity, conn in snapshot.iter_connections():
        source_id, target_id = entity.id, conn.target_id

        if source_id == target_id:
            stats.self_loops += 1
            continue

        if target_id not in graph:
            stats.orphan_references += 1
            if not include_orphan_nodes:
                continue
            graph.add_node(
                target_id,
                name=conn.target_name or target_id,
                type="unknown",
                score=None,
                orphan=True,
            )

        if graph.has_edge(source_id, target_id):
            stats.duplicate_pairs += 1
            continue

        graph.add_edge(
            source_id,
            target_id,
            source=source_id,
            target=target_id,
            relationship=conn.relationship,
            edge_type=conn.edge_type,
        )

    stats.nodes = graph.number_of_nodes()
    stats.edges = graph.number_of_edges()

    logger.debug(
        "Projection built: %d nodes, %d edges (%d duplicate pairs, %d orphan refs)",
        stats.nodes, stats.edges, stats.duplicate_pairs, stats.orphan_references,
    )
    return graph, stats
