"""Structural queries over the undirected projection.

Shortest path, bounded enumeration of simple paths, degree of
separation and N-hop neighborhoods. Every "nothing to report" outcome
(unknown id, unreachable target, empty graph) is a normal result state
so the visualization layer can render it without exception handling.

Neighbors are visited in lexicographic id order. When several shortest
paths exist the one returned is therefore stable across dataset
reorderings, not an accident of declaration order.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Any

import networkx as nx

from capturenet.graph.classifier import EdgeType

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------


@dataclass
class PathEdge:
    """One hop, oriented in traversal order.

    ``forward`` is True when the hop follows the declared direction of
    the underlying connection (source declared the relationship).
    """
    source: str
    target: str
    relationship: str
    edge_type: EdgeType
    forward: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "target": self.target,
            "relationship": self.relationship,
            "edge_type": self.edge_type.value,
            "forward": self.forward,
        }


@dataclass
class PathResult:
    """Path between two entities; ``found=False`` with distance -1 when none."""
    path: list[str] = field(default_factory=list)
    edges: list[PathEdge] = field(default_factory=list)
    distance: int = -1
    found: bool = False

    @classmethod
    def trivial(cls, node_id: str) -> PathResult:
        return cls(path=[node_id], edges=[], distance=0, found=True)

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": list(self.path),
            "edges": [e.to_dict() for e in self.edges],
            "distance": self.distance,
            "found": self.found,
        }


def _require_ids(*ids: Any) -> None:
    for value in ids:
        if value is None:
            raise ValueError("Entity ids must not be None")


# ---------------------------------------------------------------------------
# Query engine
# ---------------------------------------------------------------------------


class GraphQueryEngine:
    """Answer path and neighborhood questions over a projection.

    Parameters
    ----------
    graph:
        Undirected projection from :func:`capturenet.graph.projection.build_projection`.
    """

    def __init__(self, graph: nx.Graph) -> None:
        self._graph = graph
        # Sorted adjacency, built once; the projection never changes.
        self._adjacency: dict[str, list[tuple[str, PathEdge]]] = {
            node: [
                (neighbor, self._orient(node, neighbor, graph.edges[node, neighbor]))
                for neighbor in sorted(graph.adj[node])
            ]
            for node in graph.nodes
        }

    @property
    def graph(self) -> nx.Graph:
        return self._graph

    @staticmethod
    def _orient(u: str, v: str, data: dict[str, Any]) -> PathEdge:
        return PathEdge(
            source=u,
            target=v,
            relationship=data.get("relationship", ""),
            edge_type=data.get("edge_type", EdgeType.OTHER),
            forward=data.get("source", u) == u,
        )

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._adjacency

    def neighbors(self, node_id: str) -> list[tuple[str, PathEdge]]:
        """Sorted (neighbor, edge) pairs; empty for unknown ids."""
        return list(self._adjacency.get(node_id, []))

    def edges_for_path(self, path: list[str]) -> list[PathEdge]:
        """Rebuild the oriented edge list for consecutive node pairs.

        Raises ``KeyError`` if two consecutive nodes are not adjacent.
        """
        return [
            self._orient(u, v, self._graph.edges[u, v])
            for u, v in zip(path, path[1:])
        ]

    # -- Shortest path -------------------------------------------------------

    def find_shortest_path(self, start_id: str, end_id: str) -> PathResult:
        """Breadth-first search for a minimum-hop path.

        Nodes are marked visited when enqueued, so each is queued at most
        once, and the search stops the first time ``end_id`` shows up as
        a neighbor.
        """
        _require_ids(start_id, end_id)

        if start_id == end_id:
            return PathResult.trivial(start_id)

        if start_id not in self._adjacency or end_id not in self._adjacency:
            logger.debug("Shortest path %s -> %s: unknown endpoint", start_id, end_id)
            return PathResult()

        queue: deque[tuple[str, list[str], list[PathEdge]]] = deque(
            [(start_id, [start_id], [])]
        )
        visited = {start_id}

        while queue:
            node, path, edges = queue.popleft()
            for neighbor, edge in self._adjacency[node]:
                if neighbor == end_id:
                    return PathResult(
                        path=path + [neighbor],
                        edges=edges + [edge],
                        distance=len(path),
                        found=True,
                    )
                if neighbor not in visited:
                    visited.add(neighbor)
                    queue.append((neighbor, path + [neighbor], edges + [edge]))

        logger.debug("Shortest path %s -> %s: unreachable", start_id, end_id)
        return PathResult()

    # -- All simple paths ----------------------------------------------------

    def find_all_paths(
        self,
        start_id: str,
        end_id: str,
        max_length: int = 5,
    ) -> list[PathResult]:
        """Enumerate every simple path of at most ``max_length`` edges.

        Exponential in the worst case; ``max_length`` is the only bound,
        so keep it small for interactive use. Results are sorted by
        distance (stable, so equal-length paths keep discovery order).
        """
        _require_ids(start_id, end_id)

        if start_id == end_id:
            return [PathResult.trivial(start_id)]
        if max_length < 0:
            return []
        if start_id not in self._adjacency or end_id not in self._adjacency:
            return []

        results: list[PathResult] = []
        path = [start_id]
        edges: list[PathEdge] = []
        visited = {start_id}

        def dfs(current: str) -> None:
            if current == end_id:
                results.append(PathResult(
                    path=list(path),
                    edges=list(edges),
                    distance=len(edges),
                    found=True,
                ))
                return
            if len(edges) >= max_length:
                return
            for neighbor, edge in self._adjacency[current]:
                if neighbor in visited:
                    continue
                visited.add(neighbor)
                path.append(neighbor)
                edges.append(edge)
                dfs(neighbor)
                edges.pop()
                path.pop()
                visited.discard(neighbor)

        dfs(start_id)
        results.sort(key=lambda r: r.distance)
        return results

    # -- Degrees -------------------------------------------------------------

    def degrees_of_separation(self, start_id: str, end_id: str) -> int:
        """Hop count of the shortest path, or -1 if unreachable."""
        result = self.find_shortest_path(start_id, end_id)
        return result.distance if result.found else -1

    def find_entities_within_degrees(
        self,
        start_id: str,
        max_degrees: int,
    ) -> dict[str, int]:
        """Distances to every node within ``max_degrees`` hops, start included."""
        _require_ids(start_id)

        if start_id not in self._adjacency:
            return {}

        distances = {start_id: 0}
        queue: deque[str] = deque([start_id])

        while queue:
            node = queue.popleft()
            distance = distances[node]
            if distance >= max_degrees:
                continue
            for neighbor, _ in self._adjacency[node]:
                if neighbor not in distances:
                    distances[neighbor] = distance + 1
                    queue.append(neighbor)

        return distances
