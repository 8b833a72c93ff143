"""Path-to-center narration.

Turns a raw shortest path from an entity to the reference node (the
maximally decentralized benchmark, Bitcoin Protocol in the bundled
dataset) into something a reader can follow: one sentence per hop, an
end-to-end narrative, and a trust distance.

Trust distance is the plain mean of each path entity's centralization
penalty ``(100 - score) / 100``, scaled to 0–100. It is not weighted by
edge type or hop position: a custody hop and a partnership hop through
the same entities cost the same.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

from capturenet.graph.explanations import explain, explain_unresolved, first_sentence
from capturenet.graph.queries import GraphQueryEngine, PathEdge, PathResult
from capturenet.graph.scoring import round_half_up
from capturenet.graph.store import Entity, EntitySnapshot

logger = logging.getLogger(__name__)

HIGH_TRUST_DISTANCE = 70
MODERATE_TRUST_DISTANCE = 40


@dataclass
class HopExplanation:
    source_id: str
    target_id: str
    source_name: str
    target_name: str
    relationship: str
    edge_type: str
    explanation: str  # first sentence
    detail: str  # full text
    resolved: bool = True

    def to_dict(self) -> dict[str, Any]:
        return dict(self.__dict__)


@dataclass
class PathToCenterResult:
    start_id: str
    center_id: str
    path: PathResult
    hop_explanations: list[HopExplanation] = field(default_factory=list)
    narrative: str = ""
    trust_distance: int = 0

    @property
    def found(self) -> bool:
        return self.path.found

    @property
    def distance(self) -> int:
        return self.path.distance

    def to_dict(self) -> dict[str, Any]:
        return {
            "start_id": self.start_id,
            "center_id": self.center_id,
            **self.path.to_dict(),
            "hop_explanations": [h.to_dict() for h in self.hop_explanations],
            "narrative": self.narrative,
            "trust_distance": self.trust_distance,
        }


def calculate_trust_distance(path_entities: Sequence[Entity]) -> int:
    """Mean centralization penalty along a path, 0 (decentralized) – 100.

    Integer arithmetic on ``100 - score`` keeps exact halves exact. Any
    centralization at all reports at least 1, so 0 is reserved for paths
    made entirely of score-100 entities.
    """
    if not path_entities:
        return 0
    total_penalty = sum(100 - e.score for e in path_entities)
    if total_penalty == 0:
        return 0
    return max(1, int(round_half_up(total_penalty / len(path_entities))))


def centralization_verdict(trust_distance: int) -> str:
    if trust_distance > HIGH_TRUST_DISTANCE:
        return (
            "This path runs through highly centralized entities, implying "
            "significant trust requirements."
        )
    if trust_distance > MODERATE_TRUST_DISTANCE:
        return "This path shows moderate centralization along the way."
    return "This path is relatively decentralized."


class PathNarrator:
    """Explain how an entity connects to the reference node.

    Parameters
    ----------
    snapshot:
        Entity snapshot used to resolve names and scores.
    queries:
        Query engine over the same snapshot's projection.
    default_center_id:
        Reference node used when a call does not name one.
    """

    def __init__(
        self,
        snapshot: EntitySnapshot,
        queries: GraphQueryEngine,
        default_center_id: str = "bitcoin-protocol",
    ) -> None:
        self._snapshot = snapshot
        self._queries = queries
        self._default_center_id = default_center_id

    def find_path_to_center(
        self,
        start_id: str,
        center_id: str | None = None,
    ) -> PathToCenterResult:
        center_id = center_id or self._default_center_id
        path = self._queries.find_shortest_path(start_id, center_id)

        if not path.found:
            return PathToCenterResult(
                start_id=start_id,
                center_id=center_id,
                path=path,
                narrative=(
                    f"No path found from {self._snapshot.name_of(start_id)} "
                    f"to {self._snapshot.name_of(center_id)}."
                ),
            )

        hops = [self._explain_hop(edge) for edge in path.edges]
        resolved = [e for e in map(self._snapshot.get_entity, path.path) if e is not None]
        if len(resolved) < len(path.path):
            logger.warning(
                "Path %s -> %s passes through %d unresolved entities",
                start_id, center_id, len(path.path) - len(resolved),
            )
        trust_distance = calculate_trust_distance(resolved)

        return PathToCenterResult(
            start_id=start_id,
            center_id=center_id,
            path=path,
            hop_explanations=hops,
            narrative=self._narrative(path, trust_distance),
            trust_distance=trust_distance,
        )

    def _explain_hop(self, edge: PathEdge) -> HopExplanation:
        source = self._snapshot.get_entity(edge.source)
        target = self._snapshot.get_entity(edge.target)

        if source is None or target is None:
            detail = explain_unresolved(edge.source, edge.target, edge.relationship, edge.edge_type)
        elif edge.forward:
            detail = explain(source, target, edge.relationship, edge.edge_type)
        else:
            # Templates read in the declared direction of the relationship
            detail = explain(target, source, edge.relationship, edge.edge_type)

        return HopExplanation(
            source_id=edge.source,
            target_id=edge.target,
            source_name=source.name if source else edge.source,
            target_name=target.name if target else edge.target,
            relationship=edge.relationship,
            edge_type=edge.edge_type.value,
            explanation=first_sentence(detail),
            detail=detail,
            resolved=source is not None and target is not None,
        )

    def _narrative(self, path: PathResult, trust_distance: int) -> str:
        names = [self._snapshot.name_of(node_id) for node_id in path.path]
        start, center = names[0], names[-1]

        if path.distance == 0:
            opening = f"{start} is the reference entity itself; no hops are needed."
        else:
            plural = "s" if path.distance != 1 else ""
            opening = f"{start} reaches {center} in {path.distance} hop{plural}."

        if path.distance == 1:
            route = f"It is a direct connection to {center}."
        elif path.distance > 1:
            route = f"The path passes through {', '.join(names[1:-1])}."
        else:
            route = ""

        parts = [opening, route, centralization_verdict(trust_distance)]
        return " ".join(p for p in parts if p)
