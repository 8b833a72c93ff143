"""Whole-network centralization metrics.

Everything here is a pure function of the snapshot: averages, custody
concentration, the regulatory capture index, hub detection and the
histograms the dashboard renders. Datasets are small (hundreds of
entities), so each metric is computed from scratch; ``all_metrics`` is
memoized per snapshot version.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any

import networkx as nx

from capturenet.graph.classifier import ALL_EDGE_TYPES, EdgeType
from capturenet.graph.scoring import FALLBACK_SCORE, round_half_up
from capturenet.graph.store import Entity, EntitySnapshot, EntityType

logger = logging.getLogger(__name__)


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()


# Hub ratio / max-degree cut-offs for the network centralization level
HIGH_HUB_RATIO = 0.1
HIGH_MAX_DEGREE = 15
MEDIUM_HUB_RATIO = 0.05
MEDIUM_MAX_DEGREE = 10

# (min inclusive, max exclusive, label, description, color); 100 lands in the last bucket
SCORE_BUCKETS: list[tuple[int, int, str, str, str]] = [
    (0, 20, "0-20", "Highly Centralized", "#ef4444"),
    (20, 40, "20-40", "Mostly Centralized", "#f97316"),
    (40, 60, "40-60", "Mixed", "#eab308"),
    (60, 80, "60-80", "Mostly Decentralized", "#84cc16"),
    (80, 101, "80-100", "Decentralized", "#22c55e"),
]

ENTITY_TYPE_ORDER: tuple[EntityType, ...] = (
    EntityType.GOVERNMENT,
    EntityType.ORGANIZATION,
    EntityType.STABLECOIN,
    EntityType.PERSON,
    EntityType.CONCEPT,
    EntityType.EVENT,
)


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------


@dataclass
class CustodyConcentration:
    """Share of custody relationships held by the most custody-connected entities."""
    percentage: int
    top_custodians: list[dict[str, Any]]  # [{id, name, connections}]
    total_custody_connections: int


@dataclass
class RegulatoryCapture:
    score: float  # 0–10
    breakdown: dict[str, int]


@dataclass
class NetworkCentralization:
    level: str  # "High", "Medium", "Low"
    density: float  # percent, one decimal
    hub_count: int
    average_connections: float
    max_connections: int
    top_hubs: list[dict[str, Any]]  # [{id, name, connections, score}]


@dataclass
class MetricsReport:
    avg_centralization: int
    custody_concentration: CustodyConcentration
    regulatory_capture: RegulatoryCapture
    network_centralization: NetworkCentralization
    distribution: list[dict[str, Any]]
    most_centralized: list[dict[str, Any]]
    most_decentralized: list[dict[str, Any]]
    connection_breakdown: list[dict[str, Any]]
    entity_type_breakdown: list[dict[str, Any]]
    total_entities: int
    last_calculated: str = field(default_factory=_utcnow)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Metrics engine
# ---------------------------------------------------------------------------


class NetworkMetrics:
    """Compute aggregate statistics over a snapshot.

    Parameters
    ----------
    snapshot:
        The entity snapshot.
    graph:
        Undirected projection of the same snapshot, used for degree,
        density and hub metrics.
    hub_threshold:
        A node is a hub when its degree exceeds this.
    regulatory_ceiling:
        Normalization constant for the regulatory capture index. Tuned
        to the curated dataset's scale; not a theoretical maximum.
    """

    def __init__(
        self,
        snapshot: EntitySnapshot,
        graph: nx.Graph,
        hub_threshold: int = 10,
        regulatory_ceiling: float = 150.0,
        top_n: int = 5,
        top_custodians: int = 5,
        ranking_limit: int = 10,
    ) -> None:
        self._snapshot = snapshot
        self._graph = graph
        self._hub_threshold = hub_threshold
        self._regulatory_ceiling = regulatory_ceiling
        self._top_n = top_n
        self._top_custodians = top_custodians
        self._ranking_limit = ranking_limit
        self._cache: dict[str, MetricsReport] = {}

    @staticmethod
    def _ranked_entry(entity: Entity) -> dict[str, Any]:
        return {
            "id": entity.id,
            "name": entity.name,
            "type": entity.type.value,
            "score": entity.score,
            "description": entity.description,
        }

    # -- Scores --------------------------------------------------------------

    def average_centralization(self) -> int:
        """Mean decentralization score across all entities (0 when empty)."""
        if not len(self._snapshot):
            return 0
        total = sum(e.score for e in self._snapshot)
        return int(round_half_up(total / len(self._snapshot)))

    def score_distribution(self) -> list[dict[str, Any]]:
        counts = Counter()
        for entity in self._snapshot:
            for low, high, label, _, _ in SCORE_BUCKETS:
                if low <= entity.score < high:
                    counts[label] += 1
                    break
        return [
            {"range": label, "count": counts[label], "label": description, "color": color}
            for _, _, label, description, color in SCORE_BUCKETS
        ]

    def most_centralized(self, limit: int | None = None) -> list[dict[str, Any]]:
        limit = self._ranking_limit if limit is None else limit
        ranked = sorted(self._snapshot, key=lambda e: e.score)
        return [self._ranked_entry(e) for e in ranked[:max(0, limit)]]

    def most_decentralized(self, limit: int | None = None) -> list[dict[str, Any]]:
        limit = self._ranking_limit if limit is None else limit
        ranked = sorted(self._snapshot, key=lambda e: e.score, reverse=True)
        return [self._ranked_entry(e) for e in ranked[:max(0, limit)]]

    def entity_type_breakdown(self) -> list[dict[str, Any]]:
        """Count and mean score per entity type, most centralized type first."""
        rows = []
        for entity_type in ENTITY_TYPE_ORDER:
            members = self._snapshot.of_type(entity_type)
            avg = (
                int(round_half_up(sum(e.score for e in members) / len(members)))
                if members else 0
            )
            rows.append({"type": entity_type.value, "count": len(members), "avg_score": avg})
        return sorted(rows, key=lambda r: r["avg_score"])

    # -- Connections ---------------------------------------------------------

    def connection_breakdown(self) -> list[dict[str, Any]]:
        """Edge count per classified type across all declared connections."""
        counts = Counter({edge_type: 0 for edge_type in ALL_EDGE_TYPES})
        for _, conn in self._snapshot.iter_connections():
            counts[conn.edge_type] += 1

        total = sum(counts.values())
        rows = [
            {
                "type": edge_type.value,
                "count": counts[edge_type],
                "percentage": int(round_half_up(counts[edge_type] / total * 100)) if total else 0,
            }
            for edge_type in ALL_EDGE_TYPES
        ]
        return sorted(rows, key=lambda r: r["count"], reverse=True)

    def custody_concentration(self, top_n: int | None = None) -> CustodyConcentration:
        """How much of the custody web the top custodians account for.

        Every custody-classified connection counts once for its source
        and once for its target. The fewer entities dominate those
        endpoint counts, the higher the systemic risk.
        """
        top_n = self._top_custodians if top_n is None else top_n
        endpoint_counts: Counter[str] = Counter()
        total_custody = 0

        for entity, conn in self._snapshot.iter_connections():
            if conn.edge_type is not EdgeType.CUSTODY:
                continue
            total_custody += 1
            endpoint_counts[entity.id] += 1
            endpoint_counts[conn.target_id] += 1

        # most_common keeps first-seen order among ties
        top = endpoint_counts.most_common(top_n)
        all_total = sum(endpoint_counts.values())
        top_total = sum(count for _, count in top)

        return CustodyConcentration(
            percentage=int(round_half_up(top_total / all_total * 100)) if all_total else 0,
            top_custodians=[
                {"id": eid, "name": self._snapshot.name_of(eid), "connections": count}
                for eid, count in top
            ],
            total_custody_connections=total_custody,
        )

    def regulatory_capture(self) -> RegulatoryCapture:
        """Weighted 0–10 index of government entanglement.

        Weight = 3 × government entities + 2 × regulatory connections
        + 1 × distinct entities that touch a regulatory connection or
        declare a connection to a government entity. A government's own
        outbound connections do not entangle their targets.
        """
        government_ids = {e.id for e in self._snapshot.of_type(EntityType.GOVERNMENT)}
        regulatory_connections = 0
        entangled: set[str] = set()

        for entity, conn in self._snapshot.iter_connections():
            if conn.edge_type is EdgeType.REGULATORY:
                regulatory_connections += 1
                entangled.update((entity.id, conn.target_id))
            if conn.target_id in government_ids:
                entangled.add(entity.id)

        weighted = len(government_ids) * 3 + regulatory_connections * 2 + len(entangled)
        normalized = min(10.0, weighted / self._regulatory_ceiling * 10)

        return RegulatoryCapture(
            score=round_half_up(normalized, 1),
            breakdown={
                "government_entities": len(government_ids),
                "regulatory_connections": regulatory_connections,
                "entities_with_gov_connections": len(entangled),
                "weighted_score": weighted,
            },
        )

    # -- Topology ------------------------------------------------------------

    def network_centralization(self) -> NetworkCentralization:
        graph = self._graph
        n = graph.number_of_nodes()
        density = nx.density(graph)

        degrees = {node: deg for node, deg in graph.degree() if deg > 0}
        counts = list(degrees.values())
        max_connections = max(counts, default=0)
        average = sum(counts) / len(counts) if counts else 0.0
        hub_count = sum(1 for c in counts if c > self._hub_threshold)
        hub_ratio = hub_count / n if n else 0.0

        if hub_ratio > HIGH_HUB_RATIO or max_connections > HIGH_MAX_DEGREE:
            level = "High"
        elif hub_ratio > MEDIUM_HUB_RATIO or max_connections > MEDIUM_MAX_DEGREE:
            level = "Medium"
        else:
            level = "Low"

        ranked = sorted(degrees.items(), key=lambda item: item[1], reverse=True)
        top_hubs = []
        for node_id, degree in ranked[:self._top_n]:
            entity = self._snapshot.get_entity(node_id)
            top_hubs.append({
                "id": node_id,
                "name": entity.name if entity else node_id,
                "connections": degree,
                "score": entity.score if entity else FALLBACK_SCORE,
            })

        return NetworkCentralization(
            level=level,
            density=round_half_up(density * 100, 1),
            hub_count=hub_count,
            average_connections=round_half_up(average, 1),
            max_connections=max_connections,
            top_hubs=top_hubs,
        )

    # -- Summary -------------------------------------------------------------

    def all_metrics(self) -> MetricsReport:
        """Every metric in one report, memoized per snapshot version.

        A cached report is returned with ``last_calculated`` refreshed to
        the time of this call.
        """
        cached = self._cache.get(self._snapshot.version)
        if cached is not None:
            cached.last_calculated = _utcnow()
            return cached

        report = MetricsReport(
            avg_centralization=self.average_centralization(),
            custody_concentration=self.custody_concentration(),
            regulatory_capture=self.regulatory_capture(),
            network_centralization=self.network_centralization(),
            distribution=self.score_distribution(),
            most_centralized=self.most_centralized(),
            most_decentralized=self.most_decentralized(),
            connection_breakdown=self.connection_breakdown(),
            entity_type_breakdown=self.entity_type_breakdown(),
            total_entities=len(self._snapshot),
        )
        self._cache[self._snapshot.version] = report
        logger.info(
            "Metrics calculated for %d entities (snapshot %s)",
            report.total_entities, self._snapshot.version[:8],
        )
        return report
