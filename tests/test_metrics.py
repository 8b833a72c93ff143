"""Tests for capturenet.graph.metrics — whole-network statistics.

Expected values are computed by hand from the "Harbor" network:
scores a=10 b=20 c=100 d=30(default) e=5(default) iso=40(default).
"""

from __future__ import annotations

import pytest

from capturenet.graph import metrics as metrics_module
from capturenet.graph.engine import GraphEngine
from capturenet.graph.metrics import NetworkMetrics


class TestScores:

    def test_average(self, harbor):
        # 205 / 6 = 34.17
        assert harbor.metrics.average_centralization() == 34

    def test_distribution(self, harbor):
        rows = harbor.metrics.score_distribution()
        assert [r["range"] for r in rows] == ["0-20", "20-40", "40-60", "60-80", "80-100"]
        assert [r["count"] for r in rows] == [2, 2, 1, 0, 1]
        assert rows[0]["label"] == "Highly Centralized"

    def test_rankings(self, harbor):
        assert [r["id"] for r in harbor.metrics.most_centralized(3)] == ["e", "a", "b"]
        assert [r["id"] for r in harbor.metrics.most_decentralized(3)] == ["c", "iso", "d"]

    def test_government_default_in_rankings(self, harbor):
        top = harbor.metrics.most_centralized(1)[0]
        assert top["id"] == "e"
        assert top["score"] == 5

    def test_entity_type_breakdown(self, harbor):
        rows = harbor.metrics.entity_type_breakdown()
        assert [r["type"] for r in rows] == [
            "event", "government", "stablecoin", "organization", "person", "concept",
        ]
        organization = next(r for r in rows if r["type"] == "organization")
        assert organization == {"type": "organization", "count": 2, "avg_score": 25}


class TestConnections:

    def test_connection_breakdown(self, harbor):
        rows = harbor.metrics.connection_breakdown()
        assert [(r["type"], r["count"]) for r in rows] == [
            ("ownership", 2), ("custody", 2),
            ("partnership", 1), ("regulatory", 1), ("funding", 1), ("other", 1),
            ("boardSeat", 0),
        ]
        # 1 / 8 = 12.5 rounds up
        assert rows[2]["percentage"] == 13
        assert rows[0]["percentage"] == 25

    def test_custody_concentration(self, harbor):
        custody = harbor.metrics.custody_concentration()
        assert custody.total_custody_connections == 2
        assert custody.percentage == 100
        assert custody.top_custodians[0] == {"id": "d", "name": "Delta Custody", "connections": 2}

    def test_custody_concentration_top_one(self, harbor):
        assert harbor.metrics.custody_concentration(top_n=1).percentage == 50

    def test_no_custody_edges(self, test_settings):
        result = GraphEngine(test_settings).build_from_entities([
            {"id": "x", "name": "X", "type": "person",
             "connections": [{"targetId": "y", "relationship": "partner"}]},
            {"id": "y", "name": "Y", "type": "person"},
        ])
        custody = result.metrics.custody_concentration()
        assert custody.percentage == 0
        assert custody.top_custodians == []

    def test_regulatory_capture(self, harbor):
        capture = harbor.metrics.regulatory_capture()
        assert capture.breakdown == {
            "government_entities": 1,
            "regulatory_connections": 1,
            "entities_with_gov_connections": 2,
            "weighted_score": 7,
        }
        # 7 / 150 * 10 = 0.47
        assert capture.score == 0.5

    def test_regulatory_capture_is_capped(self, harbor):
        metrics = NetworkMetrics(harbor.snapshot, harbor.graph, regulatory_ceiling=1.0)
        assert metrics.regulatory_capture().score == 10.0

    def test_inbound_government_connection_counts(self, test_settings):
        result = GraphEngine(test_settings).build_from_entities([
            {"id": "x", "name": "X", "type": "organization",
             "connections": [{"targetId": "g", "relationship": "partner"}]},
            {"id": "g", "name": "G", "type": "government"},
        ])
        assert result.metrics.regulatory_capture().breakdown["entities_with_gov_connections"] == 1

    def test_outbound_government_connection_does_not_count(self, test_settings):
        result = GraphEngine(test_settings).build_from_entities([
            {"id": "g", "name": "G", "type": "government",
             "connections": [{"targetId": "x", "relationship": "partner"}]},
            {"id": "x", "name": "X", "type": "organization"},
        ])
        breakdown = result.metrics.regulatory_capture().breakdown
        assert breakdown["entities_with_gov_connections"] == 0
        assert breakdown["weighted_score"] == 3


class TestTopology:

    def test_network_centralization(self, harbor):
        network = harbor.metrics.network_centralization()
        assert network.level == "Low"
        # 5 edges out of 15 possible
        assert network.density == 33.3
        assert network.hub_count == 0
        assert network.max_connections == 3
        assert network.average_connections == 2.0
        assert network.top_hubs[0] == {"id": "a", "name": "Alpha Coin", "connections": 3, "score": 10}

    def test_orphan_hub_reports_fallback_score(self, harbor_with_orphans):
        metrics = NetworkMetrics(
            harbor_with_orphans.snapshot, harbor_with_orphans.graph, top_n=10
        )
        hubs = {h["id"]: h for h in metrics.network_centralization().top_hubs}
        assert hubs["ghost"] == {"id": "ghost", "name": "ghost", "connections": 1, "score": 50}

    def test_hub_threshold(self, harbor):
        metrics = NetworkMetrics(harbor.snapshot, harbor.graph, hub_threshold=2)
        network = metrics.network_centralization()
        assert network.hub_count == 1
        assert network.level == "High"

    def test_empty_graph(self, test_settings):
        result = GraphEngine(test_settings).build_from_entities([])
        report = result.metrics.all_metrics()
        assert report.total_entities == 0
        assert report.avg_centralization == 0
        assert report.network_centralization.level == "Low"
        assert report.network_centralization.density == 0.0
        assert report.custody_concentration.percentage == 0


class TestAllMetrics:

    def test_report(self, harbor):
        report = harbor.metrics.all_metrics()
        assert report.total_entities == 6
        assert report.avg_centralization == 34
        assert 0 <= report.custody_concentration.percentage <= 100

    def test_memoized_per_snapshot(self, harbor):
        assert harbor.metrics.all_metrics() is harbor.metrics.all_metrics()

    def test_cached_report_refreshes_timestamp(self, harbor, monkeypatch):
        monkeypatch.setattr(metrics_module, "_utcnow", lambda: "2024-01-01T00:00:00+00:00")
        first = harbor.metrics.all_metrics()
        monkeypatch.setattr(metrics_module, "_utcnow", lambda: "2024-01-02T00:00:00+00:00")
        second = harbor.metrics.all_metrics()
        assert second is first
        assert second.last_calculated == "2024-01-02T00:00:00+00:00"

    def test_to_dict(self, harbor):
        payload = harbor.metrics.all_metrics().to_dict()
        assert payload["regulatory_capture"]["score"] == 0.5
        assert payload["network_centralization"]["top_hubs"][0]["id"] == "a"
        assert "last_calculated" in payload

    @pytest.mark.parametrize("include_orphans", [False, True])
    def test_dangling_references_do_not_crash(self, harbor_records, test_settings, include_orphans):
        result = GraphEngine(test_settings, include_orphan_nodes=include_orphans).build_from_entities(
            harbor_records
        )
        assert result.metrics.all_metrics().total_entities == 6
