"""Tests for graph export and the GraphEngine facade.

Tests cover:
  - D3 JSON (full and filtered by edge type), Cytoscape JSON, CSV
  - GraphEngine builds from records, files, the bundled dataset and DATASET_PATH
  - The bundled dataset's reference node is reachable
"""

from __future__ import annotations

import csv
import io
import json

import pytest

from capturenet.config.settings import Settings
from capturenet.graph.engine import GraphEngine
from capturenet.graph.exporters import ORPHAN_COLOR
from capturenet.graph.store import DatasetError


# ---------------------------------------------------------------------------
# Exporters
# ---------------------------------------------------------------------------


class TestD3Export:

    def test_full_graph(self, harbor):
        data = harbor.exporter.to_d3_json()
        assert len(data["nodes"]) == 6
        assert len(data["links"]) == 5

    def test_node_payload(self, harbor):
        nodes = {n["id"]: n for n in harbor.exporter.to_d3_json()["nodes"]}
        assert nodes["a"] == {
            "id": "a",
            "name": "Alpha Coin",
            "type": "stablecoin",
            "description": "Alpha Coin description.",
            "score": 10,
            "connections": 3,
            "color": "hsl(12, 80%, 45%)",
            "orphan": False,
        }
        assert nodes["c"]["color"] == "hsl(120, 80%, 45%)"

    def test_links_keep_declared_direction(self, harbor):
        links = harbor.exporter.to_d3_json()["links"]
        ab = next(l for l in links if {l["source"], l["target"]} == {"a", "b"})
        assert (ab["source"], ab["target"]) == ("a", "b")
        assert ab["edge_type"] == "ownership"
        assert ab["color"].startswith("#")

    def test_filter_by_edge_type(self, harbor):
        data = harbor.exporter.to_d3_json(edge_type="custody")
        assert {(l["source"], l["target"]) for l in data["links"]} == {("a", "d"), ("d", "c")}
        assert sorted(n["id"] for n in data["nodes"]) == ["a", "c", "d"]

    def test_filter_with_no_matches(self, harbor):
        data = harbor.exporter.to_d3_json(edge_type="boardSeat")
        assert data == {"nodes": [], "links": []}

    def test_unknown_edge_type_raises(self, harbor):
        with pytest.raises(ValueError):
            harbor.exporter.to_d3_json(edge_type="bogus")

    def test_orphan_node_payload(self, harbor_with_orphans):
        nodes = {n["id"]: n for n in harbor_with_orphans.exporter.to_d3_json()["nodes"]}
        assert nodes["ghost"]["orphan"] is True
        assert nodes["ghost"]["score"] is None
        assert nodes["ghost"]["color"] == ORPHAN_COLOR


class TestOtherExports:

    def test_cytoscape(self, harbor):
        elements = harbor.exporter.to_cytoscape_json()["elements"]
        nodes = [e for e in elements if e["group"] == "nodes"]
        edges = [e for e in elements if e["group"] == "edges"]
        assert len(nodes) == 6
        assert len(edges) == 5
        assert nodes[0]["data"]["label"] == "Alpha Coin"
        assert edges[0]["data"]["id"] == "e0"

    def test_csv_nodes(self, harbor_with_orphans):
        rows = list(csv.reader(io.StringIO(harbor_with_orphans.exporter.to_csv_nodes())))
        assert rows[0] == ["id", "name", "type", "score", "connections"]
        assert len(rows) == 8
        ghost = next(r for r in rows if r[0] == "ghost")
        assert ghost[3] == ""

    def test_csv_edges(self, harbor):
        rows = list(csv.reader(io.StringIO(harbor.exporter.to_csv_edges())))
        assert rows[0] == ["source_id", "target_id", "relationship", "edge_type"]
        assert ["a", "b", "issued by", "ownership"] in rows
        assert len(rows) == 6

    def test_csv_files(self, harbor, tmp_path):
        nodes_path, edges_path = harbor.exporter.to_csv_files(tmp_path / "out")
        assert nodes_path.exists()
        assert edges_path.read_text().startswith("source_id,target_id")


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


class TestGraphEngine:

    def test_summary(self, harbor):
        summary = harbor.summary()
        assert summary["node_count"] == 6
        assert summary["edge_count"] == 5
        assert summary["connected_components"] == 2
        assert summary["load_stats"]["orphan_references"] == 1
        assert summary["projection"] == {"duplicate_pairs": 1, "self_loops": 1}
        assert summary["version"] == harbor.snapshot.version

    def test_components_share_snapshot(self, harbor):
        assert harbor.queries.graph is harbor.graph
        assert harbor.narrator.find_path_to_center("a").found

    def test_build_from_file(self, harbor_records, test_settings, tmp_path):
        path = tmp_path / "entities.json"
        path.write_text(json.dumps({"entities": harbor_records}))
        result = GraphEngine(test_settings).build_from_file(path)
        assert result.node_count == 6

    def test_build_default_uses_dataset_path(self, harbor_records, tmp_path):
        path = tmp_path / "entities.json"
        path.write_text(json.dumps(harbor_records))
        config = Settings(_env_file=None, DATASET_PATH=str(path))
        assert len(GraphEngine(config).build_default().snapshot) == 6

    def test_build_from_bad_file_raises(self, test_settings, tmp_path):
        path = tmp_path / "entities.json"
        path.write_text(json.dumps([{"id": "x", "name": "X", "type": "martian"}]))
        with pytest.raises(DatasetError):
            GraphEngine(test_settings).build_from_file(path)

    def test_orphan_option_overrides_config(self, harbor_records):
        config = Settings(_env_file=None, INCLUDE_ORPHAN_NODES=True)
        assert "ghost" in GraphEngine(config).build_from_entities(harbor_records).graph
        assert "ghost" not in GraphEngine(config, include_orphan_nodes=False).build_from_entities(
            harbor_records
        ).graph


class TestBundledDataset:

    @pytest.fixture
    def bundled(self):
        return GraphEngine(Settings(_env_file=None)).build_default()

    def test_loads(self, bundled):
        assert len(bundled.snapshot) > 20
        assert "bitcoin-protocol" in bundled.snapshot
        assert bundled.stats.orphan_references > 0

    def test_reference_node_reachable(self, bundled):
        result = bundled.narrator.find_path_to_center("usdt")
        assert result.found
        assert result.center_id == "bitcoin-protocol"
        assert 0 < result.trust_distance <= 100

    def test_government_defaults(self, bundled):
        assert bundled.snapshot.get_entity("fbi").score == 5

    def test_get_demo_entities_returns_copy(self):
        from capturenet.data.demo_entities import get_demo_entities

        records = get_demo_entities()
        records[0]["name"] = "changed"
        assert get_demo_entities()[0]["name"] != "changed"
