"""Tests for capturenet.graph.store — dataset loading and the snapshot."""

from __future__ import annotations

import json

import pytest

from capturenet.graph.classifier import EdgeType
from capturenet.graph.store import (
    DatasetError,
    EntitySnapshot,
    EntityType,
    load_entities,
    read_dataset_file,
)


class TestLoadEntities:

    def test_loads_all_records(self, harbor_records):
        snapshot, stats = load_entities(harbor_records)
        assert len(snapshot) == 6
        assert stats.entities_loaded == 6
        assert stats.connections_loaded == 8
        assert stats.type_counts["organization"] == 2

    def test_counts_dangling_references(self, harbor_records):
        _, stats = load_entities(harbor_records)
        assert stats.orphan_references == 1

    @pytest.mark.parametrize("records", [
        ["not a record"],
        [{"id": "x", "type": "person", "connections": ["y"]}],
        [{"id": "x", "type": "person", "scoreBreakdown": [1, 2]}],
        [{"id": "x", "type": "person", "metadata": "notes"}],
    ])
    def test_malformed_records_raise(self, records):
        with pytest.raises(DatasetError):
            load_entities(records)

    def test_classifies_connections(self, harbor_records):
        snapshot, stats = load_entities(harbor_records)
        a = snapshot.get_entity("a")
        assert [c.edge_type for c in a.connections] == [EdgeType.OWNERSHIP, EdgeType.CUSTODY]
        assert stats.edge_type_counts["custody"] == 2

    def test_explicit_edge_type_wins(self):
        snapshot, _ = load_entities([
            {"id": "x", "name": "X", "type": "organization",
             "connections": [{"targetId": "y", "relationship": "partner", "edgeType": "funding"}]},
        ])
        assert snapshot.get_entity("x").connections[0].edge_type is EdgeType.FUNDING

    def test_invalid_edge_type_falls_back_to_classifier(self):
        snapshot, _ = load_entities([
            {"id": "x", "name": "X", "type": "organization",
             "connections": [{"targetId": "y", "relationship": "partner", "edgeType": "bogus"}]},
        ])
        assert snapshot.get_entity("x").connections[0].edge_type is EdgeType.PARTNERSHIP

    def test_snake_case_keys(self):
        snapshot, _ = load_entities([
            {"id": "x", "name": "X", "type": "person", "decentralization_score": 70,
             "capture_story": "story",
             "connections": [{"target_id": "y", "relationship": "CEO"}]},
        ])
        x = snapshot.get_entity("x")
        assert x.score == 70
        assert x.capture_story == "story"
        assert x.connections[0].target_id == "y"
        assert x.connections[0].edge_type is EdgeType.BOARD_SEAT

    def test_duplicate_ids_keep_first(self):
        snapshot, stats = load_entities([
            {"id": "x", "name": "First", "type": "person"},
            {"id": "x", "name": "Second", "type": "person"},
        ])
        assert len(snapshot) == 1
        assert snapshot.get_entity("x").name == "First"
        assert stats.duplicate_ids == 1

    def test_skips_records_without_id(self):
        snapshot, stats = load_entities([
            {"name": "Nameless", "type": "person"},
            {"id": "x", "name": "X", "type": "person",
             "connections": [{"relationship": "no target"}]},
        ])
        assert len(snapshot) == 1
        assert snapshot.get_entity("x").connections == ()
        assert stats.skipped_records == 2

    def test_unknown_type_raises(self):
        with pytest.raises(DatasetError, match="unknown type"):
            load_entities([{"id": "x", "name": "X", "type": "spaceship"}])

    @pytest.mark.parametrize("score", [-1, 101, "high"])
    def test_bad_score_raises(self, score):
        with pytest.raises(DatasetError):
            load_entities([{"id": "x", "name": "X", "type": "person", "decentralizationScore": score}])

    def test_dataset_error_is_value_error(self):
        assert issubclass(DatasetError, ValueError)


class TestEntitySnapshot:

    def test_default_scores_by_type(self, harbor_records):
        snapshot = EntitySnapshot.from_dicts(harbor_records)
        assert snapshot.get_entity("e").score == 5
        assert snapshot.get_entity("d").score == 30
        assert snapshot.get_entity("iso").score == 40
        assert not snapshot.get_entity("e").has_explicit_score
        assert snapshot.get_entity("a").has_explicit_score

    def test_lookup(self, harbor_records):
        snapshot = EntitySnapshot.from_dicts(harbor_records)
        assert "a" in snapshot
        assert "ghost" not in snapshot
        assert snapshot.get_entity("ghost") is None
        assert snapshot.name_of("a") == "Alpha Coin"
        assert snapshot.name_of("ghost") == "ghost"

    def test_of_type(self, harbor_records):
        snapshot = EntitySnapshot.from_dicts(harbor_records)
        assert [e.id for e in snapshot.of_type("organization")] == ["b", "d"]
        assert [e.id for e in snapshot.of_type(EntityType.GOVERNMENT)] == ["e"]

    def test_iter_connections_in_declaration_order(self, harbor_records):
        snapshot = EntitySnapshot.from_dicts(harbor_records)
        pairs = [(e.id, c.target_id) for e, c in snapshot.iter_connections()]
        assert pairs[:3] == [("a", "b"), ("a", "d"), ("b", "c")]
        assert len(pairs) == 8

    def test_version_is_content_hash(self, harbor_records):
        first = EntitySnapshot.from_dicts(harbor_records)
        second = EntitySnapshot.from_dicts(harbor_records)
        assert first.version == second.version

        harbor_records[0]["decentralizationScore"] = 11
        changed = EntitySnapshot.from_dicts(harbor_records)
        assert changed.version != first.version

    def test_direct_construction_rejects_duplicates(self, harbor_records):
        snapshot = EntitySnapshot.from_dicts(harbor_records)
        a = snapshot.get_entity("a")
        with pytest.raises(DatasetError):
            EntitySnapshot([a, a])


class TestReadDatasetFile:

    def test_json_list(self, tmp_path, harbor_records):
        path = tmp_path / "entities.json"
        path.write_text(json.dumps(harbor_records))
        assert read_dataset_file(path) == harbor_records

    def test_json_wrapped(self, tmp_path, harbor_records):
        path = tmp_path / "entities.json"
        path.write_text(json.dumps({"entities": harbor_records}))
        assert len(read_dataset_file(path)) == 6

    def test_yaml(self, tmp_path):
        path = tmp_path / "entities.yaml"
        path.write_text(
            "entities:\n"
            "  - id: x\n"
            "    name: X\n"
            "    type: person\n"
            "    connections:\n"
            "      - targetId: y\n"
            "        relationship: founder\n"
        )
        records = read_dataset_file(path)
        assert records[0]["connections"][0]["targetId"] == "y"

    def test_not_a_list_raises(self, tmp_path):
        path = tmp_path / "entities.json"
        path.write_text(json.dumps("just a string"))
        with pytest.raises(DatasetError):
            read_dataset_file(path)

    @pytest.mark.parametrize("name, text", [
        ("entities.json", "{not json"),
        ("entities.yaml", "a: [1, 2"),
    ])
    def test_malformed_file_raises(self, tmp_path, name, text):
        path = tmp_path / name
        path.write_text(text)
        with pytest.raises(DatasetError):
            read_dataset_file(path)

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(DatasetError):
            read_dataset_file(tmp_path / "missing.json")
