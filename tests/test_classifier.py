"""Tests for relationship classification and score helpers."""

from __future__ import annotations

import pytest

from capturenet.graph.classifier import EdgeType, classify_edge_type, coerce_edge_type
from capturenet.graph.scoring import (
    default_score,
    round_half_up,
    score_color,
    score_description,
    score_label,
)


class TestClassifyEdgeType:

    @pytest.mark.parametrize("relationship, expected", [
        ("treasury custodian", EdgeType.CUSTODY),
        ("holds their treasury", EdgeType.CUSTODY),
        ("custodies backing", EdgeType.CUSTODY),
        ("Wells notice for BUSD", EdgeType.REGULATORY),
        ("lawsuit", EdgeType.REGULATORY),
        ("direct system access", EdgeType.REGULATORY),
        ("CEO", EdgeType.BOARD_SEAT),
        ("advisory role", EdgeType.BOARD_SEAT),
        ("partner", EdgeType.PARTNERSHIP),
        ("issued by", EdgeType.OWNERSHIP),
        ("major investor", EdgeType.FUNDING),
        ("primary trading venue", EdgeType.OTHER),
    ])
    def test_known_phrasings(self, relationship, expected):
        assert classify_edge_type(relationship) is expected

    def test_rule_order_regulatory_before_partnership(self):
        assert classify_edge_type("surveillance partner") is EdgeType.REGULATORY

    def test_rule_order_partnership_before_ownership(self):
        assert classify_edge_type("co-creator") is EdgeType.PARTNERSHIP

    def test_case_insensitive(self):
        assert classify_edge_type("TREASURY CUSTODIAN") is EdgeType.CUSTODY

    @pytest.mark.parametrize("relationship", ["", "zzz", None])
    def test_unmatched_is_other(self, relationship):
        assert classify_edge_type(relationship) is EdgeType.OTHER


class TestCoerceEdgeType:

    def test_enum_passthrough(self):
        assert coerce_edge_type(EdgeType.FUNDING, "CEO") is EdgeType.FUNDING

    def test_string_value(self):
        assert coerce_edge_type("boardSeat", "partner") is EdgeType.BOARD_SEAT

    def test_missing_value_classifies(self):
        assert coerce_edge_type(None, "partner") is EdgeType.PARTNERSHIP


class TestScoring:

    def test_defaults(self):
        assert default_score("government") == 5
        assert default_score("concept") == 50
        assert default_score("nonsense") == 50

    @pytest.mark.parametrize("score, label", [
        (0, "Centralized"),
        (19, "Centralized"),
        (20, "Mostly Centralized"),
        (50, "Mixed"),
        (79, "Mostly Decentralized"),
        (100, "Decentralized"),
    ])
    def test_labels(self, score, label):
        assert score_label(score) == label

    def test_description_follows_label(self):
        assert "single points of control" in score_description(5)

    def test_color_ramp(self):
        assert score_color(0) == "hsl(0, 80%, 45%)"
        assert score_color(50) == "hsl(60, 80%, 45%)"
        assert score_color(100) == "hsl(120, 80%, 45%)"
        assert score_color(250) == "hsl(120, 80%, 45%)"

    def test_round_half_up(self):
        assert round_half_up(12.5) == 13
        assert round_half_up(2.5) == 3
        assert round_half_up(0.46667, 1) == 0.5
        assert round_half_up(-2.5) == -3
