"""Shared synthetic datasets.

"Harbor" is a six-entity network small enough to reason about by hand:

    Eagle Agency (gov) ── direct system access ──► Alpha Coin (10)
    Alpha Coin ── issued by ──► Beta Corp (20) ── partner ──► Core Protocol (100)
    Alpha Coin ── treasury custodian ──► Delta Custody (30) ── custodies backing ──► Core Protocol
    Delta Custody ── major client ──► ghost            (dangling)
    Beta Corp ── issues ──► Alpha Coin                  (duplicate pair)
    Core Protocol ── references itself ──► Core Protocol (self-loop)
    Island Person                                       (isolated)
"""

from __future__ import annotations

import pytest

from capturenet.config.settings import Settings
from capturenet.graph.engine import GraphEngine, GraphResult


def _entity(eid: str, name: str, etype: str, score: int | None = None, *connections) -> dict:
    """Helper to build entity records concisely."""
    record = {
        "id": eid,
        "name": name,
        "type": etype,
        "description": f"{name} description.",
        "connections": list(connections),
    }
    if score is not None:
        record["decentralizationScore"] = score
    return record


def _conn(target_id: str, relationship: str, **extra) -> dict:
    return {"targetId": target_id, "relationship": relationship, **extra}


@pytest.fixture
def harbor_records() -> list[dict]:
    return [
        _entity("a", "Alpha Coin", "stablecoin", 10,
                _conn("b", "issued by"),
                _conn("d", "treasury custodian")),
        _entity("b", "Beta Corp", "organization", 20,
                _conn("c", "partner"),
                _conn("a", "issues")),
        _entity("c", "Core Protocol", "concept", 100,
                _conn("c", "references itself")),
        _entity("d", "Delta Custody", "organization", None,
                _conn("c", "custodies backing"),
                _conn("ghost", "major client", targetName="Ghost Fund")),
        _entity("e", "Eagle Agency", "government", None,
                _conn("a", "direct system access")),
        _entity("iso", "Island Person", "person"),
    ]


@pytest.fixture
def test_settings() -> Settings:
    return Settings(_env_file=None, CENTER_ENTITY_ID="c")


@pytest.fixture
def harbor(harbor_records, test_settings) -> GraphResult:
    return GraphEngine(test_settings).build_from_entities(harbor_records)


@pytest.fixture
def harbor_with_orphans(harbor_records, test_settings) -> GraphResult:
    return GraphEngine(test_settings, include_orphan_nodes=True).build_from_entities(
        harbor_records
    )
