"""Entity graph store — the immutable entity/connection snapshot.

The dataset is hand-curated: entities embed their outbound connections,
and a connection may point at an entity id that is not in the set. That
is expected, not an error. Lookups return ``None`` for unknown ids and
every consumer treats a dangling reference as a normal outcome.

Scores are always read through ``Entity.score`` so an entity without an
explicit score gets its type default, never 0.
"""

from __future__ import annotations

import hashlib
import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, Iterator

from capturenet.graph.classifier import EdgeType, coerce_edge_type
from capturenet.graph.scoring import default_score

logger = logging.getLogger(__name__)


class DatasetError(ValueError):
    """Raised when a dataset cannot be turned into a snapshot."""


class EntityType(str, Enum):
    PERSON = "person"
    ORGANIZATION = "organization"
    STABLECOIN = "stablecoin"
    GOVERNMENT = "government"
    CONCEPT = "concept"
    EVENT = "event"


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Connection:
    """Directed edge owned by its source entity."""
    target_id: str
    relationship: str
    edge_type: EdgeType
    target_name: str = ""


@dataclass(frozen=True)
class Entity:
    id: str
    name: str
    type: EntityType
    decentralization_score: int | None = None
    connections: tuple[Connection, ...] = ()
    # Opaque descriptive fields, passed through untouched
    description: str = ""
    capture_story: str = ""
    score_breakdown: dict[str, Any] = field(default_factory=dict, compare=False)
    sources: tuple[str, ...] = ()
    metadata: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def score(self) -> int:
        """Decentralization score, falling back to the type default."""
        if self.decentralization_score is None:
            return default_score(self.type.value)
        return self.decentralization_score

    @property
    def has_explicit_score(self) -> bool:
        return self.decentralization_score is not None

    def summary(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "score": self.score,
        }


@dataclass
class LoadStats:
    """Statistics from a dataset load."""

    entities_loaded: int = 0
    connections_loaded: int = 0
    orphan_references: int = 0
    duplicate_ids: int = 0
    skipped_records: int = 0
    type_counts: dict[str, int] = field(default_factory=dict)
    edge_type_counts: dict[str, int] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Snapshot
# ---------------------------------------------------------------------------


class EntitySnapshot:
    """Immutable, indexed view of the entity set.

    Built once per load and passed explicitly to every query. Several
    snapshots can coexist (tests build their own).
    """

    def __init__(self, entities: Iterable[Entity]) -> None:
        self._entities: tuple[Entity, ...] = tuple(entities)
        self._index: dict[str, Entity] = {e.id: e for e in self._entities}
        if len(self._index) != len(self._entities):
            raise DatasetError("Entity ids must be unique within a snapshot")
        self._version = _fingerprint(self._entities)

    @classmethod
    def from_dicts(cls, records: Iterable[dict[str, Any]]) -> EntitySnapshot:
        snapshot, _ = load_entities(records)
        return snapshot

    @property
    def entities(self) -> tuple[Entity, ...]:
        return self._entities

    @property
    def version(self) -> str:
        """Content hash; equal datasets give equal versions."""
        return self._version

    def get_entity(self, entity_id: str) -> Entity | None:
        return self._index.get(entity_id)

    def name_of(self, entity_id: str) -> str:
        """Display name, or the raw id for dangling references."""
        entity = self._index.get(entity_id)
        return entity.name if entity else entity_id

    def iter_connections(self) -> Iterator[tuple[Entity, Connection]]:
        """Every (source entity, connection) pair in declaration order."""
        for entity in self._entities:
            for conn in entity.connections:
                yield entity, conn

    def of_type(self, entity_type: EntityType | str) -> list[Entity]:
        wanted = EntityType(entity_type)
        return [e for e in self._entities if e.type is wanted]

    def __len__(self) -> int:
        return len(self._entities)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._index

    def __iter__(self) -> Iterator[Entity]:
        return iter(self._entities)

    def __repr__(self) -> str:
        return f"<EntitySnapshot entities={len(self)} version={self._version[:8]}>"


def _fingerprint(entities: tuple[Entity, ...]) -> str:
    digest = hashlib.sha256()
    for e in entities:
        digest.update(f"{e.id}\x1f{e.type.value}\x1f{e.score}\x1e".encode())
        for c in e.connections:
            digest.update(f"{c.target_id}\x1f{c.relationship}\x1f{c.edge_type.value}\x1e".encode())
    return digest.hexdigest()


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def _pick(record: dict[str, Any], *keys: str, default: Any = None) -> Any:
    """First present key; datasets use camelCase, Python callers snake_case."""
    for key in keys:
        if key in record and record[key] is not None:
            return record[key]
    return default


def _require_mapping(value: Any, what: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise DatasetError(f"{what} must be a mapping, got {type(value).__name__}")
    return value


def _parse_score(raw: Any, entity_id: str) -> int | None:
    if raw is None:
        return None
    try:
        score = int(raw)
    except (TypeError, ValueError):
        raise DatasetError(f"Entity {entity_id!r}: score {raw!r} is not an integer") from None
    if not 0 <= score <= 100:
        raise DatasetError(f"Entity {entity_id!r}: score {score} outside [0, 100]")
    return score


def _parse_connection(raw: Any, entity_id: str) -> Connection | None:
    raw = _require_mapping(raw, f"Entity {entity_id!r}: connection")
    target_id = _pick(raw, "targetId", "target_id", default="")
    if not target_id:
        return None
    relationship = str(_pick(raw, "relationship", default=""))
    return Connection(
        target_id=str(target_id),
        relationship=relationship,
        edge_type=coerce_edge_type(_pick(raw, "edgeType", "edge_type"), relationship),
        target_name=str(_pick(raw, "targetName", "target_name", default="")),
    )


def _parse_entity(record: Any, stats: LoadStats) -> Entity | None:
    record = _require_mapping(record, "Entity record")
    eid = record.get("id")
    if not eid:
        stats.skipped_records += 1
        return None
    eid = str(eid)

    raw_type = record.get("type", "")
    try:
        entity_type = EntityType(raw_type)
    except ValueError:
        raise DatasetError(f"Entity {eid!r}: unknown type {raw_type!r}") from None

    connections: list[Connection] = []
    for raw_conn in record.get("connections", []) or []:
        conn = _parse_connection(raw_conn, eid)
        if conn is None:
            stats.skipped_records += 1
            continue
        connections.append(conn)

    return Entity(
        id=eid,
        name=str(record.get("name") or eid),
        type=entity_type,
        decentralization_score=_parse_score(
            _pick(record, "decentralizationScore", "decentralization_score"), eid,
        ),
        connections=tuple(connections),
        description=str(record.get("description", "")),
        capture_story=str(_pick(record, "captureStory", "capture_story", default="")),
        score_breakdown=dict(_require_mapping(
            _pick(record, "scoreBreakdown", "score_breakdown", default={}),
            f"Entity {eid!r}: scoreBreakdown",
        )),
        sources=tuple(record.get("sources", []) or []),
        metadata=dict(_require_mapping(
            record.get("metadata") or {}, f"Entity {eid!r}: metadata",
        )),
    )


def load_entities(records: Iterable[dict[str, Any]]) -> tuple[EntitySnapshot, LoadStats]:
    """Convert raw entity records into a snapshot.

    Two passes: first collect entities (first occurrence of an id wins),
    then tally connections so dangling targets can be counted against
    the complete id set.
    """
    stats = LoadStats()
    entities: list[Entity] = []
    seen: set[str] = set()

    for record in records:
        entity = _parse_entity(record, stats)
        if entity is None:
            continue
        if entity.id in seen:
            stats.duplicate_ids += 1
            logger.warning("Duplicate entity id %r; keeping the first definition", entity.id)
            continue
        seen.add(entity.id)
        entities.append(entity)
        stats.entities_loaded += 1
        stats.type_counts[entity.type.value] = stats.type_counts.get(entity.type.value, 0) + 1

    for entity in entities:
        for conn in entity.connections:
            stats.connections_loaded += 1
            key = conn.edge_type.value
            stats.edge_type_counts[key] = stats.edge_type_counts.get(key, 0) + 1
            if conn.target_id not in seen:
                stats.orphan_references += 1
                logger.debug("Dangling reference %s -> %s", entity.id, conn.target_id)

    if stats.orphan_references:
        logger.warning(
            "%d connection(s) reference entities missing from the dataset",
            stats.orphan_references,
        )

    return EntitySnapshot(entities), stats


def read_dataset_file(path: str | Path) -> list[dict[str, Any]]:
    """Read entity records from a JSON or YAML file.

    Accepts either a bare list of records or ``{"entities": [...]}``.
    Unreadable or malformed files raise :class:`DatasetError`.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DatasetError(f"{path}: cannot read dataset: {exc}") from exc

    if path.suffix.lower() in (".yaml", ".yml"):
        import yaml

        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise DatasetError(f"{path}: invalid YAML: {exc}") from exc
    else:
        try:
            data = json.loads(text)
        except ValueError as exc:
            raise DatasetError(f"{path}: invalid JSON: {exc}") from exc

    if isinstance(data, dict):
        data = data.get("entities", [])
    if not isinstance(data, list):
        raise DatasetError(f"{path}: expected a list of entity records")

    logger.info("Read %d entity records from %s", len(data), path)
    return data
