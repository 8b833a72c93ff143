"""Graph API — entity lookup, path queries and network metrics over HTTP.

Endpoints:
    GET /api/health                              Status and entity count
    GET /api/entities                            List entities
    GET /api/entities/{id}                       One entity
    GET /api/entities/{id}/neighborhood          Entities within N hops
    GET /api/paths/shortest                      Shortest path between two ids
    GET /api/paths/all                           All simple paths up to a length
    GET /api/paths/center/{id}                   Narrated path to the reference node
    GET /api/paths/degrees                       Degrees of separation
    GET /api/metrics                             Whole-network metrics
    GET /api/graph                               D3 graph data

Unknown or unreachable ids on the path endpoints are normal answers
(``found: false``), not errors. Only the single-entity lookup 404s.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from capturenet import __version__
from capturenet.config.settings import settings
from capturenet.graph.classifier import EdgeType
from capturenet.graph.engine import GraphResult
from capturenet.graph.scoring import score_description, score_label
from capturenet.graph.store import EntityType

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["graph"])


def get_graph(request: Request) -> GraphResult:
    return request.app.state.graph


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------

@router.get("/health")
async def health(graph: GraphResult = Depends(get_graph)) -> dict[str, Any]:
    return {
        "status": "ok",
        "version": __version__,
        "entities": len(graph.snapshot),
        "snapshot": graph.snapshot.version,
    }


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------

@router.get("/entities")
async def list_entities(
    type: Optional[EntityType] = Query(None, description="Filter by entity type"),
    graph: GraphResult = Depends(get_graph),
) -> list[dict[str, Any]]:
    entities = graph.snapshot.of_type(type) if type else graph.snapshot.entities
    return [e.summary() for e in entities]


@router.get("/entities/{entity_id}")
async def get_entity(entity_id: str, graph: GraphResult = Depends(get_graph)) -> dict[str, Any]:
    entity = graph.snapshot.get_entity(entity_id)
    if entity is None:
        raise HTTPException(status_code=404, detail=f"Entity not found: {entity_id}")

    return {
        **entity.summary(),
        "score_label": score_label(entity.score),
        "score_description": score_description(entity.score),
        "explicit_score": entity.has_explicit_score,
        "description": entity.description,
        "capture_story": entity.capture_story,
        "score_breakdown": entity.score_breakdown,
        "sources": list(entity.sources),
        "metadata": entity.metadata,
        "connections": [
            {
                "target_id": c.target_id,
                "target_name": graph.snapshot.name_of(c.target_id),
                "relationship": c.relationship,
                "edge_type": c.edge_type.value,
                "resolved": c.target_id in graph.snapshot,
            }
            for c in entity.connections
        ],
    }


@router.get("/entities/{entity_id}/neighborhood")
async def neighborhood(
    entity_id: str,
    max_degrees: int = Query(2, ge=0, le=settings.MAX_PATH_LENGTH_LIMIT),
    graph: GraphResult = Depends(get_graph),
) -> dict[str, Any]:
    within = graph.queries.find_entities_within_degrees(entity_id, max_degrees)
    return {
        "entity_id": entity_id,
        "max_degrees": max_degrees,
        "entities": [
            {"id": node_id, "name": graph.snapshot.name_of(node_id), "degrees": hops}
            for node_id, hops in sorted(within.items(), key=lambda item: (item[1], item[0]))
        ],
    }


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

@router.get("/paths/shortest")
async def shortest_path(
    start: str = Query(..., description="Start entity id"),
    end: str = Query(..., description="End entity id"),
    graph: GraphResult = Depends(get_graph),
) -> dict[str, Any]:
    return graph.queries.find_shortest_path(start, end).to_dict()


@router.get("/paths/all")
async def all_paths(
    start: str = Query(..., description="Start entity id"),
    end: str = Query(..., description="End entity id"),
    max_length: int = Query(
        settings.DEFAULT_MAX_PATH_LENGTH, ge=0, le=settings.MAX_PATH_LENGTH_LIMIT,
    ),
    graph: GraphResult = Depends(get_graph),
) -> dict[str, Any]:
    paths = graph.queries.find_all_paths(start, end, max_length=max_length)
    return {
        "start": start,
        "end": end,
        "max_length": max_length,
        "count": len(paths),
        "paths": [p.to_dict() for p in paths],
    }


@router.get("/paths/center/{entity_id}")
async def path_to_center(
    entity_id: str,
    center: Optional[str] = Query(None, description="Reference entity id"),
    graph: GraphResult = Depends(get_graph),
) -> dict[str, Any]:
    return graph.narrator.find_path_to_center(entity_id, center).to_dict()


@router.get("/paths/degrees")
async def degrees_of_separation(
    start: str = Query(...),
    end: str = Query(...),
    graph: GraphResult = Depends(get_graph),
) -> dict[str, Any]:
    degrees = graph.queries.degrees_of_separation(start, end)
    return {"start": start, "end": end, "degrees": degrees, "found": degrees >= 0}


# ---------------------------------------------------------------------------
# Metrics and graph data
# ---------------------------------------------------------------------------

@router.get("/metrics")
async def metrics(graph: GraphResult = Depends(get_graph)) -> dict[str, Any]:
    return graph.metrics.all_metrics().to_dict()


@router.get("/graph")
async def graph_data(
    edge_type: Optional[EdgeType] = Query(None, description="Keep only this edge type"),
    graph: GraphResult = Depends(get_graph),
) -> dict[str, Any]:
    return graph.exporter.to_d3_json(edge_type=edge_type)
