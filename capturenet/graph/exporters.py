"""Graph export for the visualization layer and spreadsheets.

Supported formats:
  - D3 JSON: nodes/links for the force-directed network view, optionally
    filtered to a single edge type
  - Cytoscape JSON: elements array for Cytoscape.js
  - CSV: node and edge tables

Nodes carry their decentralization score and a red → green color so
the front end does not recompute either.
"""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import Any

import networkx as nx

from capturenet.graph.classifier import EDGE_COLORS, EdgeType
from capturenet.graph.scoring import score_color
from capturenet.graph.store import EntitySnapshot

logger = logging.getLogger(__name__)

ORPHAN_COLOR = "#CCCCCC"


class GraphExporter:
    """Export the projection in front-end and tabular formats.

    Parameters
    ----------
    snapshot:
        Entity snapshot (names, types, scores).
    graph:
        Undirected projection of the same snapshot.
    """

    def __init__(self, snapshot: EntitySnapshot, graph: nx.Graph) -> None:
        self._snapshot = snapshot
        self._graph = graph

    def _node_payload(self, node_id: str, data: dict[str, Any]) -> dict[str, Any]:
        score = data.get("score")
        entity = self._snapshot.get_entity(node_id)
        return {
            "id": node_id,
            "name": data.get("name", node_id),
            "type": data.get("type", "unknown"),
            "description": entity.description if entity else "",
            "score": score,
            "connections": self._graph.degree(node_id),
            "color": score_color(score) if score is not None else ORPHAN_COLOR,
            "orphan": bool(data.get("orphan", False)),
        }

    # -- D3 JSON -------------------------------------------------------------

    def to_d3_json(self, edge_type: EdgeType | str | None = None) -> dict[str, Any]:
        """Export nodes and links for a D3 force layout.

        With ``edge_type`` set, only links of that type are kept, along
        with the nodes they touch.
        """
        wanted = EdgeType(edge_type) if edge_type else None

        links = []
        touched: set[str] = set()
        for _, _, data in self._graph.edges(data=True):
            if wanted is not None and data["edge_type"] is not wanted:
                continue
            links.append({
                "source": data["source"],
                "target": data["target"],
                "relationship": data["relationship"],
                "edge_type": data["edge_type"].value,
                "color": EDGE_COLORS[data["edge_type"]],
            })
            touched.update((data["source"], data["target"]))

        nodes = [
            self._node_payload(node_id, data)
            for node_id, data in self._graph.nodes(data=True)
            if wanted is None or node_id in touched
        ]

        return {"nodes": nodes, "links": links}

    # -- Cytoscape JSON ------------------------------------------------------

    def to_cytoscape_json(self) -> dict[str, Any]:
        """Export to Cytoscape.js JSON format."""
        elements: list[dict[str, Any]] = []

        for node_id, data in self._graph.nodes(data=True):
            payload = self._node_payload(node_id, data)
            payload["label"] = payload.pop("name")
            elements.append({"data": payload, "group": "nodes"})

        for edge_id, (_, _, data) in enumerate(self._graph.edges(data=True)):
            elements.append({
                "data": {
                    "id": f"e{edge_id}",
                    "source": data["source"],
                    "target": data["target"],
                    "label": data["relationship"],
                    "edge_type": data["edge_type"].value,
                },
                "group": "edges",
            })

        return {"elements": elements}

    # -- CSV -----------------------------------------------------------------

    def to_csv_nodes(self) -> str:
        """Export node table as CSV string."""
        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow(["id", "name", "type", "score", "connections"])

        for node_id, data in self._graph.nodes(data=True):
            writer.writerow([
                node_id,
                data.get("name", ""),
                data.get("type", ""),
                "" if data.get("score") is None else data["score"],
                self._graph.degree(node_id),
            ])

        return output.getvalue()

    def to_csv_edges(self) -> str:
        """Export edge table as CSV string, in declared direction."""
        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow(["source_id", "target_id", "relationship", "edge_type"])

        for _, _, data in self._graph.edges(data=True):
            writer.writerow([
                data["source"],
                data["target"],
                data["relationship"],
                data["edge_type"].value,
            ])

        return output.getvalue()

    def to_csv_files(self, directory: str | Path) -> tuple[Path, Path]:
        """Write node and edge CSV files to a directory."""
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)

        nodes_path = directory / "nodes.csv"
        edges_path = directory / "edges.csv"

        nodes_path.write_text(self.to_csv_nodes())
        edges_path.write_text(self.to_csv_edges())

        logger.info("Exported CSV to %s (nodes + edges)", directory)
        return nodes_path, edges_path
