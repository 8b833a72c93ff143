"""Template explanations for connections between entities.

Two tables, both evaluated in order with the first match winning:

1. ``RELATIONSHIP_TEMPLATES``: specific phrasings ("issued by",
   "treasury custodian", "can freeze") that deserve their own sentence.
2. ``EDGE_TYPE_TEMPLATES``: one template per edge type, always
   present, so every call produces some sentence.
"""

from __future__ import annotations

import re
from typing import Callable, Sequence

from capturenet.graph.classifier import EdgeType
from capturenet.graph.store import Entity

Template = Callable[[str, str, str], str]


def _regulatory(source: str, target: str, relationship: str) -> str:
    rel = relationship.lower()
    if any(word in rel for word in ("lawsuit", "sue", "investigation")):
        return (
            f"{source} has taken regulatory action against {target}, demonstrating "
            f"government power over the crypto ecosystem."
        )
    if "sanction" in rel or "fine" in rel:
        return (
            f"{source} has sanctioned or fined {target}, showing how traditional "
            f"regulatory frameworks apply to crypto entities."
        )
    return (
        f"{source} has regulatory authority over {target}, meaning government rules "
        f"and enforcement directly affect {target}'s operations."
    )


def _board_seat(source: str, target: str, relationship: str) -> str:
    rel = relationship.lower()
    if any(word in rel for word in ("ceo", "founder", "chairman")):
        return (
            f"{source} holds a leadership position at {target}, giving direct control "
            f"over strategic decisions and company direction."
        )
    if "board" in rel or "director" in rel:
        return (
            f"{source} serves on the board of {target}, participating in governance "
            f"and major corporate decisions."
        )
    return (
        f"{source} has an executive or advisory relationship with {target}, "
        f"providing influence over operations."
    )


EDGE_TYPE_TEMPLATES: dict[EdgeType, Template] = {
    EdgeType.CUSTODY: lambda s, t, _: (
        f"{s} holds assets for {t}, meaning {s} physically controls what {t} owns. "
        f"This creates counterparty risk and a single point of failure."
    ),
    EdgeType.OWNERSHIP: lambda s, t, _: (
        f"{s} owns or controls {t}, giving it direct authority over operations, "
        f"strategy, and decision-making."
    ),
    EdgeType.PARTNERSHIP: lambda s, t, _: (
        f"{s} and {t} have a formal partnership, aligning their interests and "
        f"creating mutual dependencies in the ecosystem."
    ),
    EdgeType.REGULATORY: _regulatory,
    EdgeType.FUNDING: lambda s, t, _: (
        f"{s} has provided funding or investment to {t}, creating financial ties "
        f"and potential influence over {t}'s direction."
    ),
    EdgeType.BOARD_SEAT: _board_seat,
    EdgeType.OTHER: lambda s, t, rel: (
        f"{s} {rel} {t}. This connection links them within the broader financial ecosystem."
    ),
}


RELATIONSHIP_TEMPLATES: list[tuple[re.Pattern[str], Template]] = [
    (re.compile(r"issued?\s*by", re.I), lambda s, t, _: (
        f"{t} issues {s}, making them the sole authority over minting, burning, "
        f"and blacklisting operations."
    )),
    (re.compile(r"issues?(?:\s+for)?", re.I), lambda s, t, _: (
        f"{s} issues {t}, controlling all creation and destruction of the token."
    )),
    (re.compile(r"direct\s*(?:system\s*)?access", re.I), lambda s, t, _: (
        f"{s} has direct system access to {t}, allowing real-time surveillance "
        f"and intervention capabilities."
    )),
    (re.compile(r"surveillance\s*partner", re.I), lambda s, t, _: (
        f"{s} provides surveillance capabilities for {t}, tracking and monitoring "
        f"all transactions."
    )),
    (re.compile(r"treasury\s*custodian", re.I), lambda s, t, _: (
        f"{s} holds {t}'s treasury reserves, meaning a single institution controls "
        f"the backing assets."
    )),
    (re.compile(r"primary\s*(?:trading\s*)?venue", re.I), lambda s, t, _: (
        f"{s} is the primary trading venue for {t}, concentrating liquidity and "
        f"creating exchange dependency."
    )),
    (re.compile(r"co-?creat(?:or|ed)", re.I), lambda s, t, _: (
        f"{s} co-created {t}, making them a founding stakeholder with significant "
        f"influence over the project."
    )),
    (re.compile(r"central\s*node", re.I), lambda s, t, _: (
        f"{s} is a central node in {t}, representing a key point of concentration "
        f"and influence."
    )),
    (re.compile(r"core\s*member", re.I), lambda s, t, _: (
        f"{s} is a core member of {t}, playing a fundamental role in its structure "
        f"and operations."
    )),
    (re.compile(r"threatened\s*by", re.I), lambda s, t, _: (
        f"{s} is directly threatened by {t}, which undermines its core principles "
        f"and purpose."
    )),
    (re.compile(r"enables?", re.I), lambda s, t, _: (
        f"{s} enables {t}, providing essential infrastructure or capability for "
        f"its operation."
    )),
    (re.compile(r"can\s*freeze", re.I), lambda s, t, _: (
        f"{s} can freeze or blacklist addresses on {t}, demonstrating programmable "
        f"control over user funds."
    )),
    (re.compile(r"reporting\s*pipeline", re.I), lambda s, t, _: (
        f"{s} has a direct reporting pipeline to {t}, sharing transaction data "
        f"with authorities."
    )),
]


def explain_names(source: str, target: str, relationship: str, edge_type: EdgeType) -> str:
    for pattern, template in RELATIONSHIP_TEMPLATES:
        if pattern.search(relationship):
            return template(source, target, relationship)
    return EDGE_TYPE_TEMPLATES[edge_type](source, target, relationship)


def explain(source: Entity, target: Entity, relationship: str, edge_type: EdgeType) -> str:
    """Natural-language sentence(s) describing one connection. Never fails."""
    return explain_names(source.name, target.name, relationship, edge_type)


def explain_unresolved(
    source_id: str,
    target_id: str,
    relationship: str,
    edge_type: EdgeType,
) -> str:
    """Explanation for a hop whose endpoint is missing from the dataset."""
    return (
        f"{source_id} is linked to {target_id} through a {edge_type.value} "
        f"relationship ({relationship or 'unspecified'})."
    )


def first_sentence(text: str) -> str:
    """Trim an explanation to its first sentence for compact step lists."""
    head = re.split(r"\.\s", text, maxsplit=1)[0]
    return head + "." if len(head) < len(text) else text


def describe_path(
    path_entities: Sequence[Entity],
    path_edges: Sequence[tuple[str, EdgeType]],
) -> str:
    """Step-by-step walkthrough of a path.

    ``path_edges`` holds ``(relationship, edge_type)`` for each hop.
    """
    if len(path_entities) < 2:
        return "No path to display."

    start, end = path_entities[0], path_entities[-1]
    parts = [f"Starting from {start.name}"]
    for i, (relationship, edge_type) in enumerate(path_edges):
        parts.append(
            f"{path_entities[i].name} connects to {path_entities[i + 1].name} through "
            f"a {edge_type.value} relationship ({relationship})"
        )
    hops = len(path_edges)
    parts.append(f"reaching {end.name} in {hops} hop{'s' if hops != 1 else ''}.")
    return ". ".join(parts)
