"""Relationship text → categorical edge type.

Connections in the dataset carry free-text relationship descriptions
("treasury custodian", "Wells notice for BUSD", "co-creator"). Analysis
needs a small closed vocabulary instead, so each description is matched
against an ordered rule table. The first matching rule wins and
``EdgeType.OTHER`` is the catch-all, so classification never fails.

Rule order is part of the contract: "surveillance partner" is regulatory
because the regulatory rule is checked before the partnership rule, and
"co-creator" is a partnership because that rule precedes ownership.
"""

from __future__ import annotations

import re
from enum import Enum


class EdgeType(str, Enum):
    OWNERSHIP = "ownership"
    PARTNERSHIP = "partnership"
    REGULATORY = "regulatory"
    FUNDING = "funding"
    BOARD_SEAT = "boardSeat"
    CUSTODY = "custody"
    OTHER = "other"


ALL_EDGE_TYPES: tuple[EdgeType, ...] = tuple(EdgeType)

EDGE_LABELS: dict[EdgeType, str] = {
    EdgeType.OWNERSHIP: "Ownership",
    EdgeType.PARTNERSHIP: "Partnership",
    EdgeType.REGULATORY: "Regulatory",
    EdgeType.FUNDING: "Funding",
    EdgeType.BOARD_SEAT: "Board/Executive",
    EdgeType.CUSTODY: "Custody",
    EdgeType.OTHER: "Other",
}

EDGE_COLORS: dict[EdgeType, str] = {
    EdgeType.OWNERSHIP: "#ef4444",
    EdgeType.PARTNERSHIP: "#22c55e",
    EdgeType.REGULATORY: "#eab308",
    EdgeType.FUNDING: "#3b82f6",
    EdgeType.BOARD_SEAT: "#a855f7",
    EdgeType.CUSTODY: "#f97316",
    EdgeType.OTHER: "#6b7280",
}


# Evaluated top to bottom; first match wins.
CLASSIFICATION_RULES: list[tuple[EdgeType, re.Pattern[str]]] = [
    (EdgeType.CUSTODY, re.compile(
        r"custod|holds?\s+(?:their\s+)?(?:treasury|reserves|assets)|backing\s+reserves",
        re.IGNORECASE,
    )),
    (EdgeType.REGULATORY, re.compile(
        r"regulat|sanction|lawsuit|\bsued?\b|investigat|wells\s+notice|enforcement"
        r"|complian|complied|testif|reporting|surveillance|freez|froze|blacklist"
        r"|oversight|licen[cs]|killed\s+it|forced|system\s+access|onboarded",
        re.IGNORECASE,
    )),
    (EdgeType.BOARD_SEAT, re.compile(
        r"\b(?:ceo|cfo|cto|coo)\b|founder|chair|board|director|executive|president"
        r"|secretary|comptroller|chief|czar|officer|nominee|appointed|cabinet|advis",
        re.IGNORECASE,
    )),
    (EdgeType.PARTNERSHIP, re.compile(
        r"co-?creat|partner|works\s+with|colleague|associate|intertwined|coordinates"
        r"|alliance|consortium|joint",
        re.IGNORECASE,
    )),
    (EdgeType.OWNERSHIP, re.compile(
        r"\bowns?\b|owned|ownership|\bissue[ds]?\b|issuer|subsidiar|parent|acquir"
        r"|\bcontrols?\b|trading\s+arm|branded|creator|shareholder",
        re.IGNORECASE,
    )),
    (EdgeType.FUNDING, re.compile(
        r"invest|fund|backer|buyer|collateral|capital|\blend|loan|debt|financ|donat"
        r"|dealer|counterparty|client",
        re.IGNORECASE,
    )),
]


def classify_edge_type(relationship: str) -> EdgeType:
    """Classify a relationship description. Total: unmatched text is ``OTHER``."""
    text = relationship or ""
    for edge_type, pattern in CLASSIFICATION_RULES:
        if pattern.search(text):
            return edge_type
    return EdgeType.OTHER


def coerce_edge_type(value: str | EdgeType | None, relationship: str) -> EdgeType:
    """Use an explicit edge type when the dataset supplies a valid one."""
    if isinstance(value, EdgeType):
        return value
    if value:
        try:
            return EdgeType(value)
        except ValueError:
            pass
    return classify_edge_type(relationship)
