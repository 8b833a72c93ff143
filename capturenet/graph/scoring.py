"""Decentralization score helpers.

Score scale:
  - 0   = fully centralized, single point of control or failure
  - 50  = mixed
  - 100 = fully decentralized, permissionless / self-custodied
"""

from __future__ import annotations

# Used whenever an entity carries no explicit score.
DEFAULT_SCORES_BY_TYPE: dict[str, int] = {
    "government": 5,
    "organization": 30,
    "stablecoin": 30,
    "person": 40,
    "concept": 50,
    "event": 50,
}

FALLBACK_SCORE = 50

# (lower bound, label, description), highest band first
_SCORE_BANDS: list[tuple[int, str, str]] = [
    (80, "Decentralized",
     "Highly decentralized with minimal single points of control or failure."),
    (60, "Mostly Decentralized",
     "Mostly decentralized but with some concentration of control."),
    (40, "Mixed",
     "Mixed level of centralization with significant control by specific entities."),
    (20, "Mostly Centralized",
     "Mostly centralized with control concentrated in few entities."),
    (0, "Centralized",
     "Highly centralized with single points of control and potential censorship."),
]


def default_score(entity_type: str) -> int:
    """Default decentralization score for an entity type."""
    return DEFAULT_SCORES_BY_TYPE.get(str(entity_type), FALLBACK_SCORE)


def clamp_score(score: float) -> float:
    return max(0.0, min(100.0, float(score)))


def _band(score: float) -> tuple[int, str, str]:
    for floor, label, description in _SCORE_BANDS:
        if score >= floor:
            return floor, label, description
    return _SCORE_BANDS[-1]


def score_label(score: float) -> str:
    """Human-readable label for a score range."""
    return _band(score)[1]


def score_description(score: float) -> str:
    return _band(score)[2]


def score_color(score: float) -> str:
    """Map a score onto a red (0) → yellow (50) → green (100) HSL ramp."""
    hue = clamp_score(score) * 1.2
    return f"hsl({hue:g}, 80%, 45%)"


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round halves away from zero for positive values.

    ``round()`` uses banker's rounding, which makes percentages like 12.5
    come out as 12; metrics here are reported the conventional way.
    """
    factor = 10 ** ndigits
    return int(value * factor + 0.5) / factor if value >= 0 else -round_half_up(-value, ndigits)
