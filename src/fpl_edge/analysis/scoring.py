"""
Transfer Value Score and roster ranking.

The score rewards recent form and value for money and penalizes a hard
short-term fixture run:

    TVS = form x 2 + points per million - avg next-3 FDR x 1.5
"""

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from fpl_edge.data.models import NormalizedPlayer

FORM_WEIGHT = 2.0
DIFFICULTY_WEIGHT = 1.5
TOP_PICKS = 5

POSITION_FILTERS = ("ALL", "GKP", "DEF", "MID", "FWD")
SORT_KEYS = (
    "transfer_value_score",
    "form",
    "total_points",
    "price",
    "avg_next3_difficulty",
    "points_per_million",
)


def transfer_value_score(
    form: float,
    points_per_million: float,
    avg_next3_difficulty: float,
) -> float:
    """Calculate the Transfer Value Score for one player."""
    return form * FORM_WEIGHT + points_per_million - avg_next3_difficulty * DIFFICULTY_WEIGHT


def round_score(score: float, places: int = 1) -> float:
    """
    Round a score for display, exact halves away from zero (3.25 -> 3.3).

    Works on the exact binary value of the float, so 0.15 (stored just
    below a half) rounds down to 0.1.
    """
    if not math.isfinite(score):
        return score
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(score).quantize(quantum, rounding=ROUND_HALF_UP))


def top_picks(
    players: Sequence["NormalizedPlayer"],
    k: int = TOP_PICKS,
) -> list["NormalizedPlayer"]:
    """
    Get the k best players by Transfer Value Score.

    sorted() is stable, so ties keep normalizer order.
    """
    ranked = sorted(players, key=lambda p: p.transfer_value_score, reverse=True)
    return ranked[:k]


def filter_players(
    players: Sequence["NormalizedPlayer"],
    position: str = "ALL",
    max_price: float | None = None,
    sort_key: str | None = None,
    descending: bool = True,
) -> list["NormalizedPlayer"]:
    """
    Filter and sort the roster for the player table.

    Args:
        players: Normalized roster
        position: Position short code (GKP/DEF/MID/FWD) or ALL
        max_price: Keep players priced at or below this (millions)
        sort_key: One of SORT_KEYS; None keeps input order
        descending: Sort direction

    Raises:
        ValueError: On unknown position or sort key
    """
    position = position.upper()
    if position not in POSITION_FILTERS:
        raise ValueError(f"Unknown position filter: {position}")
    if sort_key is not None and sort_key not in SORT_KEYS:
        raise ValueError(f"Unknown sort key: {sort_key}")

    filtered = [
        p for p in players
        if (position == "ALL" or p.position_short == position)
        and (max_price is None or p.price <= max_price)
    ]

    if sort_key is not None:
        filtered.sort(key=lambda p: getattr(p, sort_key), reverse=descending)

    return filtered
