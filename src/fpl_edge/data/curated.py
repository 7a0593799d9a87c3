"""
Curated analysis dataset.

Hand-written "why buy" narratives keyed by FPL element ID. When a top pick
has a curated entry it replaces the generated narrative entirely.

File shape:
    {"analyses": [{"playerId": 1, "whyBuy": "...", "news": [{"title": ..., "url": ..., "snippet": ...}]}]}
"""

import json
import logging
from pathlib import Path

from pydantic import Field, ValidationError, field_validator

from .models import FrozenModel, Snippet

logger = logging.getLogger(__name__)

DEFAULT_CURATED_PATH = Path(__file__).parent / "analysis.json"


class CuratedAnalysis(FrozenModel):
    """One curated entry."""

    player_id: int
    why_buy: str = ""
    news: list[Snippet] = Field(default_factory=list)

    @field_validator("why_buy", "news", mode="before")
    @classmethod
    def none_as_default(cls, v, info):
        if v is None:
            return "" if info.field_name == "why_buy" else []
        return v


class CuratedDataset(FrozenModel):
    analyses: list[CuratedAnalysis] = Field(default_factory=list)


def load_curated(path: str | Path | None = None) -> dict[int, CuratedAnalysis]:
    """
    Load curated analyses into a lookup by player ID.

    A missing file yields an empty lookup. A malformed file is a
    configuration error and raises.

    Raises:
        ValueError: If the file is not valid JSON or has the wrong shape
    """
    path = Path(path) if path is not None else DEFAULT_CURATED_PATH

    if not path.exists():
        logger.info(f"No curated analysis file at {path}")
        return {}

    try:
        dataset = CuratedDataset.model_validate(json.loads(path.read_text(encoding="utf-8")))
    except (json.JSONDecodeError, ValidationError) as e:
        raise ValueError(f"Invalid curated analysis file {path}: {e}") from e

    curated = {a.player_id: a for a in dataset.analyses}
    logger.info(f"Loaded {len(curated)} curated analyses from {path}")
    return curated
