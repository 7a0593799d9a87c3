"""
Pydantic data models for FPL Edge.

These models represent teams, fixtures, normalized players and the
top picks analysis payload served by the API.
"""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel


class PlayerStatus(StrEnum):
    """Player availability status."""

    AVAILABLE = "a"
    DOUBTFUL = "d"
    INJURED = "i"
    UNAVAILABLE = "u"
    NOT_AVAILABLE = "n"
    SUSPENDED = "s"


class AnalysisSource(StrEnum):
    """Provenance of a top pick narrative."""

    MANUAL = "manual"  # Curated by hand
    FALLBACK = "fallback"  # Generated from templates


class FrozenModel(BaseModel):
    """Immutable model serialized with camelCase keys for the web client."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# =============================================================================
# Upstream Lookup Models
# =============================================================================


class Team(FrozenModel):
    """Represents a Premier League team."""

    id: int = Field(description="FPL team ID")
    name: str = Field(description="Full team name")
    short_name: str = Field(description="3-letter abbreviation")


class PositionType(FrozenModel):
    """Playing position (FPL element_type)."""

    id: int = Field(description="FPL element_type ID")
    singular_name: str = Field(description="e.g. Midfielder")
    singular_name_short: str = Field(description="e.g. MID")


class Fixture(FrozenModel):
    """Represents a Premier League fixture."""

    id: int = Field(description="Fixture ID")
    event: int | None = Field(default=None, description="Gameweek, None if unscheduled")
    finished: bool = Field(default=False, description="Has the match finished")
    team_h: int = Field(description="Home team ID")
    team_a: int = Field(description="Away team ID")
    team_h_difficulty: int = Field(default=3, description="FDR for home team")
    team_a_difficulty: int = Field(default=3, description="FDR for away team")


class GameweekState(FrozenModel):
    """Current and next gameweek resolved from bootstrap events."""

    current: int = Field(description="Current gameweek")
    next: int = Field(description="Next gameweek (fixture lookahead anchor)")


# =============================================================================
# Normalized Player
# =============================================================================


class FixtureSummary(FrozenModel):
    """One upcoming fixture from a team's point of view."""

    opponent: str = Field(description="Opponent short name, TBD if unknown")
    difficulty: int = Field(description="FDR for this side (1-5)")
    is_home: bool


class NormalizedPlayer(FrozenModel):
    """Flat, self-contained player record with derived fields."""

    id: int = Field(description="FPL element ID")
    name: str = Field(description="Display (web) name")
    team: str = Field(default="Unknown")
    team_short: str = Field(default="UNK")
    position: str = Field(default="Unknown")
    position_short: str = Field(default="UNK")
    price: float = Field(description="Price in millions (now_cost / 10)")
    total_points: int = 0
    form: float = 0.0
    points_per_game: float = 0.0
    points_per_million: float = 0.0
    minutes: int = 0
    ownership_pct: float = 0.0
    net_transfers_event: int = 0
    price_change_event: int = Field(default=0, description="Price change this GW in tenths")
    price_change_start: int = Field(default=0, description="Price change this season in tenths")
    chance_next: int | None = Field(default=None, description="Chance of playing next round")
    status: str = PlayerStatus.AVAILABLE.value
    news: str = ""
    ep_next: float = 0.0
    next3_fixtures: list[FixtureSummary] = Field(default_factory=list, max_length=3)
    avg_next3_difficulty: float = 3.0

    @computed_field(alias="transferValueScore")
    @property
    def transfer_value_score(self) -> float:
        """Transfer Value Score: form x 2 + points per million - avg FDR x 1.5."""
        from fpl_edge.analysis.scoring import transfer_value_score

        return transfer_value_score(
            self.form, self.points_per_million, self.avg_next3_difficulty
        )


class RosterPayload(FrozenModel):
    """Response body for the roster endpoint."""

    players: list[NormalizedPlayer]
    current_gameweek: int
    next_gameweek: int
    last_updated: str = Field(description="ISO-8601 timestamp")


# =============================================================================
# Top Picks Analysis
# =============================================================================


class Snippet(FrozenModel):
    """External text snippet (news search result)."""

    title: str = ""
    url: str = ""
    snippet: str = ""

    @field_validator("title", "url", "snippet", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        """Upstream and curated data use null for missing text."""
        return "" if v is None else v


class AnalysisRecord(FrozenModel):
    """Narrative and supporting news for one top pick."""

    player_id: int
    player_name: str
    team_short: str
    price: float
    pick_score: float = Field(description="Transfer Value Score rounded to 1 dp")
    why_buy: str
    news: list[Snippet] = Field(default_factory=list)
    source: AnalysisSource


class AnalysisPayload(FrozenModel):
    """Response body for the analyze-picks endpoint."""

    generated_at: str = Field(description="ISO-8601 timestamp")
    analyses: list[AnalysisRecord]
    cached: bool = False
