"""
Fixture Ticker Module.

Looks ahead at each team's next unplayed fixtures and summarizes the
short-term run used by scoring, narratives and the dashboard.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from fpl_edge.data.models import Fixture, FixtureSummary, Team

LOOKAHEAD = 3
UNSCHEDULED_EVENT = 999  # Unscheduled fixtures sort after every real gameweek
NEUTRAL_DIFFICULTY = 3.0
EASY_FDR = 2  # FDR 1-2
HARD_FDR = 4  # FDR 4-5


def next_fixtures(
    team_id: int,
    fixtures: Sequence[Fixture],
    next_event: int,
    teams: Mapping[int, Team],
    count: int = LOOKAHEAD,
) -> list[FixtureSummary]:
    """
    Get a team's next unplayed fixtures, nearest first.

    Args:
        team_id: Team to look ahead for
        fixtures: All fixtures from the fixtures endpoint
        next_event: First gameweek to consider
        teams: Team lookup by ID (for opponent short names)
        count: Maximum fixtures to return
    """
    upcoming = [
        f for f in fixtures
        if not f.finished
        and (f.event or UNSCHEDULED_EVENT) >= next_event
        and (f.team_h == team_id or f.team_a == team_id)
    ]
    upcoming.sort(key=lambda f: f.event or UNSCHEDULED_EVENT)

    summaries = []
    for fixture in upcoming[:count]:
        is_home = fixture.team_h == team_id
        opponent_id = fixture.team_a if is_home else fixture.team_h
        opponent = teams.get(opponent_id)
        summaries.append(FixtureSummary(
            opponent=opponent.short_name if opponent else "TBD",
            difficulty=fixture.team_h_difficulty if is_home else fixture.team_a_difficulty,
            is_home=is_home,
        ))

    return summaries


def average_difficulty(fixtures: Sequence[FixtureSummary]) -> float:
    """Mean FDR over the fixtures, neutral 3 when there are none."""
    if not fixtures:
        return NEUTRAL_DIFFICULTY
    return sum(f.difficulty for f in fixtures) / len(fixtures)


@dataclass
class FixtureRun:
    """Short-term fixture run for one player's team."""

    fixtures: list[FixtureSummary] = field(default_factory=list)

    @property
    def avg_fdr(self) -> float:
        """Average fixture difficulty."""
        return average_difficulty(self.fixtures)

    @property
    def easy_count(self) -> int:
        """Count of easy fixtures (FDR 1-2)."""
        return sum(1 for f in self.fixtures if f.difficulty <= EASY_FDR)

    @property
    def hard_count(self) -> int:
        """Count of hard fixtures (FDR 4-5)."""
        return sum(1 for f in self.fixtures if f.difficulty >= HARD_FDR)

    @property
    def home_count(self) -> int:
        """Count of home fixtures."""
        return sum(1 for f in self.fixtures if f.is_home)


def get_fdr_label(fdr: float) -> str:
    """Bucket an FDR into easy/medium/hard (averages other than exactly 3 above 2 count as hard)."""
    if fdr <= EASY_FDR:
        return "easy"
    if fdr == 3:
        return "medium"
    return "hard"


def get_fdr_color(fdr: float | None) -> str:
    """
    Get color for FDR value (for UI display).

    Returns CSS-compatible color hex.
    """
    if fdr is None or fdr == 0:
        return "#808080"  # Gray for blank

    colors = {
        "easy": "#4ADE80",  # Green
        "medium": "#FACC15",  # Yellow
        "hard": "#F87171",  # Red
    }
    return colors[get_fdr_label(fdr)]


def format_fixture(fixture: FixtureSummary) -> str:
    """Short fixture label, away games prefixed with @."""
    return fixture.opponent if fixture.is_home else f"@{fixture.opponent}"
