"""
Data Processors for FPL API Responses.

Transforms raw API JSON responses into typed Pydantic models.
Handles data cleaning, lookups and derived calculations.
"""

import logging
import math
from collections.abc import Mapping, Sequence
from typing import Any

from fpl_edge.analysis.fixture_ticker import average_difficulty, next_fixtures

from .models import Fixture, GameweekState, NormalizedPlayer, PositionType, Team

logger = logging.getLogger(__name__)


def parse_float(value: Any) -> float:
    """Parse a string-encoded number, 0.0 on anything unparsable."""
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if math.isnan(parsed) else parsed


# =============================================================================
# Bootstrap Static Processing
# =============================================================================


def process_teams(teams_data: list[dict[str, Any]]) -> dict[int, Team]:
    """
    Process team data from bootstrap-static 'teams' array.

    Returns:
        Team lookup by ID
    """
    teams = {}

    for team_data in teams_data:
        try:
            team = Team(
                id=team_data["id"],
                name=team_data.get("name", ""),
                short_name=team_data.get("short_name", ""),
            )
            teams[team.id] = team

        except (KeyError, ValueError) as e:
            logger.warning(f"Error processing team {team_data.get('id')}: {e}")
            continue

    logger.debug(f"Processed {len(teams)} teams")
    return teams


def process_positions(element_types: list[dict[str, Any]]) -> dict[int, PositionType]:
    """
    Process position data from bootstrap-static 'element_types' array.

    Returns:
        PositionType lookup by ID
    """
    positions = {}

    for et in element_types:
        try:
            position = PositionType(
                id=et["id"],
                singular_name=et.get("singular_name", ""),
                singular_name_short=et.get("singular_name_short", ""),
            )
            positions[position.id] = position

        except (KeyError, ValueError) as e:
            logger.warning(f"Error processing position {et.get('id')}: {e}")
            continue

    return positions


def resolve_gameweeks(events: list[dict[str, Any]] | None) -> GameweekState:
    """
    Resolve current and next gameweek from bootstrap-static 'events'.

    Current is the event flagged current, else the one flagged next,
    else 1. Next is the event flagged next, else current + 1.
    """
    events = events or []
    flagged_current = next((e["id"] for e in events if e.get("is_current")), None)
    flagged_next = next((e["id"] for e in events if e.get("is_next")), None)

    current = flagged_current or flagged_next or 1
    return GameweekState(current=current, next=flagged_next or current + 1)


# =============================================================================
# Fixture Processing
# =============================================================================


def process_fixtures(fixtures_data: list[dict[str, Any]]) -> list[Fixture]:
    """
    Process fixture data from fixtures endpoint.

    Args:
        fixtures_data: List of fixture dictionaries from API

    Returns:
        List of Fixture models
    """
    fixtures = []

    for fix in fixtures_data:
        try:
            fixture = Fixture(
                id=fix["id"],
                event=fix.get("event"),  # None for unscheduled
                finished=bool(fix.get("finished", False)),
                team_h=fix["team_h"],
                team_a=fix["team_a"],
                team_h_difficulty=fix.get("team_h_difficulty", 3),
                team_a_difficulty=fix.get("team_a_difficulty", 3),
            )
            fixtures.append(fixture)

        except (KeyError, ValueError) as e:
            logger.warning(f"Error processing fixture {fix.get('id')}: {e}")
            continue

    logger.debug(f"Processed {len(fixtures)} fixtures")
    return fixtures


# =============================================================================
# Player Normalization
# =============================================================================


def normalize_player(
    elem: dict[str, Any],
    teams: Mapping[int, Team],
    positions: Mapping[int, PositionType],
    fixtures: Sequence[Fixture],
    next_event: int,
) -> NormalizedPlayer:
    """Build one NormalizedPlayer from a bootstrap-static element."""
    team = teams.get(elem.get("team"))
    position = positions.get(elem.get("element_type"))

    # Price is in tenths (e.g., 100 = £10.0)
    price = elem.get("now_cost", 0) / 10
    points_per_game = parse_float(elem.get("points_per_game"))

    upcoming = next_fixtures(elem.get("team"), fixtures, next_event, teams)

    return NormalizedPlayer(
        id=elem["id"],
        name=elem.get("web_name", ""),
        team=team.name if team else "Unknown",
        team_short=team.short_name if team else "UNK",
        position=position.singular_name if position else "Unknown",
        position_short=position.singular_name_short if position else "UNK",
        price=price,
        total_points=elem.get("total_points") or 0,
        form=parse_float(elem.get("form")),
        points_per_game=points_per_game,
        points_per_million=points_per_game / price if price > 0 else 0.0,
        minutes=elem.get("minutes") or 0,
        ownership_pct=parse_float(elem.get("selected_by_percent")),
        net_transfers_event=(
            (elem.get("transfers_in_event") or 0) - (elem.get("transfers_out_event") or 0)
        ),
        price_change_event=elem.get("cost_change_event") or 0,
        price_change_start=elem.get("cost_change_start") or 0,
        chance_next=elem.get("chance_of_playing_next_round"),
        status=elem.get("status") or "a",
        news=elem.get("news") or "",
        ep_next=parse_float(elem.get("ep_next")),
        next3_fixtures=upcoming,
        avg_next3_difficulty=average_difficulty(upcoming),
    )


def normalize_players(
    elements: list[dict[str, Any]],
    teams: Mapping[int, Team],
    positions: Mapping[int, PositionType],
    fixtures: Sequence[Fixture],
    next_event: int,
) -> list[NormalizedPlayer]:
    """
    Normalize every player with recorded minutes, in upstream order.

    Players who have not played are dropped rather than scored.
    """
    players = [
        normalize_player(elem, teams, positions, fixtures, next_event)
        for elem in elements
        if (elem.get("minutes") or 0) > 0
    ]

    logger.info(f"Normalized {len(players)} of {len(elements)} players")
    return players


def process_bootstrap_static(
    bootstrap: dict[str, Any],
    fixtures_data: list[dict[str, Any]],
) -> tuple[list[NormalizedPlayer], GameweekState]:
    """
    Process complete bootstrap-static and fixtures responses.

    Returns:
        Tuple of (normalized players, gameweek state)
    """
    teams = process_teams(bootstrap.get("teams", []))
    positions = process_positions(bootstrap.get("element_types", []))
    gameweeks = resolve_gameweeks(bootstrap.get("events"))
    fixtures = process_fixtures(fixtures_data)

    players = normalize_players(
        bootstrap.get("elements", []), teams, positions, fixtures, gameweeks.next
    )
    return players, gameweeks
