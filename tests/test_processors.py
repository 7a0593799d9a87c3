import pytest

from fpl_edge.data.processors import (
    normalize_players,
    parse_float,
    process_bootstrap_static,
    process_fixtures,
    process_positions,
    process_teams,
    resolve_gameweeks,
)

from tests.factories import ELEMENT_TYPES, FIXTURES, TEAMS, make_bootstrap, make_element


def _normalize(elements):
    return normalize_players(
        elements,
        process_teams(TEAMS),
        process_positions(ELEMENT_TYPES),
        process_fixtures(FIXTURES),
        next_event=11,
    )


@pytest.mark.parametrize(
    "raw, expected",
    [("5.5", 5.5), ("0.0", 0.0), (None, 0.0), ("", 0.0), ("abc", 0.0), ("nan", 0.0), (3, 3.0)],
)
def test_parse_float_defaults_to_zero(raw, expected):
    assert parse_float(raw) == expected


def test_players_without_minutes_are_excluded():
    players = _normalize([
        make_element(1, minutes=0, form="9.0"),
        make_element(2, minutes=1),
        make_element(3, minutes=0),
    ])

    assert [p.id for p in players] == [2]


@pytest.mark.parametrize("now_cost, price", [(0, 0.0), (45, 4.5), (999, 99.9)])
def test_price_is_cost_in_tenths(now_cost, price):
    (player,) = _normalize([make_element(1, now_cost=now_cost)])

    assert player.price == price
    if now_cost == 0:
        assert player.points_per_million == 0.0


def test_derived_fields():
    (player,) = _normalize([
        make_element(
            7,
            now_cost=80,
            form="6.5",
            points_per_game="4.0",
            selected_by_percent="23.4",
            ep_next="5.2",
            transfers_in_event=100,
            transfers_out_event=350,
            cost_change_event=1,
            chance_of_playing_next_round=50,
            status="d",
        )
    ])

    assert player.form == 6.5
    assert player.points_per_game == 4.0
    assert player.points_per_million == pytest.approx(0.5)
    assert player.ownership_pct == 23.4
    assert player.ep_next == 5.2
    assert player.net_transfers_event == -250
    assert player.price_change_event == 1
    assert player.chance_next == 50
    assert player.status == "d"


def test_unparsable_stats_default_to_zero():
    (player,) = _normalize([
        make_element(1, form="", points_per_game=None, selected_by_percent="n/a", ep_next=None)
    ])

    assert player.form == 0.0
    assert player.points_per_game == 0.0
    assert player.points_per_million == 0.0
    assert player.ownership_pct == 0.0
    assert player.ep_next == 0.0


def test_unknown_team_and_position_use_placeholders():
    (player,) = _normalize([make_element(1, team=42, element_type=9)])

    assert player.team == "Unknown"
    assert player.team_short == "UNK"
    assert player.position == "Unknown"
    assert player.position_short == "UNK"


def test_average_difficulty_defaults_to_three_without_fixtures():
    (player,) = _normalize([make_element(1, team=42)])

    assert player.next3_fixtures == []
    assert player.avg_next3_difficulty == 3


def test_average_difficulty_over_next_three():
    (player,) = _normalize([make_element(1, team=1)])

    assert [f.difficulty for f in player.next3_fixtures] == [2, 3, 2]
    assert player.avg_next3_difficulty == pytest.approx(7 / 3)


def test_normalization_is_reproducible():
    elements = make_bootstrap()["elements"]

    first = _normalize(elements)
    second = _normalize(elements)

    assert [p.id for p in first] == [1, 2, 3, 4, 5]
    assert first == second


@pytest.mark.parametrize(
    "events, current, next_",
    [
        ([{"id": 10, "is_current": True}, {"id": 11, "is_next": True}], 10, 11),
        ([{"id": 7, "is_current": True, "is_next": False}], 7, 8),
        ([{"id": 5, "is_current": False, "is_next": True}], 5, 5),
        ([], 1, 2),
        (None, 1, 2),
    ],
)
def test_resolve_gameweeks(events, current, next_):
    state = resolve_gameweeks(events)

    assert state.current == current
    assert state.next == next_


def test_process_bootstrap_static():
    players, gameweeks = process_bootstrap_static(make_bootstrap(), FIXTURES)

    assert len(players) == 5
    assert (gameweeks.current, gameweeks.next) == (10, 11)


def test_malformed_fixture_is_skipped():
    fixtures = process_fixtures([{"id": 1, "event": 3}, FIXTURES[0]])

    assert [f.id for f in fixtures] == [1]
    assert fixtures[0].team_h == 1
