"""
"Why buy" narrative generator for top transfer picks.

Builds a short multi-sentence blurb from templated phrasing banks. Output
is deterministic for a given player: the opener variant is picked by
player ID modulo the bank size, never at random, so the same pick reads
the same on every refresh.
"""

import re
from enum import Enum

from fpl_edge.data.models import NormalizedPlayer, PlayerStatus

from .fixture_ticker import FixtureRun


class Archetype(Enum):
    """Opener bucket, checked in declaration order of classify_opener."""

    FIXTURE = "fixture"
    FORM = "form"
    DIFFERENTIAL = "differential"
    PROJECTION = "projection"
    BUDGET = "budget"
    PREMIUM = "premium"
    BRAVE = "brave"


OPENERS: dict[Archetype, tuple[str, ...]] = {
    Archetype.FIXTURE: (
        "{name} is a fixture-driven buy: the next 3 lean friendly and you get {home} home dates to capitalize.",
        "The short-term schedule screams upside for {name}; the home/away split is kind and the ceiling is real.",
        "{name} has a runway right now: good matchups and home advantage make this a short-term strike.",
    ),
    Archetype.FORM: (
        "{name} is in real form; {ppg} PPG over recent weeks is not noise, it is output you can bank.",
        "{name} is coming in hot: form {form} with steady minutes makes this the obvious play-the-streak pick.",
        "{name} is the one riding momentum right now; the recent returns justify the buy even before fixtures.",
    ),
    Archetype.DIFFERENTIAL: (
        "{name} is a classic differential with secure minutes; the upside is rank-moving if the returns come.",
        "{name} gives you a low-owned edge without the rotation headache, and that is the appeal.",
        "{name} is the off-template pick who still plays, a rare and valuable combination.",
    ),
    Archetype.PROJECTION: (
        "{name} is projected well for the next GW; this is a short-term expected-points play.",
        "{name} rates strongly in the model for the immediate window, which makes this a clean buy now.",
        "{name} has a strong near-term projection; you are buying the next 2-3 GWs, not just the season.",
    ),
    Archetype.BUDGET: (
        "{name} is the budget enabler who still returns; the price makes this an easy squad unlock.",
        "{name} offers genuine output for the price, which is exactly what a budget slot should do.",
        "{name} is value-first: cheap, playable, and with enough upside to matter.",
    ),
    Archetype.PREMIUM: (
        "{name} is a premium you buy for captaincy-adjacent output; the price is steep but the ceiling is higher.",
        "{name} is the premium with the most reliable floor; you pay up for security plus haul potential.",
        "{name} is the big-ticket pick here; you are buying star-level upside, not just fixtures.",
    ),
    Archetype.BRAVE: (
        "{name} is a brave buy against the fixture grain; you are betting on talent over schedule.",
        "{name} is a conviction pick despite a tough run; the bet is on role and quality.",
        "{name} is the high-risk/high-reward play even with harder opponents on deck.",
    ),
}


def classify_opener(player: NormalizedPlayer, run: FixtureRun) -> Archetype:
    """Pick the opener archetype; first matching rule wins."""
    if run.easy_count >= 2 and run.home_count >= 2:
        return Archetype.FIXTURE
    if player.form >= 7 and player.points_per_game >= 5:
        return Archetype.FORM
    if player.ownership_pct < 10 and player.minutes >= 600:
        return Archetype.DIFFERENTIAL
    if player.ep_next >= 5:
        return Archetype.PROJECTION
    if player.price <= 5.0:
        return Archetype.BUDGET
    if player.price >= 10.0:
        return Archetype.PREMIUM
    if run.hard_count >= 2:
        return Archetype.BRAVE
    return Archetype.FORM


def variant_index(player_id: int, pool_size: int) -> int:
    """Stable phrasing variant for a player."""
    return player_id % pool_size


def build_opener(player: NormalizedPlayer, run: FixtureRun) -> str:
    pool = OPENERS[classify_opener(player, run)]
    template = pool[variant_index(player.id, len(pool))]
    return template.format(
        name=player.name,
        home=run.home_count,
        ppg=f"{player.points_per_game:.1f}",
        form=f"{player.form:.1f}",
    )


# =============================================================================
# Note Ladders
# =============================================================================


def fixture_note(run: FixtureRun) -> str:
    if run.easy_count >= 2:
        character = "a strong short-term run"
    elif run.hard_count >= 2:
        character = "a tough short-term run"
    else:
        character = "a mixed short-term run"
    return f"Fixtures show {character} ({run.home_count} home in the next 3)."


def minutes_note(player: NormalizedPlayer) -> str:
    if player.minutes >= 900:
        return "Minutes suggest a first-choice starter."
    if player.minutes >= 450:
        return "Minutes are decent but not nailed."
    return "Minutes are low, so there is rotation risk."


def availability_note(player: NormalizedPlayer) -> str:
    if player.chance_next is not None and player.chance_next < 75:
        return f"Availability risk ({player.chance_next}% chance of playing)."
    if player.status != PlayerStatus.AVAILABLE:
        return "Availability risk flagged."
    return ""


def value_note(player: NormalizedPlayer) -> str:
    if player.points_per_million >= 0.7:
        return (
            f"Value looks strong at £{player.price:.1f}m "
            f"({player.points_per_million:.2f} PPM)."
        )
    return f"Premium price tag at £{player.price:.1f}m; needs returns to justify it."


def ceiling_note(player: NormalizedPlayer) -> str:
    if player.ep_next >= 5:
        return "Expected points look healthy for a haul."
    return "Ceiling leans on current form rather than fixtures."


def ownership_note(player: NormalizedPlayer) -> str:
    pct = f"{player.ownership_pct:.1f}%"
    if player.ownership_pct >= 20:
        return f"Widely owned ({pct}), so you are mostly protecting rank."
    if player.ownership_pct >= 10:
        return f"Getting popular ({pct}); you are not alone."
    return f"A differential at {pct}, with upside if the returns come."


def transfer_note(player: NormalizedPlayer) -> str:
    net = player.net_transfers_event
    if net > 0:
        return f"Market momentum is with this pick ({net:,} net in)."
    if net < 0:
        return f"Market momentum is cooling ({abs(net):,} net out)."
    return "Market momentum is flat this week."


def price_note(player: NormalizedPlayer) -> str:
    change = player.price_change_event
    if change > 0:
        return f"Price just rose £{change / 10:.1f}m."
    if change < 0:
        return f"Price just dipped £{abs(change) / 10:.1f}m."
    return ""


def verdict(player: NormalizedPlayer, run: FixtureRun) -> str:
    if run.easy_count >= 2 and player.minutes >= 450:
        return "Verdict: buy now and ride the short-term run."
    if run.hard_count >= 2:
        return "Verdict: buy only if you need the role; fixtures are a headwind."
    return "Verdict: viable buy if the role fits your squad build."


# =============================================================================
# Assembly
# =============================================================================


_WHITESPACE = re.compile(r"\s+")


def build_why_buy(player: NormalizedPlayer) -> str:
    """
    Generate the "why buy" narrative for a top pick.

    Sentences: opener, fixture run, minutes, availability, value, ceiling,
    ownership/momentum/price movement and a closing verdict. Empty notes
    are dropped by the whitespace collapse.
    """
    run = FixtureRun(fixtures=list(player.next3_fixtures))

    sentences = [
        build_opener(player, run),
        fixture_note(run),
        minutes_note(player),
        availability_note(player),
        value_note(player),
        ceiling_note(player),
        ownership_note(player),
        transfer_note(player),
        price_note(player),
        verdict(player, run),
    ]
    return _WHITESPACE.sub(" ", " ".join(sentences)).strip()
