"""
FPL Edge Streamlit Web Application.

Single-page dashboard: top 5 transfer picks with "why buy" notes and a
filterable, sortable player table.
Run with: streamlit run src/fpl_edge/app.py
"""

import asyncio
import sys
from datetime import datetime
from pathlib import Path

# Add src to path for direct execution
_src_path = Path(__file__).parent.parent
if str(_src_path) not in sys.path:
    sys.path.insert(0, str(_src_path))

import pandas as pd
import streamlit as st

from fpl_edge.analysis.fixture_ticker import format_fixture, get_fdr_color
from fpl_edge.analysis.scoring import filter_players, round_score
from fpl_edge.api.cache import AnalysisCache
from fpl_edge.api.client import FPLAPIError
from fpl_edge.config import get_settings
from fpl_edge.data.models import AnalysisPayload, NormalizedPlayer, RosterPayload
from fpl_edge.pipeline import create_service

st.set_page_config(
    page_title="FPL Edge",
    page_icon="⚽",
    layout="wide",
)

POSITIONS = {
    "All Positions": "ALL",
    "Goalkeeper": "GKP",
    "Defender": "DEF",
    "Midfielder": "MID",
    "Forward": "FWD",
}

ROSTER_TTL = 5 * 60  # seconds

SORT_LABELS = {
    "TVS": "transfer_value_score",
    "Form": "form",
    "Points": "total_points",
    "Price": "price",
    "FDR": "avg_next3_difficulty",
    "Pts/£": "points_per_million",
}


@st.cache_resource
def get_analysis_cache() -> AnalysisCache[AnalysisPayload]:
    """Analysis cache shared across reruns and sessions."""
    return AnalysisCache(ttl=get_settings().cache.analysis_ttl)


async def _load() -> tuple[RosterPayload, AnalysisPayload]:
    settings = get_settings()
    service = create_service(settings)
    service.cache = get_analysis_cache()
    try:
        players, gameweeks = await service.load_players()
        roster = service.build_roster(players, gameweeks)
        analysis = await service.analyze_picks(players=players)
    finally:
        await service.close()
    return roster, analysis


# Widget changes rerun the script; keep one upstream load per interval.
@st.cache_resource(ttl=ROSTER_TTL)
def fetch_dashboard_data() -> tuple[RosterPayload, AnalysisPayload]:
    return asyncio.run(_load())


def load_data() -> tuple[RosterPayload, AnalysisPayload] | None:
    """Load roster and analysis, showing an error on upstream failure."""
    try:
        with st.spinner("Loading FPL data..."):
            return fetch_dashboard_data()
    except FPLAPIError as e:
        st.error("Error loading data")
        st.caption(str(e))
        return None


def tvs_color(score: float) -> str:
    if score >= 8:
        return "green"
    if score >= 5:
        return "orange"
    return "red"


def show_top_picks(players: list[NormalizedPlayer], analysis: AnalysisPayload) -> None:
    """Top 5 cards with narrative and news."""
    st.subheader("Top 5 Transfer Picks")
    by_id = {p.id: p for p in players}

    cols = st.columns(max(len(analysis.analyses), 1))
    for i, (col, record) in enumerate(zip(cols, analysis.analyses), start=1):
        player = by_id.get(record.player_id)
        with col:
            st.markdown(f"### #{i} {record.player_name}")
            if player:
                st.caption(f"{player.team} · {player.position_short}")
            st.markdown(
                f"**Value Score** :{tvs_color(record.pick_score)}[{record.pick_score:.1f}]  \n"
                f"**Price** £{record.price:.1f}m"
            )
            if player:
                fixtures = " ".join(
                    f"<span style='color:{get_fdr_color(f.difficulty)}'>{format_fixture(f)}</span>"
                    for f in player.next3_fixtures
                ) or "-"
                st.markdown(fixtures, unsafe_allow_html=True)

            with st.expander("Why buy?"):
                st.write(record.why_buy)
                for item in record.news:
                    st.markdown(f"- [{item.title}]({item.url})")
                st.caption("Curated" if record.source == "manual" else "Generated")

    st.caption(
        f"Analysis generated {analysis.generated_at}"
        + (" (cached)" if analysis.cached else "")
    )


def show_player_table(players: list[NormalizedPlayer]) -> None:
    """Filterable, sortable player table."""
    col1, col2, col3 = st.columns([2, 2, 1])

    with col1:
        position_label = st.radio("Position", list(POSITIONS), horizontal=True)
    with col2:
        max_price = st.slider("Max Price (£m)", 4.0, 15.0, 15.0, step=0.5)
    with col3:
        sort_label = st.selectbox("Sort by", list(SORT_LABELS))
        ascending = st.checkbox("Ascending", value=False)

    rows = filter_players(
        players,
        position=POSITIONS[position_label],
        max_price=max_price,
        sort_key=SORT_LABELS[sort_label],
        descending=not ascending,
    )

    if not rows:
        st.info("No players match the filters.")
        return

    data = pd.DataFrame([
        {
            "Player": p.name,
            "Team": p.team_short,
            "Pos": p.position_short,
            "Price": p.price,
            "Pts": p.total_points,
            "Form": p.form,
            "Pts/£": round(p.points_per_million, 1),
            "FDR": round(p.avg_next3_difficulty, 1),
            "TVS": round_score(p.transfer_value_score),
            "Next 3": " ".join(format_fixture(f) for f in p.next3_fixtures) or "-",
        }
        for p in rows
    ])

    st.dataframe(
        data,
        use_container_width=True,
        hide_index=True,
        column_config={"Price": st.column_config.NumberColumn(format="£%.1fm")},
    )


def main():
    """Main application."""
    st.title("FPL Edge")

    loaded = load_data()
    if loaded is None:
        return
    roster, analysis = loaded

    st.caption(
        f"Fantasy Premier League Transfer Optimizer · GW{roster.current_gameweek} "
        f"(next: GW{roster.next_gameweek})"
    )
    st.caption(f"Last updated: {datetime.fromisoformat(roster.last_updated):%Y-%m-%d %H:%M} UTC")
    st.caption("FDR: easy (1-2) · medium (3) · hard (4-5) · TVS = Transfer Value Score")

    show_top_picks(roster.players, analysis)
    st.markdown("---")
    show_player_table(roster.players)

    st.caption("Data from Fantasy Premier League API · Not affiliated with FPL")


main()
