"""
Top picks pipeline.

Fetches FPL data, normalizes the roster and builds the cached top picks
analysis: one curated or generated narrative per pick, with news snippets
fetched concurrently and isolated per player.
"""

import asyncio
import logging
import time
from datetime import datetime, timezone

from fpl_edge.analysis.narrative import build_why_buy
from fpl_edge.analysis.scoring import TOP_PICKS, round_score, top_picks
from fpl_edge.analysis.snippets import filter_snippets
from fpl_edge.api.cache import AnalysisCache
from fpl_edge.api.client import FPLClient
from fpl_edge.api.search import SearchClient, SearchError
from fpl_edge.config import Settings
from fpl_edge.data.curated import CuratedAnalysis, load_curated
from fpl_edge.data.models import (
    AnalysisPayload,
    AnalysisRecord,
    AnalysisSource,
    GameweekState,
    NormalizedPlayer,
    RosterPayload,
    Snippet,
)
from fpl_edge.data.processors import process_bootstrap_static

logger = logging.getLogger(__name__)

MAX_NEWS_RESULTS = 3


def _isoformat(now: float) -> str:
    return datetime.fromtimestamp(now, tz=timezone.utc).isoformat()


class PicksService:
    """
    Builds roster and top picks payloads.

    The cache is injected so tests can share or replace it and pass
    explicit timestamps.
    """

    def __init__(
        self,
        fpl_client: FPLClient,
        search_client: SearchClient,
        cache: AnalysisCache[AnalysisPayload] | None = None,
        curated: dict[int, CuratedAnalysis] | None = None,
        league: str = "EPL",
        top_n: int = TOP_PICKS,
    ):
        self.fpl_client = fpl_client
        self.search_client = search_client
        self.cache = cache if cache is not None else AnalysisCache()
        self.curated = curated if curated is not None else {}
        self.league = league
        self.top_n = top_n

    async def close(self) -> None:
        """Close upstream HTTP clients."""
        await self.fpl_client.close()
        await self.search_client.close()

    async def load_players(self) -> tuple[list[NormalizedPlayer], GameweekState]:
        """
        Fetch both FPL snapshots and normalize the roster.

        Raises:
            FPLAPIError: If either upstream request fails
        """
        bootstrap = await self.fpl_client.get_bootstrap_static()
        fixtures = await self.fpl_client.get_fixtures()
        return process_bootstrap_static(bootstrap, fixtures)

    async def fetch_roster(self, now: float | None = None) -> RosterPayload:
        """Full normalized roster plus gameweek metadata."""
        players, gameweeks = await self.load_players()
        return self.build_roster(players, gameweeks, now)

    def build_roster(
        self,
        players: list[NormalizedPlayer],
        gameweeks: GameweekState,
        now: float | None = None,
    ) -> RosterPayload:
        now = time.time() if now is None else now
        return RosterPayload(
            players=players,
            current_gameweek=gameweeks.current,
            next_gameweek=gameweeks.next,
            last_updated=_isoformat(now),
        )

    async def analyze_picks(
        self,
        now: float | None = None,
        players: list[NormalizedPlayer] | None = None,
    ) -> AnalysisPayload:
        """
        Top picks analysis, served from cache while fresh.

        A failed generation raises before anything is cached.

        Args:
            now: Cache clock, defaults to the current time
            players: Already loaded roster; fetched from FPL when omitted
        """
        now = time.time() if now is None else now

        cached = self.cache.get(now)
        if cached is not None:
            return cached.model_copy(update={"cached": True})

        if players is None:
            players, _ = await self.load_players()
        picks = top_picks(players, self.top_n)
        logger.info(f"Analyzing top {len(picks)} picks")

        analyses = await asyncio.gather(*(self.analyze_player(p) for p in picks))

        payload = AnalysisPayload(generated_at=_isoformat(now), analyses=list(analyses))
        self.cache.set(payload, now)
        return payload

    async def analyze_player(self, player: NormalizedPlayer) -> AnalysisRecord:
        """Curated analysis if one exists, else generated narrative plus live news."""
        curated = self.curated.get(player.id)

        if curated is not None and curated.why_buy:
            why_buy = curated.why_buy
            news = filter_snippets(
                curated.news, player.name, player.team, player.team_short
            )
            source = AnalysisSource.MANUAL
        else:
            news = await self.search_news(player)
            why_buy = build_why_buy(player)
            source = AnalysisSource.FALLBACK

        return AnalysisRecord(
            player_id=player.id,
            player_name=player.name,
            team_short=player.team_short,
            price=player.price,
            pick_score=round_score(player.transfer_value_score),
            why_buy=why_buy,
            news=news,
            source=source,
        )

    async def search_news(self, player: NormalizedPlayer) -> list[Snippet]:
        """Filtered news for one player; search failures degrade to no news."""
        query = f"{player.name} {self.league} injury form news"
        try:
            results = await self.search_client.search(query)
        except SearchError as e:
            logger.warning(f"News search failed for {player.name}: {e}")
            return []

        return filter_snippets(
            results, player.name, player.team, player.team_short, limit=MAX_NEWS_RESULTS
        )


def create_service(settings: Settings) -> PicksService:
    """Build a PicksService from settings."""
    return PicksService(
        fpl_client=FPLClient(base_url=settings.fpl.base_url, timeout=settings.fpl.timeout),
        search_client=SearchClient(
            base_url=settings.search.url, timeout=settings.search.timeout
        ),
        cache=AnalysisCache(ttl=settings.cache.analysis_ttl),
        curated=load_curated(settings.app.curated_path),
        league=settings.search.league,
    )
