"""REST API for the FPL Edge dashboard."""

import logging
from contextlib import asynccontextmanager
from typing import Literal

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import JSONResponse

from fpl_edge.analysis.scoring import filter_players
from fpl_edge.config import get_settings
from fpl_edge.data.models import AnalysisPayload, RosterPayload
from fpl_edge.pipeline import PicksService, create_service

logger = logging.getLogger(__name__)


def create_app(service: PicksService | None = None) -> FastAPI:
    """
    Build the FastAPI app.

    Args:
        service: Pipeline to serve; built from settings when omitted
    """
    service = service if service is not None else create_service(get_settings())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await service.close()

    app = FastAPI(title="FPL Edge", lifespan=lifespan)
    app.state.service = service

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/fpl", response_model=RosterPayload)
    async def roster(
        position: str = Query("ALL", description="GKP, DEF, MID, FWD or ALL"),
        max_price: float | None = Query(None, ge=0),
        sort: str | None = Query(None, description="Field to sort by"),
        order: Literal["asc", "desc"] = Query("desc"),
    ):
        try:
            payload = await service.fetch_roster()
        except Exception:
            logger.exception("Roster request failed")
            return JSONResponse({"error": "Failed to fetch FPL data"}, status_code=500)

        try:
            players = filter_players(
                payload.players, position, max_price, sort, descending=order == "desc"
            )
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        return payload.model_copy(update={"players": players})

    @app.get("/api/analyze-picks", response_model=AnalysisPayload)
    async def analyze_picks():
        try:
            return await service.analyze_picks()
        except Exception:
            logger.exception("Analyze picks request failed")
            return JSONResponse({"error": "Failed to analyze picks"}, status_code=500)

    return app
