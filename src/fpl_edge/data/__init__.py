"""
Data Models and Processing Module.

Contains Pydantic models for FPL entities and the curated analysis dataset.
"""

from .models import (
    AnalysisPayload,
    AnalysisRecord,
    AnalysisSource,
    Fixture,
    FixtureSummary,
    GameweekState,
    NormalizedPlayer,
    PlayerStatus,
    PositionType,
    RosterPayload,
    Snippet,
    Team,
)

__all__ = [
    "AnalysisPayload",
    "AnalysisRecord",
    "AnalysisSource",
    "Fixture",
    "FixtureSummary",
    "GameweekState",
    "NormalizedPlayer",
    "PlayerStatus",
    "PositionType",
    "RosterPayload",
    "Snippet",
    "Team",
]
