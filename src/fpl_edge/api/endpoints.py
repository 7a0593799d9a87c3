"""
Upstream endpoint definitions.

URLs for the Fantasy Premier League API and the SearXNG search backend.
Note: The FPL API is undocumented and unofficial - URLs may change.
"""

# Base URLs
FPL_BASE_URL = "https://fantasy.premierleague.com/api"

# =============================================================================
# FPL Public Endpoints (No authentication required)
# =============================================================================

# Bootstrap Static - Main data endpoint
# Contains: all players, teams, positions, gameweek info
BOOTSTRAP_STATIC = "/bootstrap-static/"

# Fixtures - All match fixtures
# Contains: fixture IDs, teams, difficulties, finished flags
FIXTURES = "/fixtures/"

# =============================================================================
# SearXNG
# =============================================================================

SEARCH = "/search"


def get_bootstrap_static_url(base_url: str = FPL_BASE_URL) -> str:
    """Get URL for bootstrap-static."""
    return f"{base_url.rstrip('/')}{BOOTSTRAP_STATIC}"


def get_fixtures_url(base_url: str = FPL_BASE_URL) -> str:
    """Get URL for all fixtures."""
    return f"{base_url.rstrip('/')}{FIXTURES}"


def get_search_url(base_url: str) -> str:
    """Get URL for a SearXNG search."""
    return f"{base_url.rstrip('/')}{SEARCH}"
