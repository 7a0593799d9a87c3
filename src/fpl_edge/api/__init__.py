"""
Upstream API Integration Module.

Provides clients for the Fantasy Premier League API and the SearXNG
news search backend, plus the single-slot analysis cache.
"""

from .cache import AnalysisCache, CacheEntry
from .client import FPLAPIError, FPLClient, FPLNotFoundError
from .search import SearchClient, SearchError

__all__ = [
    # Clients
    "FPLClient",
    "SearchClient",
    # Cache
    "AnalysisCache",
    "CacheEntry",
    # Errors
    "FPLAPIError",
    "FPLNotFoundError",
    "SearchError",
]
