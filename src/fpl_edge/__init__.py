"""
FPL Edge - Fantasy Premier League Transfer Dashboard.

Fetches public FPL data, ranks players by Transfer Value Score and
writes short "why buy" blurbs for the top picks of the week.
"""

__version__ = "0.1.0"

from .config import Settings, get_settings

__all__ = ["Settings", "get_settings", "__version__"]
