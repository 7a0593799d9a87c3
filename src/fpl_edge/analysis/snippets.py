"""
News snippet safety and relevance filter.

Applied to live search results and to curated snippets before they are
served, so list changes also apply to previously curated data.
"""

from collections.abc import Iterable
from urllib.parse import urlsplit

from fpl_edge.data.models import Snippet

BLOCKLIST = (
    "porn", "xhamster", "adult", "xxx", "sex", "nsfw",
    "onlyfans", "escort", "camgirl", "cam",
)

ALLOWED_DOMAINS = (
    "bbc.com",
    "bbc.co.uk",
    "skysports.com",
    "theguardian.com",
    "premierleague.com",
    "telegraph.co.uk",
    "theathletic.com",
    "independent.co.uk",
    "standard.co.uk",
)


def get_domain(url: str | None) -> str:
    """Hostname without a leading www., empty for missing or malformed URLs."""
    if not url:
        return ""
    try:
        hostname = urlsplit(url).hostname or ""
    except ValueError:
        return ""
    return hostname.removeprefix("www.")


def is_safe_result(
    result: Snippet,
    player_name: str = "",
    team_name: str = "",
    team_short: str = "",
) -> bool:
    """
    Check a snippet against the blocklist, domain allow-list and relevance.

    A snippet with no parsable domain skips the allow-list check but must
    still mention the player or team.
    """
    text = f"{result.title} {result.snippet} {result.url}".lower()
    if any(term in text for term in BLOCKLIST):
        return False

    domain = get_domain(result.url)
    if domain and not any(domain.endswith(allowed) for allowed in ALLOWED_DOMAINS):
        return False

    keywords = [player_name.lower(), team_name.lower(), team_short.lower()]
    if all(keywords) and not any(k in text for k in keywords):
        return False

    return True


def filter_snippets(
    results: Iterable[Snippet],
    player_name: str = "",
    team_name: str = "",
    team_short: str = "",
    limit: int | None = None,
) -> list[Snippet]:
    """Keep safe, relevant snippets in order, up to limit."""
    safe = [r for r in results if is_safe_result(r, player_name, team_name, team_short)]
    return safe if limit is None else safe[:limit]
