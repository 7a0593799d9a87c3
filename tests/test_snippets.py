import pytest

from fpl_edge.analysis.snippets import filter_snippets, get_domain, is_safe_result
from fpl_edge.data.models import Snippet

PLAYER = {"player_name": "Palmer", "team_name": "Chelsea", "team_short": "CHE"}


@pytest.mark.parametrize(
    "url, domain",
    [
        ("https://www.bbc.co.uk/sport/football", "bbc.co.uk"),
        ("https://skysports.com/news", "skysports.com"),
        ("not a url", ""),
        ("", ""),
        (None, ""),
        ("http://[::1", ""),
    ],
)
def test_get_domain(url, domain):
    assert get_domain(url) == domain


def test_rejects_blocked_domain_regardless_of_text():
    result = Snippet(
        title="Palmer Chelsea team news",
        snippet="Palmer fit for Chelsea",
        url="https://example-adult-site.xxx/palmer",
    )

    assert not is_safe_result(result, **PLAYER)


def test_rejects_domain_outside_allow_list():
    result = Snippet(
        title="Palmer injury update",
        snippet="Palmer trained with Chelsea today",
        url="https://random-blog.net/palmer",
    )

    assert not is_safe_result(result, **PLAYER)


def test_accepts_allowed_domain_mentioning_team_short_code():
    result = Snippet(
        title="Team news: Saka back in training",
        snippet="The ARS winger is fit for the weekend",
        url="https://www.bbc.co.uk/sport/football/12345",
    )

    assert is_safe_result(result, player_name="Bukayo Saka", team_name="Arsenal FC", team_short="ARS")


def test_allow_list_matches_subdomains():
    result = Snippet(title="Palmer update", url="https://amp.theguardian.com/football/palmer")

    assert is_safe_result(result, **PLAYER)


def test_rejects_blocklisted_text():
    result = Snippet(title="Palmer NSFW gossip", url="https://www.skysports.com/x")

    assert not is_safe_result(result, **PLAYER)


def test_malformed_url_skips_domain_check_but_needs_relevance():
    relevant = Snippet(title="Palmer ruled out", snippet="hamstring", url="not a url")
    irrelevant = Snippet(title="Liverpool win the derby", snippet="Salah scores", url="not a url")

    assert is_safe_result(relevant, **PLAYER)
    assert not is_safe_result(irrelevant, **PLAYER)


def test_relevance_skipped_when_subject_names_missing():
    result = Snippet(title="Weekend round-up", url="https://www.bbc.com/sport")

    assert is_safe_result(result, player_name="Palmer", team_name="", team_short="CHE")


def test_filter_snippets_keeps_order_and_limit():
    results = [
        Snippet(title=f"Palmer story {i}", url=f"https://www.bbc.co.uk/sport/{i}") for i in range(5)
    ]
    results.insert(1, Snippet(title="Palmer xxx", url="https://www.bbc.co.uk/sport/x"))

    kept = filter_snippets(results, limit=3, **PLAYER)

    assert [r.title for r in kept] == ["Palmer story 0", "Palmer story 1", "Palmer story 2"]
