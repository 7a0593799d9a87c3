import httpx
import pytest

from fpl_edge.api.client import FPLAPIError, FPLClient, FPLNotFoundError
from fpl_edge.api.endpoints import get_bootstrap_static_url, get_fixtures_url, get_search_url
from fpl_edge.api.search import SearchClient, SearchError


def _transport(*args, **kwargs) -> httpx.MockTransport:
    return httpx.MockTransport(lambda request: httpx.Response(*args, **kwargs))


def test_endpoint_urls():
    assert get_bootstrap_static_url() == "https://fantasy.premierleague.com/api/bootstrap-static/"
    assert get_fixtures_url("http://fpl.test/api") == "http://fpl.test/api/fixtures/"
    assert get_search_url("http://searx:8080") == "http://searx:8080/search"


async def test_fpl_not_found():
    async with FPLClient(transport=_transport(404)) as client:
        with pytest.raises(FPLNotFoundError) as exc_info:
            await client.get_fixtures()

    assert exc_info.value.status_code == 404


async def test_fpl_server_error_keeps_status():
    async with FPLClient(transport=_transport(503)) as client:
        with pytest.raises(FPLAPIError) as exc_info:
            await client.get_bootstrap_static()

    assert exc_info.value.status_code == 503


async def test_fpl_bootstrap_missing_fields():
    async with FPLClient(transport=_transport(200, json={"elements": []})) as client:
        with pytest.raises(FPLAPIError, match="missing fields"):
            await client.get_bootstrap_static()


async def test_fpl_fixtures_must_be_list():
    async with FPLClient(transport=_transport(200, json={"fixtures": []})) as client:
        with pytest.raises(FPLAPIError, match="expected list"):
            await client.get_fixtures()


async def test_fpl_invalid_json():
    async with FPLClient(transport=_transport(200, text="<html>maintenance</html>")) as client:
        with pytest.raises(FPLAPIError, match="Invalid JSON"):
            await client.get_fixtures()


async def test_fpl_connection_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    async with FPLClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(FPLAPIError, match="failed"):
            await client.get_fixtures()


async def test_search_maps_results():
    results = [
        {"title": "A", "url": "https://bbc.co.uk/a", "content": "from content"},
        {"title": "B", "url": "https://bbc.co.uk/b", "snippet": "from snippet"},
        {"url": "https://bbc.co.uk/c"},
        "not a result",
    ]
    async with SearchClient(transport=_transport(200, json={"results": results})) as client:
        snippets = await client.search("Saka")

    assert [s.title for s in snippets] == ["A", "B", ""]
    assert [s.snippet for s in snippets] == ["from content", "from snippet", ""]


async def test_search_without_results_key():
    async with SearchClient(transport=_transport(200, json={})) as client:
        assert await client.search("Saka") == []


@pytest.mark.parametrize(
    "response_kwargs",
    [
        {"status_code": 500, "text": "boom"},
        {"status_code": 200, "text": "not json"},
        {"status_code": 200, "json": ["a", "list"]},
    ],
)
async def test_search_errors(response_kwargs):
    async with SearchClient(transport=_transport(**response_kwargs)) as client:
        with pytest.raises(SearchError):
            await client.search("Saka")


async def test_search_connection_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    async with SearchClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(SearchError):
            await client.search("Saka")


@pytest.mark.parametrize(
    "payload",
    [
        {"results": [{"title": 123, "url": "https://www.bbc.co.uk/x", "content": "ARS"}]},
        {"results": [{"title": "A", "url": ["https://www.bbc.co.uk/x"]}]},
        {"results": 5},
    ],
)
async def test_search_malformed_results(payload):
    async with SearchClient(transport=_transport(200, json=payload)) as client:
        with pytest.raises(SearchError, match="Malformed"):
            await client.search("Saka")


async def test_search_null_fields_become_empty():
    results = [{"title": None, "url": "https://bbc.co.uk/a", "content": None}]
    async with SearchClient(transport=_transport(200, json={"results": results})) as client:
        snippets = await client.search("Saka")

    assert snippets[0].title == ""
    assert snippets[0].snippet == ""
