import json

import pytest

from fpl_edge.data.curated import DEFAULT_CURATED_PATH, load_curated


def test_load_curated_by_player_id(tmp_path):
    path = tmp_path / "analysis.json"
    path.write_text(json.dumps({
        "analyses": [
            {
                "playerId": 7,
                "whyBuy": "Penalties and a kind run.",
                "news": [{"title": "Fit", "url": "https://www.bbc.co.uk/sport/x"}],
            },
            {"playerId": 9},
        ]
    }))

    curated = load_curated(path)

    assert set(curated) == {7, 9}
    assert curated[7].why_buy == "Penalties and a kind run."
    assert curated[7].news[0].snippet == ""
    assert curated[9].why_buy == ""
    assert curated[9].news == []


def test_missing_file_is_empty(tmp_path):
    assert load_curated(tmp_path / "nope.json") == {}


@pytest.mark.parametrize("content", ["{not json", '{"analyses": [{"whyBuy": "no id"}]}'])
def test_malformed_file_raises(tmp_path, content):
    path = tmp_path / "analysis.json"
    path.write_text(content)

    with pytest.raises(ValueError, match="Invalid curated analysis file"):
        load_curated(path)


def test_packaged_dataset_loads():
    assert DEFAULT_CURATED_PATH.exists()
    assert isinstance(load_curated(), dict)


def test_null_fields_fall_back_to_defaults(tmp_path):
    path = tmp_path / "analysis.json"
    path.write_text(json.dumps({
        "analyses": [
            {
                "playerId": 7,
                "whyBuy": "Nailed on.",
                "news": [{"title": None, "url": "https://www.bbc.co.uk/sport/x", "snippet": None}],
            },
            {"playerId": 8, "whyBuy": None, "news": None},
        ]
    }))

    curated = load_curated(path)

    assert curated[7].news[0].title == ""
    assert curated[7].news[0].snippet == ""
    assert curated[8].why_buy == ""
    assert curated[8].news == []
