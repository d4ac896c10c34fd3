"""Tests for champion name lookup."""
import json

import pytest

from draft_better.utils.champion_catalog import ChampionCatalog


@pytest.fixture
def champion_json(tmp_path):
    """Minimal Data Dragon champion.json."""
    data = {
        "type": "champion",
        "data": {
            "Ahri": {"id": "Ahri", "key": "103", "name": "Ahri"},
            "Yasuo": {"id": "Yasuo", "key": "157", "name": "Yasuo"},
            "MonkeyKing": {"id": "MonkeyKing", "key": "62", "name": "Wukong"},
            "Broken": {"id": "Broken", "name": "No Key"},
        },
    }
    path = tmp_path / "champion.json"
    path.write_text(json.dumps(data))
    return path


def test_loads_names_by_numeric_key(champion_json):
    catalog = ChampionCatalog(champion_json)
    assert len(catalog) == 3
    assert catalog.get_name(157) == "Yasuo"
    assert catalog.get_name(62) == "Wukong"


def test_unknown_and_zero_ids_are_empty(champion_json):
    catalog = ChampionCatalog(champion_json)
    assert catalog.get_name(0) == ""
    assert catalog.get_name(-1) == ""
    assert catalog.get_name(999) == ""


def test_missing_file_leaves_catalog_empty(tmp_path):
    catalog = ChampionCatalog(tmp_path / "missing.json")
    assert len(catalog) == 0
    assert catalog.get_name(103) == ""


def test_invalid_json_leaves_catalog_empty(tmp_path):
    path = tmp_path / "champion.json"
    path.write_text("{not json")
    assert len(ChampionCatalog(path)) == 0


def test_no_path():
    assert len(ChampionCatalog()) == 0


def test_from_mapping():
    catalog = ChampionCatalog.from_mapping({103: "Ahri"})
    assert catalog.get_name(103) == "Ahri"
