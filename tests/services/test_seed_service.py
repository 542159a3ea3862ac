"""Tests for seed dataset loading."""

import json

import pytest

from clubportal.exceptions import ConfigError
from clubportal.services.seed_service import SeedService
from clubportal.services.seed_service import default_seed_path


def test_bundled_dataset_is_valid():
    """Test that the packaged seed file loads."""
    service = SeedService()
    assert service.seed_file == default_seed_path()

    clubs = service.seed_clubs()
    assert len(clubs) == 12
    ids = [club.id for club in clubs]
    assert len(set(ids)) == len(ids)
    assert all(club.members == [] for club in clubs)


def test_seed_from_file(tmp_path):
    """Test loading a custom seed file."""
    seed_file = tmp_path / "clubs.json"
    seed_file.write_text(json.dumps([
        {"id": "a", "name": "Knitting Circle", "category": "Crafts", "views": 2}
    ]), encoding="utf-8")

    clubs = SeedService(str(seed_file)).seed_clubs()
    assert len(clubs) == 1
    assert clubs[0].id == "a"
    assert clubs[0].views == 2


def test_inline_records(seed_records):
    """Test that inline records bypass the file."""
    clubs = SeedService(records=seed_records).seed_clubs()
    assert [club.name for club in clubs] == [record["name"] for record in seed_records]


def test_missing_seed_file(tmp_path):
    """Test that a missing file is a configuration error."""
    with pytest.raises(ConfigError) as exc_info:
        SeedService(str(tmp_path / "missing.json")).load_records()
    assert "not found" in exc_info.value.message


def test_unreadable_seed_file(tmp_path):
    """Test that invalid JSON is a configuration error."""
    seed_file = tmp_path / "clubs.json"
    seed_file.write_text("[{", encoding="utf-8")
    with pytest.raises(ConfigError):
        SeedService(str(seed_file)).load_records()


@pytest.mark.parametrize("records", [
    {"id": 1},
    [{"id": 1, "name": "Chess Club"}],
    [{"id": 1, "name": "Chess Club", "category": "Games", "views": -3}],
    [
        {"id": 1, "name": "Chess Club", "category": "Games"},
        {"id": 1, "name": "Checkers Club", "category": "Games"},
    ],
])
def test_invalid_records(records):
    """Test seed validation failures."""
    with pytest.raises(ConfigError):
        SeedService(records=records).load_records()
