"""Tests for the club model."""

import pytest

from clubportal.models.club import Club
from clubportal.models.user import User


def test_from_seed_starts_with_empty_roster():
    """Test that seeded clubs have no members."""
    club = Club.from_seed({"id": 1, "name": "Chess Club", "category": "Games", "views": 10})
    assert club.id == 1
    assert club.views == 10
    assert club.members == []
    assert club.bulletin == ""
    assert club.contact == ""


def test_add_member_bumps_views_and_roster():
    """Test that a join is counted once."""
    club = Club(id=1, name="Chess Club", category="Games", views=10)
    club.add_member(User("Alice", "101"))
    assert club.views == 11
    assert club.members == ["Alice (101)"]

    club.add_member(User("Bob", "202"))
    assert club.views == 12
    assert club.members == ["Alice (101)", "Bob (202)"]


@pytest.mark.parametrize("query,expected", [
    ("chess", True),
    ("CHESS", True),
    ("ss Cl", True),
    ("", True),
    ("checkers", False),
])
def test_matches(query, expected):
    """Test case-insensitive substring matching on the name."""
    club = Club(id=1, name="Chess Club", category="Games")
    assert club.matches(query) is expected


def test_dict_conversion_keeps_members():
    """Test stored representation."""
    club = Club(id="x1", name="Drama", category="Arts", bulletin="b", contact="c",
                views=3, members=["Alice (101)"])
    data = club.to_dict()
    assert data == {
        "id": "x1",
        "name": "Drama",
        "category": "Arts",
        "bulletin": "b",
        "contact": "c",
        "views": 3,
        "members": ["Alice (101)"],
    }
    restored = Club.from_dict(data)
    assert restored == club
    assert restored.members is not club.members


@pytest.mark.parametrize("data", [
    "not a club",
    {"name": "Chess Club", "category": "Games"},
    {"id": True, "name": "Chess Club", "category": "Games"},
    {"id": 1, "name": "Chess Club", "category": "Games", "views": -1},
    {"id": 1, "name": "Chess Club", "category": "Games", "views": "10"},
    {"id": 1, "name": "Chess Club", "category": "Games", "members": "Alice"},
    {"id": 1, "name": "Chess Club", "category": "Games", "members": [1]},
])
def test_from_dict_rejects_malformed_records(data):
    """Test that malformed stored clubs raise ValueError."""
    with pytest.raises(ValueError):
        Club.from_dict(data)
