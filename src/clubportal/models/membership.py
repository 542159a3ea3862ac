"""
Membership model for the club portal.
"""

import json
from collections.abc import Iterator
from typing import Any
from typing import NamedTuple
from typing import Union

ClubId = Union[int, str]


class IdentityKey(NamedTuple):
    """Composite key identifying a user for membership bookkeeping.

    Two users typing the same name and roll share one key. Only the
    encoding is unambiguous, the identity itself is not unique.
    """
    name: str
    roll: str

    def encode(self) -> str:
        """Storage form: a JSON array text such as ``["Alice", "101"]``."""
        return json.dumps([self.name, self.roll], ensure_ascii=False)

    @classmethod
    def decode(cls, text: str) -> "IdentityKey":
        """
        Parse a stored key.

        Accepts the JSON array form and the legacy ``name_roll`` form, which
        is split at the last underscore. Text that looks like an array but
        does not parse as a pair of strings is read as a legacy key, since
        legacy names may start with a bracket.

        Raises:
            ValueError: If the key cannot be parsed
        """
        if text.startswith("["):
            try:
                parts = json.loads(text)
            except json.JSONDecodeError:
                parts = None
            if (
                isinstance(parts, list)
                and len(parts) == 2
                and all(isinstance(p, str) for p in parts)
            ):
                return cls(parts[0], parts[1])

        name, sep, roll = text.rpartition("_")
        if not sep:
            raise ValueError(f"Invalid identity key: {text!r}")
        return cls(name, roll)


class MembershipIndex:
    """Per-user mapping of category to joined club id.

    Entries are additive only and a user holds at most one club per
    category.
    """

    def __init__(self, entries: dict[IdentityKey, dict[str, ClubId]] | None = None):
        self._entries: dict[IdentityKey, dict[str, ClubId]] = {
            key: dict(categories) for key, categories in (entries or {}).items()
        }

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[IdentityKey]:
        return iter(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MembershipIndex):
            return NotImplemented
        return self._entries == other._entries

    def copy(self) -> "MembershipIndex":
        return MembershipIndex(self._entries)

    def joined(self, key: IdentityKey) -> dict[str, ClubId]:
        """Copy of the category mapping for a user (empty when unknown)."""
        return dict(self._entries.get(key, {}))

    def club_for(self, key: IdentityKey, category: str) -> ClubId | None:
        """Club id joined by the user in a category, if any."""
        return self._entries.get(key, {}).get(category)

    def record(self, key: IdentityKey, category: str, club_id: ClubId) -> None:
        """
        Record a join.

        Raises:
            ValueError: If the user already holds a club in the category
        """
        categories = self._entries.setdefault(key, {})
        if category in categories:
            raise ValueError(
                f"{key.name} ({key.roll}) already holds club {categories[category]} in {category}"
            )
        categories[category] = club_id

    def count_for(self, club_id: ClubId, category: str) -> int:
        """Number of users holding a club under its category."""
        return sum(
            1 for categories in self._entries.values()
            if categories.get(category) == club_id
        )

    def to_dict(self) -> dict[str, dict[str, ClubId]]:
        """Stored representation, keyed by encoded identity keys."""
        return {key.encode(): dict(categories) for key, categories in self._entries.items()}

    @classmethod
    def from_dict(cls, data: Any) -> "MembershipIndex":
        """
        Create an index from its stored representation.

        Raises:
            ValueError: If the data is malformed
        """
        if not isinstance(data, dict):
            raise ValueError(f"Membership data must be a mapping, got {type(data).__name__}")

        entries: dict[IdentityKey, dict[str, ClubId]] = {}
        for encoded_key, categories in data.items():
            key = IdentityKey.decode(encoded_key)
            if not isinstance(categories, dict):
                raise ValueError(f"Invalid categories for {encoded_key!r}")
            for category, club_id in categories.items():
                if isinstance(club_id, bool) or not isinstance(club_id, (int, str)):
                    raise ValueError(f"Invalid club id {club_id!r} for {encoded_key!r}")
            entries.setdefault(key, {}).update(categories)
        return cls(entries)
