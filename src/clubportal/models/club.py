"""
Club model for the club portal.
"""

from dataclasses import dataclass
from dataclasses import field
from typing import Any

from clubportal.config.types import SeedClub
from clubportal.models.membership import ClubId
from clubportal.models.user import User

@dataclass
class Club:
    """A club record as kept in the club store.

    ``views`` doubles as the member count: it grows by one per join and
    never shrinks.
    """
    id: ClubId
    name: str
    category: str
    bulletin: str = ""
    contact: str = ""
    views: int = 0
    members: list[str] = field(default_factory=list)

    @classmethod
    def from_seed(cls, record: SeedClub) -> "Club":
        """Create a club from a seed record, starting with no members."""
        return cls(
            id=record["id"],
            name=str(record["name"]),
            category=str(record["category"]),
            bulletin=str(record.get("bulletin", "")),
            contact=str(record.get("contact", "")),
            views=int(record.get("views", 0)),
            members=[]
        )

    @classmethod
    def from_dict(cls, data: Any) -> "Club":
        """
        Create a club from its stored representation.

        Raises:
            ValueError: If the record is malformed
        """
        if not isinstance(data, dict):
            raise ValueError(f"Club record must be a mapping, got {type(data).__name__}")

        try:
            club_id = data["id"]
            name = data["name"]
            category = data["category"]
        except KeyError as e:
            raise ValueError(f"Club record missing field {e}") from e

        if not isinstance(club_id, (int, str)) or isinstance(club_id, bool):
            raise ValueError(f"Invalid club id: {club_id!r}")

        views = data.get("views", 0)
        if isinstance(views, bool) or not isinstance(views, int) or views < 0:
            raise ValueError(f"Invalid views for club {club_id}: {views!r}")

        members = data.get("members", [])
        if not isinstance(members, list) or not all(isinstance(m, str) for m in members):
            raise ValueError(f"Invalid members for club {club_id}")

        return cls(
            id=club_id,
            name=str(name),
            category=str(category),
            bulletin=str(data.get("bulletin", "")),
            contact=str(data.get("contact", "")),
            views=views,
            members=list(members)
        )

    def to_dict(self) -> dict[str, Any]:
        """Stored representation of the club."""
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "bulletin": self.bulletin,
            "contact": self.contact,
            "views": self.views,
            "members": list(self.members),
        }

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match against the club name."""
        return query.lower() in self.name.lower()

    def add_member(self, user: User) -> None:
        """Count a join: bump views and append the member's display string."""
        self.views += 1
        self.members.append(user.display_name)
