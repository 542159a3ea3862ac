"""
User model for the club portal.
"""

from dataclasses import dataclass
from typing import Any

from clubportal.exceptions import ValidationError
from clubportal.models.membership import IdentityKey

@dataclass(frozen=True)
class User:
    """Logged-in user. Name and roll are free text with no uniqueness check."""
    name: str
    roll: str

    @classmethod
    def from_login(cls, name: str | None, number: str | None) -> "User":
        """
        Create a user from login form input.

        Args:
            name: Name as typed
            number: Roll number as typed

        Returns:
            User with both fields trimmed

        Raises:
            ValidationError: If either field is blank after trimming
        """
        name = (name or "").strip()
        roll = (number or "").strip()
        if not name or not roll:
            raise ValidationError(
                "Enter both name and number",
                {"name_blank": not name, "number_blank": not roll}
            )
        return cls(name=name, roll=roll)

    @classmethod
    def from_dict(cls, data: Any) -> "User":
        """
        Create a user from its stored representation.

        Raises:
            ValueError: If the record is malformed
        """
        if not isinstance(data, dict):
            raise ValueError(f"User record must be a mapping, got {type(data).__name__}")
        name = data.get("name")
        roll = data.get("roll")
        if not isinstance(name, str) or not isinstance(roll, str):
            raise ValueError("User record needs string name and roll")
        return cls(name=name, roll=roll)

    def to_dict(self) -> dict[str, str]:
        """Stored representation of the user."""
        return {"name": self.name, "roll": self.roll}

    @property
    def identity_key(self) -> IdentityKey:
        """Key used for membership bookkeeping."""
        return IdentityKey(self.name, self.roll)

    @property
    def display_name(self) -> str:
        """Member roster entry, e.g. ``Alice (101)``."""
        return f"{self.name} ({self.roll})"
