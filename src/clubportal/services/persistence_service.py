"""Write-through persistence of the portal's durable slots."""

import json
from typing import Any

from clubportal.exceptions import StorageError
from clubportal.models.club import Club
from clubportal.models.membership import MembershipIndex
from clubportal.models.user import User
from clubportal.services.seed_service import SeedService
from clubportal.services.storage import KeyValueStore
from clubportal.utils.logging_utils import EnhancedLoggerMixin


CLUBS_SLOT = "clubs"
MEMBERSHIP_SLOT = "joinedByUser"
CURRENT_USER_SLOT = "currentUser"

SLOTS = (CLUBS_SLOT, MEMBERSHIP_SLOT, CURRENT_USER_SLOT)


class PersistenceService(EnhancedLoggerMixin):
    """Loads and saves the club store, membership index and current user.

    Every save serializes the whole structure and overwrites its slot.
    Loads never fail: unreadable or malformed slots fall back to defaults.
    """

    def __init__(self, store: KeyValueStore, seed_service: SeedService | None = None):
        super().__init__()
        self.store = store
        self.seed_service = seed_service or SeedService()

    def _read_json(self, slot: str) -> Any | None:
        """Decoded slot content, or None when the slot is empty.

        Raises:
            StorageError: If the slot cannot be read or is not valid JSON
        """
        raw = self.store.get(slot)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageError(f"Slot {slot} does not hold valid JSON: {e.msg}", slot) from e

    def _write_json(self, slot: str, value: Any) -> None:
        self.store.set(slot, json.dumps(value, ensure_ascii=False))

    def _fallback(self, slot: str, error: Exception) -> None:
        self.warning("Ignoring unreadable slot, using defaults", slot=slot, error=str(error))

    def _load_stored_clubs(self) -> list[Club] | None:
        """Stored clubs, or None when the slot is empty or unreadable."""
        try:
            data = self._read_json(CLUBS_SLOT)
            if data is not None and not isinstance(data, list):
                raise StorageError(f"Slot {CLUBS_SLOT} must hold a list", CLUBS_SLOT)
            if data:
                clubs = [Club.from_dict(record) for record in data]
                self.debug("Loaded clubs from storage", clubs=len(clubs))
                return clubs
        except (StorageError, ValueError) as e:
            self._fallback(CLUBS_SLOT, e)
        return None

    def load_clubs(self) -> list[Club]:
        """Stored clubs when present and non-empty, else the seed dataset."""
        return self._load_stored_clubs() or self.seed_service.seed_clubs()

    def load_state(self) -> tuple[list[Club], MembershipIndex, User | None]:
        """
        Load clubs, memberships and the current user together.

        Seeded clubs start with no members, so a stored membership index is
        discarded whenever the club store falls back to the seed dataset.
        """
        clubs = self._load_stored_clubs()
        memberships = self.load_memberships()
        if clubs is None:
            clubs = self.seed_service.seed_clubs()
            if len(memberships):
                self.warning(
                    "Discarding memberships, club store was reseeded",
                    users=len(memberships)
                )
                memberships = MembershipIndex()
        return clubs, memberships, self.load_current_user()

    def load_memberships(self) -> MembershipIndex:
        """Stored membership index, else an empty one."""
        try:
            data = self._read_json(MEMBERSHIP_SLOT)
            if data is not None:
                index = MembershipIndex.from_dict(data)
                self.debug("Loaded memberships from storage", users=len(index))
                return index
        except (StorageError, ValueError) as e:
            self._fallback(MEMBERSHIP_SLOT, e)
        return MembershipIndex()

    def load_current_user(self) -> User | None:
        """Stored current user, else None."""
        try:
            data = self._read_json(CURRENT_USER_SLOT)
            if data is not None:
                return User.from_dict(data)
        except (StorageError, ValueError) as e:
            self._fallback(CURRENT_USER_SLOT, e)
        return None

    def save_clubs(self, clubs: list[Club]) -> None:
        self._write_json(CLUBS_SLOT, [club.to_dict() for club in clubs])

    def save_memberships(self, index: MembershipIndex) -> None:
        self._write_json(MEMBERSHIP_SLOT, index.to_dict())

    def save_current_user(self, user: User | None) -> None:
        self._write_json(CURRENT_USER_SLOT, user.to_dict() if user else None)

    def clear(self) -> None:
        """Delete all durable slots."""
        for slot in SLOTS:
            self.store.delete(slot)
        self.info("Cleared storage slots")
