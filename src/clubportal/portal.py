"""
Application state for the club portal.

``ClubPortal`` owns the club store, the membership index and the session
view, and exposes one method per user action. Actions never raise for
expected failures: the error becomes the transient status message and the
action returns False.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from clubportal.config.types import AppConfig
from clubportal.exceptions import AuthRequiredError
from clubportal.exceptions import ClubPortalError
from clubportal.exceptions import StorageError
from clubportal.exceptions import handle_errors
from clubportal.models.club import Club
from clubportal.models.club import ClubId
from clubportal.models.membership import MembershipIndex
from clubportal.models.session import SessionView
from clubportal.models.user import User
from clubportal.services.membership_service import MembershipService
from clubportal.services.message_service import DEFAULT_TIMEOUT_MS
from clubportal.services.message_service import MessageService
from clubportal.services.message_service import TimerFactory
from clubportal.services.persistence_service import PersistenceService
from clubportal.services.search_service import DETAIL_LOGIN_MESSAGE
from clubportal.services.search_service import SearchService
from clubportal.services.search_service import find_club
from clubportal.services.seed_service import SeedService
from clubportal.services.session_service import SessionService
from clubportal.services.storage import KeyValueStore
from clubportal.services.storage import SQLiteKeyValueStore
from clubportal.utils.logging_utils import EnhancedLoggerMixin
from clubportal.utils.logging_utils import log_execution


@dataclass
class _JoinSnapshot:
    """State a join touches, captured before the join is applied."""
    views: int
    members: list[str]
    memberships: MembershipIndex
    query: str
    results: list[Club]
    selected_club: Club | None

    @classmethod
    def take(cls, view: SessionView, memberships: MembershipIndex, club: Club) -> "_JoinSnapshot":
        return cls(
            views=club.views,
            members=list(club.members),
            memberships=memberships.copy(),
            query=view.query,
            results=list(view.results),
            selected_club=view.selected_club
        )

    def apply(self, view: SessionView, club: Club) -> MembershipIndex:
        """Put the club and view back; returns the saved index."""
        club.views = self.views
        club.members = list(self.members)
        view.query = self.query
        view.results = list(self.results)
        view.selected_club = self.selected_club
        return self.memberships


class ClubPortal(EnhancedLoggerMixin):
    """Single-user club directory state manager."""

    def __init__(
        self,
        store: KeyValueStore,
        seed_service: SeedService | None = None,
        message_timeout_ms: int = DEFAULT_TIMEOUT_MS,
        timer_factory: TimerFactory | None = None
    ):
        """Load state from storage and write it back once.

        Args:
            store: Durable key-value storage
            seed_service: Source of the initial club list
            message_timeout_ms: How long status messages stay visible
            timer_factory: Replacement for the message expiry timer
        """
        super().__init__()
        self.persistence = PersistenceService(store, seed_service)
        if timer_factory is None:
            self.messages = MessageService(message_timeout_ms)
        else:
            self.messages = MessageService(message_timeout_ms, timer_factory)

        self.session_service = SessionService()
        self.search_service = SearchService()
        self.membership_service = MembershipService()

        clubs, memberships, current_user = self.persistence.load_state()
        self.clubs: list[Club] = clubs
        self.memberships: MembershipIndex = memberships
        self.view = SessionView(current_user=current_user)
        self._sync_all()

    @classmethod
    def from_config(cls, config: AppConfig) -> "ClubPortal":
        """Create a portal backed by the configured SQLite file."""
        return cls(
            SQLiteKeyValueStore(config.db_path),
            SeedService(config.seed_file),
            message_timeout_ms=config.message_timeout_ms
        )

    def __enter__(self) -> "ClubPortal":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Stop the pending message timer."""
        self.messages.close()

    # Storage sync

    def _sync_clubs(self) -> None:
        self.persistence.save_clubs(self.clubs)

    def _sync_memberships(self) -> None:
        self.persistence.save_memberships(self.memberships)

    def _sync_current_user(self) -> None:
        self.persistence.save_current_user(self.view.current_user)

    def _sync_all(self) -> None:
        self._sync_clubs()
        self._sync_memberships()
        self._sync_current_user()

    # Error handling

    def _reject(self, error: ClubPortalError) -> None:
        self.info("Action rejected", code=error.code.value, reason=error.message)
        self.messages.show(error.message)

    @contextmanager
    def _action(self, operation: str) -> Iterator[None]:
        with handle_errors(ClubPortalError, "portal", operation, self._reject):
            yield

    # Read-only view

    @property
    def current_user(self) -> User | None:
        return self.view.current_user

    @property
    def message(self) -> str:
        return self.messages.message

    @property
    def query(self) -> str:
        return self.view.query

    @property
    def results(self) -> list[Club]:
        return list(self.view.results)

    @property
    def selected_club(self) -> Club | None:
        return self.view.selected_club

    def get_club(self, club_id: ClubId) -> Club:
        """
        Look up a club in the store.

        Raises:
            ClubNotFoundError: If the id is unknown
        """
        return find_club(self.clubs, club_id)

    def joined_club_id(self, category: str) -> ClubId | None:
        """Club the current user joined in a category, if any."""
        if self.view.current_user is None:
            return None
        return self.memberships.club_for(self.view.current_user.identity_key, category)

    def joined_clubs(self) -> dict[str, ClubId]:
        """Category to club id for the current user."""
        if self.view.current_user is None:
            return {}
        return self.memberships.joined(self.view.current_user.identity_key)

    def can_join(self, club: Club) -> bool:
        """Whether the join action is open for this club's category."""
        return self.view.current_user is not None and self.joined_club_id(club.category) is None

    # Actions

    def set_login_fields(self, name: str, number: str) -> None:
        """Update the login form fields."""
        self.view.login_name = name
        self.view.login_number = number

    def set_query(self, text: str) -> None:
        """Update the search field without searching."""
        self.view.query = text

    @log_execution()
    def login(self, name: str | None = None, number: str | None = None) -> bool:
        """Log in with a name and roll number (defaults: the form fields)."""
        with self._action("login"):
            user = self.session_service.login(self.view, name, number)
            self._sync_current_user()
            self.messages.show(f"Welcome {user.name}")
            return True
        return False

    @log_execution()
    def logout(self) -> bool:
        """Log out and clear the browsing state."""
        with self._action("logout"):
            self.session_service.logout(self.view)
            self._sync_current_user()
            self.messages.show("Logged out")
            return True
        return False

    @log_execution(include_args=True)
    def search(self, query: str | None = None) -> bool:
        """Search club names; uses the search field when no query is given."""
        with self._action("search"):
            self.search_service.search(self.view, self.clubs, query)
            return True
        return False

    @log_execution(include_args=True)
    def select_club(self, club_id: ClubId) -> bool:
        """Open the detail view of a club."""
        with self._action("select_club"):
            self.search_service.select(self.view, self.clubs, club_id)
            return True
        return False

    def deselect_club(self) -> None:
        """Go back to the list view."""
        self.search_service.deselect(self.view)

    @log_execution(include_args=True)
    def join_club(self, club_id: ClubId) -> bool:
        """Join a club for the current user."""
        with self._action("join_club"):
            if self.view.current_user is None:
                raise AuthRequiredError(DETAIL_LOGIN_MESSAGE, {"action": "join_club"})
            club = find_club(self.clubs, club_id)
            snapshot = _JoinSnapshot.take(self.view, self.memberships, club)
            self.membership_service.join(self.view, self.clubs, self.memberships, club)
            try:
                self._sync_memberships()
                self._sync_clubs()
            except StorageError:
                self._undo_join(club, snapshot)
                raise
            self.messages.show(f"You joined {club.name} ✅")
            return True
        return False

    def _undo_join(self, club: Club, snapshot: "_JoinSnapshot") -> None:
        """Restore memory to its pre-join state and rewrite both slots."""
        self.memberships = snapshot.apply(self.view, club)
        try:
            self._sync_memberships()
            self._sync_clubs()
        except StorageError as e:
            self.error("Failed to restore storage after failed join", club_id=club.id, error=e.message)

    @log_execution()
    def reset(self) -> None:
        """Wipe storage and start again from the seed dataset."""
        self.persistence.clear()
        self.messages.clear()
        self.clubs = self.persistence.load_clubs()
        self.memberships = MembershipIndex()
        self.view = SessionView()
        self._sync_all()
        self.warning("Portal state reset", clubs=len(self.clubs))
