"""Club search and selection."""

from collections.abc import Iterable

from clubportal.exceptions import AuthRequiredError
from clubportal.exceptions import ClubNotFoundError
from clubportal.models.club import Club
from clubportal.models.club import ClubId
from clubportal.models.session import SessionView
from clubportal.utils.logging_utils import EnhancedLoggerMixin


SEARCH_LOGIN_MESSAGE = "Login first to search clubs"
DETAIL_LOGIN_MESSAGE = "Login first to view club details"


def filter_clubs(clubs: Iterable[Club], query: str) -> list[Club]:
    """Clubs whose name contains ``query`` (case-insensitive), most viewed first.

    The sort is stable, so clubs with equal views keep their store order.
    An empty query matches every club.
    """
    return sorted(
        (club for club in clubs if club.matches(query)),
        key=lambda club: club.views,
        reverse=True
    )


def find_club(clubs: Iterable[Club], club_id: ClubId) -> Club:
    """
    Look up a club by id.

    Raises:
        ClubNotFoundError: If no club has the id
    """
    for club in clubs:
        if club.id == club_id:
            return club
    raise ClubNotFoundError(club_id)


class SearchService(EnhancedLoggerMixin):
    """Runs searches and moves the view between list and detail."""

    def search(self, view: SessionView, clubs: list[Club], query: str | None = None) -> list[Club]:
        """
        Replace the result list with clubs matching the query.

        Args:
            view: Session view to update
            clubs: Current club store
            query: Query text, defaults to the view's query field

        Returns:
            The new result list

        Raises:
            AuthRequiredError: If nobody is logged in
        """
        if view.current_user is None:
            raise AuthRequiredError(SEARCH_LOGIN_MESSAGE, {"action": "search"})

        query = view.query if query is None else query
        view.results = filter_clubs(clubs, query)
        view.selected_club = None
        self.debug("Search finished", query=query, results=len(view.results))
        return view.results

    def select(self, view: SessionView, clubs: list[Club], club_id: ClubId) -> Club:
        """
        Switch to the detail view of a club.

        Raises:
            AuthRequiredError: If nobody is logged in
            ClubNotFoundError: If the club id is unknown
        """
        if view.current_user is None:
            raise AuthRequiredError(DETAIL_LOGIN_MESSAGE, {"action": "select_club"})

        club = find_club(clubs, club_id)
        view.selected_club = club
        return club

    def deselect(self, view: SessionView) -> None:
        """Return to the list view."""
        view.selected_club = None
