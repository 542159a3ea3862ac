"""Joining clubs, one per category per user."""

from clubportal.exceptions import AlreadyJoinedError
from clubportal.exceptions import AuthRequiredError
from clubportal.exceptions import ClubNotFoundError
from clubportal.models.club import Club
from clubportal.models.membership import MembershipIndex
from clubportal.models.session import SessionView
from clubportal.services.search_service import DETAIL_LOGIN_MESSAGE
from clubportal.services.search_service import filter_clubs
from clubportal.services.search_service import find_club
from clubportal.utils.logging_utils import EnhancedLoggerMixin


class MembershipService(EnhancedLoggerMixin):
    """Applies joins to the club store and the membership index."""

    def join(self, view: SessionView, clubs: list[Club], index: MembershipIndex, club: Club) -> Club:
        """
        Join a club for the current user.

        On success the club gains one view and one roster entry, the index
        records the category, and the view returns to a refreshed list: the
        results are recomputed with the current query, then the selection and
        the query are cleared.

        Args:
            view: Session view to update
            clubs: Current club store, mutated in place
            index: Membership index, mutated in place
            club: Club to join

        Returns:
            The joined club

        Raises:
            AuthRequiredError: If nobody is logged in
            AlreadyJoinedError: If the user already holds a club in the
                category; nothing is changed
        """
        user = view.current_user
        if user is None:
            raise AuthRequiredError(DETAIL_LOGIN_MESSAGE, {"action": "join_club"})

        key = user.identity_key
        held_id = index.club_for(key, club.category)
        if held_id is not None:
            try:
                held_name: str | None = find_club(clubs, held_id).name
            except ClubNotFoundError:
                held_name = None
            raise AlreadyJoinedError(held_name, club.category)

        index.record(key, club.category, club.id)
        club.add_member(user)
        self.info(
            "Joined club",
            user=user.display_name,
            club_id=club.id,
            category=club.category,
            views=club.views
        )

        view.results = filter_clubs(clubs, view.query)
        view.selected_club = None
        view.query = ""
        return club
