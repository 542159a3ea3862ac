"""
Session and view state for the club portal.
"""

from dataclasses import dataclass
from dataclasses import field

from clubportal.models.club import Club
from clubportal.models.user import User

@dataclass
class SessionView:
    """In-memory view state. Only ``current_user`` outlives the process."""
    current_user: User | None = None
    login_name: str = ""
    login_number: str = ""
    query: str = ""
    results: list[Club] = field(default_factory=list)
    selected_club: Club | None = None

    @property
    def is_logged_in(self) -> bool:
        return self.current_user is not None

    @property
    def is_detail_view(self) -> bool:
        return self.selected_club is not None

    @property
    def is_list_view(self) -> bool:
        return bool(self.results) and self.selected_club is None

    def clear_login_fields(self) -> None:
        self.login_name = ""
        self.login_number = ""

    def clear_browsing(self) -> None:
        """Drop query, results and selection."""
        self.query = ""
        self.results = []
        self.selected_club = None
