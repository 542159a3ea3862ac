"""Login and logout."""

from clubportal.models.session import SessionView
from clubportal.models.user import User
from clubportal.utils.logging_utils import EnhancedLoggerMixin


class SessionService(EnhancedLoggerMixin):
    """Manages who is logged in."""

    def login(self, view: SessionView, name: str | None = None, number: str | None = None) -> User:
        """
        Log a user in.

        Args:
            view: Session view to update
            name: Name as typed, defaults to the login form field
            number: Roll number as typed, defaults to the login form field

        Returns:
            The logged-in user

        Raises:
            ValidationError: If either field is blank after trimming
        """
        name = view.login_name if name is None else name
        number = view.login_number if number is None else number

        user = User.from_login(name, number)
        view.current_user = user
        view.clear_login_fields()
        self.info("User logged in", user=user.display_name)
        return user

    def logout(self, view: SessionView) -> User | None:
        """Log out and drop all browsing state. Returns the previous user."""
        previous = view.current_user
        view.current_user = None
        view.clear_browsing()
        if previous is not None:
            self.info("User logged out", user=previous.display_name)
        return previous
