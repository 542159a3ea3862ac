"""Centralized error definitions for the club portal."""

import logging
from collections.abc import Callable
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

from clubportal.config.error_aggregator import aggregate_error
from clubportal.error_codes import ErrorCode


logger = logging.getLogger(__name__)

@dataclass
class ClubPortalError(Exception):
    """Base exception for all club portal errors."""
    message: str
    code: ErrorCode
    details: dict[str, Any] | None = None

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (Code: {self.code.value}, Details: {self.details})"
        return f"{self.message} (Code: {self.code.value})"

class ValidationError(ClubPortalError):
    """Validation error."""
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, ErrorCode.VALIDATION_FAILED, details)

class AuthRequiredError(ClubPortalError):
    """Action attempted while nobody is logged in."""
    def __init__(self, message: str = "Login first", details: dict[str, Any] | None = None):
        super().__init__(message, ErrorCode.AUTH_REQUIRED, details)

class AlreadyJoinedError(ClubPortalError):
    """User already joined a club in the target category."""
    def __init__(self, club_name: str | None, category: str | None = None):
        super().__init__(
            f'You already joined "{club_name}" in this category.',
            ErrorCode.ALREADY_JOINED,
            {"club_name": club_name, "category": category}
        )
        self.club_name = club_name
        self.category = category

class ClubNotFoundError(ClubPortalError):
    """Unknown club id."""
    def __init__(self, club_id: Any):
        super().__init__(f"Club {club_id} does not exist", ErrorCode.CLUB_NOT_FOUND, {"club_id": club_id})
        self.club_id = club_id

class StorageError(ClubPortalError):
    """Malformed or unreadable storage slot."""
    def __init__(self, message: str, slot: str, code: ErrorCode = ErrorCode.STORAGE_CORRUPT):
        super().__init__(message, code, {"slot": slot})
        self.slot = slot

class ConfigError(ClubPortalError):
    """Configuration error."""
    def __init__(self, message: str, details: dict[str, Any] | None = None, code: ErrorCode = ErrorCode.CONFIG_INVALID):
        super().__init__(message, code, details)

@contextmanager
def handle_errors(
    error_type: type[ClubPortalError],
    service: str,
    operation: str,
    on_error: Callable[[ClubPortalError], None] | None = None
) -> Iterator[None]:
    """Handle errors in a context manager.

    Args:
        error_type: The error type to catch
        service: The service name
        operation: The operation name
        on_error: Optional handler; when given, caught errors are passed to it
            and not re-raised

    Raises:
        The caught error when no handler is given, and any unexpected error
    """
    try:
        yield
    except error_type as e:
        aggregate_error(e.message, service, operation)

        if on_error is None:
            raise
        on_error(e)
    except Exception as e:
        logger.error(
            f"Unexpected error in {service}.{operation}: {e}",
            exc_info=True
        )
        aggregate_error(str(e), service, operation)
        raise
