"""Error codes for the club portal."""

from enum import Enum

class ErrorCode(Enum):
    """Enumeration of all possible error codes."""
    # Session Errors
    AUTH_REQUIRED = "auth_required"
    VALIDATION_FAILED = "validation_failed"

    # Membership Errors
    ALREADY_JOINED = "already_joined"
    CLUB_NOT_FOUND = "club_not_found"

    # Storage Errors
    STORAGE_CORRUPT = "storage_corrupt"
    STORAGE_UNAVAILABLE = "storage_unavailable"

    # Configuration Errors
    CONFIG_INVALID = "config_invalid"
    CONFIG_MISSING = "config_missing"
