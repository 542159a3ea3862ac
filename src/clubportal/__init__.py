"""
Club directory application.
"""

__version__ = '0.1.0'

from .exceptions import (
    AlreadyJoinedError,
    AuthRequiredError,
    ClubNotFoundError,
    ClubPortalError,
    ConfigError,
    StorageError,
    ValidationError,
)

__all__ = [
    'AlreadyJoinedError',
    'AuthRequiredError',
    'ClubNotFoundError',
    'ClubPortalError',
    'ConfigError',
    'StorageError',
    'ValidationError'
]
