"""
Models package for the club portal.
Contains data models for core business objects.
"""

from .club import Club, ClubId
from .membership import IdentityKey, MembershipIndex
from .session import SessionView
from .user import User

__all__ = ['Club', 'ClubId', 'IdentityKey', 'MembershipIndex', 'SessionView', 'User']
