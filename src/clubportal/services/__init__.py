"""
Service layer for the club portal.
"""

from .membership_service import MembershipService
from .message_service import MessageService
from .persistence_service import PersistenceService
from .search_service import SearchService, filter_clubs
from .seed_service import SeedService
from .session_service import SessionService
from .storage import KeyValueStore, MemoryKeyValueStore, SQLiteKeyValueStore

__all__ = [
    'KeyValueStore',
    'MembershipService',
    'MemoryKeyValueStore',
    'MessageService',
    'PersistenceService',
    'SQLiteKeyValueStore',
    'SearchService',
    'SeedService',
    'SessionService',
    'filter_clubs',
]
