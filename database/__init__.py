"""
Database package for the tennis tracker.
"""

from .errors import StoreError, InvalidMatchDataError, ConsolidationError
from .store import MatchStore, AuthProvider
from .database_manager import DatabaseManager
from .player_manager import PlayerManager
from .match_manager import MatchManager
from .sqlite_store import SQLiteStore
from .remote_store import RemoteStore
from .auth import StaticAuthProvider, RemoteAuthProvider

__all__ = [
    'StoreError', 'InvalidMatchDataError', 'ConsolidationError',
    'MatchStore', 'AuthProvider',
    'DatabaseManager', 'PlayerManager', 'MatchManager',
    'SQLiteStore', 'RemoteStore', 'StaticAuthProvider', 'RemoteAuthProvider'
]
