"""
SQLite-backed match store for a single account.
"""

from typing import List

from database.database_manager import DatabaseManager
from database.match_manager import MatchManager
from database.player_manager import PlayerManager
from models.match import Match
from models.player import Player


class SQLiteStore:
    """MatchStore implementation over the local sqlite database."""

    def __init__(self, database_manager: DatabaseManager, account_id: str):
        self.db_manager = database_manager
        self.account_id = account_id
        self.player_manager = PlayerManager(database_manager)
        self.match_manager = MatchManager(database_manager)

    def fetch_players(self) -> List[Player]:
        return self.player_manager.get_all_players(self.account_id)

    def save_player(self, player: Player) -> None:
        self.player_manager.save_player(self.account_id, player)

    def delete_player(self, player_id: str) -> None:
        self.player_manager.delete_player(self.account_id, player_id)

    def fetch_matches(self) -> List[Match]:
        return self.match_manager.get_all_matches(self.account_id)

    def fetch_recent_matches(self, limit: int = 10) -> List[Match]:
        return self.match_manager.get_all_matches(self.account_id, limit=limit)

    def save_match(self, match: Match) -> None:
        self.match_manager.save_match(self.account_id, match)
