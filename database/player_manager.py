"""
Player management for the tennis tracker database.
"""

import logging
from typing import List, Tuple
from models.player import Player, PlayerStats

logger = logging.getLogger(__name__)

PLAYER_COLUMNS = """
    id, name, matches_played, matches_won, sets_won, sets_lost, games_won, games_lost
"""


class PlayerManager:
    """Manages player-related database operations."""

    def __init__(self, database_manager):
        self.db_manager = database_manager

    @staticmethod
    def _row_to_player(row: Tuple) -> Player:
        return Player(
            id=row[0],
            name=row[1],
            stats=PlayerStats(
                matches_played=row[2],
                matches_won=row[3],
                sets_won=row[4],
                sets_lost=row[5],
                games_won=row[6],
                games_lost=row[7]
            )
        )

    def get_all_players(self, account_id: str) -> List[Player]:
        """Get all players of an account, in creation order."""
        with self.db_manager.transaction("fetch players") as cursor:
            cursor.execute(f"""
                SELECT {PLAYER_COLUMNS}
                FROM players
                WHERE account_id = ?
                ORDER BY created_at, rowid
            """, (account_id,))
            return [self._row_to_player(row) for row in cursor.fetchall()]

    def save_player(self, account_id: str, player: Player) -> None:
        """Insert or update a player record."""
        stats = player.stats
        with self.db_manager.transaction(f"save player {player.name}") as cursor:
            cursor.execute("""
                SELECT 1 FROM players WHERE account_id = ? AND id = ?
            """, (account_id, player.id))

            if cursor.fetchone():
                cursor.execute("""
                    UPDATE players SET
                        name = ?, normalized_name = ?,
                        matches_played = ?, matches_won = ?, sets_won = ?, sets_lost = ?,
                        games_won = ?, games_lost = ?, updated_at = CURRENT_TIMESTAMP
                    WHERE account_id = ? AND id = ?
                """, (
                    player.name, player.normalized_name,
                    stats.matches_played, stats.matches_won, stats.sets_won, stats.sets_lost,
                    stats.games_won, stats.games_lost,
                    account_id, player.id
                ))
                logger.debug(f"Updated player {player.name}")
            else:
                cursor.execute("""
                    INSERT INTO players (
                        account_id, id, name, normalized_name,
                        matches_played, matches_won, sets_won, sets_lost, games_won, games_lost
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """, (
                    account_id, player.id, player.name, player.normalized_name,
                    stats.matches_played, stats.matches_won, stats.sets_won, stats.sets_lost,
                    stats.games_won, stats.games_lost
                ))
                logger.info(f"Added new player {player.name}")

    def delete_player(self, account_id: str, player_id: str) -> None:
        """Delete a player record."""
        with self.db_manager.transaction(f"delete player {player_id}") as cursor:
            cursor.execute("""
                DELETE FROM players WHERE account_id = ? AND id = ?
            """, (account_id, player_id))
            if cursor.rowcount:
                logger.info(f"Deleted player {player_id}")
            else:
                logger.debug(f"No player {player_id} to delete")
