"""
Core database management for the tennis tracker.
"""

import sqlite3
import logging
from contextlib import contextmanager
from typing import Dict, Iterator, Optional
from config.config_manager import ConfigManager
from database.errors import StoreError

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Manages core database operations and initialization."""

    def __init__(self, db_path: Optional[str] = None, config_file: str = "config.yaml"):
        self.config = ConfigManager.load_config(config_file)
        self.db_path = db_path or self.config['database']['path']
        self.init_database()

    def init_database(self) -> None:
        """Initialize the database with required tables."""
        try:
            with sqlite3.connect(self.db_path) as conn:
                cursor = conn.cursor()

                # Players, scoped per account
                cursor.execute("""
                    CREATE TABLE IF NOT EXISTS players (
                        account_id TEXT NOT NULL,
                        id TEXT NOT NULL,
                        name TEXT NOT NULL,
                        normalized_name TEXT NOT NULL,
                        matches_played INTEGER NOT NULL DEFAULT 0,
                        matches_won INTEGER NOT NULL DEFAULT 0,
                        sets_won INTEGER NOT NULL DEFAULT 0,
                        sets_lost INTEGER NOT NULL DEFAULT 0,
                        games_won INTEGER NOT NULL DEFAULT 0,
                        games_lost INTEGER NOT NULL DEFAULT 0,
                        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                        updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                        PRIMARY KEY (account_id, id)
                    )
                """)

                # Matches are stored as JSON documents with a few indexed columns
                cursor.execute("""
                    CREATE TABLE IF NOT EXISTS matches (
                        id TEXT PRIMARY KEY,
                        account_id TEXT NOT NULL,
                        match_timestamp TEXT NOT NULL,
                        match_type TEXT NOT NULL,
                        surface TEXT,
                        document TEXT NOT NULL,
                        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                    )
                """)

                cursor.execute("""
                    CREATE INDEX IF NOT EXISTS idx_players_name
                    ON players(account_id, normalized_name)
                """)
                cursor.execute("""
                    CREATE INDEX IF NOT EXISTS idx_matches_account_time
                    ON matches(account_id, match_timestamp)
                """)

                conn.commit()
                logger.info("Database initialized successfully")
        except sqlite3.Error as e:
            logger.error(f"Could not initialize database {self.db_path}: {e}")
            raise StoreError(f"Could not initialize database {self.db_path}: {e}") from e

    @contextmanager
    def transaction(self, action: str) -> Iterator[sqlite3.Cursor]:
        """
        Yield a cursor inside a committed transaction.
        sqlite errors are rolled back and re-raised as StoreError.
        """
        conn = sqlite3.connect(self.db_path)
        try:
            cursor = conn.cursor()
            yield cursor
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            logger.error(f"Database error while trying to {action}: {e}")
            raise StoreError(f"Could not {action}: {e}") from e
        finally:
            conn.close()

    def get_database_stats(self, account_id: Optional[str] = None) -> Dict[str, int]:
        """Get basic database statistics, optionally for one account."""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.cursor()

            if account_id is None:
                cursor.execute("SELECT COUNT(*) FROM players")
                players = cursor.fetchone()[0]
                cursor.execute("SELECT COUNT(*) FROM matches")
                matches = cursor.fetchone()[0]
            else:
                cursor.execute("SELECT COUNT(*) FROM players WHERE account_id = ?", (account_id,))
                players = cursor.fetchone()[0]
                cursor.execute("SELECT COUNT(*) FROM matches WHERE account_id = ?", (account_id,))
                matches = cursor.fetchone()[0]

            return {
                'players': players,
                'matches': matches
            }
