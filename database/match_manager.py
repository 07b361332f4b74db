"""
Match management for the tennis tracker database.
"""

import json
import logging
from typing import List, Optional
from models.match import Match
from database.errors import StoreError

logger = logging.getLogger(__name__)


class MatchManager:
    """Manages match documents in the database."""

    def __init__(self, database_manager):
        self.db_manager = database_manager

    @staticmethod
    def _decode(document: str) -> Match:
        try:
            return Match.from_dict(json.loads(document))
        except (ValueError, KeyError, TypeError) as e:
            raise StoreError(f"Corrupt match document: {e}") from e

    def get_all_matches(self, account_id: str, limit: Optional[int] = None) -> List[Match]:
        """Get matches of an account, most recent first."""
        sql = """
            SELECT document FROM matches
            WHERE account_id = ?
            ORDER BY match_timestamp DESC
        """
        params = (account_id,)
        if limit is not None:
            sql += " LIMIT ?"
            params = (account_id, limit)

        with self.db_manager.transaction("fetch matches") as cursor:
            cursor.execute(sql, params)
            rows = cursor.fetchall()

        return [self._decode(row[0]) for row in rows]

    def save_match(self, account_id: str, match: Match) -> None:
        """Insert a match document, or overwrite it when it already exists."""
        document = json.dumps(match.to_dict())
        with self.db_manager.transaction(f"save match {match.id}") as cursor:
            cursor.execute("""
                INSERT INTO matches (id, account_id, match_timestamp, match_type, surface, document)
                VALUES (?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    match_timestamp = excluded.match_timestamp,
                    match_type = excluded.match_type,
                    surface = excluded.surface,
                    document = excluded.document
            """, (
                match.id, account_id, match.timestamp.isoformat(), match.match_type.value,
                match.surface.value if match.surface else None, document
            ))
        logger.info(f"Saved match {match.id}: {match.score_string}")
