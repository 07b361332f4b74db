"""
Head-to-head records between a player and every opponent faced.
"""

import logging
from typing import Dict, List, Sequence

from models.head_to_head import HeadToHeadRecord
from models.match import Match
from models.player import Player

logger = logging.getLogger(__name__)


class HeadToHeadAggregator:
    """Derives pairwise win/loss records from the match history."""

    @staticmethod
    def head_to_head(player: Player, matches: Sequence[Match]) -> List[HeadToHeadRecord]:
        """
        One record per distinct opponent, keyed by normalized opponent name.

        Matches without a winner are ignored. Records are sorted by descending
        win percentage, then by opponent name (case-insensitive).
        """
        records: Dict[str, HeadToHeadRecord] = {}

        for match in matches:
            if not match.has_winner:
                continue

            team_index = match.team_index_for(player.name)
            if team_index is None:
                continue

            is_win = match.winner_team_index == team_index
            for opponent in match.teams[1 - team_index].players:
                record = records.get(opponent.normalized_name)
                if record is None:
                    record = HeadToHeadRecord(opponent=opponent)
                    records[opponent.normalized_name] = record

                if is_win:
                    record.wins += 1
                else:
                    record.losses += 1

        logger.debug(f"Head-to-head for {player.name}: {len(records)} opponents")
        return sorted(records.values(),
                      key=lambda record: (-record.win_percentage, record.opponent.name.casefold()))

    @staticmethod
    def record_against(player: Player, opponent: Player, matches: Sequence[Match]) -> HeadToHeadRecord:
        """The player's record against one opponent (0-0 when they never met)."""
        for record in HeadToHeadAggregator.head_to_head(player, matches):
            if record.opponent.normalized_name == opponent.normalized_name:
                return record
        return HeadToHeadRecord(opponent=opponent)
