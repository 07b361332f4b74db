"""
Duplicate player consolidation and duplicate match detection.

Consolidation writes in a fixed order per group: the merged primary player
first, then the rewritten matches, and only then deletes the duplicate
records. A failure before the deletions leaves extra records behind but
loses no data.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Set, Tuple

from database.errors import ConsolidationError, StoreError
from database.store import MatchStore
from models.match import Match, Team
from models.player import Player
from utils.name_utils import NameUtils

logger = logging.getLogger(__name__)


@dataclass
class ConsolidationResult:
    """Outcome of one consolidation run."""
    primaries: List[Player] = field(default_factory=list)
    removed_player_ids: List[str] = field(default_factory=list)
    rewritten_match_ids: List[str] = field(default_factory=list)

    @property
    def groups_merged(self) -> int:
        return len(self.primaries)

    @property
    def changed(self) -> bool:
        return bool(self.primaries)


class DuplicatePlayerConsolidator:
    """Merges player records that share a normalized name into one canonical record."""

    def __init__(self, store: MatchStore):
        self.store = store

    @staticmethod
    def find_duplicate_groups(players: Sequence[Player]) -> Dict[str, List[Player]]:
        """Groups of more than one player with the same normalized name."""
        groups = NameUtils.group_by_normalized_name(players, lambda player: player.name)
        return {name: group for name, group in groups.items() if len(group) > 1}

    @staticmethod
    def choose_primary(group: Sequence[Player]) -> Player:
        """The member with the most matches played; ties go to the first encountered."""
        primary = group[0]
        for player in group[1:]:
            if player.stats.matches_played > primary.stats.matches_played:
                primary = player
        return primary

    @staticmethod
    def merge_group(group: Sequence[Player]) -> Tuple[Player, List[Player]]:
        """
        Merge a duplicate group.

        Returns:
            (primary with the summed stats of all members, the non-primary members)
        """
        primary = DuplicatePlayerConsolidator.choose_primary(group).snapshot()
        duplicates = [player for player in group if player.id != primary.id]
        for duplicate in duplicates:
            primary.stats.merge(duplicate.stats)
        return primary, duplicates

    @staticmethod
    def rewrite_match(match: Match, primary: Player, duplicate_ids: Set[str]) -> Match:
        """Copy of the match with references to duplicate ids replaced by the primary snapshot."""
        teams = []
        for team in match.teams:
            players = [primary.snapshot() if player.id in duplicate_ids else player
                       for player in team.players]
            teams.append(Team(players=players, id=team.id))
        return match.with_teams(teams)

    def consolidate(self) -> ConsolidationResult:
        """
        Merge every group of duplicate players in the store.
        Running it again without new duplicates changes nothing.
        """
        logger.info("Starting player consolidation...")
        result = ConsolidationResult()

        players = self.store.fetch_players()
        groups = self.find_duplicate_groups(players)
        if not groups:
            logger.info("No duplicate players found")
            return result

        matches = self.store.fetch_matches()

        for normalized_name, group in groups.items():
            logger.info(f"Found {len(group)} duplicate players for name: {normalized_name}")
            primary, duplicates = self.merge_group(group)
            duplicate_ids = {duplicate.id for duplicate in duplicates}

            step = "save merged primary"
            try:
                self.store.save_player(primary)

                step = "rewrite matches"
                for index, match in enumerate(matches):
                    if not any(team.has_player_id(player_id)
                               for team in match.teams for player_id in duplicate_ids):
                        continue
                    rewritten = self.rewrite_match(match, primary, duplicate_ids)
                    self.store.save_match(rewritten)
                    matches[index] = rewritten
                    result.rewritten_match_ids.append(match.id)
                    logger.info(f"Updated match {match.id} to use consolidated player {primary.name}")

                step = "delete duplicates"
                for duplicate_id in sorted(duplicate_ids):
                    self.store.delete_player(duplicate_id)
                    result.removed_player_ids.append(duplicate_id)
                    logger.info(f"Deleted duplicate player: {duplicate_id}")
            except StoreError as e:
                logger.error(f"Consolidation of '{normalized_name}' failed during '{step}': {e}")
                raise ConsolidationError(
                    f"Consolidation of '{normalized_name}' failed during '{step}': {e}",
                    normalized_name=normalized_name, step=step
                ) from e

            result.primaries.append(primary)

        logger.info(f"Player consolidation completed: {result.groups_merged} groups merged, "
                    f"{len(result.removed_player_ids)} records removed, "
                    f"{len(result.rewritten_match_ids)} match updates")
        return result


class DuplicateMatchDetector:
    """Flags pairs of matches that look like the same match recorded twice."""

    @staticmethod
    def detect(matches: Sequence[Match], window_seconds: int = 3600) -> List[Tuple[Match, Match]]:
        """
        Pairs recorded less than window_seconds apart with the same players.
        Advisory only: candidates are returned for review, nothing is deleted.
        """
        candidates = []
        for i, first in enumerate(matches):
            for second in matches[i + 1:]:
                gap = abs((first.timestamp - second.timestamp).total_seconds())
                if gap < window_seconds and first.player_names() == second.player_names():
                    candidates.append((first, second))

        if candidates:
            logger.warning(f"Found {len(candidates)} possible duplicate match pair(s)")
        return candidates
