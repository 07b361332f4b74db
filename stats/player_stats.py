"""
Player statistics aggregation for the tennis tracker.

Players are matched to the players embedded in a match by normalized name,
not by id: a match holds point-in-time player snapshots whose ids may no
longer exist after duplicate consolidation.
"""

import logging
from collections import Counter
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

import pandas as pd

from models.match import CourtSurface, Match, MatchType
from models.player import Player, PlayerStats

logger = logging.getLogger(__name__)


class SortCriteria(Enum):
    """Leaderboard orderings."""
    WIN_PERCENTAGE = 'Win %'
    TOTAL_WINS = 'Total Wins'
    MATCHES_PLAYED = 'Matches Played'
    SET_WIN_PERCENTAGE = 'Set Win %'
    RECENT_FORM = 'Recent Form'


class DateRangeFilter(Enum):
    """Relative date windows for filtered statistics."""
    ALL = 'All Time'
    LAST_WEEK = 'Last Week'
    LAST_MONTH = 'Last Month'
    LAST_THREE_MONTHS = 'Last 3 Months'
    LAST_YEAR = 'Last Year'

    def interval(self, now: Optional[datetime] = None) -> Optional[Tuple[datetime, datetime]]:
        """Start and end of the window ending at now; None for all time."""
        if self is DateRangeFilter.ALL:
            return None

        now = now or datetime.now(timezone.utc)
        offsets = {
            DateRangeFilter.LAST_WEEK: pd.DateOffset(weeks=1),
            DateRangeFilter.LAST_MONTH: pd.DateOffset(months=1),
            DateRangeFilter.LAST_THREE_MONTHS: pd.DateOffset(months=3),
            DateRangeFilter.LAST_YEAR: pd.DateOffset(years=1)
        }
        start = (pd.Timestamp(now) - offsets[self]).to_pydatetime()
        return start, now


class PlayerStatsAggregator:
    """Folds matches into per-player counters and derived rankings."""

    @staticmethod
    def add_match_to_stats(stats: PlayerStats, match: Match, team_index: int) -> None:
        """Add one match's result to a player's counters, seen from the given team."""
        stats.matches_played += 1
        if match.winner_team_index == team_index:
            stats.matches_won += 1

        for game_set in match.sets:
            if game_set.winner_team_index == team_index:
                stats.sets_won += 1
            else:
                stats.sets_lost += 1
            stats.games_won += game_set.games_for(team_index)
            stats.games_lost += game_set.games_against(team_index)

    @staticmethod
    def apply_match(players: Sequence[Player], match: Match) -> List[Player]:
        """
        Incrementally update player stats with a newly saved match.

        Matches without a determined winner are skipped. Players of the match
        that have no record in players are logged and skipped.

        Returns:
            The players whose stats changed
        """
        if not match.has_winner:
            logger.warning(f"Skipping match {match.id} - no winner specified")
            return []

        by_name: Dict[str, Player] = {}
        for player in players:
            by_name.setdefault(player.normalized_name, player)

        updated = []
        for match_player in match.all_players():
            player = by_name.get(match_player.normalized_name)
            if player is None:
                logger.warning(f"Could not find player {match_player.name} in player list")
                continue

            team_index = match.team_index_for(match_player.name)
            PlayerStatsAggregator.add_match_to_stats(player.stats, match, team_index)
            updated.append(player)

        return updated

    @staticmethod
    def recalculate(players: Sequence[Player], matches: Sequence[Match]) -> List[Player]:
        """
        Reset every player's stats and replay all matches.
        The result is independent of match order.
        """
        for player in players:
            player.stats.reset()

        skipped = 0
        for match in matches:
            if not match.has_winner:
                skipped += 1
                continue
            PlayerStatsAggregator.apply_match(players, match)

        logger.info(f"Recalculated stats for {len(players)} players from {len(matches) - skipped} matches "
                    f"({skipped} without winner skipped)")
        return list(players)

    @staticmethod
    def matches_for_player(player: Player, matches: Sequence[Match]) -> List[Match]:
        """Matches the player took part in, most recent first."""
        player_matches = [match for match in matches if match.team_index_for(player.name) is not None]
        return sorted(player_matches, key=lambda match: match.timestamp, reverse=True)

    @staticmethod
    def filtered_stats(player: Player, matches: Sequence[Match],
                       match_type: Optional[MatchType] = None,
                       surface: Optional[CourtSurface] = None,
                       date_range: DateRangeFilter = DateRangeFilter.ALL,
                       now: Optional[datetime] = None) -> PlayerStats:
        """
        Stats over the player's matches that pass the filters.
        Matches without a winner still count as played.
        """
        stats = PlayerStats()
        interval = date_range.interval(now)

        for match in matches:
            team_index = match.team_index_for(player.name)
            if team_index is None:
                continue
            if match_type is not None and match.match_type != match_type:
                continue
            if surface is not None and match.surface != surface:
                continue
            if interval is not None and not interval[0] <= match.timestamp <= interval[1]:
                continue

            PlayerStatsAggregator.add_match_to_stats(stats, match, team_index)

        return stats

    @staticmethod
    def recent_form(player: Player, matches: Sequence[Match], last_n_matches: int = 5) -> float:
        """Win percentage over the player's most recent matches."""
        recent = PlayerStatsAggregator.matches_for_player(player, matches)[:last_n_matches]
        if not recent:
            return 0.0

        wins = sum(1 for match in recent
                   if match.has_winner and match.winner_team_index == match.team_index_for(player.name))
        return wins / len(recent) * 100.0

    @staticmethod
    def win_streak(player: Player, matches: Sequence[Match]) -> int:
        """Consecutive wins counted back from the most recent match."""
        streak = 0
        for match in PlayerStatsAggregator.matches_for_player(player, matches):
            if not match.has_winner or match.winner_team_index != match.team_index_for(player.name):
                break
            streak += 1
        return streak

    @staticmethod
    def sort_players(players: Sequence[Player], criteria: SortCriteria = SortCriteria.WIN_PERCENTAGE,
                     matches: Sequence[Match] = (), recent_form_matches: int = 5) -> List[Player]:
        """
        Order players for a leaderboard.
        Players without matches (or sets) go last; ties are ordered by name.
        """
        def name_key(player: Player) -> str:
            return player.name.casefold()

        if criteria is SortCriteria.WIN_PERCENTAGE:
            key = lambda p: (p.stats.matches_played == 0, -p.stats.win_percentage, name_key(p))
        elif criteria is SortCriteria.TOTAL_WINS:
            key = lambda p: (-p.stats.matches_won, name_key(p))
        elif criteria is SortCriteria.MATCHES_PLAYED:
            key = lambda p: (-p.stats.matches_played, name_key(p))
        elif criteria is SortCriteria.SET_WIN_PERCENTAGE:
            key = lambda p: (p.stats.sets_won + p.stats.sets_lost == 0,
                             -p.stats.set_win_percentage, name_key(p))
        else:
            forms = {p.id: PlayerStatsAggregator.recent_form(p, matches, recent_form_matches) for p in players}
            key = lambda p: (-forms[p.id], name_key(p))

        return sorted(players, key=key)

    @staticmethod
    def top_performers(players: Sequence[Player], min_matches: int = 3, limit: int = 5) -> List[Player]:
        """Best win percentages among players with enough matches."""
        eligible = [player for player in players if player.stats.matches_played >= min_matches]
        eligible.sort(key=lambda p: (-p.stats.win_percentage, p.name.casefold()))
        return eligible[:limit]

    @staticmethod
    def player_rank(player: Player, ranked_players: Sequence[Player]) -> Optional[int]:
        """1-based position of the player in an ordered list."""
        for index, ranked in enumerate(ranked_players, 1):
            if ranked.id == player.id:
                return index
        return None

    @staticmethod
    def surface_statistics(matches: Sequence[Match]) -> List[Tuple[CourtSurface, int]]:
        """Match counts per surface, largest first, surfaces without matches omitted."""
        counts = Counter(match.surface for match in matches if match.surface is not None)
        result = [(surface, counts[surface]) for surface in CourtSurface if counts[surface] > 0]
        return sorted(result, key=lambda item: item[1], reverse=True)

    @staticmethod
    def match_type_statistics(matches: Sequence[Match]) -> List[Tuple[MatchType, int]]:
        """Match counts per match type, largest first."""
        counts = Counter(match.match_type for match in matches)
        result = [(match_type, counts[match_type]) for match_type in MatchType if counts[match_type] > 0]
        return sorted(result, key=lambda item: item[1], reverse=True)
