"""
Tennis set and match validation.

Rules enforced:
1. A standard set is won 6-0 to 6-4
2. 7-5 is a complete set without a tiebreak
3. 7-6 is only complete when tiebreak points were recorded for both sides
4. Advantage sets beyond 7 games are won by exactly two games (8-6, 9-7, ...)
5. A match has 1 to 5 sets; up to 3 sets need 2 set wins, 4 or 5 sets need 3
"""

import logging
from typing import Optional, Sequence, Tuple

from models.match import GameSet

logger = logging.getLogger(__name__)


class MatchValidator:
    """Validates tennis set and match scores."""

    MAX_SETS = 5

    @staticmethod
    def validate_set(team1_games: int, team2_games: int,
                     team1_tiebreak_points: Optional[int] = None,
                     team2_tiebreak_points: Optional[int] = None) -> bool:
        """
        Validate that a set score is a legal, finished tennis set.

        Game counts are not range-checked here, and tiebreak points are not
        checked against each other; both belong to input collection.
        """
        max_games = max(team1_games, team2_games)
        min_games = min(team1_games, team2_games)

        if max_games == 6 and min_games <= 4:
            return True

        if max_games == 7 and min_games == 5:
            return True

        if max_games == 7 and min_games == 6:
            return team1_tiebreak_points is not None and team2_tiebreak_points is not None

        if max_games > 7 and max_games - min_games == 2:
            return True

        return False

    @staticmethod
    def validate_game_set(game_set: GameSet) -> bool:
        """Validate a GameSet using its own recorded tiebreak points."""
        return MatchValidator.validate_set(
            game_set.team1_games, game_set.team2_games,
            game_set.team1_tiebreak_points, game_set.team2_tiebreak_points
        )

    @staticmethod
    def set_winner(game_set: GameSet) -> int:
        """Index (0 or 1) of the team that won the set."""
        return game_set.winner_team_index

    @staticmethod
    def requires_tiebreak(team1_games: Optional[int], team2_games: Optional[int]) -> bool:
        """Check if a set score requires tiebreak points."""
        if team1_games is None or team2_games is None:
            return False
        return (team1_games == 7 and team2_games == 6) or (team1_games == 6 and team2_games == 7)

    @staticmethod
    def sets_won(sets: Sequence[GameSet]) -> Tuple[int, int]:
        """Number of sets won by team 1 and team 2."""
        team1_sets = sum(1 for game_set in sets if game_set.winner_team_index == 0)
        return team1_sets, len(sets) - team1_sets

    @staticmethod
    def required_set_wins(set_count: int) -> int:
        """Set wins needed to take a match of the given length (best of 3 or 5)."""
        return 2 if set_count <= 3 else 3

    @staticmethod
    def validate_match(sets: Sequence[GameSet]) -> bool:
        """Validate a complete best-of-3 or best-of-5 match."""
        if not sets or len(sets) > MatchValidator.MAX_SETS:
            return False

        for game_set in sets:
            if not MatchValidator.validate_game_set(game_set):
                logger.debug(f"Set {game_set.score_string} is not a valid tennis set")
                return False

        team1_sets, team2_sets = MatchValidator.sets_won(sets)
        return max(team1_sets, team2_sets) >= MatchValidator.required_set_wins(len(sets))
