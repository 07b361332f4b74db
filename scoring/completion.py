"""
Live match winner calculation while scores are still being entered.
"""

from typing import Optional, Sequence, Tuple

from scoring.match_form import SetInput
from scoring.validation import MatchValidator


class MatchCompletionCalculator:
    """Determines the currently implied winner from partial set input."""

    @staticmethod
    def sets_won(set_inputs: Sequence[SetInput]) -> Tuple[int, int]:
        """Set wins per team over the sets that parse so far."""
        sets = [game_set for game_set in (entry.to_game_set() for entry in set_inputs)
                if game_set is not None]
        return MatchValidator.sets_won(sets)

    @staticmethod
    def current_winner(set_inputs: Sequence[SetInput]) -> Optional[int]:
        """
        Winner implied by the sets entered so far.

        Sets that do not parse are skipped and parsed sets are not required to
        be legal tennis sets. A single set decides a quick one-set match.

        Returns:
            0 or 1, or None while no side has won enough sets
        """
        sets = [game_set for game_set in (entry.to_game_set() for entry in set_inputs)
                if game_set is not None]

        if not sets:
            return None

        if len(sets) == 1:
            return sets[0].winner_team_index

        required = MatchValidator.required_set_wins(len(sets))
        team1_sets, team2_sets = MatchValidator.sets_won(sets)

        if team1_sets >= required:
            return 0
        if team2_sets >= required:
            return 1
        return None
