"""
Match entry form state and its validation.

Validation is a pure function of the form: it returns the complete list of
problems instead of stopping at the first one, so the caller can show them
all at once.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from models.match import CourtSurface, GameSet, MatchType
from scoring.validation import MatchValidator
from utils.name_utils import NameUtils
from utils.text_utils import TextUtils

logger = logging.getLogger(__name__)

MAX_GAMES_INPUT = 20
MAX_TIEBREAK_POINTS_INPUT = 50


@dataclass
class SetInput:
    """Raw, possibly incomplete score entry for one set."""
    team1_games: str = ""
    team2_games: str = ""
    team1_tiebreak_points: str = ""
    team2_tiebreak_points: str = ""

    @property
    def requires_tiebreak(self) -> bool:
        return MatchValidator.requires_tiebreak(
            TextUtils.parse_int(self.team1_games), TextUtils.parse_int(self.team2_games)
        )

    @property
    def is_valid(self) -> bool:
        """Input-level check: parseable, in range, not tied, tiebreak present when needed."""
        t1_games = TextUtils.parse_int(self.team1_games)
        t2_games = TextUtils.parse_int(self.team2_games)
        if t1_games is None or t2_games is None:
            return False

        if not (0 <= t1_games <= MAX_GAMES_INPUT and 0 <= t2_games <= MAX_GAMES_INPUT):
            return False

        if t1_games == t2_games:
            return False

        if self.requires_tiebreak:
            t1_tb = TextUtils.parse_int(self.team1_tiebreak_points)
            t2_tb = TextUtils.parse_int(self.team2_tiebreak_points)
            if t1_tb is None or t2_tb is None:
                return False
            if not (0 <= t1_tb <= MAX_TIEBREAK_POINTS_INPUT and 0 <= t2_tb <= MAX_TIEBREAK_POINTS_INPUT):
                return False

        return True

    def to_game_set(self) -> Optional[GameSet]:
        """
        Convert the entry to a GameSet.
        Returns None when the games, or the required tiebreak points, do not parse.
        """
        t1_games = TextUtils.parse_int(self.team1_games)
        t2_games = TextUtils.parse_int(self.team2_games)
        if t1_games is None or t2_games is None:
            return None

        t1_tb = None
        t2_tb = None
        if self.requires_tiebreak:
            t1_tb = TextUtils.parse_int(self.team1_tiebreak_points)
            t2_tb = TextUtils.parse_int(self.team2_tiebreak_points)
            if t1_tb is None or t2_tb is None:
                return None

        return GameSet(
            team1_games=t1_games,
            team2_games=t2_games,
            team1_tiebreak_points=t1_tb,
            team2_tiebreak_points=t2_tb
        )


@dataclass
class MatchForm:
    """Everything a user enters to record a match."""
    match_type: MatchType = MatchType.SINGLES
    team1_players: List[str] = field(default_factory=lambda: ["", ""])
    team2_players: List[str] = field(default_factory=lambda: ["", ""])
    sets: List[SetInput] = field(default_factory=lambda: [SetInput()])
    winner_team_index: int = 0
    location: str = ""
    surface: Optional[CourtSurface] = CourtSurface.HARD
    notes: str = ""

    @property
    def max_players_per_team(self) -> int:
        return self.match_type.max_players_per_team

    @property
    def team1_players_filtered(self) -> List[str]:
        return self.team1_players[:self.max_players_per_team]

    @property
    def team2_players_filtered(self) -> List[str]:
        return self.team2_players[:self.max_players_per_team]

    @property
    def can_add_set(self) -> bool:
        return 0 < len(self.sets) < MatchValidator.MAX_SETS and self.sets[-1].is_valid

    def add_set(self) -> bool:
        if not self.can_add_set:
            return False
        self.sets.append(SetInput())
        return True

    def remove_set(self, index: int) -> bool:
        if len(self.sets) <= 1 or not 0 <= index < len(self.sets):
            return False
        del self.sets[index]
        return True

    def on_match_type_changed(self) -> None:
        """Clear the second player slots when switching to singles."""
        if self.match_type is MatchType.SINGLES:
            self._pad_players()
            self.team1_players[1] = ""
            self.team2_players[1] = ""

    def apply_quick_template(self, team1: List[str], team2: List[str], match_type: MatchType) -> None:
        self.match_type = match_type
        self.team1_players = list(team1)
        self.team2_players = list(team2)
        self._pad_players()
        self.on_match_type_changed()

    def parsed_sets(self) -> List[GameSet]:
        """Sets that parse to a GameSet, in entry order."""
        return [game_set for game_set in (entry.to_game_set() for entry in self.sets)
                if game_set is not None]

    def _pad_players(self) -> None:
        while len(self.team1_players) < 2:
            self.team1_players.append("")
        while len(self.team2_players) < 2:
            self.team2_players.append("")


def compute_validation_errors(form: MatchForm) -> List[str]:
    """
    Validate a match form.

    Returns:
        List of human-readable problems; empty when the form can be saved
    """
    errors = []
    needed = form.max_players_per_team

    team1_names = [name for name in form.team1_players_filtered if TextUtils.clean_text(name)]
    team2_names = [name for name in form.team2_players_filtered if TextUtils.clean_text(name)]

    if len(team1_names) != needed:
        errors.append(f"Team 1 needs {needed} player(s)")

    if len(team2_names) != needed:
        errors.append(f"Team 2 needs {needed} player(s)")

    if NameUtils.has_duplicates(team1_names + team2_names):
        errors.append("Players cannot appear on both teams")

    valid_sets = form.parsed_sets()

    if not valid_sets:
        errors.append("At least one valid set is required")

    if any(game_set.team1_games == game_set.team2_games for game_set in valid_sets):
        errors.append("Sets cannot be tied")

    # Single-set quick matches are accepted without a match format check
    if len(valid_sets) > 1 and not MatchValidator.validate_match(valid_sets):
        errors.append("Invalid match format or scores")

    if valid_sets:
        team1_sets, team2_sets = MatchValidator.sets_won(valid_sets)
        if team1_sets != team2_sets:
            actual_winner = 0 if team1_sets > team2_sets else 1
            if form.winner_team_index != actual_winner:
                errors.append("Winner selection doesn't match the scores")

    if errors:
        logger.debug(f"Match form has {len(errors)} validation error(s): {errors}")

    return errors
