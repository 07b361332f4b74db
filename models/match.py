"""
Match, team and set data models for the tennis tracker.

A Match stores point-in-time snapshots of its players. Later changes to the
canonical Player records are not reflected in historical matches, except
where the duplicate consolidation rewrites them explicitly.
"""

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from models.player import Player
from utils.name_utils import NameUtils


class MatchType(Enum):
    """Singles or doubles."""
    SINGLES = 'singles'
    DOUBLES = 'doubles'

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def max_players_per_team(self) -> int:
        return 1 if self is MatchType.SINGLES else 2


class CourtSurface(Enum):
    """Court surface a match was played on."""
    HARD = 'hard'
    CLAY = 'clay'
    GRASS = 'grass'
    INDOOR = 'indoor'
    CARPET = 'carpet'

    @property
    def display_name(self) -> str:
        return f"{self.value.capitalize()} Court"


@dataclass
class GameSet:
    """Raw result of one set; tiebreak points are present only for tiebreak sets."""
    team1_games: int
    team2_games: int
    team1_tiebreak_points: Optional[int] = None
    team2_tiebreak_points: Optional[int] = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @property
    def winner_team_index(self) -> int:
        """
        Index of the team that won the set.

        More games wins. Equal games fall back to the tiebreak points, and to
        team 0 when no tiebreak points were recorded.
        """
        if self.team1_games > self.team2_games:
            return 0
        if self.team2_games > self.team1_games:
            return 1
        if self.team1_tiebreak_points is not None and self.team2_tiebreak_points is not None:
            return 0 if self.team1_tiebreak_points > self.team2_tiebreak_points else 1
        return 0

    @property
    def is_tiebreak(self) -> bool:
        return self.team1_tiebreak_points is not None or self.team2_tiebreak_points is not None

    @property
    def score_string(self) -> str:
        score = f"{self.team1_games}-{self.team2_games}"
        if self.team1_tiebreak_points is not None and self.team2_tiebreak_points is not None:
            score += f" ({self.team1_tiebreak_points}-{self.team2_tiebreak_points})"
        return score

    def games_for(self, team_index: int) -> int:
        return self.team1_games if team_index == 0 else self.team2_games

    def games_against(self, team_index: int) -> int:
        return self.team2_games if team_index == 0 else self.team1_games

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'team1Games': self.team1_games,
            'team2Games': self.team2_games,
            'team1TiebreakPoints': self.team1_tiebreak_points,
            'team2TiebreakPoints': self.team2_tiebreak_points
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GameSet':
        tb1 = data.get('team1TiebreakPoints')
        tb2 = data.get('team2TiebreakPoints')
        return cls(
            id=str(data.get('id') or uuid.uuid4()),
            team1_games=int(data['team1Games']),
            team2_games=int(data['team2Games']),
            team1_tiebreak_points=int(tb1) if tb1 is not None else None,
            team2_tiebreak_points=int(tb2) if tb2 is not None else None
        )


@dataclass
class Team:
    """One side of a match: one player for singles, two for doubles."""
    players: List[Player]
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @property
    def display_name(self) -> str:
        return " / ".join(player.name for player in self.players)

    @property
    def normalized_names(self) -> frozenset:
        return frozenset(player.normalized_name for player in self.players)

    def has_player(self, name: str) -> bool:
        return NameUtils.normalize(name) in self.normalized_names

    def has_player_id(self, player_id: str) -> bool:
        return any(player.id == player_id for player in self.players)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'players': [player.to_dict() for player in self.players]
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Team':
        return cls(
            id=str(data.get('id') or uuid.uuid4()),
            players=[Player.from_dict(player) for player in data.get('players', [])]
        )


@dataclass
class Match:
    """A recorded match. Treated as immutable once saved."""
    user_id: str
    match_type: MatchType
    teams: List[Team]
    sets: List[GameSet]
    winner_team_index: Optional[int] = None
    location: Optional[str] = None
    surface: Optional[CourtSurface] = None
    notes: Optional[str] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @property
    def score_string(self) -> str:
        return ", ".join(game_set.score_string for game_set in self.sets)

    @property
    def winner_team(self) -> Optional[Team]:
        if self.winner_team_index not in (0, 1):
            return None
        return self.teams[self.winner_team_index]

    @property
    def loser_team(self) -> Optional[Team]:
        if self.winner_team_index not in (0, 1):
            return None
        return self.teams[1 - self.winner_team_index]

    @property
    def has_winner(self) -> bool:
        return self.winner_team_index in (0, 1)

    def team_index_for(self, name: str) -> Optional[int]:
        """Index of the team the named player is on, by normalized name."""
        for index, team in enumerate(self.teams):
            if team.has_player(name):
                return index
        return None

    def all_players(self) -> List[Player]:
        """Players of both teams, one entry per normalized name."""
        seen = set()
        players = []
        for team in self.teams:
            for player in team.players:
                if player.normalized_name not in seen:
                    seen.add(player.normalized_name)
                    players.append(player)
        return players

    def player_names(self) -> frozenset:
        names = frozenset()
        for team in self.teams:
            names = names | team.normalized_names
        return names

    def with_teams(self, teams: List[Team]) -> 'Match':
        """Copy of this match with its embedded teams replaced."""
        return replace(self, teams=teams)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'userId': self.user_id,
            'matchType': self.match_type.value,
            'teams': [team.to_dict() for team in self.teams],
            'sets': [game_set.to_dict() for game_set in self.sets],
            'winnerTeamIndex': self.winner_team_index,
            'timestamp': self.timestamp.isoformat(),
            'location': self.location,
            'surface': self.surface.value if self.surface else None,
            'notes': self.notes
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Match':
        raw_timestamp = str(data['timestamp'])
        if raw_timestamp.endswith('Z'):
            raw_timestamp = raw_timestamp[:-1] + '+00:00'
        timestamp = datetime.fromisoformat(raw_timestamp)
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)

        winner = data.get('winnerTeamIndex')
        surface = data.get('surface')

        return cls(
            id=str(data['id']),
            user_id=str(data.get('userId', '')),
            match_type=MatchType(data.get('matchType', MatchType.SINGLES.value)),
            teams=[Team.from_dict(team) for team in data.get('teams', [])],
            sets=[GameSet.from_dict(game_set) for game_set in data.get('sets', [])],
            winner_team_index=int(winner) if winner is not None else None,
            timestamp=timestamp,
            location=data.get('location'),
            surface=CourtSurface(surface) if surface else None,
            notes=data.get('notes')
        )
