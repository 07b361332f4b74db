"""
Player data models for the tennis tracker.
"""

import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Dict

from utils.name_utils import NameUtils


@dataclass
class PlayerStats:
    """Aggregate match, set and game counters for a player."""
    matches_played: int = 0
    matches_won: int = 0
    sets_won: int = 0
    sets_lost: int = 0
    games_won: int = 0
    games_lost: int = 0

    @property
    def matches_lost(self) -> int:
        return self.matches_played - self.matches_won

    @property
    def win_percentage(self) -> float:
        """Match win percentage, 0.0 when no match was played."""
        if self.matches_played <= 0:
            return 0.0
        return self.matches_won / self.matches_played * 100.0

    @property
    def set_win_percentage(self) -> float:
        """Set win percentage, 0.0 when no set was played."""
        total_sets = self.sets_won + self.sets_lost
        if total_sets <= 0:
            return 0.0
        return self.sets_won / total_sets * 100.0

    def reset(self) -> None:
        """Zero every counter."""
        self.matches_played = 0
        self.matches_won = 0
        self.sets_won = 0
        self.sets_lost = 0
        self.games_won = 0
        self.games_lost = 0

    def merge(self, other: 'PlayerStats') -> None:
        """Add another player's counters to this one."""
        self.matches_played += other.matches_played
        self.matches_won += other.matches_won
        self.sets_won += other.sets_won
        self.sets_lost += other.sets_lost
        self.games_won += other.games_won
        self.games_lost += other.games_lost

    def to_dict(self) -> Dict[str, int]:
        return {
            'matchesPlayed': self.matches_played,
            'matchesWon': self.matches_won,
            'setsWon': self.sets_won,
            'setsLost': self.sets_lost,
            'gamesWon': self.games_won,
            'gamesLost': self.games_lost
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PlayerStats':
        data = data or {}
        return cls(
            matches_played=int(data.get('matchesPlayed', 0)),
            matches_won=int(data.get('matchesWon', 0)),
            sets_won=int(data.get('setsWon', 0)),
            sets_lost=int(data.get('setsLost', 0)),
            games_won=int(data.get('gamesWon', 0)),
            games_lost=int(data.get('gamesLost', 0))
        )


@dataclass(eq=False)
class Player:
    """A player record; identity is the id, aggregation matches on the normalized name."""
    name: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    stats: PlayerStats = field(default_factory=PlayerStats)

    def __post_init__(self):
        self.name = self.name.strip() if self.name else ""
        if self.stats is None:
            self.stats = PlayerStats()

    def __eq__(self, other):
        if not isinstance(other, Player):
            return NotImplemented
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)

    @property
    def normalized_name(self) -> str:
        return NameUtils.normalize(self.name)

    def snapshot(self) -> 'Player':
        """Copy of this player for embedding in a match."""
        return Player(name=self.name, id=self.id, stats=replace(self.stats))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'stats': self.stats.to_dict()
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Player':
        return cls(
            id=str(data['id']),
            name=data.get('name', ''),
            stats=PlayerStats.from_dict(data.get('stats'))
        )
