"""
Models package for the tennis tracker.

This package contains all data models and dataclasses used throughout the system.
"""

from .player import PlayerStats, Player
from .match import MatchType, CourtSurface, GameSet, Team, Match
from .head_to_head import HeadToHeadRecord

__all__ = [
    'PlayerStats', 'Player', 'MatchType', 'CourtSurface', 'GameSet', 'Team', 'Match',
    'HeadToHeadRecord'
]
