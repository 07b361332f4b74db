"""
Head-to-head record model. Derived on demand, never persisted.
"""

from dataclasses import dataclass

from models.player import Player


@dataclass
class HeadToHeadRecord:
    """Win/loss record of one player against a single opponent."""
    opponent: Player
    wins: int = 0
    losses: int = 0

    @property
    def total_matches(self) -> int:
        return self.wins + self.losses

    @property
    def win_percentage(self) -> float:
        if self.total_matches <= 0:
            return 0.0
        return self.wins / self.total_matches * 100.0

    @property
    def record_string(self) -> str:
        return f"{self.wins}-{self.losses}"
