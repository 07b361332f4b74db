"""
Store and authentication interfaces consumed by the services.

Implementations: SQLiteStore (local sqlite file) and RemoteStore (JSON
document store over HTTP). All failures surface as StoreError.
"""

from typing import List, Protocol, runtime_checkable

from models.match import Match
from models.player import Player


@runtime_checkable
class MatchStore(Protocol):
    """Player and match persistence for one account."""

    def fetch_players(self) -> List[Player]:
        ...

    def save_player(self, player: Player) -> None:
        ...

    def delete_player(self, player_id: str) -> None:
        ...

    def fetch_matches(self) -> List[Match]:
        ...

    def fetch_recent_matches(self, limit: int = 10) -> List[Match]:
        ...

    def save_match(self, match: Match) -> None:
        ...


@runtime_checkable
class AuthProvider(Protocol):
    """Yields the stable account identifier the store is scoped to."""

    def authenticate(self) -> str:
        ...
