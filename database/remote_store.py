"""
Match store backed by a remote JSON document store.

Layout on the server:
    {base_url}/users/{account}/players/{player_id}   player documents
    {base_url}/matches/{match_id}                    match documents (field userId)
"""

import logging
from typing import Any, List, Optional

import requests

from database.errors import StoreError
from database.store import AuthProvider
from models.match import Match
from models.player import Player

logger = logging.getLogger(__name__)


class RemoteStore:
    """MatchStore implementation talking to a document store over HTTP."""

    def __init__(self, base_url: str, auth_provider: AuthProvider,
                 session: Optional[requests.Session] = None, timeout: int = 30):
        self.base_url = base_url.rstrip('/')
        self.auth_provider = auth_provider
        self.session = session or requests.Session()
        self.timeout = timeout

    def _players_url(self, player_id: Optional[str] = None) -> str:
        url = f"{self.base_url}/users/{self.auth_provider.authenticate()}/players"
        return f"{url}/{player_id}" if player_id else url

    def _request(self, method: str, url: str, action: str, **kwargs) -> Any:
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
            if not response.content:
                return None
            return response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Error trying to {action}: {e}")
            raise StoreError(f"Could not {action}: {e}") from e

    @staticmethod
    def _documents(payload: Any) -> List[dict]:
        if payload is None:
            return []
        if isinstance(payload, dict):
            return payload.get('documents', [])
        return list(payload)

    def fetch_players(self) -> List[Player]:
        payload = self._request('GET', self._players_url(), "fetch players")
        try:
            return [Player.from_dict(doc) for doc in self._documents(payload)]
        except (KeyError, TypeError, ValueError) as e:
            raise StoreError(f"Corrupt player document: {e}") from e

    def save_player(self, player: Player) -> None:
        self._request('PUT', self._players_url(player.id), f"save player {player.name}",
                      json=player.to_dict())

    def delete_player(self, player_id: str) -> None:
        self._request('DELETE', self._players_url(player_id), f"delete player {player_id}")
        logger.info(f"Deleted player {player_id}")

    def fetch_matches(self) -> List[Match]:
        payload = self._request('GET', f"{self.base_url}/matches", "fetch matches",
                                params={'userId': self.auth_provider.authenticate()})
        try:
            matches = [Match.from_dict(doc) for doc in self._documents(payload)]
        except (KeyError, TypeError, ValueError) as e:
            raise StoreError(f"Corrupt match document: {e}") from e
        matches.sort(key=lambda match: match.timestamp, reverse=True)
        return matches

    def fetch_recent_matches(self, limit: int = 10) -> List[Match]:
        return self.fetch_matches()[:limit]

    def save_match(self, match: Match) -> None:
        self._request('PUT', f"{self.base_url}/matches/{match.id}", f"save match {match.id}",
                      json=match.to_dict())
        logger.info(f"Saved match {match.id}: {match.score_string}")
