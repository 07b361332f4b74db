"""
Authentication providers yielding the account identifier stores are scoped to.
"""

import logging
from typing import Optional

import requests

from database.errors import StoreError

logger = logging.getLogger(__name__)


class StaticAuthProvider:
    """Always returns a fixed account id (local, single-user installs)."""

    def __init__(self, account_id: str):
        self.account_id = account_id

    def authenticate(self) -> str:
        return self.account_id


class RemoteAuthProvider:
    """Signs in anonymously against the document store's auth endpoint."""

    def __init__(self, auth_url: str, api_key: str = "", session: Optional[requests.Session] = None,
                 timeout: int = 30):
        self.auth_url = auth_url
        self.api_key = api_key
        self.session = session or requests.Session()
        self.timeout = timeout
        self._account_id: Optional[str] = None

    def authenticate(self) -> str:
        """Return the cached account id, signing in anonymously on first use."""
        if self._account_id:
            return self._account_id

        logger.info("No existing user, signing in anonymously...")
        params = {'key': self.api_key} if self.api_key else None
        try:
            response = self.session.post(self.auth_url, params=params,
                                         json={'returnSecureToken': True}, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Anonymous sign-in failed: {e}")
            raise StoreError(f"Authentication failed: {e}") from e

        account_id = payload.get('localId') or payload.get('uid')
        if not account_id:
            raise StoreError("Authentication failed: no account id in response")

        id_token = payload.get('idToken')
        if id_token:
            self.session.headers['Authorization'] = f"Bearer {id_token}"

        self._account_id = account_id
        logger.info(f"Anonymous sign-in successful: {account_id}")
        return account_id
