"""
Supabase Handler Module

This module provides functionality to interact with Supabase for storing and
retrieving medical supply records and for authenticating users.
"""

import logging
import os
from typing import Any, Callable, Dict, List, Optional

import requests
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Load environment variables
load_dotenv()

# Auth change events emitted to listeners
SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"
SIGNED_UP = "SIGNED_UP"
TOKEN_REFRESHED = "TOKEN_REFRESHED"

AuthListener = Callable[[str, Optional[Dict[str, Any]]], None]


class SupabaseError(Exception):
    """Error returned by the Supabase REST or auth endpoints"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    @classmethod
    def from_response(cls, response: requests.Response) -> "SupabaseError":
        try:
            body = response.json()
        except ValueError:
            body = None
        message = None
        if isinstance(body, dict):
            for key in ("msg", "message", "error_description", "error"):
                if body.get(key):
                    message = str(body[key])
                    break
        return cls(message or response.text or f"HTTP {response.status_code}", response.status_code)


class SupabaseHandler:
    """Handler for Supabase table queries and auth operations."""

    def __init__(self, url: Optional[str] = None, anon_key: Optional[str] = None):
        """Initialize the SupabaseHandler with credentials from environment variables."""
        self.url = (url or os.getenv('SUPABASE_URL') or '').rstrip('/')
        self.anon_key = anon_key or os.getenv('SUPABASE_ANON_KEY')

        if not self.url or not self.anon_key:
            raise ValueError("Supabase URL or anon key not found in environment variables")

        self.timeout = float(os.getenv('SUPABASE_TIMEOUT', '10'))
        self.rest_url = f"{self.url}/rest/v1"
        self.auth_url = f"{self.url}/auth/v1"
        self.access_token: Optional[str] = None
        self._listeners: List[AuthListener] = []

    # --- Auth change subscription ---

    def on_auth_state_change(self, listener: AuthListener) -> Callable[[], None]:
        """
        Register a listener for auth change events.

        Returns:
            Callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: str, session: Optional[Dict[str, Any]]):
        logger.info(f"Auth event: {event}")
        for listener in list(self._listeners):
            listener(event, session)

    # --- HTTP helpers ---

    def _headers(self, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        headers = {
            'apikey': self.anon_key,
            'Authorization': f'Bearer {self.access_token or self.anon_key}',
            'Content-Type': 'application/json',
        }
        if extra:
            headers.update(extra)
        return headers

    def _request(self, method: str, url: str, **kwargs) -> requests.Response:
        extra_headers = kwargs.pop('headers', None)
        try:
            response = requests.request(
                method, url, headers=self._headers(extra_headers), timeout=self.timeout, **kwargs
            )
        except requests.exceptions.RequestException as e:
            raise SupabaseError(f"Could not reach Supabase: {str(e)}") from e

        if response.status_code >= 400:
            raise SupabaseError.from_response(response)
        return response

    @staticmethod
    def _json(response: requests.Response) -> Any:
        if not response.text.strip():
            return None
        return response.json()

    # --- Table operations ---

    def select_all(self, table: str) -> List[Dict[str, Any]]:
        """
        Retrieve every row of a table.

        Args:
            table (str): Table name

        Returns:
            List[Dict[str, Any]]: Rows keyed by column name
        """
        response = self._request('GET', f"{self.rest_url}/{table}", params={'select': '*'})
        return self._json(response) or []

    def insert(self, table: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert one row and return it as stored.

        Args:
            table (str): Table name
            data (Dict[str, Any]): Column values, without id

        Returns:
            Dict[str, Any]: Created row
        """
        response = self._request(
            'POST',
            f"{self.rest_url}/{table}",
            json=[data],
            headers={'Prefer': 'return=representation'},
        )
        rows = self._json(response) or []
        return rows[0] if rows else {}

    def update(self, table: str, record_id: str, data: Dict[str, Any]) -> List[Dict[str, Any]]:
        """
        Update the row with the given id.

        Args:
            table (str): Table name
            record_id (str): Row id
            data (Dict[str, Any]): Full set of column values

        Returns:
            List[Dict[str, Any]]: Updated rows
        """
        response = self._request(
            'PATCH',
            f"{self.rest_url}/{table}",
            params={'id': f'eq.{record_id}'},
            json=data,
            headers={'Prefer': 'return=representation'},
        )
        return self._json(response) or []

    # --- Auth operations ---

    def sign_up(self, email: str, password: str) -> Dict[str, Any]:
        """Register a new user. Returns the session when email confirmation is disabled."""
        response = self._request(
            'POST', f"{self.auth_url}/signup", json={'email': email, 'password': password}
        )
        body = self._json(response) or {}
        if body.get('access_token'):
            self.access_token = body['access_token']
            self._emit(SIGNED_IN, body)
        else:
            self._emit(SIGNED_UP, None)
        return body

    def sign_in_with_password(self, email: str, password: str) -> Dict[str, Any]:
        response = self._request(
            'POST',
            f"{self.auth_url}/token",
            params={'grant_type': 'password'},
            json={'email': email, 'password': password},
        )
        body = self._json(response) or {}
        self.access_token = body.get('access_token')
        self._emit(SIGNED_IN, body)
        return body

    def refresh_session(self, refresh_token: str) -> Dict[str, Any]:
        response = self._request(
            'POST',
            f"{self.auth_url}/token",
            params={'grant_type': 'refresh_token'},
            json={'refresh_token': refresh_token},
        )
        body = self._json(response) or {}
        self.access_token = body.get('access_token')
        self._emit(TOKEN_REFRESHED, body)
        return body

    def sign_out(self):
        """Revoke the current access token. The local session is dropped even if revoking fails."""
        try:
            if self.access_token:
                self._request('POST', f"{self.auth_url}/logout")
        finally:
            self.access_token = None
            self._emit(SIGNED_OUT, None)
