"""
Session state for the signed-in user.

SessionStore owns the current session and is the only place that changes it.
It listens to the auth events emitted by SupabaseHandler, so a successful
sign-in updates the session and every page reading it reacts on the next run.
"""

import logging
import time
from typing import Any, Dict, Optional

from pydantic import BaseModel

from utils.supabase_handler import (
    SIGNED_IN,
    SIGNED_OUT,
    TOKEN_REFRESHED,
    SupabaseError,
    SupabaseHandler,
)

logger = logging.getLogger(__name__)

# Refresh the access token when it is this close to expiring
REFRESH_MARGIN_SECONDS = 60


class SessionUser(BaseModel):
    id: str
    email: Optional[str] = None


class Session(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None
    expires_at: Optional[float] = None
    user: SessionUser

    @classmethod
    def from_auth_response(cls, body: Dict[str, Any]) -> "Session":
        expires_at = body.get("expires_at")
        if expires_at is None and body.get("expires_in"):
            expires_at = time.time() + float(body["expires_in"])
        user = body.get("user") or {}
        return cls(
            access_token=body["access_token"],
            refresh_token=body.get("refresh_token"),
            expires_at=expires_at,
            user=SessionUser(id=str(user.get("id", "")), email=user.get("email")),
        )

    def expires_soon(self, now: Optional[float] = None) -> bool:
        if self.expires_at is None:
            return False
        now = time.time() if now is None else now
        return self.expires_at - now <= REFRESH_MARGIN_SECONDS


class SessionStore:
    """Holds the current session and exposes the auth operations to pages"""

    def __init__(self, handler: SupabaseHandler):
        self.handler = handler
        self.session: Optional[Session] = None
        self._unsubscribe = handler.on_auth_state_change(self.handle_auth_event)

    @property
    def is_authenticated(self) -> bool:
        return self.session is not None

    def handle_auth_event(self, event: str, body: Optional[Dict[str, Any]]):
        """Single update entry point for the session value"""
        if event in (SIGNED_IN, TOKEN_REFRESHED) and body and body.get("access_token"):
            self.session = Session.from_auth_response(body)
            logger.info(f"Session set for {self.session.user.email}")
        elif event == SIGNED_OUT:
            self.session = None
            logger.info("Session cleared")

    def sign_in(self, email: str, password: str):
        self.handler.sign_in_with_password(email, password)

    def sign_up(self, email: str, password: str):
        self.handler.sign_up(email, password)

    def sign_out(self):
        try:
            self.handler.sign_out()
        except SupabaseError as e:
            logger.error(f"Error signing out: {e.message}")

    def ensure_fresh(self):
        """Refresh the access token when it is about to expire; drop the session if that fails"""
        if not self.session or not self.session.expires_soon():
            return
        if not self.session.refresh_token:
            self.handle_auth_event(SIGNED_OUT, None)
            return
        try:
            self.handler.refresh_session(self.session.refresh_token)
        except SupabaseError as e:
            logger.error(f"Failed to refresh session: {e.message}")
            self.handler.access_token = None
            self.handle_auth_event(SIGNED_OUT, None)
