#!/usr/bin/env python3
"""
Unit tests for the session store, the sign-in/sign-up form handlers and the
route table.
"""

import os
import sys
import time
import unittest
from unittest.mock import MagicMock

# Add the parent directory to the path to access utils
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from utils.auth_forms import SignUpForm, submit_sign_in, submit_sign_up
from utils.notifications import NotificationQueue
from utils.router import NOT_FOUND_PAGE, RouteDecision, normalize_path, resolve_route
from utils.session import Session, SessionStore
from utils.supabase_handler import (
    SIGNED_IN,
    SIGNED_OUT,
    TOKEN_REFRESHED,
    SupabaseError,
    SupabaseHandler,
)

AUTH_BODY = {
    "access_token": "token-1",
    "refresh_token": "refresh-1",
    "expires_in": 3600,
    "user": {"id": "user-1", "email": "nurse@example.org"},
}


class FakeAuthHandler(SupabaseHandler):
    """SupabaseHandler whose auth endpoints answer from memory"""

    def __init__(self):
        super().__init__("https://demo-project.supabase.co", "anon-key")
        self.calls = []
        self.error = None

    def sign_in_with_password(self, email, password):
        self.calls.append(("sign_in", email, password))
        if self.error:
            raise self.error
        self._emit(SIGNED_IN, AUTH_BODY)
        return AUTH_BODY

    def sign_up(self, email, password):
        self.calls.append(("sign_up", email, password))
        if self.error:
            raise self.error
        return {"id": "user-2"}

    def refresh_session(self, refresh_token):
        self.calls.append(("refresh", refresh_token))
        if self.error:
            raise self.error
        body = dict(AUTH_BODY, access_token="token-2")
        self._emit(TOKEN_REFRESHED, body)
        return body

    def sign_out(self):
        self.calls.append(("sign_out",))
        self._emit(SIGNED_OUT, None)


class TestSessionStore(unittest.TestCase):

    def setUp(self):
        self.handler = FakeAuthHandler()
        self.store = SessionStore(self.handler)

    def test_starts_without_session(self):
        self.assertFalse(self.store.is_authenticated)

    def test_sign_in_event_sets_session(self):
        self.store.sign_in("nurse@example.org", "correct-horse")
        self.assertTrue(self.store.is_authenticated)
        self.assertEqual(self.store.session.user.email, "nurse@example.org")
        self.assertEqual(self.store.session.access_token, "token-1")

    def test_sign_out_event_clears_session(self):
        self.store.sign_in("nurse@example.org", "correct-horse")
        self.store.sign_out()
        self.assertFalse(self.store.is_authenticated)

    def test_sign_out_error_is_logged_not_raised(self):
        handler = MagicMock()
        handler.sign_out.side_effect = SupabaseError("network down")
        store = SessionStore(handler)
        store.sign_out()
        handler.sign_out.assert_called_once()

    def test_ensure_fresh_refreshes_expiring_token(self):
        self.store.handle_auth_event(SIGNED_IN, dict(AUTH_BODY, expires_in=None, expires_at=time.time() + 5))
        self.store.ensure_fresh()
        self.assertIn(("refresh", "refresh-1"), self.handler.calls)
        self.assertEqual(self.store.session.access_token, "token-2")

    def test_ensure_fresh_leaves_valid_token(self):
        self.store.sign_in("nurse@example.org", "correct-horse")
        self.store.ensure_fresh()
        self.assertNotIn("refresh", [call[0] for call in self.handler.calls])

    def test_failed_refresh_drops_session(self):
        self.store.handle_auth_event(SIGNED_IN, dict(AUTH_BODY, expires_in=None, expires_at=time.time()))
        self.handler.error = SupabaseError("Invalid Refresh Token")
        self.store.ensure_fresh()
        self.assertFalse(self.store.is_authenticated)

    def test_session_expiry(self):
        session = Session.from_auth_response(dict(AUTH_BODY, expires_in=None, expires_at=1000))
        self.assertTrue(session.expires_soon(now=950))
        self.assertFalse(session.expires_soon(now=100))


class TestSignUp(unittest.TestCase):

    def setUp(self):
        self.handler = FakeAuthHandler()
        self.store = SessionStore(self.handler)
        self.notifier = NotificationQueue()

    def test_mismatched_passwords_block_submission(self):
        error = submit_sign_up(
            self.store, self.notifier, "nurse@example.org", "long-password", "long-passw0rd"
        )
        self.assertEqual(error, "Passwords do not match")
        self.assertEqual(self.handler.calls, [])
        self.assertEqual(self.notifier.drain(), [])

    def test_short_password_blocks_submission(self):
        error = submit_sign_up(self.store, self.notifier, "nurse@example.org", "short", "short")
        self.assertEqual(error, "Password must be at least 8 characters long")
        self.assertEqual(self.handler.calls, [])

    def test_invalid_email_blocks_submission(self):
        error = submit_sign_up(self.store, self.notifier, "nurse", "long-password", "long-password")
        self.assertEqual(error, "Invalid email")
        self.assertEqual(self.handler.calls, [])

    def test_successful_sign_up(self):
        error = submit_sign_up(
            self.store, self.notifier, "nurse@example.org", "long-password", "long-password"
        )
        self.assertIsNone(error)
        self.assertEqual(self.handler.calls, [("sign_up", "nurse@example.org", "long-password")])
        self.assertEqual(
            self.notifier.drain(),
            [("success", "Signup successful! Please check your email to confirm your account.")],
        )

    def test_backend_error_is_shown_verbatim(self):
        self.handler.error = SupabaseError("User already registered", 422)
        error = submit_sign_up(
            self.store, self.notifier, "nurse@example.org", "long-password", "long-password"
        )
        self.assertIsNone(error)
        self.assertEqual(self.notifier.drain(), [("error", "User already registered")])

    def test_form_model(self):
        form = SignUpForm(email=" nurse@example.org ", password="12345678", confirm_password="12345678")
        self.assertEqual(form.email, "nurse@example.org")


class TestSignIn(unittest.TestCase):

    def setUp(self):
        self.handler = FakeAuthHandler()
        self.store = SessionStore(self.handler)
        self.notifier = NotificationQueue()

    def test_success_sets_session_through_event(self):
        error = submit_sign_in(self.store, self.notifier, "nurse@example.org", "correct-horse")
        self.assertIsNone(error)
        self.assertTrue(self.store.is_authenticated)
        self.assertEqual(self.notifier.drain(), [])

    def test_backend_error_is_shown_verbatim(self):
        self.handler.error = SupabaseError("Invalid login credentials", 400)
        submit_sign_in(self.store, self.notifier, "nurse@example.org", "wrong-password")
        self.assertFalse(self.store.is_authenticated)
        self.assertEqual(self.notifier.drain(), [("error", "Invalid login credentials")])

    def test_empty_password_blocks_submission(self):
        error = submit_sign_in(self.store, self.notifier, "nurse@example.org", "")
        self.assertEqual(error, "Password is required")
        self.assertEqual(self.handler.calls, [])


class TestRouter(unittest.TestCase):

    def test_public_pages(self):
        self.assertEqual(resolve_route("/", False), RouteDecision("landing"))
        self.assertEqual(resolve_route(None, False), RouteDecision("landing"))
        self.assertEqual(resolve_route("/signin", False), RouteDecision("signin"))
        self.assertEqual(resolve_route("/signup", False), RouteDecision("signup"))

    def test_dashboard_requires_session(self):
        self.assertEqual(resolve_route("/dashboard", False), RouteDecision("landing", "/"))
        self.assertEqual(resolve_route("/protected", False), RouteDecision("landing", "/"))
        self.assertEqual(resolve_route("/dashboard", True), RouteDecision("dashboard"))
        self.assertEqual(resolve_route("/protected", True), RouteDecision("dashboard"))

    def test_signed_in_users_skip_auth_pages(self):
        self.assertEqual(resolve_route("/signin", True), RouteDecision("dashboard", "/dashboard"))
        self.assertEqual(resolve_route("/signup", True), RouteDecision("dashboard", "/dashboard"))

    def test_landing_stays_public_with_session(self):
        self.assertEqual(resolve_route("/", True), RouteDecision("landing"))

    def test_unknown_path(self):
        self.assertEqual(resolve_route("/reports", True), RouteDecision(NOT_FOUND_PAGE))
        self.assertEqual(resolve_route("/reports", False), RouteDecision(NOT_FOUND_PAGE))

    def test_normalize_path(self):
        self.assertEqual(normalize_path("dashboard/"), "/dashboard")
        self.assertEqual(normalize_path(" /SignIn "), "/signin")
        self.assertEqual(normalize_path(""), "/")


if __name__ == '__main__':
    unittest.main()
