"""
core/tests/test_app_context_session.py

Basic unit tests for AppContext session API and observer mechanism.
Uses unittest to avoid external test dependencies.
"""

from __future__ import annotations

import unittest

from core.common.app_context import AppContext
from core.common.session_events import UserSessionEvent
from core.models.user import UserSession


class TestAppContextSession(unittest.TestCase):
    def setUp(self) -> None:
        # Ensure we start clean for each test
        AppContext.clear_current_user(reason="test_setup")
        self._events: list[UserSessionEvent] = []

        def _cb(ev: UserSessionEvent) -> None:
            self._events.append(ev)

        self._cb = _cb
        AppContext.subscribe_user_session(self._cb)

    def tearDown(self) -> None:
        AppContext.unsubscribe_user_session(self._cb)
        AppContext.clear_current_user(reason="test_teardown")

    def test_login_event_emitted(self) -> None:
        u = UserSession("alice.l", "alice", "ACME", "https://dms.example")
        AppContext.set_current_user(u, reason="login")
        self.assertEqual(AppContext.get_current_user(), u)
        self.assertTrue(self._events)
        ev = self._events[-1]
        self.assertEqual(ev.type, "login")
        self.assertIsNone(ev.old_user)
        self.assertEqual(ev.new_user.current_user_name, "alice")

    def test_logout_event_emitted(self) -> None:
        u = UserSession("bob.l", "bob")
        AppContext.set_current_user(u, reason="login")
        AppContext.clear_current_user(reason="logout")
        self.assertIsNone(AppContext.get_current_user())
        ev = self._events[-1]
        self.assertEqual(ev.type, "logout")
        self.assertIsNotNone(ev.old_user)
        self.assertIsNone(ev.new_user)

    def test_switching_identity_emits_user_changed(self) -> None:
        AppContext.set_current_user(UserSession("a", "alice"), reason="login")
        AppContext.set_current_user(UserSession("a", "alice", client_url="https://other"), reason="switch")
        ev = self._events[-1]
        self.assertEqual(ev.type, "user_changed")
        self.assertEqual(ev.new_user.client_url, "https://other")

    def test_same_session_value_is_not_a_change(self) -> None:
        AppContext.set_current_user(UserSession("a", "alice"), reason="login")
        count = len(self._events)
        AppContext.set_current_user(UserSession("a", "alice"), reason="login")
        self.assertEqual(len(self._events), count)

    def test_unsubscribe_stops_events(self) -> None:
        AppContext.unsubscribe_user_session(self._cb)
        self._events.clear()
        AppContext.set_current_user(UserSession("carol.l", "carol"), reason="login")
        self.assertEqual(self._events, [])

    def test_failing_observer_does_not_break_others(self) -> None:
        def _boom(_ev: UserSessionEvent) -> None:
            raise RuntimeError("observer failure")

        AppContext.subscribe_user_session(_boom)
        try:
            AppContext.set_current_user(UserSession("d", "dave"), reason="login")
        finally:
            AppContext.unsubscribe_user_session(_boom)
        self.assertEqual(self._events[-1].new_user.current_user_name, "dave")


if __name__ == "__main__":
    unittest.main()
