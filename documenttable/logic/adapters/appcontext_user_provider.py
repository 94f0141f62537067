"""
===============================================================================
AppContext Session Provider – bridge from host AppContext to the feature
-------------------------------------------------------------------------------
Purpose:
    Read the active session from the host application's AppContext and
    forward AppContext session events (login / user_changed / logout) to
    feature listeners as plain Optional[UserSession] values.

Contract:
    - get_session() -> UserSession | None
    - subscribe(listener) / unsubscribe(listener)
===============================================================================
"""
from __future__ import annotations
from typing import List, Optional

from core.common.app_context import AppContext
from core.common.session_events import UserSessionEvent
from core.models.user import UserSession

from .current_user_provider import SessionListener


class AppContextSessionProvider:
    """Adapter reading the current session from the host's AppContext."""

    def __init__(self) -> None:
        self._listeners: List[SessionListener] = []
        self._subscribed = False

    def get_session(self) -> Optional[UserSession]:
        return AppContext.get_current_user()

    def subscribe(self, listener: SessionListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)
        if not self._subscribed:
            AppContext.subscribe_user_session(self._on_session_event)
            self._subscribed = True

    def unsubscribe(self, listener: SessionListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)
        if not self._listeners and self._subscribed:
            AppContext.unsubscribe_user_session(self._on_session_event)
            self._subscribed = False

    # ---------------------------- internals ---------------------------- #
    def _on_session_event(self, event: UserSessionEvent) -> None:
        for listener in list(self._listeners):
            listener(event.new_user)
