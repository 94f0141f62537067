"""
===============================================================================
Session Provider Protocols & Defaults
-------------------------------------------------------------------------------
Purpose:
    Define a tiny abstraction for obtaining the acting user's session used by
    the permission policy and the service calls. This keeps controllers
    independent from the host application's session implementation.

Files:
    - SessionProvider (Protocol)
    - StaticSessionProvider (fixed session, tests and demo)

Notes:
    - In production, prefer AppContextSessionProvider which bridges the host's
      AppContext and forwards session change events.
===============================================================================
"""
from __future__ import annotations
from typing import Callable, List, Optional, Protocol

from core.models.user import UserSession

SessionListener = Callable[[Optional[UserSession]], None]


class SessionProvider(Protocol):
    """Protocol for providers that yield the active UserSession."""
    def get_session(self) -> Optional[UserSession]: ...
    def subscribe(self, listener: SessionListener) -> None: ...
    def unsubscribe(self, listener: SessionListener) -> None: ...


class StaticSessionProvider:
    """
    Provider holding a session in memory.

    Behavior:
        - 'set_session' replaces the session and notifies listeners when the
          value actually changes (identity or endpoint).
    """

    def __init__(self, session: Optional[UserSession] = None) -> None:
        self._session = session
        self._listeners: List[SessionListener] = []

    def get_session(self) -> Optional[UserSession]:
        return self._session

    def set_session(self, session: Optional[UserSession]) -> None:
        if session == self._session:
            return
        self._session = session
        for listener in list(self._listeners):
            listener(session)

    def subscribe(self, listener: SessionListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: SessionListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)
