# core/common/app_context.py
"""
Global runtime context & service registry for DocTable.

IMPORTANT ARCHITECTURE RULE:
- The session is issued by the host (login is out of scope); AppContext only
  holds it and broadcasts changes.
- ConfigService is the SINGLE source of truth for configuration; this file
  must not read INI files itself.
"""

from __future__ import annotations

import logging
import weakref
from datetime import datetime, timezone
from threading import RLock
from typing import Callable, List, Optional, Union

from core.common.session_events import SessionEventType, UserSessionEvent
from core.models.user import UserSession

log = logging.getLogger(__name__)

SessionCallback = Callable[[UserSessionEvent], None]
_Ref = Union[weakref.WeakMethod, Callable[[], Optional[SessionCallback]]]


def _make_ref(cb: SessionCallback) -> _Ref:
    """Bound methods are held weakly so views can die without unsubscribing."""
    if hasattr(cb, "__self__") and hasattr(cb, "__func__"):
        return weakref.WeakMethod(cb)  # type: ignore[arg-type]
    return lambda: cb


# ------------------------------------------------------------------ #
#  Central AppContext                                                 #
# ------------------------------------------------------------------ #
class AppContext:
    """Central runtime context (no GUI state)."""

    current_user: Optional[UserSession] = None

    # ---------- Service registry for DI -------------------------------
    services: dict[str, object] = {}

    _session_lock = RLock()
    _session_observers: List[_Ref] = []

    # ---------- Dynamic registration ---------------------------------
    @classmethod
    def register_service(cls, name: str, instance: object) -> None:
        cls.services[name] = instance

    @classmethod
    def get_service(cls, name: str) -> object | None:
        return cls.services.get(name)

    # ---------- Session ------------------------------------------------
    @classmethod
    def get_current_user(cls) -> Optional[UserSession]:
        return cls.current_user

    @classmethod
    def set_current_user(cls, user: UserSession, *, reason: str = "login") -> None:
        with cls._session_lock:
            old = cls.current_user
            if old == user:
                return
            cls.current_user = user
        ev_type: SessionEventType = "login" if old is None else "user_changed"
        cls._emit(ev_type, old, user, reason)

    @classmethod
    def clear_current_user(cls, *, reason: str = "logout") -> None:
        with cls._session_lock:
            old = cls.current_user
            if old is None:
                return
            cls.current_user = None
        cls._emit("logout", old, None, reason)

    # ---------- Observers ----------------------------------------------
    @classmethod
    def subscribe_user_session(cls, cb: SessionCallback) -> None:
        with cls._session_lock:
            if any(ref() == cb for ref in cls._session_observers):
                return
            cls._session_observers.append(_make_ref(cb))

    @classmethod
    def unsubscribe_user_session(cls, cb: SessionCallback) -> None:
        with cls._session_lock:
            cls._session_observers = [
                ref for ref in cls._session_observers
                if ref() is not None and ref() != cb
            ]

    @classmethod
    def _emit(
        cls,
        ev_type: SessionEventType,
        old: Optional[UserSession],
        new: Optional[UserSession],
        reason: str,
    ) -> None:
        event = UserSessionEvent(
            type=ev_type,
            old_user=old,
            new_user=new,
            reason=reason,
            ts_utc=datetime.now(timezone.utc),
        )
        with cls._session_lock:
            callbacks = [ref() for ref in cls._session_observers]
            cls._session_observers = [
                ref for ref, cb in zip(cls._session_observers, callbacks) if cb is not None
            ]
        for cb in callbacks:
            if cb is None:
                continue
            try:
                cb(event)
            except Exception:
                log.exception("Session observer %r failed on %s", cb, ev_type)
