"""Shared fakes for the document table tests."""
from __future__ import annotations

from typing import Any, Dict, List

from core.models.user import UserSession
from documenttable.models.notification import Notification

ALICE = UserSession("alice.l", "alice", "ACME", "https://dms.example")
BOB = UserSession("bob.l", "bob", "ACME", "https://dms.example")


def make_row(ref: Any, **overrides: Any) -> Dict[str, Any]:
    """Wire-format row owned by alice with no status."""
    row: Dict[str, Any] = {
        "REF_SEQ_NO": ref,
        "DOCUMENT_NO": f"DOC-{ref}",
        "DOCUMENT_DESCRIPTION": f"Document {ref}",
        "USER_NAME": "alice",
        "CHANNEL_SOURCE": "Email",
        "DOC_RELATED_TO": "Finance",
        "DOC_RELATED_CATEGORY": "Invoices",
        "DOCUMENT_STATUS": "",
        "ASSIGNED_USER": None,
        "NO_OF_DOCUMENTS": 0,
    }
    row.update(overrides)
    return row


class RecordingNotifier:
    def __init__(self) -> None:
        self.notifications: List[Notification] = []

    def notify(self, notification: Notification) -> None:
        self.notifications.append(notification)


class ScriptedConfirm:
    def __init__(self, answer: bool = True) -> None:
        self.answer = answer
        self.messages: List[str] = []

    def __call__(self, message: str) -> bool:
        self.messages.append(message)
        return self.answer
