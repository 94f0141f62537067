"""
Notification sink and confirmation prompt contracts.

The table never renders toasts or dialogs itself; the host passes in
objects satisfying these protocols (Tk implementations live in gui/messages.py).
"""
from __future__ import annotations
from typing import Protocol

from documenttable.models.notification import Notification


class NotificationSink(Protocol):
    def notify(self, notification: Notification) -> None: ...


class ConfirmPrompt(Protocol):
    def __call__(self, message: str) -> bool: ...
