"""
Tk implementations of the notification sink and the confirmation prompt.
"""
from __future__ import annotations

import tkinter as tk
from tkinter import messagebox

from documenttable.models.notification import Notification, Severity


class MessageboxNotifier:
    """Shows notifications as message boxes on the given parent."""

    def __init__(self, parent: tk.Misc) -> None:
        self._parent = parent

    def notify(self, notification: Notification) -> None:
        title = notification.title
        body = notification.description or notification.title
        if notification.severity is Severity.DESTRUCTIVE:
            messagebox.showerror(title, body, parent=self._parent.winfo_toplevel())
        else:
            messagebox.showinfo(title, body, parent=self._parent.winfo_toplevel())


class MessageboxConfirm:
    def __init__(self, parent: tk.Misc, *, title: str = "Confirm") -> None:
        self._parent = parent
        self._title = title

    def __call__(self, message: str) -> bool:
        return bool(messagebox.askyesno(self._title, message, parent=self._parent.winfo_toplevel()))
