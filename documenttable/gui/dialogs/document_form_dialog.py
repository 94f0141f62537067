"""
Create/edit dialog for a document's metadata.

The window lives for the whole session and is only shown/hidden: it attaches
itself to the coordinator's form ModalState and reads the selected document
whenever it becomes visible.
"""

from __future__ import annotations

import logging
import tkinter as tk
from tkinter import ttk, messagebox
from typing import Any, Callable, Coroutine, Dict, Optional

from documenttable.controllers.actions_controller import DocumentActionsController
from documenttable.controllers.modal_coordinator import ModalCoordinator
from documenttable.exceptions.errors import error_message
from documenttable.logic.adapters.current_user_provider import SessionProvider
from documenttable.logic.repository.document_repository import DocumentDataSource

log = logging.getLogger(__name__)

Submit = Callable[[Coroutine[Any, Any, Any]], Any]

# (wire key, label)
FORM_FIELDS = (
    ("DOCUMENT_NO", "Document no."),
    ("DOCUMENT_DESCRIPTION", "Description"),
    ("DOC_RELATED_TO", "Related to"),
    ("DOC_RELATED_CATEGORY", "Category"),
    ("CHANNEL_SOURCE", "Channel source"),
    ("ASSIGNED_USER", "Assigned user"),
)


class DocumentFormDialog(tk.Toplevel):
    def __init__(
        self,
        parent: tk.Misc,
        *,
        modals: ModalCoordinator,
        actions: DocumentActionsController,
        data_source: DocumentDataSource,
        session_provider: SessionProvider,
        submit: Submit,
    ) -> None:
        super().__init__(parent)
        self.withdraw()
        self.resizable(False, False)
        self.transient(parent)
        self._modals = modals
        self._actions = actions
        self._source = data_source
        self._sessions = session_provider
        self._submit = submit
        self._busy = False

        frm = ttk.Frame(self, padding=12)
        frm.grid(sticky="nsew")
        self.columnconfigure(0, weight=1)

        self._entries: Dict[str, ttk.Entry] = {}
        for row, (key, label) in enumerate(FORM_FIELDS):
            ttk.Label(frm, text=label).grid(row=row, column=0, sticky="w", pady=4)
            entry = ttk.Entry(frm, width=50)
            entry.grid(row=row, column=1, sticky="ew", pady=4)
            self._entries[key] = entry

        btns = ttk.Frame(frm)
        btns.grid(row=len(FORM_FIELDS), column=0, columnspan=2, sticky="e", pady=(12, 0))
        ttk.Button(btns, text="Cancel", command=self._cancel).grid(row=0, column=0, padx=(0, 6))
        self._btn_save = ttk.Button(btns, text="Save", command=self._save)
        self._btn_save.grid(row=0, column=1)

        self.protocol("WM_DELETE_WINDOW", self._cancel)
        modals.form.attach(self._set_visible)
        self.bind("<Destroy>", self._on_destroy, add="+")

    # visibility
    def _set_visible(self, visible: bool) -> None:
        if not visible:
            self.grab_release()
            self.withdraw()
            return
        record = self._modals.selected_document
        self.title("Edit document" if record is not None else "New document")
        values = record.to_payload() if record is not None else {}
        for key, entry in self._entries.items():
            entry.delete(0, "end")
            entry.insert(0, str(values.get(key) or ""))
        self.deiconify()
        self.grab_set()
        self._entries["DOCUMENT_NO"].focus_set()

    def _on_destroy(self, event) -> None:
        if event.widget is self:
            self._modals.form.detach()

    def _cancel(self) -> None:
        if not self._busy:
            self._modals.close_form()

    # save
    def _payload(self, owner: str) -> Dict[str, Any]:
        record = self._modals.selected_document
        payload = record.to_payload() if record is not None else {"REF_SEQ_NO": None, "USER_NAME": owner}
        for key, entry in self._entries.items():
            text = entry.get().strip()
            payload[key] = text or (None if key in ("DOC_RELATED_TO", "DOC_RELATED_CATEGORY", "ASSIGNED_USER") else "")
        return payload

    def _save(self) -> None:
        if self._busy:
            return
        if not self._entries["DOCUMENT_DESCRIPTION"].get().strip():
            messagebox.showwarning("Save", "Please enter a description.", parent=self)
            return
        session = self._sessions.get_session()
        if session is None:
            messagebox.showerror("Save", "No active user session.", parent=self)
            return
        self._busy = True
        self._btn_save.state(["disabled"])
        payload = self._payload(session.current_user_name)
        self._submit(self._save_async(payload, session.current_user_login, session.client_url))

    async def _save_async(self, payload: Dict[str, Any], user: str, endpoint: str) -> None:
        try:
            await self._source.save_record(payload, user, endpoint)
        except Exception as exc:
            log.error("Saving document failed: %s", exc)
            messagebox.showerror("Save", error_message(exc, "Unknown error occurred."), parent=self)
            return
        finally:
            self._busy = False
            self._btn_save.state(["!disabled"])
        await self._actions.on_form_success()
