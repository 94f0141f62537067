"""
===============================================================================
DocumentUploadDialog – attach files to the selected document
-------------------------------------------------------------------------------
- Lists the files already uploaded for the row.
- "Add files..." picks local files; they are inspected (pages/title) and
  queued. The selected queued file is sent as primary.
- "Upload" sends the queue, then hands over to on_upload_success().
Persistent window; shown/hidden through the upload ModalState.
===============================================================================
"""
from __future__ import annotations

import logging
import tkinter as tk
from tkinter import ttk, filedialog, messagebox
from typing import Any, Callable, Coroutine, List, Optional

from documenttable.controllers.actions_controller import DocumentActionsController
from documenttable.controllers.modal_coordinator import ModalCoordinator
from documenttable.exceptions.errors import error_message
from documenttable.logic.adapters.current_user_provider import SessionProvider
from documenttable.logic.repository.document_repository import DocumentDataSource
from documenttable.logic.services.attachment_inspector import AttachmentInspector
from documenttable.models.attachment import AttachmentDescriptor

log = logging.getLogger(__name__)

Submit = Callable[[Coroutine[Any, Any, Any]], Any]

FILE_TYPES = [
    ("Documents", "*.pdf *.docx"),
    ("PDF", "*.pdf"),
    ("Word", "*.docx"),
    ("All files", "*.*"),
]


def _describe(d: AttachmentDescriptor) -> str:
    details = [f"{d.size_bytes // 1024} KB"]
    if d.page_count is not None:
        details.append(f"{d.page_count} pages")
    if d.title:
        details.append(d.title)
    mark = "★ " if d.is_primary else ""
    return f"{mark}{d.file_name}  ({', '.join(details)})"


class DocumentUploadDialog(tk.Toplevel):
    def __init__(
        self,
        parent: tk.Misc,
        *,
        modals: ModalCoordinator,
        actions: DocumentActionsController,
        data_source: DocumentDataSource,
        session_provider: SessionProvider,
        submit: Submit,
        inspector: Optional[AttachmentInspector] = None,
    ) -> None:
        super().__init__(parent)
        self.withdraw()
        self.transient(parent)
        self.geometry("560x420")
        self._modals = modals
        self._actions = actions
        self._source = data_source
        self._sessions = session_provider
        self._submit = submit
        self._inspector = inspector or AttachmentInspector()
        self._queue: List[AttachmentDescriptor] = []
        self._busy = False

        frm = ttk.Frame(self, padding=12)
        frm.pack(fill="both", expand=True)

        self._lbl_doc = ttk.Label(frm, text="", font=("Segoe UI", 10, "bold"))
        self._lbl_doc.pack(anchor="w")

        ttk.Label(frm, text="Uploaded files").pack(anchor="w", pady=(8, 2))
        self._lst_existing = tk.Listbox(frm, height=6, activestyle="none")
        self._lst_existing.pack(fill="x")

        ttk.Label(frm, text="Files to upload (selected = primary)").pack(anchor="w", pady=(8, 2))
        self._lst_queue = tk.Listbox(frm, height=8, exportselection=False)
        self._lst_queue.pack(fill="both", expand=True)
        self._lst_queue.bind("<<ListboxSelect>>", lambda _e: self._mark_primary())

        btns = ttk.Frame(frm)
        btns.pack(fill="x", pady=(10, 0))
        ttk.Button(btns, text="Add files...", command=self._add_files).pack(side="left")
        ttk.Button(btns, text="Remove", command=self._remove_selected).pack(side="left", padx=(6, 0))
        ttk.Button(btns, text="Close", command=self._cancel).pack(side="right")
        self._btn_upload = ttk.Button(btns, text="Upload", command=self._upload)
        self._btn_upload.pack(side="right", padx=(0, 6))

        self.protocol("WM_DELETE_WINDOW", self._cancel)
        modals.upload.attach(self._set_visible)
        self.bind("<Destroy>", self._on_destroy, add="+")

    # visibility
    def _set_visible(self, visible: bool) -> None:
        if not visible:
            self.grab_release()
            self.withdraw()
            return
        record = self._modals.selected_document
        self._queue.clear()
        self._render_queue()
        self._lst_existing.delete(0, "end")
        if record is not None:
            self.title(f"Documents – {record.ref_seq_no}")
            self._lbl_doc.configure(text=f"{record.document_description}  [{record.document_no}]")
            for d in record.uploaded_docs:
                self._lst_existing.insert("end", _describe(d))
        self.deiconify()
        self.grab_set()

    def _on_destroy(self, event) -> None:
        if event.widget is self:
            self._modals.upload.detach()

    def _cancel(self) -> None:
        if not self._busy:
            self._modals.close_upload()

    # queue
    def _add_files(self) -> None:
        paths = filedialog.askopenfilenames(parent=self, title="Select files", filetypes=FILE_TYPES)
        for p in paths:
            try:
                self._queue.append(self._inspector.inspect(p))
            except FileNotFoundError as exc:
                messagebox.showerror("Add files", f"File not found: {exc}", parent=self)
        if self._queue and not any(d.is_primary for d in self._queue):
            self._queue[0].is_primary = True
        self._render_queue()

    def _remove_selected(self) -> None:
        sel = self._lst_queue.curselection()
        if not sel:
            return
        del self._queue[sel[0]]
        if self._queue and not any(d.is_primary for d in self._queue):
            self._queue[0].is_primary = True
        self._render_queue()

    def _mark_primary(self) -> None:
        sel = self._lst_queue.curselection()
        if not sel:
            return
        for i, d in enumerate(self._queue):
            d.is_primary = i == sel[0]
        self._render_queue(select=sel[0])

    def _render_queue(self, select: Optional[int] = None) -> None:
        self._lst_queue.delete(0, "end")
        for d in self._queue:
            self._lst_queue.insert("end", _describe(d))
        if select is not None:
            self._lst_queue.selection_set(select)

    # upload
    def _upload(self) -> None:
        record = self._modals.selected_document
        if self._busy or record is None:
            return
        if not self._queue:
            messagebox.showinfo("Upload", "Please add at least one file.", parent=self)
            return
        session = self._sessions.get_session()
        if session is None:
            messagebox.showerror("Upload", "No active user session.", parent=self)
            return
        self._busy = True
        self._btn_upload.state(["disabled"])
        self._submit(self._upload_async(record.ref_seq_no, list(self._queue),
                                        session.current_user_login, session.client_url))

    async def _upload_async(self, ref_seq_no: Any, files: List[AttachmentDescriptor], user: str, endpoint: str) -> None:
        try:
            await self._source.upload_attachments(ref_seq_no, files, user, endpoint)
        except Exception as exc:
            log.error("Upload for %r failed: %s", ref_seq_no, exc)
            messagebox.showerror("Upload", error_message(exc, "Unknown error occurred."), parent=self)
            return
        finally:
            self._busy = False
            self._btn_upload.state(["!disabled"])
        await self._actions.on_upload_success()
