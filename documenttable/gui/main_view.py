"""
DocumentTableView – search bar, record table, pagination and the two dialogs.

This file is UI-only. The DocumentTableController owns store, filtering,
paging and row actions; the view renders controller.view_model() whenever the
view engine reports a change and forwards user input back to it.
"""

from __future__ import annotations

import logging
import tkinter as tk
from tkinter import ttk
from typing import Any, Callable, Coroutine, Optional

from documenttable.controllers.document_table_controller import DocumentTableController
from documenttable.gui.dialogs.document_form_dialog import DocumentFormDialog
from documenttable.gui.dialogs.document_upload_dialog import DocumentUploadDialog
from documenttable.gui.document_table_panel import DocumentTablePanel
from documenttable.gui.pagination_bar import PaginationBar
from documenttable.gui.search_bar import SearchBar
from documenttable.logic.adapters.current_user_provider import SessionProvider
from documenttable.logic.repository.document_repository import DocumentDataSource
from documenttable.logic.services.view_engine import ViewEngine
from documenttable.models.table_columns import column_by_id

log = logging.getLogger(__name__)

Submit = Callable[[Coroutine[Any, Any, Any]], Any]


class DocumentTableView(ttk.Frame):
    def __init__(
        self,
        parent: tk.Misc,
        *,
        controller: DocumentTableController,
        data_source: DocumentDataSource,
        session_provider: SessionProvider,
        filter_var: tk.StringVar,
        submit: Submit,
        on_refresh: Optional[Callable[[], None]] = None,
    ) -> None:
        super().__init__(parent, padding=8)
        self.ctrl = controller
        self._submit = submit
        self._shift_down = False

        self.columnconfigure(0, weight=1)
        self.rowconfigure(1, weight=1)

        self.search = SearchBar(
            self,
            variable=filter_var,
            on_filter_changed=controller.engine.filter_changed,
            on_new=controller.actions.open_create_form,
            on_refresh=on_refresh or (lambda: self._submit(self.ctrl.refresh())),
        )
        self.search.grid(row=0, column=0, sticky="ew", pady=(0, 8))

        self.table = DocumentTablePanel(
            self,
            on_sort=self._on_sort,
            on_edit=self._on_edit,
            on_upload=self._on_upload,
            on_delete=self._on_delete,
        )
        self.table.grid(row=1, column=0, sticky="nsew")
        # Shift+click on a header adds a secondary sort key
        self.table.tree.bind("<Button-1>", lambda e: self._set_shift(bool(e.state & 0x0001)), add="+")

        self.pager = PaginationBar(self, engine=controller.engine)
        self.pager.grid(row=2, column=0, sticky="ew", pady=(8, 0))

        self.form_dialog = DocumentFormDialog(
            self, modals=controller.modals, actions=controller.actions,
            data_source=data_source, session_provider=session_provider, submit=submit,
        )
        self.upload_dialog = DocumentUploadDialog(
            self, modals=controller.modals, actions=controller.actions,
            data_source=data_source, session_provider=session_provider, submit=submit,
        )

        controller.engine.subscribe(self._on_engine_changed)
        self.bind("<Destroy>", self._on_destroy, add="+")
        self.render()

    # rendering
    def render(self) -> None:
        state = self.ctrl.view_model()
        self.table.render(state)
        self.pager.render(state.pagination)

    def _on_engine_changed(self, _engine: ViewEngine) -> None:
        self.render()

    def _on_destroy(self, event) -> None:
        if event.widget is self:
            self.ctrl.engine.unsubscribe(self._on_engine_changed)
            self.ctrl.unmount()

    # table callbacks
    def _set_shift(self, pressed: bool) -> None:
        self._shift_down = pressed

    def _on_sort(self, column_id: str) -> None:
        column = column_by_id(column_id)
        if column is None or not column.sortable:
            return
        self.ctrl.engine.toggle_sort(column.attribute, multi=self._shift_down)

    def _on_edit(self, key: str) -> None:
        record = self.ctrl.find(key)
        if record is not None:
            self.ctrl.actions.open_edit_form(record)

    def _on_upload(self, key: str) -> None:
        record = self.ctrl.find(key)
        if record is not None:
            self.ctrl.actions.open_upload(record)

    def _on_delete(self, key: str) -> None:
        record = self.ctrl.find(key)
        if record is None:
            log.warning("Delete requested for unknown row %s", key)
            return
        self._submit(self.ctrl.actions.delete(record))
