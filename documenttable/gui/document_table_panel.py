"""
===============================================================================
DocumentTablePanel – the record table (Treeview)
-------------------------------------------------------------------------------
- One Treeview item per visible row, iid = str(REF_SEQ_NO).
- Loading / error / empty bodies are rendered as a single status row.
- Header click -> on_sort(column_id)
- Docs cell click -> on_upload(key); Action cell: left half edit, right half delete
- Double click -> edit; right click -> context menu
===============================================================================
"""
from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Callable, Optional

from documenttable.logic.viewstate.ui_state import BODY_ERROR, BODY_ROWS, DocumentTableUIState
from documenttable.models.table_columns import COLUMNS

STATUS_IID = "__status__"
ACTIONS_CELL = "✎ Edit   🗑 Delete"

RowCallback = Callable[[str], None]


class DocumentTablePanel(ttk.Frame):
    def __init__(
        self,
        parent: tk.Widget,
        *,
        on_sort: Optional[Callable[[str], None]] = None,
        on_edit: Optional[RowCallback] = None,
        on_upload: Optional[RowCallback] = None,
        on_delete: Optional[RowCallback] = None,
    ) -> None:
        super().__init__(parent)
        self._on_sort = on_sort
        self._on_edit = on_edit
        self._on_upload = on_upload
        self._on_delete = on_delete

        # Layout: allow growth
        self.columnconfigure(0, weight=1)
        self.rowconfigure(0, weight=1)

        self.tree = ttk.Treeview(self, columns=[c.id for c in COLUMNS], show="headings", selectmode="browse")
        for col in COLUMNS:
            self.tree.heading(col.id, text=col.header, command=lambda cid=col.id: self._sort_clicked(cid))
            self.tree.column(col.id, width=col.width, anchor=col.anchor, stretch=col.id == "document")
        self.tree.tag_configure("status", foreground="#6b7280")
        self.tree.tag_configure("error", foreground="#dc2626")
        self.tree.tag_configure("has_docs", foreground="#15803d")

        vsb = ttk.Scrollbar(self, orient="vertical", command=self.tree.yview)
        hsb = ttk.Scrollbar(self, orient="horizontal", command=self.tree.xview)
        self.tree.configure(yscrollcommand=vsb.set, xscrollcommand=hsb.set)

        self.tree.grid(row=0, column=0, sticky="nsew")
        vsb.grid(row=0, column=1, sticky="ns")
        hsb.grid(row=1, column=0, sticky="ew")

        self._menu = tk.Menu(self, tearoff=False)
        self._menu.add_command(label="Edit", command=lambda: self._fire_selected(self._on_edit))
        self._menu.add_command(label="Upload / view documents", command=lambda: self._fire_selected(self._on_upload))
        self._menu.add_separator()
        self._menu.add_command(label="Delete", command=lambda: self._fire_selected(self._on_delete))

        self.tree.bind("<ButtonRelease-1>", self._on_click)
        self.tree.bind("<Double-1>", self._on_double_click)
        self.tree.bind("<Button-3>", self._on_context_menu)

    # data rendering
    def render(self, state: DocumentTableUIState) -> None:
        self.tree.delete(*self.tree.get_children())
        for key in state.sorting:
            for col in COLUMNS:
                if col.attribute == key.column:
                    arrow = " ▼" if key.descending else " ▲"
                    self.tree.heading(col.id, text=col.header + arrow)
        sorted_attrs = {k.column for k in state.sorting}
        for col in COLUMNS:
            if col.attribute not in sorted_attrs:
                self.tree.heading(col.id, text=col.header)

        if state.body != BODY_ROWS:
            values = ["" for _ in COLUMNS]
            values[1] = state.message
            tag = "error" if state.body == BODY_ERROR else "status"
            self.tree.insert("", "end", iid=STATUS_IID, values=values, tags=(tag,))
            return

        for row in state.rows:
            document = f"{row.document_name}  [{row.document_no}]" if row.document_no else row.document_name
            self.tree.insert(
                "", "end", iid=row.key,
                values=(
                    row.ref_no, document, row.uploader, row.channel_source, row.related_to,
                    row.category, row.status, row.assigned_to, row.docs, ACTIONS_CELL,
                ),
                tags=("has_docs",) if row.has_documents else (),
            )

    # events
    def _sort_clicked(self, column_id: str) -> None:
        if self._on_sort is not None:
            self._on_sort(column_id)

    def _row_at(self, event) -> Optional[str]:
        iid = self.tree.identify_row(event.y)
        if not iid or iid == STATUS_IID:
            return None
        return iid

    def _on_click(self, event) -> None:
        if self.tree.identify_region(event.x, event.y) != "cell":
            return
        key = self._row_at(event)
        if key is None:
            return
        column_ref = self.tree.identify_column(event.x)      # "#1".."#n"
        column_id = COLUMNS[int(column_ref[1:]) - 1].id
        if column_id == "docs" and self._on_upload is not None:
            self._on_upload(key)
        elif column_id == "actions":
            x, _y, width, _h = self.tree.bbox(key, column_ref)
            handler = self._on_edit if event.x < x + width / 2 else self._on_delete
            if handler is not None:
                handler(key)

    def _on_double_click(self, event) -> None:
        key = self._row_at(event)
        if key is None or self._on_edit is None:
            return
        column_id = COLUMNS[int(self.tree.identify_column(event.x)[1:]) - 1].id
        if column_id not in ("docs", "actions"):
            self._on_edit(key)

    def _on_context_menu(self, event) -> None:
        key = self._row_at(event)
        if key is None:
            return
        self.tree.selection_set(key)
        self._menu.tk_popup(event.x_root, event.y_root)

    def _fire_selected(self, handler: Optional[RowCallback]) -> None:
        sel = self.tree.selection()
        if sel and handler is not None and sel[0] != STATUS_IID:
            handler(sel[0])
