"""
===============================================================================
SearchBar – top bar with global filter + create/refresh actions
-------------------------------------------------------------------------------
Responsibility
- Shows: [New document] [Refresh] | [filter field]
- The filter field edits the parent-owned StringVar directly; the bar only
  reports changes through on_filter_changed().
- Delegates:
    * on_new()      -> open the edit form without a selected document
    * on_refresh()  -> reload through the parent's refresh handle

SRP
- Pure GUI + delegation. No filtering or storage logic in here.
===============================================================================
"""
from __future__ import annotations

import tkinter as tk
from tkinter import ttk, messagebox
from typing import Callable, Optional


class SearchBar(ttk.Frame):
    """Top filter and action bar."""

    def __init__(
        self,
        parent: tk.Widget,
        *,
        variable: tk.StringVar,
        on_filter_changed: Optional[Callable[[], None]] = None,
        on_new: Optional[Callable[[], None]] = None,
        on_refresh: Optional[Callable[[], None]] = None,
    ) -> None:
        super().__init__(parent)
        self._var = variable
        self._on_filter_changed = on_filter_changed
        self._on_new = on_new
        self._on_refresh = on_refresh

        self.columnconfigure(3, weight=1)

        ttk.Button(self, text="New document", command=lambda: self._invoke(self._on_new, "New document")) \
            .grid(row=0, column=0, padx=(0, 6))
        ttk.Button(self, text="Refresh", command=lambda: self._invoke(self._on_refresh, "Refresh")) \
            .grid(row=0, column=1, padx=(0, 12))

        ttk.Label(self, text="Search:").grid(row=0, column=2, padx=(0, 6))
        self._entry = ttk.Entry(self, textvariable=self._var)
        self._entry.grid(row=0, column=3, sticky="ew")
        ttk.Button(self, text="✕", width=3, command=lambda: self._var.set("")).grid(row=0, column=4, padx=(4, 0))

        self._trace_id = self._var.trace_add("write", self._on_var_written)
        self.bind("<Destroy>", self._on_destroy, add="+")

    # --- events --------------------------------------------------------------
    def _on_var_written(self, *_args) -> None:
        if callable(self._on_filter_changed):
            self._on_filter_changed()

    def _on_destroy(self, event) -> None:
        if event.widget is self:
            try:
                self._var.trace_remove("write", self._trace_id)
            except tk.TclError:
                pass

    def _invoke(self, handler: Optional[Callable[[], None]], title: str) -> None:
        if not callable(handler):
            messagebox.showinfo(title, "No handler wired.", parent=self.winfo_toplevel())
            return
        try:
            handler()
        except Exception as exc:
            messagebox.showerror(title, f"{type(exc).__name__}: {exc}", parent=self.winfo_toplevel())
