"""
===============================================================================
PaginationBar – first/prev/next/last, page jump, page-size selector
-------------------------------------------------------------------------------
Renders a PaginationState and forwards clicks to the ViewEngine. Buttons are
disabled from the engine's navigation predicates.
===============================================================================
"""
from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Sequence

from documenttable.logic.services.view_engine import ViewEngine
from documenttable.logic.viewstate.view_state import PaginationState


class PaginationBar(ttk.Frame):
    def __init__(self, parent: tk.Widget, *, engine: ViewEngine) -> None:
        super().__init__(parent)
        self._engine = engine

        nav = ttk.Frame(self)
        nav.pack(side="left")
        self._btn_first = ttk.Button(nav, text="«", width=3, command=engine.first_page)
        self._btn_prev = ttk.Button(nav, text="‹", width=3, command=engine.previous_page)
        self._lbl_page = ttk.Label(nav, text="Page 1 of 1", padding=(12, 0))
        self._btn_next = ttk.Button(nav, text="›", width=3, command=engine.next_page)
        self._btn_last = ttk.Button(nav, text="»", width=3, command=engine.last_page)
        for w in (self._btn_first, self._btn_prev, self._lbl_page, self._btn_next, self._btn_last):
            w.pack(side="left", padx=1)

        right = ttk.Frame(self)
        right.pack(side="right")
        ttk.Label(right, text="Go to page:").pack(side="left", padx=(0, 4))
        self._jump_var = tk.StringVar(value="1")
        jump = ttk.Spinbox(right, from_=1, to=1, width=5, textvariable=self._jump_var,
                           command=self._on_jump)
        jump.pack(side="left")
        jump.bind("<Return>", lambda _e: self._on_jump())
        self._jump = jump

        ttk.Label(right, text="Rows per page:").pack(side="left", padx=(12, 4))
        self._size_var = tk.StringVar(value=str(engine.page_size))
        size = ttk.Combobox(right, textvariable=self._size_var, state="readonly", width=8)
        size.pack(side="left")
        size.bind("<<ComboboxSelected>>", self._on_size_selected)
        self._size = size
        self._set_page_sizes(engine.page_sizes)

    def render(self, state: PaginationState) -> None:
        self._lbl_page.configure(text=f"Page {state.page_index + 1} of {state.page_count}")
        prev_state = "!disabled" if state.can_previous_page else "disabled"
        next_state = "!disabled" if state.can_next_page else "disabled"
        self._btn_first.state([prev_state])
        self._btn_prev.state([prev_state])
        self._btn_next.state([next_state])
        self._btn_last.state([next_state])
        self._jump.configure(to=state.page_count)
        self._size_var.set(f"Show {state.page_size}")

    def _set_page_sizes(self, sizes: Sequence[int]) -> None:
        self._size.configure(values=[f"Show {s}" for s in sizes])
        self._size_var.set(f"Show {self._engine.page_size}")

    def _on_jump(self) -> None:
        self._engine.page_jump(self._jump_var.get())

    def _on_size_selected(self, _event=None) -> None:
        raw = self._size_var.get().replace("Show", "").strip()
        if raw.isdigit():
            self._engine.set_page_size(int(raw))
