"""
===============================================================================
ViewEngine – global filter, column sort and pagination over the RecordStore
-------------------------------------------------------------------------------
Purpose:
    Turn the store's collection into the rows the table shows:
        store.data -> global filter -> sort -> page slice

Contract:
    - Filter text is read from the parent-owned FilterBinding on every
      computation; the engine keeps no copy of it.
    - Page size is limited to the configured set; out-of-range navigation is
      a no-op, direct index requests are clamped.
    - Listeners registered via subscribe() are called after every change of
      the data or the view state.

SRP:
    No I/O, no permissions, no widgets.
===============================================================================
"""
from __future__ import annotations

import logging
import math
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple

from documenttable.exceptions.errors import InvalidPageSizeError
from documenttable.logic.store.record_store import RecordStore
from documenttable.logic.viewstate.view_state import (
    DEFAULT_PAGE_SIZES,
    FilterBinding,
    PaginationState,
    SortKey,
    ViewState,
)
from documenttable.models.document_record import DocumentRecord

log = logging.getLogger(__name__)

EngineListener = Callable[["ViewEngine"], None]


def _as_text(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def matches_global_filter(record: DocumentRecord, filter_value: str) -> bool:
    """True if any string/number field contains the filter (case-insensitive)."""
    needle = _as_text(filter_value).lower()
    if not needle:
        return True
    return any(needle in _as_text(v).lower() for v in record.scalar_values())


def _sort_key(value: Any) -> Tuple[int, Any]:
    # numbers before strings, strings compared case-insensitively
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (0, value)
    return (1, str(value).lower())


def sort_records(records: Iterable[DocumentRecord], sorting: Sequence[SortKey]) -> List[DocumentRecord]:
    """
    Stable multi-key sort. The first key has the highest priority; missing
    (None) values always go last.
    """
    rows = list(records)
    for key in reversed(list(sorting)):
        present = [r for r in rows if getattr(r, key.column, None) is not None]
        missing = [r for r in rows if getattr(r, key.column, None) is None]
        present.sort(key=lambda r: _sort_key(getattr(r, key.column)), reverse=key.descending)
        rows = present + missing
    return rows


class ViewEngine:
    """Client-side filter/sort/paging engine for one table."""

    def __init__(
        self,
        store: RecordStore,
        filter_binding: FilterBinding,
        *,
        page_sizes: Sequence[int] = DEFAULT_PAGE_SIZES,
        page_size: Optional[int] = None,
    ) -> None:
        sizes = tuple(page_sizes)
        if not sizes or any((not isinstance(s, int)) or s <= 0 for s in sizes):
            raise InvalidPageSizeError(f"Page sizes must be positive integers: {sizes!r}")
        initial = sizes[0] if page_size is None else page_size
        if initial not in sizes:
            raise InvalidPageSizeError(f"Page size {initial} is not one of {sizes!r}")

        self._store = store
        self._filter = filter_binding
        self._page_sizes = sizes
        self._state = ViewState(page_size=initial)
        self._listeners: List[EngineListener] = []
        store.subscribe(self._on_store_changed)

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------
    def subscribe(self, listener: EngineListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: EngineListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def detach(self) -> None:
        self._store.unsubscribe(self._on_store_changed)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def _on_store_changed(self, _store: RecordStore) -> None:
        self._state.page_index = self.page_index
        self._notify()

    # ------------------------------------------------------------------
    # Global filter (controlled by the parent)
    # ------------------------------------------------------------------
    @property
    def global_filter(self) -> str:
        return self._filter.get_value() or ""

    def set_global_filter(self, text: str) -> None:
        self._filter.set_value(text or "")
        self.filter_changed()

    def filter_changed(self) -> None:
        """The parent changed the filter value; restart at the first page."""
        self._state.page_index = 0
        self._notify()

    # ------------------------------------------------------------------
    # Sorting
    # ------------------------------------------------------------------
    @property
    def sorting(self) -> List[SortKey]:
        return list(self._state.sorting)

    def set_sorting(self, keys: Iterable[SortKey]) -> None:
        self._state.sorting = list(keys)
        self._notify()

    def toggle_sort(self, column: str, *, multi: bool = False) -> None:
        """Cycle a column: ascending -> descending -> unsorted."""
        current = next((k for k in self._state.sorting if k.column == column), None)
        if current is None:
            nxt: Optional[SortKey] = SortKey(column, False)
        elif not current.descending:
            nxt = SortKey(column, True)
        else:
            nxt = None

        if multi:
            others = [k for k in self._state.sorting if k.column != column]
            if nxt is None:
                keys = others
            elif current is None:
                keys = others + [nxt]
            else:
                keys = [nxt if k.column == column else k for k in self._state.sorting]
        else:
            keys = [nxt] if nxt is not None else []
        self.set_sorting(keys)

    # ------------------------------------------------------------------
    # Row models
    # ------------------------------------------------------------------
    def filtered_rows(self) -> List[DocumentRecord]:
        text = self.global_filter
        return [r for r in self._store.data if matches_global_filter(r, text)]

    def rows(self) -> List[DocumentRecord]:
        """Filtered and sorted rows (pre-pagination)."""
        return sort_records(self.filtered_rows(), self._state.sorting)

    def page_rows(self) -> List[DocumentRecord]:
        start = self.page_index * self._state.page_size
        return self.rows()[start:start + self._state.page_size]

    # ------------------------------------------------------------------
    # Pagination
    # ------------------------------------------------------------------
    @property
    def page_sizes(self) -> Tuple[int, ...]:
        return self._page_sizes

    @property
    def page_size(self) -> int:
        return self._state.page_size

    @property
    def page_count(self) -> int:
        total = len(self.filtered_rows())
        return max(1, math.ceil(total / self._state.page_size))

    @property
    def page_index(self) -> int:
        return min(self._state.page_index, self.page_count - 1)

    @property
    def can_previous_page(self) -> bool:
        return self.page_index > 0

    @property
    def can_next_page(self) -> bool:
        return self.page_index < self.page_count - 1

    def set_page_index(self, index: int) -> None:
        self._state.page_index = max(0, min(int(index), self.page_count - 1))
        self._notify()

    def first_page(self) -> None:
        self.set_page_index(0)

    def last_page(self) -> None:
        self.set_page_index(self.page_count - 1)

    def next_page(self) -> bool:
        if not self.can_next_page:
            return False
        self.set_page_index(self.page_index + 1)
        return True

    def previous_page(self) -> bool:
        if not self.can_previous_page:
            return False
        self.set_page_index(self.page_index - 1)
        return True

    def page_jump(self, text: str) -> bool:
        """Numeric 'go to page' input (1-based); blank means the first page."""
        raw = (text or "").strip()
        if not raw:
            self.set_page_index(0)
            return True
        try:
            page = int(raw)
        except ValueError:
            return False
        self.set_page_index(page - 1)
        return True

    def set_page_size(self, size: int) -> bool:
        """Switch page size, keeping the current top row on screen."""
        if size not in self._page_sizes:
            log.warning("Ignoring page size %r (allowed: %s)", size, self._page_sizes)
            return False
        top_row = self.page_index * self._state.page_size
        self._state.page_size = size
        self._state.page_index = top_row // size
        self._notify()
        return True

    def pagination(self) -> PaginationState:
        total = len(self.filtered_rows())
        page_count = max(1, math.ceil(total / self._state.page_size))
        index = min(self._state.page_index, page_count - 1)
        return PaginationState(
            page_index=index,
            page_count=page_count,
            page_size=self._state.page_size,
            total_rows=total,
            can_previous_page=index > 0,
            can_next_page=index < page_count - 1,
        )
