"""
===============================================================================
ViewState – client-side table state (sort, pagination)
-------------------------------------------------------------------------------
Ownership:
    Owned by the ViewEngine of one table. The global filter text is NOT held
    here; it lives with the parent and is read through a FilterBinding.
===============================================================================
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, List, Tuple

DEFAULT_PAGE_SIZES: Tuple[int, ...] = (10, 20, 30, 40, 50)


@dataclass(frozen=True, slots=True)
class SortKey:
    column: str              # DocumentRecord attribute name
    descending: bool = False


@dataclass(slots=True)
class ViewState:
    sorting: List[SortKey] = field(default_factory=list)
    page_index: int = 0
    page_size: int = 10


@dataclass(frozen=True, slots=True)
class PaginationState:
    page_index: int
    page_count: int
    page_size: int
    total_rows: int
    can_previous_page: bool
    can_next_page: bool


@dataclass(frozen=True)
class FilterBinding:
    """
    Controlled filter value: the parent owns it, the table reads and writes
    it only through these callables.
    """
    get_value: Callable[[], str]
    set_value: Callable[[str], None]

    @classmethod
    def local(cls, initial: str = "") -> "FilterBinding":
        """Binding over a private cell, for hosts without their own state."""
        cell = [initial]

        def _set(value: str) -> None:
            cell[0] = value

        return cls(get_value=lambda: cell[0], set_value=_set)
