"""
===============================================================================
UI State (Document Table) – view-facing snapshot
-------------------------------------------------------------------------------
Purpose:
    Provide a minimal, serializable structure describing everything the
    renderer needs for one frame: body state, visible rows, pagination and
    modal visibility. This module is strictly view-oriented and holds no
    business logic.

Ownership:
    Produced by DocumentTableController.view_model(); consumed by the Tk view.
===============================================================================
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from documenttable.models.dto.document_row_dto import DocumentRowDTO

from .view_state import PaginationState, SortKey

BODY_LOADING = "loading"
BODY_ERROR = "error"
BODY_ROWS = "rows"
BODY_EMPTY = "empty"


@dataclass(slots=True)
class DocumentTableUIState:
    """
    Encapsulates what the table view shows.

    Fields
    ------
    body : str
        One of 'loading', 'error', 'rows', 'empty' (precedence in that order).
    message : str
        Text for loading/error/empty bodies ("Error: ..." for errors).
    rows : list[DocumentRowDTO]
        Visible rows of the current page.
    pagination : PaginationState
        Page index/count/size and navigation predicates.
    page_sizes : tuple[int, ...]
        Choices for the page-size selector.
    filter_text : str
        Current global filter (read from the parent binding).
    sorting : list[SortKey]
        Active sort keys.
    form_visible / upload_visible : bool
        Modal visibility.
    selected_key : str | None
        Row key of the selected document, if any.
    """
    body: str
    message: str
    rows: List[DocumentRowDTO]
    pagination: PaginationState
    page_sizes: Tuple[int, ...]
    filter_text: str = ""
    sorting: List[SortKey] = field(default_factory=list)
    form_visible: bool = False
    upload_visible: bool = False
    selected_key: Optional[str] = None
