"""documenttable/controllers/modal_coordinator.py

===============================================================================
ModalCoordinator – selected document + visibility of the two dialogs
-------------------------------------------------------------------------------
Why this controller exists
    The edit form and the upload dialog both work on "the selected document".
    Exactly one place owns that selection and commands dialog visibility:
        - open_form(record)   -> selection, then form visible
        - open_upload(record) -> selection, then upload visible
        - close_form()/close_upload()

    Dialogs attach a listener to their ModalState; the coordinator pushes
    visibility changes to it (no polling). A command for a dialog that has
    not attached yet is logged and dropped.

    It also rebinds the parent's RefreshHandle to the store's refresh so that
    sibling UI can force a reload.
===============================================================================
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, List, Optional

from documenttable.models.document_record import DocumentRecord

log = logging.getLogger(__name__)

VisibilityListener = Callable[[bool], None]
RefreshFn = Callable[[], Awaitable[List[DocumentRecord]]]


class ModalState:
    """Visibility state machine of one dialog."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._visible = False
        self._listener: Optional[VisibilityListener] = None

    @property
    def visible(self) -> bool:
        return self._visible

    @property
    def attached(self) -> bool:
        return self._listener is not None

    def attach(self, listener: VisibilityListener) -> None:
        self._listener = listener

    def detach(self) -> None:
        self._listener = None
        self._visible = False

    def open(self) -> bool:
        return self._command(True)

    def close(self) -> bool:
        return self._command(False)

    def _command(self, visible: bool) -> bool:
        if self._listener is None:
            log.error("%s modal element not found (visible=%s ignored)", self.name, visible)
            return False
        self._visible = visible
        self._listener(visible)
        return True


class RefreshHandle:
    """
    Parent-held slot through which outside code can reload the table.

    Calling an unbound handle logs a warning and returns [].
    """

    def __init__(self) -> None:
        self._target: Optional[RefreshFn] = None

    @property
    def bound(self) -> bool:
        return self._target is not None

    def bind(self, target: Optional[RefreshFn]) -> None:
        self._target = target

    async def __call__(self) -> List[DocumentRecord]:
        if self._target is None:
            log.warning("Refresh requested before the document table was mounted")
            return []
        return await self._target()


class ModalCoordinator:
    """Owns 'selected_document' and the form/upload ModalStates."""

    def __init__(self) -> None:
        self.form = ModalState("Form")
        self.upload = ModalState("Upload")
        self._selected: Optional[DocumentRecord] = None

    @property
    def selected_document(self) -> Optional[DocumentRecord]:
        return self._selected

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def open_form(self, record: Optional[DocumentRecord]) -> bool:
        """Open the edit form; None opens it for a new document."""
        self._selected = record
        return self.form.open()

    def open_upload(self, record: DocumentRecord) -> bool:
        self._selected = record
        return self.upload.open()

    def close_form(self) -> bool:
        return self.form.close()

    def close_upload(self) -> bool:
        return self.upload.close()

    # ------------------------------------------------------------------
    # Refresh handle
    # ------------------------------------------------------------------
    @staticmethod
    def bind_refresh_handle(handle: Optional[RefreshHandle], refresh: Optional[RefreshFn]) -> None:
        if handle is not None:
            handle.bind(refresh)
