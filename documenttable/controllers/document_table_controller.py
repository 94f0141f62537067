"""documenttable/controllers/document_table_controller.py

===============================================================================
DocumentTableController – composition root of the document table
-------------------------------------------------------------------------------
Why this controller exists
    The view needs exactly ONE object that offers:
        - mount() / unmount()             lifecycle
        - refresh()                       reload the master list
        - view_model()                    snapshot for rendering
        - engine / actions / modals       filter+paging, row actions, dialogs

    It wires the parts and owns the lifecycle rules:
        - the first mount() loads the list exactly once
        - a different login or endpoint reloads the list (name or
          organization changes alone do not)
        - the parent's RefreshHandle is bound while mounted

SRP (strict)
    - No business logic; store/engine/actions do the work.
===============================================================================
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Coroutine, List, Optional, Set, Tuple

from core.config.config_service import TableConfig, config_service
from core.models.user import UserSession
from documenttable.controllers.actions_controller import DocumentActionsController
from documenttable.controllers.modal_coordinator import ModalCoordinator, RefreshHandle
from documenttable.logic.adapters.current_user_provider import SessionProvider
from documenttable.logic.adapters.notifier import ConfirmPrompt, NotificationSink
from documenttable.logic.policy.permission_policy import PermissionPolicy
from documenttable.logic.repository.document_repository import DocumentDataSource
from documenttable.logic.services.view_engine import ViewEngine
from documenttable.logic.store.record_store import RecordStore
from documenttable.logic.viewstate.ui_state import (
    BODY_EMPTY,
    BODY_ERROR,
    BODY_LOADING,
    BODY_ROWS,
    DocumentTableUIState,
)
from documenttable.logic.viewstate.view_state import FilterBinding
from documenttable.models.document_record import DocumentRecord
from documenttable.models.list_query import ListQuery
from documenttable.models.mappers import to_row_dto

log = logging.getLogger(__name__)

Scheduler = Callable[[Coroutine[Any, Any, Any]], Any]

MSG_LOADING = "Loading..."
MSG_EMPTY = "No data found"


def schedule_on_running_loop(coro: Coroutine[Any, Any, Any]) -> "asyncio.Task[Any]":
    """Default scheduler: run the coroutine as a task on the running loop."""
    return asyncio.get_running_loop().create_task(coro)


def _reload_key(session: Optional[UserSession]) -> Optional[Tuple[str, str]]:
    if session is None:
        return None
    return session.current_user_login, session.client_url


class DocumentTableController:
    """Wires store, view engine, dialogs and row actions for one table."""

    def __init__(
        self,
        *,
        data_source: DocumentDataSource,
        session_provider: SessionProvider,
        notifier: NotificationSink,
        confirm: ConfirmPrompt,
        filter_binding: Optional[FilterBinding] = None,
        refresh_handle: Optional[RefreshHandle] = None,
        table_config: Optional[TableConfig] = None,
        schedule: Optional[Scheduler] = None,
        policy: Optional[PermissionPolicy] = None,
    ) -> None:
        cfg = table_config or config_service.table
        self._sessions = session_provider
        self._refresh_handle = refresh_handle
        self._schedule = schedule or schedule_on_running_loop
        self._tasks: Set["asyncio.Future[Any]"] = set()
        self._mounted = False
        self._last_session_key: Optional[Tuple[str, str]] = None

        self.filter = filter_binding or FilterBinding.local()
        self.store = RecordStore(
            data_source=data_source,
            session_provider=session_provider,
            query=ListQuery(order_by=cfg.order_by, include_emp_image=cfg.include_emp_image),
        )
        self.engine = ViewEngine(
            self.store,
            self.filter,
            page_sizes=cfg.page_sizes,
            page_size=cfg.default_page_size,
        )
        self.modals = ModalCoordinator()
        self.actions = DocumentActionsController(
            store=self.store,
            modals=self.modals,
            data_source=data_source,
            session_provider=session_provider,
            notifier=notifier,
            confirm=confirm,
            policy=policy,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    @property
    def mounted(self) -> bool:
        return self._mounted

    async def mount(self) -> List[DocumentRecord]:
        """Bind the refresh handle, watch the session, load once."""
        if self._mounted:
            return self.store.data
        self._mounted = True
        self.modals.bind_refresh_handle(self._refresh_handle, self.store.refresh)
        self._sessions.subscribe(self._on_session_changed)
        self._last_session_key = _reload_key(self._sessions.get_session())
        return await self.store.refresh()

    def unmount(self) -> None:
        if not self._mounted:
            return
        self._mounted = False
        self._sessions.unsubscribe(self._on_session_changed)
        self.modals.bind_refresh_handle(self._refresh_handle, None)

    async def refresh(self) -> List[DocumentRecord]:
        return await self.store.refresh()

    def _on_session_changed(self, session: Optional[UserSession]) -> None:
        if session is None:
            self._last_session_key = None
            log.info("Session ended; keeping the last loaded list")
            return
        key = _reload_key(session)
        if key == self._last_session_key:
            return
        self._last_session_key = key
        coro = self.store.refresh()
        try:
            self._track(self._schedule(coro))
        except RuntimeError as exc:
            coro.close()
            log.error("Cannot schedule reload after session change: %s", exc)

    def _track(self, task: Any) -> None:
        if isinstance(task, asyncio.Future):
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)

    # ------------------------------------------------------------------
    # Lookups for the view
    # ------------------------------------------------------------------
    def find(self, key: str) -> Optional[DocumentRecord]:
        """Resolve a row key (str of REF_SEQ_NO) to its record."""
        for record in self.store.data:
            if str(record.ref_seq_no) == key:
                return record
        return None

    def view_model(self) -> DocumentTableUIState:
        session = self._sessions.get_session()
        organization = session.organization if session is not None else ""
        page = self.engine.page_rows()

        if self.store.loading:
            body, message = BODY_LOADING, MSG_LOADING
        elif self.store.error:
            body, message = BODY_ERROR, f"Error: {self.store.error}"
        elif page:
            body, message = BODY_ROWS, ""
        else:
            body, message = BODY_EMPTY, MSG_EMPTY

        selected = self.modals.selected_document
        return DocumentTableUIState(
            body=body,
            message=message,
            rows=[to_row_dto(r, organization=organization) for r in page] if body == BODY_ROWS else [],
            pagination=self.engine.pagination(),
            page_sizes=self.engine.page_sizes,
            filter_text=self.engine.global_filter,
            sorting=self.engine.sorting,
            form_visible=self.modals.form.visible,
            upload_visible=self.modals.upload.visible,
            selected_key=str(selected.ref_seq_no) if selected is not None else None,
        )
