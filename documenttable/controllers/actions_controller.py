"""
===============================================================================
Actions Controller – row actions (edit, upload, delete)
-------------------------------------------------------------------------------
Purpose:
    - Open the edit form or the upload dialog for a row.
    - Delete a row: permission check, confirmation, remote delete, optimistic
      local removal, user feedback.
    - React to dialog success by reloading the master list.

Contract to the host:
    - notifier.notify(Notification) for toasts
    - confirm(message) -> bool, a blocking yes/no prompt

Note:
    Only delete is permission-gated. Edit and upload open for every row; the
    service is expected to enforce its own rules on save/upload.
===============================================================================
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from documenttable.controllers.modal_coordinator import ModalCoordinator
from documenttable.exceptions.errors import error_message
from documenttable.logic.adapters.current_user_provider import SessionProvider
from documenttable.logic.adapters.notifier import ConfirmPrompt, NotificationSink
from documenttable.logic.feature_log import safe_log
from documenttable.logic.policy.permission_policy import PermissionPolicy
from documenttable.logic.repository.document_repository import DocumentDataSource
from documenttable.logic.store.record_store import RecordStore
from documenttable.models.document_record import DocumentRecord
from documenttable.models.notification import Notification, Severity

log = logging.getLogger(__name__)

CONFIRM_DELETE = "Are you sure you want to delete this document?"
TITLE_DENIED = "Permission Denied"
TITLE_DELETED = "Document deleted successfully."
DESC_DELETED = "Document deleted."
TITLE_DELETE_FAILED = "Unknown error occurred."


class DeleteOutcome(str, Enum):
    DENIED = "denied"
    CANCELLED = "cancelled"
    DELETED = "deleted"
    FAILED = "failed"


class DocumentActionsController:
    """
    Controller grouping the per-row actions of the document table.

    Responsibilities:
        - Keep the UI responsive with clear messages.
        - Never let a failed remote call escape into the view.

    Excludes:
        - No rendering; dialogs are driven through the ModalCoordinator.
    """

    def __init__(
        self,
        *,
        store: RecordStore,
        modals: ModalCoordinator,
        data_source: DocumentDataSource,
        session_provider: SessionProvider,
        notifier: NotificationSink,
        confirm: ConfirmPrompt,
        policy: Optional[PermissionPolicy] = None,
    ) -> None:
        self._store = store
        self._modals = modals
        self._source = data_source
        self._sessions = session_provider
        self._notifier = notifier
        self._confirm = confirm
        self._policy = policy or PermissionPolicy()

    # ------------------------------------------------------------------
    # Dialogs
    # ------------------------------------------------------------------
    def open_upload(self, record: DocumentRecord) -> bool:
        """Show the upload dialog for this row (not permission-gated)."""
        log.debug("Open upload for %r (no permission check)", record.ref_seq_no)
        return self._modals.open_upload(record)

    def open_edit_form(self, record: DocumentRecord) -> bool:
        """Show the edit form for this row (not permission-gated)."""
        log.debug("Open edit form for %r (no permission check)", record.ref_seq_no)
        return self._modals.open_form(record)

    def open_create_form(self) -> bool:
        """Show the edit form without a selected document."""
        return self._modals.open_form(None)

    async def on_upload_success(self) -> None:
        """Reload the list and hide the upload dialog; safe to repeat."""
        await self._store.refresh()
        self._modals.close_upload()

    async def on_form_success(self) -> None:
        await self._store.refresh()
        self._modals.close_form()

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------
    async def delete(self, record: DocumentRecord) -> DeleteOutcome:
        """
        Delete a row after permission check and user confirmation.

        The local list changes only after the service confirmed the delete.
        """
        session = self._sessions.get_session()
        reason = self._policy.evaluate(record, session)
        if reason:
            self._notifier.notify(Notification(Severity.DESTRUCTIVE, TITLE_DENIED, reason))
            safe_log("DeleteDenied", level="WARNING", reference_id=record.ref_seq_no, message=reason)
            return DeleteOutcome.DENIED

        if not self._confirm(CONFIRM_DELETE):
            return DeleteOutcome.CANCELLED

        # session is not None here: the policy denies a missing session
        payload = {"USER_NAME": record.user_name, "REF_SEQ_NO": record.ref_seq_no}
        try:
            response = await self._source.delete_record(
                payload,
                session.current_user_login,
                session.client_url,
            )
        except Exception as exc:
            log.error("Delete of %r failed: %s", record.ref_seq_no, exc)
            message = error_message(exc, TITLE_DELETE_FAILED)
            self._notifier.notify(Notification(Severity.DESTRUCTIVE, message))
            safe_log("DeleteFailed", level="ERROR", reference_id=record.ref_seq_no, message=message)
            return DeleteOutcome.FAILED

        self._store.remove_by_key(record.ref_seq_no)
        description = response if isinstance(response, str) else DESC_DELETED
        self._notifier.notify(Notification(Severity.SUCCESS, TITLE_DELETED, description))
        safe_log("Delete", reference_id=record.ref_seq_no, message=description)
        return DeleteOutcome.DELETED
