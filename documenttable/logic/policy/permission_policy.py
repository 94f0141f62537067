"""
===============================================================================
Permission Policy – record-level delete permission
-------------------------------------------------------------------------------
Purpose:
    Decide whether the acting user may delete (or otherwise alter) a document
    record, and if not, produce the human-readable denial reason shown in the
    "Permission Denied" notification.

Design:
    - No I/O, no clock, no locale: identical inputs give identical results.
    - Rules are evaluated in order; the first match wins.

Integration:
    - Consulted by DocumentActionsController before deletion only. Opening
      the edit form or the upload dialog is not gated here.
===============================================================================
"""
from __future__ import annotations
from typing import Optional

from core.models.user import UserSession
from documenttable.exceptions.errors import PermissionDeniedError
from documenttable.models.document_record import DocumentRecord
from documenttable.models.document_status import DocumentStatus

DENIED_OTHER_USER = "Access Denied: This document is created by another user."
DENIED_VERIFIED = "Access Denied: This document has been verified and approved for processing."
DENIED_ASSIGNED = "Access Denied: This document has been assigned to {assigned_user}."
DENIED_IN_PROGRESS = "Access Denied: This document is in progress status."
DENIED_COMPLETED = "Access Denied: This document has been processed and completed."
DENIED_NO_SESSION = "Access Denied: No active user session."


class PermissionPolicy:
    """
    Evaluate whether a record may be deleted by the acting user.

    Rules (first match wins):
      1. Owner differs from the acting user's name   -> denied
      2. Status VERIFIED                             -> denied
      3. Status AWAITING FOR USER ACCEPTANCE         -> denied (names assignee)
      4. Status IN PROGRESS                          -> denied
      5. Status COMPLETED                            -> denied
      6. Otherwise                                   -> allowed
    """

    def evaluate(self, record: DocumentRecord, user: Optional[UserSession]) -> Optional[str]:
        """
        Return the denial reason, or None when the action is allowed.

        Parameters
        ----------
        record : DocumentRecord
            Row the action targets.
        user : UserSession | None
            Acting identity; a missing session is always denied.
        """
        if user is None:
            return DENIED_NO_SESSION
        if record.user_name != user.current_user_name:
            return DENIED_OTHER_USER

        status = record.status
        if status is DocumentStatus.VERIFIED:
            return DENIED_VERIFIED
        if status is DocumentStatus.AWAITING_USER_ACCEPTANCE:
            return DENIED_ASSIGNED.format(assigned_user=record.assigned_user)
        if status is DocumentStatus.IN_PROGRESS:
            return DENIED_IN_PROGRESS
        if status is DocumentStatus.COMPLETED:
            return DENIED_COMPLETED
        return None

    def can_delete(self, record: DocumentRecord, user: Optional[UserSession]) -> bool:
        return self.evaluate(record, user) is None

    def require_delete(self, record: DocumentRecord, user: Optional[UserSession]) -> None:
        """Raise PermissionDeniedError carrying the denial reason."""
        reason = self.evaluate(record, user)
        if reason:
            raise PermissionDeniedError(reason)


def evaluate(record: DocumentRecord, user: Optional[UserSession]) -> Optional[str]:
    """Module-level shortcut for PermissionPolicy().evaluate()."""
    return PermissionPolicy().evaluate(record, user)
