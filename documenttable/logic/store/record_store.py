"""
===============================================================================
RecordStore – in-memory master list with loading/error state
-------------------------------------------------------------------------------
Purpose:
    Hold the document records shown by the table and keep them in sync with
    the document service.
    - refresh(): re-fetch the full list, normalize, replace the collection
    - remove_by_key(): optimistic local removal after a confirmed delete

Observable state:
    data, loading, error. Listeners registered via subscribe() are called
    with the store after every change.

Concurrency:
    Overlapping refresh() calls are not sequenced; each replaces the
    collection when it resolves, so the last one to finish wins.
===============================================================================
"""
from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional

from documenttable.exceptions.errors import DocumentTableError, error_message
from documenttable.logic.adapters.current_user_provider import SessionProvider
from documenttable.logic.feature_log import safe_log
from documenttable.logic.repository.document_repository import DocumentDataSource
from documenttable.models.document_record import DocumentRecord, RefSeqNo
from documenttable.models.list_query import ListQuery

log = logging.getLogger(__name__)

FETCH_ERROR_FALLBACK = "Error fetching data"
NO_SESSION_ERROR = "No active user session."

StoreListener = Callable[["RecordStore"], None]


class RecordStore:
    """Owns the record collection of one table instance."""

    def __init__(
        self,
        *,
        data_source: DocumentDataSource,
        session_provider: SessionProvider,
        query: Optional[ListQuery] = None,
    ) -> None:
        self._source = data_source
        self._sessions = session_provider
        self._query = query or ListQuery()
        self._data: List[DocumentRecord] = []
        self._loading = False
        self._error: Optional[str] = None
        self._listeners: List[StoreListener] = []

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------
    @property
    def data(self) -> List[DocumentRecord]:
        return list(self._data)

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def query(self) -> ListQuery:
        return self._query

    def get(self, ref_seq_no: RefSeqNo) -> Optional[DocumentRecord]:
        for record in self._data:
            if record.ref_seq_no == ref_seq_no:
                return record
        return None

    def subscribe(self, listener: StoreListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: StoreListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    async def refresh(self) -> List[DocumentRecord]:
        """
        Re-fetch the master list.

        Returns the normalized collection, or [] on failure (the previous
        collection is kept and 'error' is set).
        """
        self._loading = True
        self._notify()
        try:
            session = self._sessions.get_session()
            if session is None:
                raise DocumentTableError(NO_SESSION_ERROR)

            response = await self._source.list_records(
                self._query.to_payload(),
                session.current_user_login,
                session.client_url,
            )
            records = self._normalize(response)

            self._data = records
            self._error = None
            safe_log("Refresh", message=f"rows={len(records)}")
            return list(records)
        except Exception as exc:
            log.error("Error fetching master data: %s", exc)
            self._error = error_message(exc, FETCH_ERROR_FALLBACK)
            safe_log("Refresh", level="ERROR", message=self._error)
            return []
        finally:
            self._loading = False
            self._notify()

    def remove_by_key(self, ref_seq_no: RefSeqNo) -> bool:
        """Drop the record with this identifier; True if one was removed."""
        remaining = [r for r in self._data if r.ref_seq_no != ref_seq_no]
        removed = len(remaining) != len(self._data)
        if removed:
            self._data = remaining
            self._notify()
        return removed

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    @staticmethod
    def _normalize(response: Any) -> List[DocumentRecord]:
        if not isinstance(response, list):
            if response is not None:
                log.warning("Master list response is %s, not a list; treating as empty",
                            type(response).__name__)
            return []

        records: List[DocumentRecord] = []
        seen: set = set()
        for item in response:
            if not isinstance(item, dict):
                log.warning("Skipping non-object master list item: %r", item)
                continue
            record = DocumentRecord.from_payload(item)
            if record.ref_seq_no in seen:
                log.warning("Duplicate REF_SEQ_NO %r in master list; keeping first", record.ref_seq_no)
                continue
            seen.add(record.ref_seq_no)
            records.append(record)
        return records
