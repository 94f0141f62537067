"""
===============================================================================
Document Data Source Protocol – remote master-list contract
-------------------------------------------------------------------------------
Purpose:
    Define the calls the document table makes against the document service.
    Concrete implementations may use HTTP, SQLite, or memory.

Design:
    - Protocol only; no implementation details.
    - All calls are coroutines; they raise on failure (any exception is
      treated as a failed call by the caller).
    - Payloads use the service's upper-snake keys (see DocumentRecord).
===============================================================================
"""
from __future__ import annotations
from typing import Any, Dict, List, Protocol, Sequence

from documenttable.models.attachment import AttachmentDescriptor


class DocumentDataSource(Protocol):
    """
    Remote contract for the document master list.

    Methods
    -------
    list_records(query, acting_user, endpoint) -> list[dict]
        Return the master list for the ListQuery payload.
    delete_record(payload, acting_user, endpoint) -> Any
        Delete {USER_NAME, REF_SEQ_NO}; usually returns a message string.
    save_record(payload, acting_user, endpoint) -> dict
        Create (no REF_SEQ_NO) or update a record's metadata.
    upload_attachments(ref_seq_no, attachments, acting_user, endpoint) -> Any
        Attach files to an existing record.
    """

    async def list_records(self, query: Dict[str, Any], acting_user: str, endpoint: str) -> List[Dict[str, Any]]:
        ...

    async def delete_record(self, payload: Dict[str, Any], acting_user: str, endpoint: str) -> Any:
        ...

    async def save_record(self, payload: Dict[str, Any], acting_user: str, endpoint: str) -> Dict[str, Any]:
        ...

    async def upload_attachments(
        self,
        ref_seq_no: Any,
        attachments: Sequence[AttachmentDescriptor],
        acting_user: str,
        endpoint: str,
    ) -> Any:
        ...
