"""
===============================================================================
InMemoryDocumentRepository – DocumentDataSource backed by a dict
-------------------------------------------------------------------------------
Purpose:
    Reference implementation of the remote document service for the demo
    launcher and the tests. Behaves like the service: returns copies in wire
    format, honours the 'Orderby' clause, raises DataSourceError subclasses.

Extras for tests/demo:
    - latency : seconds awaited before each call (asyncio.sleep)
    - fail_next(exc) : the next call raises 'exc'
    - calls : list of (method, args) tuples for assertions
===============================================================================
"""
from __future__ import annotations

import asyncio
import copy
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from documenttable.exceptions.errors import DataSourceError, RecordNotFoundError
from documenttable.models.attachment import AttachmentDescriptor


class InMemoryDocumentRepository:
    """Dict-backed document service."""

    def __init__(self, rows: Optional[Iterable[Dict[str, Any]]] = None, *, latency: float = 0.0) -> None:
        self._rows: Dict[Any, Dict[str, Any]] = {}
        for row in rows or []:
            self._rows[row["REF_SEQ_NO"]] = copy.deepcopy(row)
        self._latency = latency
        self._next_error: Optional[BaseException] = None
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []

    # ------------------------------------------------------------------ #
    # Test/demo hooks
    # ------------------------------------------------------------------ #
    def fail_next(self, exc: BaseException) -> None:
        self._next_error = exc

    def rows(self) -> List[Dict[str, Any]]:
        return [copy.deepcopy(r) for r in self._rows.values()]

    async def _enter(self, method: str, *args: Any) -> None:
        self.calls.append((method, args))
        if self._latency:
            await asyncio.sleep(self._latency)
        if self._next_error is not None:
            exc, self._next_error = self._next_error, None
            raise exc

    # ------------------------------------------------------------------ #
    # DocumentDataSource
    # ------------------------------------------------------------------ #
    async def list_records(self, query: Dict[str, Any], acting_user: str, endpoint: str) -> List[Dict[str, Any]]:
        await self._enter("list_records", query, acting_user, endpoint)
        rows = self.rows()
        column, descending = _parse_order_by(query.get("Orderby") or "")
        if column:
            rows.sort(key=lambda r: (r.get(column) is None, r.get(column)), reverse=descending)
        if not query.get("IncludeEmpImage"):
            for r in rows:
                r.pop("EMP_IMAGE", None)
        return rows

    async def delete_record(self, payload: Dict[str, Any], acting_user: str, endpoint: str) -> str:
        await self._enter("delete_record", payload, acting_user, endpoint)
        key = payload.get("REF_SEQ_NO")
        row = self._rows.get(key)
        if row is None:
            raise RecordNotFoundError(key)
        if row.get("USER_NAME") != payload.get("USER_NAME"):
            raise DataSourceError("Document owner mismatch.")
        del self._rows[key]
        return f"Document {key} deleted."

    async def save_record(self, payload: Dict[str, Any], acting_user: str, endpoint: str) -> Dict[str, Any]:
        await self._enter("save_record", payload, acting_user, endpoint)
        key = payload.get("REF_SEQ_NO")
        if key in (None, ""):
            key = max((k for k in self._rows if isinstance(k, int)), default=0) + 1
            row = {
                "REF_SEQ_NO": key,
                "USER_NAME": payload.get("USER_NAME") or acting_user,
                "DOCUMENT_STATUS": "",
                "NO_OF_DOCUMENTS": 0,
            }
            self._rows[key] = row
        elif key not in self._rows:
            raise RecordNotFoundError(key)
        row = self._rows[key]
        for k, v in payload.items():
            if k in {"REF_SEQ_NO", "USER_NAME", "uploadedDocs", "NO_OF_DOCUMENTS"}:
                continue
            row[k] = v
        return copy.deepcopy(row)

    async def upload_attachments(
        self,
        ref_seq_no: Any,
        attachments: Sequence[AttachmentDescriptor],
        acting_user: str,
        endpoint: str,
    ) -> str:
        await self._enter("upload_attachments", ref_seq_no, tuple(attachments), acting_user, endpoint)
        row = self._rows.get(ref_seq_no)
        if row is None:
            raise RecordNotFoundError(ref_seq_no)
        docs = row.setdefault("uploadedDocs", [])
        docs.extend(a.to_payload() for a in attachments)
        row["NO_OF_DOCUMENTS"] = int(row.get("NO_OF_DOCUMENTS") or 0) + len(attachments)
        return f"{len(attachments)} file(s) uploaded."


def _parse_order_by(clause: str) -> Tuple[str, bool]:
    parts = clause.split()
    if not parts:
        return "", False
    return parts[0], len(parts) > 1 and parts[1].upper() == "DESC"
