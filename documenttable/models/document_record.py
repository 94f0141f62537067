from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Union

from .attachment import AttachmentDescriptor
from .document_status import DocumentStatus

RefSeqNo = Union[int, str]

# wire key -> attribute name (payloads use the service's upper-snake keys)
WIRE_FIELDS: Dict[str, str] = {
    "REF_SEQ_NO": "ref_seq_no",
    "DOCUMENT_NO": "document_no",
    "DOCUMENT_DESCRIPTION": "document_description",
    "USER_NAME": "user_name",
    "CHANNEL_SOURCE": "channel_source",
    "DOC_RELATED_TO": "related_to",
    "DOC_RELATED_CATEGORY": "related_category",
    "DOCUMENT_STATUS": "document_status",
    "ASSIGNED_USER": "assigned_user",
    "NO_OF_DOCUMENTS": "number_of_documents",
}

_LIST_KEYS = {"uploadedDocs", "IsPrimaryDocument"}


def _to_key(raw: Any) -> RefSeqNo:
    """Identifiers are integer-like; keep the raw string if it is not."""
    if isinstance(raw, bool):
        return str(raw)
    if isinstance(raw, int):
        return raw
    text = str(raw if raw is not None else "").strip()
    try:
        return int(text)
    except ValueError:
        return text


def _to_count(raw: Any) -> int:
    try:
        return max(int(raw or 0), 0)
    except (TypeError, ValueError):
        return 0


@dataclass(slots=True)
class DocumentRecord:
    """
    One row of the document master list.

    Notes:
    - 'ref_seq_no'          unique row identity (delete key, Treeview iid)
    - 'channel_source'      may be blank; the view shows the organization then
    - 'uploaded_docs'       normalized to [] when the server omits it
    - 'is_primary_document' derived display flag, seeded blank on load
    - 'extra'               unknown server keys, kept for filtering/round-trip
    """

    ref_seq_no: RefSeqNo
    document_no: str = ""
    document_description: str = ""
    user_name: str = ""
    channel_source: str = ""
    related_to: Optional[str] = None
    related_category: Optional[str] = None
    document_status: str = ""
    assigned_user: Optional[str] = None
    number_of_documents: int = 0
    uploaded_docs: List[AttachmentDescriptor] = field(default_factory=list)
    is_primary_document: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    # Factories -------------------------------------------------------------
    @classmethod
    def from_payload(cls, raw: Mapping[str, Any]) -> "DocumentRecord":
        """
        Build a normalized record from a server payload.

        'uploadedDocs' keeps every entry as a descriptor (non-list → []),
        'is_primary_document' is always reset to "".
        """
        docs_raw = raw.get("uploadedDocs")
        docs: List[AttachmentDescriptor] = []
        if isinstance(docs_raw, (list, tuple)):
            docs = [AttachmentDescriptor.from_item(item) for item in docs_raw]

        extra = {k: v for k, v in raw.items() if k not in WIRE_FIELDS and k not in _LIST_KEYS}
        return cls(
            ref_seq_no=_to_key(raw.get("REF_SEQ_NO")),
            document_no=str(raw.get("DOCUMENT_NO") or ""),
            document_description=str(raw.get("DOCUMENT_DESCRIPTION") or ""),
            user_name=str(raw.get("USER_NAME") or ""),
            channel_source=str(raw.get("CHANNEL_SOURCE") or ""),
            related_to=raw.get("DOC_RELATED_TO"),
            related_category=raw.get("DOC_RELATED_CATEGORY"),
            document_status=str(raw.get("DOCUMENT_STATUS") or ""),
            assigned_user=raw.get("ASSIGNED_USER"),
            number_of_documents=_to_count(raw.get("NO_OF_DOCUMENTS")),
            uploaded_docs=docs,
            is_primary_document="",
            extra=extra,
        )

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = dict(self.extra)
        for wire, attr in WIRE_FIELDS.items():
            payload[wire] = getattr(self, attr)
        payload["uploadedDocs"] = [d.to_payload() for d in self.uploaded_docs]
        payload["IsPrimaryDocument"] = self.is_primary_document
        return payload

    # Convenience -----------------------------------------------------------
    @property
    def status(self) -> Optional[DocumentStatus]:
        return DocumentStatus.parse(self.document_status)

    def display_channel_source(self, organization: str) -> str:
        return organization if not (self.channel_source or "").strip() else self.channel_source

    def scalar_values(self) -> Iterator[Union[str, int, float]]:
        """Yield every string/number value of the row (global filter input)."""
        for attr in WIRE_FIELDS.values():
            value = getattr(self, attr)
            if _is_scalar(value):
                yield value
        if _is_scalar(self.is_primary_document):
            yield self.is_primary_document
        for value in self.extra.values():
            if _is_scalar(value):
                yield value


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (str, int, float)) and not isinstance(value, bool)
