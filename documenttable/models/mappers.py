from __future__ import annotations
from typing import Any

from .document_record import DocumentRecord
from .dto.document_row_dto import DocumentRowDTO

UPLOAD_MARKER = "⇪ Upload"
PLACEHOLDER = "-"


def _or_dash(value: Any) -> str:
    if value is None:
        return PLACEHOLDER
    text = str(value)
    return text if text.strip() else PLACEHOLDER


def docs_cell(count: int) -> str:
    return f"● {count}" if count > 0 else UPLOAD_MARKER


def to_row_dto(record: DocumentRecord, *, organization: str = "") -> DocumentRowDTO:
    """Map a record to display strings (blank cells become '-')."""
    ref = record.ref_seq_no
    return DocumentRowDTO(
        key=str(ref),
        ref_no=str(ref) if ref else PLACEHOLDER,
        document_no=record.document_no or "",
        document_name=record.document_description or "",
        uploader=record.user_name or "",
        channel_source=record.display_channel_source(organization),
        related_to=_or_dash(record.related_to),
        category=_or_dash(record.related_category),
        status=_or_dash(record.document_status),
        assigned_to=_or_dash(record.assigned_user),
        docs=docs_cell(record.number_of_documents),
        has_documents=record.number_of_documents > 0,
    )
