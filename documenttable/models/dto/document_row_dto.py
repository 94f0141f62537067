from __future__ import annotations
from dataclasses import dataclass


@dataclass(slots=True)
class DocumentRowDTO:
    """
    Lightweight row for the table.
    Keep strings preformatted for the UI.
    """
    key: str               # Treeview iid, str(ref_seq_no)
    ref_no: str
    document_no: str
    document_name: str
    uploader: str
    channel_source: str    # organization when the record has none
    related_to: str
    category: str
    status: str
    assigned_to: str
    docs: str              # count badge or upload marker
    has_documents: bool
