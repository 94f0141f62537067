from __future__ import annotations
from typing import Any, Dict, List


def fake_records() -> List[Dict[str, Any]]:
    """Seed rows for the demo launcher (service wire format)."""
    return [
        {"REF_SEQ_NO": 1, "DOCUMENT_NO": "INV-2024-001", "DOCUMENT_DESCRIPTION": "Supplier invoice March",
         "USER_NAME": "alice", "CHANNEL_SOURCE": "", "DOC_RELATED_TO": "Finance",
         "DOC_RELATED_CATEGORY": "Invoices", "DOCUMENT_STATUS": "", "ASSIGNED_USER": None,
         "NO_OF_DOCUMENTS": 0},
        {"REF_SEQ_NO": 2, "DOCUMENT_NO": "CTR-0042", "DOCUMENT_DESCRIPTION": "Framework contract logistics",
         "USER_NAME": "alice", "CHANNEL_SOURCE": "Email", "DOC_RELATED_TO": "Legal",
         "DOC_RELATED_CATEGORY": "Contracts", "DOCUMENT_STATUS": "VERIFIED", "ASSIGNED_USER": "bob",
         "NO_OF_DOCUMENTS": 2},
        {"REF_SEQ_NO": 3, "DOCUMENT_NO": "HR-7781", "DOCUMENT_DESCRIPTION": "Onboarding checklist",
         "USER_NAME": "bob", "CHANNEL_SOURCE": "Portal", "DOC_RELATED_TO": "HR",
         "DOC_RELATED_CATEGORY": "Personnel", "DOCUMENT_STATUS": "IN PROGRESS", "ASSIGNED_USER": "carol",
         "NO_OF_DOCUMENTS": 1},
        {"REF_SEQ_NO": 4, "DOCUMENT_NO": "PO-5512", "DOCUMENT_DESCRIPTION": "Purchase order printers",
         "USER_NAME": "alice", "CHANNEL_SOURCE": "", "DOC_RELATED_TO": "Procurement",
         "DOC_RELATED_CATEGORY": "Orders", "DOCUMENT_STATUS": "Awaiting for user acceptance",
         "ASSIGNED_USER": "dave", "NO_OF_DOCUMENTS": 0},
        {"REF_SEQ_NO": 5, "DOCUMENT_NO": "QA-0900", "DOCUMENT_DESCRIPTION": "Audit report Q1",
         "USER_NAME": "carol", "CHANNEL_SOURCE": "Scanner", "DOC_RELATED_TO": "Quality",
         "DOC_RELATED_CATEGORY": "Reports", "DOCUMENT_STATUS": "COMPLETED", "ASSIGNED_USER": "alice",
         "NO_OF_DOCUMENTS": 3},
    ]
