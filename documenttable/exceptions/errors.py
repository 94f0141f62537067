"""Document table feature exceptions."""
from __future__ import annotations

from typing import Optional


class DocumentTableError(Exception):
    """Base exception for the document table feature."""


class DataSourceError(DocumentTableError):
    """Raised by data sources when a remote call fails."""


class RecordNotFoundError(DataSourceError):
    """Raised when a record key does not exist at the data source."""

    def __init__(self, ref_seq_no: object) -> None:
        super().__init__(f"Document {ref_seq_no} not found.")
        self.ref_seq_no = ref_seq_no


class PermissionDeniedError(DocumentTableError):
    """Raised when a policy rule denies an action on a record."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class InvalidPageSizeError(ValueError, DocumentTableError):
    """Raised when the configured page sizes are unusable."""


def error_message(exc: Optional[BaseException], fallback: str) -> str:
    """Prefer the failure's own message; fall back when it is blank."""
    if exc is None:
        return fallback
    text = str(exc).strip()
    return text or fallback
