from __future__ import annotations
from enum import Enum
from typing import Optional


class DocumentStatus(str, Enum):
    """Server-side processing status of a document record (known values only)."""
    VERIFIED = "VERIFIED"
    AWAITING_USER_ACCEPTANCE = "AWAITING FOR USER ACCEPTANCE"
    IN_PROGRESS = "IN PROGRESS"
    COMPLETED = "COMPLETED"

    @classmethod
    def parse(cls, raw: object) -> Optional["DocumentStatus"]:
        """Case-insensitive lookup; blank or unknown values yield None."""
        if not isinstance(raw, str):
            return None
        try:
            return cls(raw.upper())
        except ValueError:
            return None
