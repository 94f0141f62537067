from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Mapping, Optional


def _to_int(raw: Any) -> Optional[int]:
    """Integer-like server values ("12", 12.5, "12.5"); None when unusable."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    try:
        return int(float(str(raw).strip()))
    except (TypeError, ValueError, OverflowError):
        return None


@dataclass(slots=True)
class AttachmentDescriptor:
    """
    One file attached to a document record.

    Notes:
    - 'page_count' is only known for PDFs
    - 'title'      is read from DOCX core properties when present
    - 'raw'        the server item as received; written back unchanged
    """
    file_name: str
    file_path: str = ""
    size_bytes: int = 0
    extension: str = ""
    page_count: Optional[int] = None
    title: Optional[str] = None
    is_primary: bool = False
    raw: Any = None

    @classmethod
    def from_payload(cls, raw: Mapping[str, Any]) -> "AttachmentDescriptor":
        title = raw.get("title")
        return cls(
            file_name=str(raw.get("fileName") or raw.get("FILE_NAME") or ""),
            file_path=str(raw.get("filePath") or ""),
            size_bytes=max(_to_int(raw.get("sizeBytes")) or 0, 0),
            extension=str(raw.get("extension") or ""),
            page_count=_to_int(raw.get("pageCount")),
            title=None if title is None else str(title),
            is_primary=bool(raw.get("isPrimary", False)),
            raw=dict(raw),
        )

    @classmethod
    def from_item(cls, item: Any) -> "AttachmentDescriptor":
        """Wrap any 'uploadedDocs' entry; non-mapping items keep only a name."""
        if isinstance(item, AttachmentDescriptor):
            return item
        if isinstance(item, Mapping):
            return cls.from_payload(item)
        return cls(file_name="" if item is None else str(item), raw=item)

    def to_payload(self) -> Any:
        if self.raw is not None and not isinstance(self.raw, Mapping):
            return self.raw
        payload = dict(self.raw or {})
        payload.update(
            fileName=self.file_name,
            filePath=self.file_path,
            sizeBytes=self.size_bytes,
            extension=self.extension,
            pageCount=self.page_count,
            title=self.title,
            isPrimary=self.is_primary,
        )
        return payload
