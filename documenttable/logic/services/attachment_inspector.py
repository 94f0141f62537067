"""
===============================================================================
AttachmentInspector – build upload descriptors from local files
-------------------------------------------------------------------------------
Implementation
    - Uses pypdf (BSD) to count PDF pages.
    - Uses python-docx (MIT) to read the DOCX core-property title.
    - Any other file type only gets name/size/extension.

Robustness
    A file that cannot be parsed still yields a descriptor; the parse error is
    logged and page_count/title stay None.
===============================================================================
"""
from __future__ import annotations

import logging
import zipfile
from pathlib import Path
from typing import Iterable, List, Optional

from docx import Document  # type: ignore
from docx.opc.exceptions import PackageNotFoundError  # type: ignore
from pypdf import PdfReader  # type: ignore
from pypdf.errors import PyPdfError  # type: ignore

from documenttable.models.attachment import AttachmentDescriptor

log = logging.getLogger(__name__)


class AttachmentInspector:
    """Inspect files picked in the upload dialog."""

    def inspect(self, path: Path | str, *, is_primary: bool = False) -> AttachmentDescriptor:
        p = Path(path)
        if not p.is_file():
            raise FileNotFoundError(str(p))

        ext = p.suffix.lower().lstrip(".")
        descriptor = AttachmentDescriptor(
            file_name=p.name,
            file_path=str(p.resolve()),
            size_bytes=p.stat().st_size,
            extension=ext,
            is_primary=is_primary,
        )
        if ext == "pdf":
            descriptor.page_count = self._pdf_page_count(p)
        elif ext == "docx":
            descriptor.title = self._docx_title(p)
        return descriptor

    def inspect_many(self, paths: Iterable[Path | str], *, primary_index: int = 0) -> List[AttachmentDescriptor]:
        """Inspect several files; the one at 'primary_index' is flagged primary."""
        return [self.inspect(p, is_primary=(i == primary_index)) for i, p in enumerate(paths)]

    # ---- helpers ---- #
    @staticmethod
    def _pdf_page_count(path: Path) -> Optional[int]:
        try:
            return len(PdfReader(str(path)).pages)
        except (PyPdfError, OSError, ValueError) as exc:
            log.warning("Cannot read PDF %s: %s", path, exc)
            return None

    @staticmethod
    def _docx_title(path: Path) -> Optional[str]:
        try:
            title = Document(str(path)).core_properties.title
        except (PackageNotFoundError, zipfile.BadZipFile, KeyError, OSError, ValueError) as exc:
            log.warning("Cannot read DOCX %s: %s", path, exc)
            return None
        return title or None
