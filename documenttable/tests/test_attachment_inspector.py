"""AttachmentInspector reads PDF page counts and DOCX titles."""
from __future__ import annotations

from pathlib import Path

import pytest
from docx import Document
from pypdf import PdfWriter

from documenttable.logic.services.attachment_inspector import AttachmentInspector


@pytest.fixture
def inspector() -> AttachmentInspector:
    return AttachmentInspector()


def _pdf(path: Path, pages: int) -> Path:
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=595, height=842)
    with path.open("wb") as fh:
        writer.write(fh)
    return path


def _docx(path: Path, title: str) -> Path:
    doc = Document()
    doc.add_paragraph("Body")
    doc.core_properties.title = title
    doc.save(str(path))
    return path


def test_pdf_page_count(tmp_path: Path, inspector: AttachmentInspector) -> None:
    d = inspector.inspect(_pdf(tmp_path / "Report.PDF", 3), is_primary=True)
    assert d.file_name == "Report.PDF"
    assert d.extension == "pdf"
    assert d.page_count == 3
    assert d.title is None
    assert d.is_primary
    assert d.size_bytes > 0


def test_docx_title(tmp_path: Path, inspector: AttachmentInspector) -> None:
    d = inspector.inspect(_docx(tmp_path / "memo.docx", "Quarterly memo"))
    assert d.extension == "docx"
    assert d.title == "Quarterly memo"
    assert d.page_count is None
    assert not d.is_primary


def test_unparseable_pdf_still_yields_descriptor(tmp_path: Path, inspector: AttachmentInspector) -> None:
    broken = tmp_path / "broken.pdf"
    broken.write_bytes(b"not a pdf at all")
    d = inspector.inspect(broken)
    assert d.file_name == "broken.pdf"
    assert d.page_count is None


def test_other_types_only_get_basic_info(tmp_path: Path, inspector: AttachmentInspector) -> None:
    txt = tmp_path / "notes.txt"
    txt.write_text("hello", encoding="utf-8")
    d = inspector.inspect(txt)
    assert (d.extension, d.size_bytes, d.page_count, d.title) == ("txt", 5, None, None)


def test_missing_file_raises(tmp_path: Path, inspector: AttachmentInspector) -> None:
    with pytest.raises(FileNotFoundError):
        inspector.inspect(tmp_path / "nope.pdf")


def test_inspect_many_flags_one_primary(tmp_path: Path, inspector: AttachmentInspector) -> None:
    a = _pdf(tmp_path / "a.pdf", 1)
    b = tmp_path / "b.txt"
    b.write_text("x", encoding="utf-8")
    result = inspector.inspect_many([a, b], primary_index=1)
    assert [d.is_primary for d in result] == [False, True]
