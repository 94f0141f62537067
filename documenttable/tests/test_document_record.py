"""Normalization of master list rows and their display mapping."""
from __future__ import annotations

import unittest

from documenttable.models.attachment import AttachmentDescriptor
from documenttable.models.document_record import DocumentRecord
from documenttable.models.document_status import DocumentStatus
from documenttable.models.list_query import ListQuery
from documenttable.models.mappers import PLACEHOLDER, UPLOAD_MARKER, to_row_dto
from documenttable.tests.helpers import make_row


class TestDocumentRecord(unittest.TestCase):
    def test_missing_uploaded_docs_become_empty_list(self) -> None:
        rec = DocumentRecord.from_payload(make_row(1))
        self.assertEqual(rec.uploaded_docs, [])
        self.assertEqual(rec.is_primary_document, "")

    def test_non_list_uploaded_docs_become_empty_list(self) -> None:
        rec = DocumentRecord.from_payload(make_row(1, uploadedDocs="broken"))
        self.assertEqual(rec.uploaded_docs, [])

    def test_uploaded_docs_are_parsed(self) -> None:
        rec = DocumentRecord.from_payload(
            make_row(1, uploadedDocs=[{"fileName": "a.pdf", "pageCount": 3, "isPrimary": True}])
        )
        self.assertEqual(len(rec.uploaded_docs), 1)
        doc = rec.uploaded_docs[0]
        self.assertIsInstance(doc, AttachmentDescriptor)
        self.assertEqual(doc.file_name, "a.pdf")
        self.assertEqual(doc.page_count, 3)
        self.assertTrue(doc.is_primary)

    def test_loose_attachment_numbers_do_not_fail(self) -> None:
        rec = DocumentRecord.from_payload(
            make_row(1, uploadedDocs=[{"fileName": "a.pdf", "sizeBytes": "12.5", "pageCount": "n/a"}])
        )
        doc = rec.uploaded_docs[0]
        self.assertEqual(doc.size_bytes, 12)
        self.assertIsNone(doc.page_count)

    def test_every_uploaded_entry_is_kept(self) -> None:
        rec = DocumentRecord.from_payload(make_row(1, uploadedDocs=["a.pdf", "b.pdf", {"fileName": "c.pdf"}]))
        self.assertEqual([d.file_name for d in rec.uploaded_docs], ["a.pdf", "b.pdf", "c.pdf"])
        self.assertEqual(rec.to_payload()["uploadedDocs"][:2], ["a.pdf", "b.pdf"])

    def test_unknown_attachment_keys_are_written_back(self) -> None:
        rec = DocumentRecord.from_payload(make_row(1, uploadedDocs=[{"fileName": "a.pdf", "DOC_ID": 77}]))
        written = rec.to_payload()["uploadedDocs"][0]
        self.assertEqual(written["DOC_ID"], 77)
        self.assertEqual(written["fileName"], "a.pdf")

    def test_server_primary_flag_is_reset(self) -> None:
        rec = DocumentRecord.from_payload(make_row(1, IsPrimaryDocument="Y"))
        self.assertEqual(rec.is_primary_document, "")

    def test_numeric_string_key_becomes_int(self) -> None:
        self.assertEqual(DocumentRecord.from_payload(make_row("42")).ref_seq_no, 42)
        self.assertEqual(DocumentRecord.from_payload(make_row("A-1")).ref_seq_no, "A-1")

    def test_unknown_keys_are_kept_and_round_trip(self) -> None:
        rec = DocumentRecord.from_payload(make_row(1, DEPARTMENT="Sales"))
        self.assertEqual(rec.extra, {"DEPARTMENT": "Sales"})
        payload = rec.to_payload()
        self.assertEqual(payload["DEPARTMENT"], "Sales")
        self.assertEqual(payload["REF_SEQ_NO"], 1)
        self.assertEqual(payload["uploadedDocs"], [])

    def test_status_parsing(self) -> None:
        rec = DocumentRecord.from_payload(make_row(1, DOCUMENT_STATUS="In Progress"))
        self.assertIs(rec.status, DocumentStatus.IN_PROGRESS)
        self.assertIsNone(DocumentRecord.from_payload(make_row(2)).status)

    def test_scalar_values_skip_lists_and_none(self) -> None:
        rec = DocumentRecord.from_payload(make_row(1, uploadedDocs=[{"fileName": "x.pdf"}]))
        values = list(rec.scalar_values())
        self.assertIn("DOC-1", values)
        self.assertIn(1, values)
        self.assertNotIn(None, values)


class TestRowMapping(unittest.TestCase):
    def test_blank_channel_shows_organization(self) -> None:
        rec = DocumentRecord.from_payload(make_row(1, CHANNEL_SOURCE="  "))
        self.assertEqual(to_row_dto(rec, organization="ACME").channel_source, "ACME")

    def test_blank_cells_show_placeholder(self) -> None:
        rec = DocumentRecord.from_payload(make_row(1, DOC_RELATED_TO=None, ASSIGNED_USER=""))
        row = to_row_dto(rec)
        self.assertEqual(row.related_to, PLACEHOLDER)
        self.assertEqual(row.assigned_to, PLACEHOLDER)
        self.assertEqual(row.status, PLACEHOLDER)

    def test_docs_cell(self) -> None:
        empty = to_row_dto(DocumentRecord.from_payload(make_row(1)))
        self.assertEqual(empty.docs, UPLOAD_MARKER)
        self.assertFalse(empty.has_documents)
        full = to_row_dto(DocumentRecord.from_payload(make_row(2, NO_OF_DOCUMENTS=3)))
        self.assertEqual(full.docs, "● 3")
        self.assertTrue(full.has_documents)
        self.assertEqual(full.key, "2")


def test_list_query_payload() -> None:
    assert ListQuery().to_payload() == {
        "WhereCondition": "",
        "Orderby": "REF_SEQ_NO DESC",
        "IncludeEmpImage": False,
    }
