"""In-memory document service used by the launcher and the tests."""
from __future__ import annotations

import unittest

from documenttable.exceptions.errors import DataSourceError, RecordNotFoundError
from documenttable.logic.fake_data import fake_records
from documenttable.logic.repository.in_memory_repository import InMemoryDocumentRepository
from documenttable.models.attachment import AttachmentDescriptor
from documenttable.tests.helpers import make_row

QUERY = {"WhereCondition": "", "Orderby": "REF_SEQ_NO DESC", "IncludeEmpImage": False}


class TestInMemoryDocumentRepository(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self.repo = InMemoryDocumentRepository([make_row(1), make_row(3, EMP_IMAGE="..."), make_row(2)])

    async def test_list_honours_order_and_image_flag(self) -> None:
        rows = await self.repo.list_records(QUERY, "alice.l", "url")
        self.assertEqual([r["REF_SEQ_NO"] for r in rows], [3, 2, 1])
        self.assertNotIn("EMP_IMAGE", rows[0])
        asc = await self.repo.list_records({**QUERY, "Orderby": "REF_SEQ_NO", "IncludeEmpImage": True}, "a", "u")
        self.assertEqual([r["REF_SEQ_NO"] for r in asc], [1, 2, 3])
        self.assertIn("EMP_IMAGE", asc[2])

    async def test_list_returns_copies(self) -> None:
        rows = await self.repo.list_records(QUERY, "alice.l", "url")
        rows[0]["DOCUMENT_NO"] = "changed"
        self.assertNotEqual(self.repo.rows()[1]["DOCUMENT_NO"], "changed")

    async def test_delete(self) -> None:
        message = await self.repo.delete_record({"USER_NAME": "alice", "REF_SEQ_NO": 1}, "alice.l", "url")
        self.assertEqual(message, "Document 1 deleted.")
        self.assertEqual(len(self.repo.rows()), 2)
        with self.assertRaises(RecordNotFoundError):
            await self.repo.delete_record({"USER_NAME": "alice", "REF_SEQ_NO": 1}, "alice.l", "url")

    async def test_delete_rejects_owner_mismatch(self) -> None:
        with self.assertRaises(DataSourceError):
            await self.repo.delete_record({"USER_NAME": "bob", "REF_SEQ_NO": 2}, "bob.l", "url")
        self.assertEqual(len(self.repo.rows()), 3)

    async def test_save_creates_with_next_key(self) -> None:
        row = await self.repo.save_record(
            {"REF_SEQ_NO": None, "USER_NAME": "alice", "DOCUMENT_DESCRIPTION": "New"}, "alice.l", "url"
        )
        self.assertEqual(row["REF_SEQ_NO"], 4)
        self.assertEqual(row["USER_NAME"], "alice")
        self.assertEqual(row["NO_OF_DOCUMENTS"], 0)

    async def test_save_updates_metadata_only(self) -> None:
        row = await self.repo.save_record(
            {"REF_SEQ_NO": 2, "DOCUMENT_DESCRIPTION": "Renamed", "USER_NAME": "mallory", "NO_OF_DOCUMENTS": 9},
            "alice.l",
            "url",
        )
        self.assertEqual(row["DOCUMENT_DESCRIPTION"], "Renamed")
        self.assertEqual(row["USER_NAME"], "alice")
        self.assertEqual(row["NO_OF_DOCUMENTS"], 0)
        with self.assertRaises(RecordNotFoundError):
            await self.repo.save_record({"REF_SEQ_NO": 77}, "alice.l", "url")

    async def test_upload_appends_and_counts(self) -> None:
        files = [AttachmentDescriptor("a.pdf", is_primary=True), AttachmentDescriptor("b.docx")]
        message = await self.repo.upload_attachments(1, files, "alice.l", "url")
        self.assertEqual(message, "2 file(s) uploaded.")
        row = next(r for r in self.repo.rows() if r["REF_SEQ_NO"] == 1)
        self.assertEqual(row["NO_OF_DOCUMENTS"], 2)
        self.assertEqual([d["fileName"] for d in row["uploadedDocs"]], ["a.pdf", "b.docx"])

    async def test_fail_next_applies_once(self) -> None:
        self.repo.fail_next(DataSourceError("down"))
        with self.assertRaises(DataSourceError):
            await self.repo.list_records(QUERY, "alice.l", "url")
        self.assertEqual(len(await self.repo.list_records(QUERY, "alice.l", "url")), 3)


def test_fake_records_have_unique_keys() -> None:
    keys = [r["REF_SEQ_NO"] for r in fake_records()]
    assert len(keys) == len(set(keys))
