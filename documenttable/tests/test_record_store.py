"""RecordStore refresh/normalize/remove behaviour."""
from __future__ import annotations

import unittest

from documenttable.exceptions.errors import DataSourceError
from documenttable.logic.adapters.current_user_provider import StaticSessionProvider
from documenttable.logic.repository.in_memory_repository import InMemoryDocumentRepository
from documenttable.logic.store.record_store import FETCH_ERROR_FALLBACK, NO_SESSION_ERROR, RecordStore
from documenttable.tests.helpers import ALICE, make_row


class _ScriptedSource(InMemoryDocumentRepository):
    """Returns a fixed raw response from list_records."""

    def __init__(self, response) -> None:
        super().__init__()
        self.response = response

    async def list_records(self, query, acting_user, endpoint):
        await self._enter("list_records", query, acting_user, endpoint)
        return self.response


class TestRecordStore(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self.repo = InMemoryDocumentRepository([make_row(1), make_row(2), make_row(3)])
        self.sessions = StaticSessionProvider(ALICE)
        self.store = RecordStore(data_source=self.repo, session_provider=self.sessions)
        self.states: list[tuple[bool, int]] = []
        self.store.subscribe(lambda s: self.states.append((s.loading, len(s.data))))

    async def test_refresh_loads_newest_first(self) -> None:
        rows = await self.store.refresh()
        self.assertEqual([r.ref_seq_no for r in rows], [3, 2, 1])
        self.assertEqual([r.ref_seq_no for r in self.store.data], [3, 2, 1])
        self.assertFalse(self.store.loading)
        self.assertIsNone(self.store.error)

    async def test_refresh_sends_query_and_session(self) -> None:
        await self.store.refresh()
        method, (query, user, endpoint) = self.repo.calls[-1]
        self.assertEqual(method, "list_records")
        self.assertEqual(query, {"WhereCondition": "", "Orderby": "REF_SEQ_NO DESC", "IncludeEmpImage": False})
        self.assertEqual(user, "alice.l")
        self.assertEqual(endpoint, "https://dms.example")

    async def test_loading_toggles_around_fetch(self) -> None:
        await self.store.refresh()
        self.assertEqual(self.states[0], (True, 0))
        self.assertEqual(self.states[-1], (False, 3))

    async def test_failure_keeps_previous_data_and_sets_error(self) -> None:
        await self.store.refresh()
        self.repo.fail_next(DataSourceError("Service unavailable"))
        result = await self.store.refresh()
        self.assertEqual(result, [])
        self.assertEqual(len(self.store.data), 3)
        self.assertEqual(self.store.error, "Service unavailable")
        self.assertFalse(self.store.loading)

    async def test_failure_without_message_uses_fallback(self) -> None:
        self.repo.fail_next(RuntimeError())
        await self.store.refresh()
        self.assertEqual(self.store.error, FETCH_ERROR_FALLBACK)

    async def test_success_clears_previous_error(self) -> None:
        self.repo.fail_next(DataSourceError("boom"))
        await self.store.refresh()
        await self.store.refresh()
        self.assertIsNone(self.store.error)

    async def test_missing_session_is_an_error(self) -> None:
        self.sessions.set_session(None)
        await self.store.refresh()
        self.assertEqual(self.store.error, NO_SESSION_ERROR)
        self.assertEqual(self.repo.calls, [])

    async def test_non_list_response_becomes_empty(self) -> None:
        store = RecordStore(data_source=_ScriptedSource({"rows": []}), session_provider=self.sessions)
        self.assertEqual(await store.refresh(), [])
        self.assertIsNone(store.error)

    async def test_duplicate_keys_keep_first(self) -> None:
        source = _ScriptedSource([make_row(1, DOCUMENT_NO="first"), make_row(1, DOCUMENT_NO="second"), "junk"])
        store = RecordStore(data_source=source, session_provider=self.sessions)
        rows = await store.refresh()
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0].document_no, "first")

    async def test_odd_attachment_entries_do_not_fail_the_load(self) -> None:
        source = _ScriptedSource([
            make_row(1, uploadedDocs=[{"fileName": "a.pdf", "sizeBytes": "12.5"}]),
            make_row(2, uploadedDocs=["a.pdf", "b.pdf"]),
        ])
        store = RecordStore(data_source=source, session_provider=self.sessions)
        rows = await store.refresh()
        self.assertIsNone(store.error)
        self.assertEqual(len(rows), 2)
        self.assertEqual(rows[0].uploaded_docs[0].size_bytes, 12)
        self.assertEqual(len(rows[1].uploaded_docs), 2)

    async def test_remove_by_key(self) -> None:
        await self.store.refresh()
        self.assertTrue(self.store.remove_by_key(2))
        self.assertEqual([r.ref_seq_no for r in self.store.data], [3, 1])
        self.assertFalse(self.store.remove_by_key(99))
        self.assertIsNone(self.store.get(2))
        self.assertIsNotNone(self.store.get(3))

    async def test_data_is_a_copy(self) -> None:
        await self.store.refresh()
        self.store.data.clear()
        self.assertEqual(len(self.store.data), 3)
