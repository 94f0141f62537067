"""ModalState visibility machine, selection and the refresh handle."""
from __future__ import annotations

import logging
import unittest

from documenttable.controllers.modal_coordinator import ModalCoordinator, ModalState, RefreshHandle
from documenttable.models.document_record import DocumentRecord
from documenttable.tests.helpers import make_row


class TestModalState(unittest.TestCase):
    def test_unattached_command_is_logged_and_dropped(self) -> None:
        state = ModalState("Upload")
        with self.assertLogs("documenttable.controllers.modal_coordinator", level=logging.ERROR) as cm:
            self.assertFalse(state.open())
        self.assertIn("Upload modal element not found", cm.output[0])
        self.assertFalse(state.visible)

    def test_attached_listener_receives_visibility(self) -> None:
        seen: list[bool] = []
        state = ModalState("Form")
        state.attach(seen.append)
        self.assertTrue(state.open())
        self.assertTrue(state.visible)
        self.assertTrue(state.close())
        self.assertEqual(seen, [True, False])

    def test_detach_hides(self) -> None:
        state = ModalState("Form")
        state.attach(lambda _v: None)
        state.open()
        state.detach()
        self.assertFalse(state.attached)
        self.assertFalse(state.visible)


class TestModalCoordinator(unittest.TestCase):
    def setUp(self) -> None:
        self.modals = ModalCoordinator()
        self.modals.form.attach(lambda _v: None)
        self.modals.upload.attach(lambda _v: None)
        self.record = DocumentRecord.from_payload(make_row(5))

    def test_open_form_selects_record(self) -> None:
        self.modals.open_form(self.record)
        self.assertIs(self.modals.selected_document, self.record)
        self.assertTrue(self.modals.form.visible)
        self.assertFalse(self.modals.upload.visible)

    def test_open_upload_replaces_selection(self) -> None:
        other = DocumentRecord.from_payload(make_row(6))
        self.modals.open_form(self.record)
        self.modals.open_upload(other)
        self.assertIs(self.modals.selected_document, other)
        self.assertTrue(self.modals.upload.visible)

    def test_close_keeps_selection(self) -> None:
        self.modals.open_upload(self.record)
        self.modals.close_upload()
        self.assertFalse(self.modals.upload.visible)
        self.assertIs(self.modals.selected_document, self.record)


class TestRefreshHandle(unittest.IsolatedAsyncioTestCase):
    async def test_unbound_handle_returns_empty(self) -> None:
        handle = RefreshHandle()
        with self.assertLogs("documenttable.controllers.modal_coordinator", level=logging.WARNING):
            self.assertEqual(await handle(), [])

    async def test_bound_handle_forwards(self) -> None:
        record = DocumentRecord.from_payload(make_row(1))

        async def _refresh():
            return [record]

        handle = RefreshHandle()
        ModalCoordinator.bind_refresh_handle(handle, _refresh)
        self.assertTrue(handle.bound)
        self.assertEqual(await handle(), [record])
        ModalCoordinator.bind_refresh_handle(handle, None)
        self.assertFalse(handle.bound)

    def test_binding_without_handle_is_ignored(self) -> None:
        ModalCoordinator.bind_refresh_handle(None, None)
