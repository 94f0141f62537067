"""
DocTable launcher – demo window around the document table.

Starts a Tk root with the in-memory document service, a demo session issued
through AppContext and the asyncio bridge. A "Switch user" button changes the
session so the reload-on-session-change path can be watched.
"""

import logging
import tkinter as tk
from tkinter import ttk

from core.common.app_context import AppContext
from core.config.config_service import config_service
from core.models.user import UserSession
from core.qm_logging.logic.logger import logger
from documenttable.controllers.document_table_controller import DocumentTableController
from documenttable.controllers.modal_coordinator import RefreshHandle
from documenttable.gui.async_bridge import AsyncioTkBridge
from documenttable.gui.main_view import DocumentTableView
from documenttable.gui.messages import MessageboxConfirm, MessageboxNotifier
from documenttable.logic.adapters.appcontext_user_provider import AppContextSessionProvider
from documenttable.logic.fake_data import fake_records
from documenttable.logic.repository.in_memory_repository import InMemoryDocumentRepository
from documenttable.logic.viewstate.view_state import FilterBinding

DEMO_USERS = (
    UserSession("alice.l", "alice", organization="ACME Corp", client_url="memory://acme"),
    UserSession("bob.l", "bob", organization="ACME Corp", client_url="memory://acme"),
)


class MainWindow(tk.Tk):
    def __init__(self):
        super().__init__()
        general = config_service.general
        self.title(f"{general.app_name} {general.version}")
        self.geometry("1300x600")

        self.bridge = AsyncioTkBridge(self)
        self.sessions = AppContextSessionProvider()
        self.repository = InMemoryDocumentRepository(fake_records(), latency=0.3)
        self.refresh_handle = RefreshHandle()

        # The filter text belongs to the window; the table reads it through a binding
        self.filter_var = tk.StringVar(value="")
        binding = FilterBinding(get_value=self.filter_var.get, set_value=self.filter_var.set)

        self.controller = DocumentTableController(
            data_source=self.repository,
            session_provider=self.sessions,
            notifier=MessageboxNotifier(self),
            confirm=MessageboxConfirm(self, title="Delete document"),
            filter_binding=binding,
            refresh_handle=self.refresh_handle,
            schedule=self.bridge.submit,
        )

        # Top bar
        nav = ttk.Frame(self, padding=(8, 6))
        nav.pack(side="top", fill="x")
        ttk.Button(nav, text="Switch user", command=self.switch_user).pack(side="right")
        self.lbl_user = ttk.Label(nav, text="")
        self.lbl_user.pack(side="right", padx=10)

        self.view = DocumentTableView(
            self,
            controller=self.controller,
            data_source=self.repository,
            session_provider=self.sessions,
            filter_var=self.filter_var,
            submit=self.bridge.submit,
            on_refresh=lambda: self.bridge.submit(self.refresh_handle()),
        )
        self.view.pack(fill="both", expand=True)

        # Status bar
        self.status_bar = ttk.Label(self, text="", anchor="w", padding=(8, 2))
        self.status_bar.pack(side="bottom", fill="x")

        AppContext.subscribe_user_session(self._on_session_event)
        self.protocol("WM_DELETE_WINDOW", self.close)
        self._show_user()

    def start(self):
        self.bridge.start()
        self.bridge.submit(self.controller.mount())

    def switch_user(self):
        current = AppContext.get_current_user()
        nxt = DEMO_USERS[1] if current == DEMO_USERS[0] else DEMO_USERS[0]
        AppContext.set_current_user(nxt, reason="user_changed")

    def _on_session_event(self, event):
        self._show_user()
        login = event.new_user.current_user_login if event.new_user else "-"
        self.status_bar.configure(text=f"Session {event.type}: {login}")

    def _show_user(self):
        user = AppContext.get_current_user()
        self.lbl_user.configure(text=f"Logged in as {user.current_user_name}" if user else "Not logged in")

    def close(self):
        self.controller.unmount()
        self.bridge.stop()
        self.destroy()


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )
    logger.configure(persist=config_service.general.log_to_db)
    AppContext.set_current_user(DEMO_USERS[0])

    app = MainWindow()
    app.start()
    app.mainloop()


if __name__ == "__main__":
    main()
