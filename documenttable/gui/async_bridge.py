"""
===============================================================================
AsyncioTkBridge – run coroutines from a Tk mainloop
-------------------------------------------------------------------------------
Tk owns the main thread. The bridge keeps a private asyncio loop and lets it
run all ready callbacks on every after() tick, so coroutines (refresh,
delete, upload) progress without blocking the UI.

Nested Tk loops (messagebox, wait_window) can fire ticks while the asyncio
loop is already running; such ticks are skipped and rescheduled.
===============================================================================
"""
from __future__ import annotations

import asyncio
import logging
import tkinter as tk
from typing import Any, Coroutine, Optional

log = logging.getLogger(__name__)


class AsyncioTkBridge:
    def __init__(self, root: tk.Misc, *, interval_ms: int = 15) -> None:
        self._root = root
        self._interval = interval_ms
        self._loop = asyncio.new_event_loop()
        self._after_id: Optional[str] = None

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop

    def start(self) -> None:
        if self._after_id is None:
            self._after_id = self._root.after(self._interval, self._on_tick)

    def stop(self) -> None:
        if self._after_id is not None:
            self._root.after_cancel(self._after_id)
            self._after_id = None
        if self._loop.is_closed():
            return
        for task in asyncio.all_tasks(self._loop):
            task.cancel()
        self._drain()
        self._loop.close()

    def submit(self, coro: Coroutine[Any, Any, Any]) -> "asyncio.Task[Any]":
        """Schedule a coroutine; it starts on the next tick."""
        task = self._loop.create_task(coro)
        task.add_done_callback(self._report)
        return task

    # ---- internals ---- #
    def _on_tick(self) -> None:
        if not self._loop.is_running():
            self._drain()
        self._after_id = self._root.after(self._interval, self._on_tick)

    def _drain(self) -> None:
        self._loop.call_soon(self._loop.stop)
        self._loop.run_forever()

    @staticmethod
    def _report(task: "asyncio.Task[Any]") -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            log.error("Background task failed", exc_info=exc)
