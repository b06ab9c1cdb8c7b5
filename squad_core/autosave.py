# squad_core/autosave.py
from __future__ import annotations
import asyncio
import logging
from typing import Callable, Optional

from .models import SquadSnapshot
from .outcomes import PersistenceError
from .persistence import SquadStore

logger = logging.getLogger(__name__)


class Autosaver:
    """
    Debounced writer for one identity.

    `mark_dirty` only sets a flag and makes sure a single writer task is
    running. The writer waits until marks stop arriving for `delay` seconds,
    snapshots the current state and saves it. A mark that arrives while a
    save is in flight makes the writer go round again, so the final state is
    always written. `flush()` goes through the same task and skips the
    debounce. With no running event loop the mark is held until
    `flush()`.
    """

    def __init__(self, store: SquadStore, identity: str,
                 snapshot: Callable[[], SquadSnapshot], delay: float = 0.75):
        self._store = store
        self._identity = identity
        self._snapshot = snapshot
        self.delay = delay
        self.enabled = True
        self.writes = 0
        self.last_error: Optional[PersistenceError] = None
        self._dirty = False
        self._last_mark = 0.0
        self._task: Optional[asyncio.Task] = None
        self._wake: Optional[asyncio.Event] = None
        self._flushing = False

    @property
    def dirty(self) -> bool:
        return self._dirty

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def mark_dirty(self):
        if not self.enabled:
            return
        self._dirty = True
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        self._last_mark = loop.time()
        if not self.running:
            self._task = loop.create_task(self._run())

    async def _run(self):
        loop = asyncio.get_running_loop()
        self._wake = asyncio.Event()
        while self._dirty:
            wait = 0 if self._flushing else self._last_mark + self.delay - loop.time()
            if wait > 0:
                self._wake.clear()
                try:
                    await asyncio.wait_for(self._wake.wait(), wait)
                except asyncio.TimeoutError:
                    pass
                continue
            await self._write_once()

    async def _write_once(self):
        self._dirty = False
        snap = self._snapshot()
        try:
            await self._store.save(self._identity, snap)
        except PersistenceError as e:
            # in-memory state stays as is; the next mark schedules another attempt
            self.last_error = e
            logger.error("Save failed for %s: %s", self._identity, e)
            return
        self.last_error = None
        self.writes += 1
        logger.debug("Saved state for %s (write #%d)", self._identity, self.writes)

    async def flush(self):
        """Write any pending state now and wait for it to land."""
        loop = asyncio.get_running_loop()
        self._flushing = True
        try:
            # marks that arrive while a write is in flight go round again
            while self.running or (self._dirty and self.enabled):
                if self.running:
                    if self._wake is not None:
                        self._wake.set()
                else:
                    self._task = loop.create_task(self._run())
                await self._task
        finally:
            self._flushing = False

    async def close(self):
        task, self._task = self._task, None
        self._dirty = False
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
