"""Polling file watcher for translation directories.

Each configured root is scanned recursively every ``interval`` seconds. A
``.json`` file that appears is reported as ``add``; one whose modification
time or size changes is reported as ``change``. Removed files are dropped
from the snapshot without an event.
"""

from __future__ import annotations

import asyncio
import os
from typing import Awaitable, Callable, Dict, Iterable, List, Optional, Set, Tuple

from ..core.logging_config import get_logger
from .paths import FILE_EXTENSION

log = get_logger(__name__)

ADD = "add"
CHANGE = "change"

Signature = Tuple[int, int]
EventCallback = Callable[[str, str], Awaitable[object]]


def scan(roots: Iterable[str]) -> Dict[str, Signature]:
    """Return ``{path: (mtime_ns, size)}`` for every translation file under ``roots``."""
    found: Dict[str, Signature] = {}
    for root in roots:
        for dirpath, _dirnames, filenames in os.walk(root):
            for name in filenames:
                if not name.endswith(FILE_EXTENSION):
                    continue
                path = os.path.join(dirpath, name)
                try:
                    st = os.stat(path)
                except OSError:
                    continue
                found[path] = (st.st_mtime_ns, st.st_size)
    return found


def diff(old: Dict[str, Signature], new: Dict[str, Signature]) -> List[Tuple[str, str]]:
    events: List[Tuple[str, str]] = []
    for path, sig in new.items():
        before = old.get(path)
        if before is None:
            events.append((ADD, path))
        elif before != sig:
            events.append((CHANGE, path))
    return events


class ChangeWatcher:
    def __init__(self, roots: Iterable[str], callback: EventCallback, interval: float = 1.0) -> None:
        self.roots = list(roots)
        self.callback = callback
        self.interval = interval
        self._snapshot: Optional[Dict[str, Signature]] = None
        self._task: Optional[asyncio.Task] = None
        self._pending: Set[asyncio.Task] = set()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def prime(self) -> List[str]:
        """Take the baseline snapshot and return the files it contains."""
        self._snapshot = await asyncio.to_thread(scan, self.roots)
        return sorted(self._snapshot)

    async def start(self) -> None:
        if self.running:
            return
        if self._snapshot is None:
            await self.prime()
        self._task = asyncio.create_task(self._run(), name="i18n-watcher")
        log.info("Watching %d director%s", len(self.roots), "y" if len(self.roots) == 1 else "ies")

    async def poll(self) -> List[Tuple[str, str]]:
        """Run one scan and dispatch an event task per difference."""
        current = await asyncio.to_thread(scan, self.roots)
        events = diff(self._snapshot or {}, current)
        self._snapshot = current
        for kind, path in events:
            self._dispatch(kind, path)
        return events

    def _dispatch(self, kind: str, path: str) -> None:
        task = asyncio.create_task(self._deliver(kind, path))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _deliver(self, kind: str, path: str) -> None:
        log.debug("%s: %s", kind, path)
        try:
            await self.callback(kind, path)
        except Exception:
            log.exception("Handler failed for %s event on %s", kind, path)

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                await self.poll()
            except Exception as e:
                log.error("Watcher scan failed: %s", e)

    async def drain(self) -> None:
        """Wait for every dispatched event task to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is not None:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
            log.info("watcher closed")
        await self.drain()
        self._snapshot = None
