"""Write-behind persistence for in-memory stores.

A store commits a change to memory first and then hands a snapshot of its
document to :class:`WriteBehind`, which writes it on a later frame using the
Kivy clock.  Writes are never awaited by the caller.  Each write carries the
snapshot taken when it was issued.  A snapshot older than one already on
disk is dropped, so whatever order the clock fires them in, the document
ends up holding the most recently issued snapshot.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Any, Callable

from kivy.clock import Clock

from .errors import StorageError
from .storage import DocumentStorage


class WriteBehind:
    """Schedule durable writes of one storage key."""

    def __init__(
        self,
        storage: DocumentStorage,
        key: str,
        *,
        delay: float = 0.0,
        on_complete: Callable[[str, bool], None] | None = None,
    ) -> None:
        self.storage = storage
        self.key = key
        self.delay = delay
        self.on_complete = on_complete
        # ticket -> (clock event, document snapshot)
        self._pending: dict[int, tuple[Any, Any]] = {}
        self._next_ticket = 0
        # highest ticket already written; older snapshots are never written after it
        self._written_ticket = 0

    @property
    def pending(self) -> int:
        """Number of writes issued but not yet run."""
        return len(self._pending)

    def schedule(self, document: Any) -> int:
        """Queue ``document`` for writing and return its ticket."""
        self._next_ticket += 1
        ticket = self._next_ticket
        event = Clock.schedule_once(partial(self._run, ticket), self.delay)
        self._pending[ticket] = (event, document)
        return ticket

    def flush(self) -> None:
        """Run every pending write now, in the order they were issued."""
        for ticket in sorted(self._pending):
            entry = self._pending.get(ticket)
            if entry is None:
                continue
            entry[0].cancel()
            self._run(ticket)

    def cancel(self) -> None:
        """Drop every pending write without running it."""
        for event, _document in self._pending.values():
            event.cancel()
        self._pending.clear()

    def _run(self, ticket: int, *_dt) -> None:
        entry = self._pending.pop(ticket, None)
        if entry is None or ticket < self._written_ticket:
            return
        self._written_ticket = ticket
        ok = True
        try:
            self.storage.write(self.key, entry[1])
        except StorageError:
            ok = False
            logging.exception("Failed to persist %s", self.key)
        if self.on_complete:
            self.on_complete(self.key, ok)
