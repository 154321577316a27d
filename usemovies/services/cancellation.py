"""Per-fetch cancellation tokens"""

import asyncio
from typing import Optional


class CancellationToken:
    """Marks one in-flight fetch as stale

    Cancelling also asks the task to stop, but that is only advisory: a
    transport may still deliver a result, and callers must check
    ``cancelled`` before applying it.
    """

    def __init__(self, label: str = "", key: Optional[str] = None):
        self.label = label
        self.key = key
        self.task: Optional[asyncio.Task] = None
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def attach(self, task: asyncio.Task):
        """Remember the task doing the work for this token"""
        self.task = task
        if self._cancelled:
            task.cancel()

    def cancel(self):
        if self._cancelled:
            return
        self._cancelled = True
        if self.task is not None and not self.task.done():
            self.task.cancel()

    def __repr__(self):
        state = "cancelled" if self._cancelled else "live"
        return f"<CancellationToken {self.label!r} {self.key!r} {state}>"
