"""
Worklist protocol shared by both crawl phases.

A phase loop receives URL batches from a queue and spawns one task per URL.
Termination is detected with a pending counter instead of a join primitive:

* the seed batch counts as one pending unit;
* every spawned task adds one unit before it starts;
* the loop removes one unit for every batch it consumes;
* every task pushes exactly one batch (possibly empty) when it finishes.

The phase is done exactly when the counter drops to zero.
"""
from __future__ import annotations

import asyncio
from typing import Iterable, List, Optional, Set

from sitemap_scout.exceptions import CrawlError
from sitemap_scout.logger import get_logger

__all__ = ("PendingCounter", "WorklistPhase")

logger = get_logger("worklist")


class PendingCounter:
    """Count of queued and in-flight units of work for one phase; never negative."""

    __slots__ = ("_value",)

    def __init__(self, initial: int = 0) -> None:
        if initial < 0:
            raise ValueError("initial pending count must be >= 0")
        self._value = initial

    @property
    def value(self) -> int:
        return self._value

    def increment(self) -> int:
        self._value += 1
        return self._value

    def decrement(self) -> int:
        if self._value == 0:
            raise RuntimeError("pending counter would go negative")
        self._value -= 1
        return self._value

    def __bool__(self) -> bool:
        return self._value > 0

    def __repr__(self) -> str:
        return f"PendingCounter({self._value})"


class WorklistPhase:
    """
    Base class for a fan-out/fan-in crawl phase.

    Subclasses implement :meth:`process`, which handles one URL and returns
    the follow-up batch to put back on the worklist. Errors raised by
    ``process`` are logged and recorded in :attr:`failed`; the task still
    signals completion, so a failing URL never stalls the phase.
    """

    name: str = "phase"

    def __init__(self, *, phase_timeout: Optional[float] = None) -> None:
        self.phase_timeout = phase_timeout
        self.failed: List[str] = []
        self.spawned = 0
        self.timed_out = False
        self._worklist: asyncio.Queue[List[str]] = asyncio.Queue()
        self._pending = PendingCounter()
        self._tasks: Set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> int:
        return self._pending.value

    async def run(self, seed: Iterable[str]) -> None:
        """Drive the phase from *seed* until no work is pending (or the phase times out)."""
        self.failed = []
        self.spawned = 0
        self.timed_out = False
        self._worklist = asyncio.Queue()
        self._pending = PendingCounter(1)
        self._tasks = set()
        self._worklist.put_nowait(list(seed))
        try:
            if self.phase_timeout is None:
                await self._drain()
            else:
                await asyncio.wait_for(self._drain(), timeout=self.phase_timeout)
        except asyncio.TimeoutError:
            self.timed_out = True
            logger.warning(
                "%s phase timed out after %.2f s with %d unit(s) pending",
                self.name, self.phase_timeout, self._pending.value,
            )
        finally:
            await self._cancel_outstanding()

    async def process(self, url: str) -> List[str]:
        raise NotImplementedError

    def accept(self, url: str) -> bool:
        """Return False to drop *url* without spawning a task."""
        return bool(url)

    async def _drain(self) -> None:
        while self._pending:
            batch = await self._worklist.get()
            for url in batch:
                if not self.accept(url):
                    continue
                self._pending.increment()
                self.spawned += 1
                task = asyncio.create_task(self._run_task(url))
                self._tasks.add(task)
                task.add_done_callback(self._tasks.discard)
            self._pending.decrement()

    async def _run_task(self, url: str) -> None:
        follow_up: List[str] = []
        try:
            follow_up = await self.process(url)
        except CrawlError as exc:
            self.failed.append(url)
            logger.warning("%s: %s: %s", self.name, type(exc).__name__, exc)
        except Exception:
            self.failed.append(url)
            logger.exception("%s: unexpected error while processing %s", self.name, url)
        finally:
            self._worklist.put_nowait(list(follow_up or []))

    async def _cancel_outstanding(self) -> None:
        if not self._tasks:
            return
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
