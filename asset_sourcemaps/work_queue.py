"""Bounded-concurrency dispatch of the per-file processor."""
from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Awaitable, Callable, Iterable, List, Optional

from .report import FileOutcome

logger = logging.getLogger(__name__)

Worker = Callable[[Path], Awaitable[FileOutcome]]


class WorkQueue:
    """Run ``worker`` over paths with at most ``concurrency`` in flight.

    ``on_drain`` is called once per :meth:`run`, after every submitted
    path has an outcome.
    """

    def __init__(
        self,
        worker: Worker,
        concurrency: int = 3,
        on_drain: Optional[Callable[[List[FileOutcome]], None]] = None,
    ) -> None:
        if concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {concurrency}")
        self.worker = worker
        self.concurrency = concurrency
        self.on_drain = on_drain

    async def run(self, paths: Iterable[Path]) -> List[FileOutcome]:
        semaphore = asyncio.Semaphore(self.concurrency)

        async def slot(path: Path) -> FileOutcome:
            async with semaphore:
                try:
                    return await self.worker(path)
                except Exception as exc:
                    logger.error("Error processing file %s: %s", path, exc)
                    return FileOutcome.failure(path, exc)

        outcomes = list(await asyncio.gather(*(slot(path) for path in paths)))
        if self.on_drain is not None:
            self.on_drain(outcomes)
        return outcomes
