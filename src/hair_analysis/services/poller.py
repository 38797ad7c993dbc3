"""User-side polling for operator results."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import StrEnum

from hair_analysis.domain.results import ResultRecord, parse_result_record
from hair_analysis.services.results import ResultStore, ResultStoreError
from hair_analysis.services.scheduling import cancel_task

logger = logging.getLogger(__name__)


class PollerState(StrEnum):
    """Lifecycle of a poller."""

    IDLE = "idle"
    POLLING = "polling"
    CONSUMED = "consumed"
    CANCELLED = "cancelled"


@dataclass
class ResultPoller:
    """Reads the store on a fixed interval until a well-formed record appears.

    Empty, malformed and unreadable slots all mean "not ready yet". The first
    valid record clears the slot and is handed to ``on_result`` exactly once.
    """

    store: ResultStore
    on_result: Callable[[ResultRecord], Awaitable[None]]
    interval_seconds: float = 2.0
    state: PollerState = field(default=PollerState.IDLE, init=False)
    cleared: bool = field(default=False, init=False)
    _task: "asyncio.Task[None] | None" = field(default=None, init=False, repr=False)

    @property
    def task(self) -> "asyncio.Task[None] | None":
        """The background polling task, once started."""
        return self._task

    def start(self) -> None:
        """Begin polling in a background task."""
        if self.state is not PollerState.IDLE:
            return
        self.state = PollerState.POLLING
        self._task = asyncio.create_task(self._run())

    def cancel(self) -> None:
        """Stop polling; a consumed poller stays consumed."""
        if self.state in {PollerState.IDLE, PollerState.POLLING}:
            self.state = PollerState.CANCELLED
        cancel_task(self._task)

    async def poll_once(self) -> ResultRecord | None:
        """Run a single poll and deliver the record if one is ready."""
        if self.state is not PollerState.POLLING:
            return None
        try:
            raw = await self.store.get()
        except ResultStoreError:
            logger.warning("Result store read failed, retrying", exc_info=True)
            return None
        if self.state is not PollerState.POLLING:
            return None
        record = parse_result_record(raw)
        if record is None:
            if raw is not None:
                logger.info("Ignoring malformed result payload")
            return None
        self.state = PollerState.CONSUMED
        try:
            await self.store.clear()
        except ResultStoreError:
            logger.warning(
                "Failed to clear consumed result; it stays in the store until "
                "the next successful clear",
                exc_info=True,
            )
        else:
            self.cleared = True
        logger.info("Consumed operator result", extra={"hair_count": record.hair_count})
        await self.on_result(record)
        return record

    async def _run(self) -> None:
        while self.state is PollerState.POLLING:
            await asyncio.sleep(self.interval_seconds)
            await self.poll_once()
