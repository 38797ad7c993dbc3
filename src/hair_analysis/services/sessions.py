"""State machine for one analysis session."""

import asyncio
import logging
import random
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime

from hair_analysis.domain.recommendations import recommendation_for
from hair_analysis.domain.results import ResultRecord, derive_tier
from hair_analysis.domain.sessions import (
    AnalysisReport,
    CapturedImage,
    ResultSource,
    SessionPhase,
    SessionState,
)
from hair_analysis.services.fallback import (
    SessionTimeoutFallback,
    generate_fallback_record,
)
from hair_analysis.services.images import (
    MAX_IMAGE_BYTES,
    ImageValidationError,
    validate_image,
)
from hair_analysis.services.poller import ResultPoller
from hair_analysis.services.results import ResultStore, ResultStoreError
from hair_analysis.services.scheduling import cancel_task, wait_cancelled
from hair_analysis.services.status import READY_MESSAGE, StatusBoard

logger = logging.getLogger(__name__)


class SessionStateError(RuntimeError):
    """Raised when an operation is not allowed in the current phase."""


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class SessionController:
    """Drives idle -> capturing -> processing -> awaiting_result -> complete.

    Every scheduled task is tagged with the session generation it was created
    for. Reset bumps the generation, so a callback that fires late finds a
    different generation and does nothing.
    """

    store: ResultStore
    status_board: StatusBoard
    poll_interval_seconds: float = 2.0
    fallback_timeout_seconds: float = 30.0
    processing_seconds: float = 12.0
    max_image_bytes: int = MAX_IMAGE_BYTES
    on_report: Callable[[AnalysisReport], None] | None = None
    clock: Callable[[], datetime] = _utc_now
    rng: random.Random = field(default_factory=random.Random)
    state: SessionState = field(default_factory=SessionState, init=False)
    _poller: ResultPoller | None = field(default=None, init=False, repr=False)
    _fallback: SessionTimeoutFallback | None = field(
        default=None, init=False, repr=False
    )
    _processing_task: "asyncio.Task[None] | None" = field(
        default=None, init=False, repr=False
    )
    _stale_result: bool = field(default=False, init=False, repr=False)

    def begin_capture(self) -> None:
        """Enter capturing when the user opens the camera or upload dialog."""
        if self.state.phase not in {SessionPhase.IDLE, SessionPhase.CAPTURING}:
            raise SessionStateError(f"Cannot start capture while {self.state.phase}")
        self.state.phase = SessionPhase.CAPTURING
        self.state.last_error = None

    def report_capture_failure(self, reason: str) -> None:
        """Record a camera/environment failure; the session stays capturing."""
        if self.state.phase is not SessionPhase.CAPTURING:
            raise SessionStateError(
                f"Cannot report capture failure while {self.state.phase}"
            )
        self.state.phase = SessionPhase.FAILED
        self.state.last_error = reason
        logger.warning("Capture failed", extra={"reason": reason})
        self.state.phase = SessionPhase.CAPTURING

    async def submit_image(self, image: CapturedImage) -> None:
        """Validate the captured image and start processing it."""
        if self.state.phase is not SessionPhase.CAPTURING:
            raise SessionStateError(f"Cannot accept an image while {self.state.phase}")
        try:
            validate_image(image, self.max_image_bytes)
        except ImageValidationError as exc:
            self.state.last_error = str(exc)
            logger.info("Rejected captured image", extra={"reason": str(exc)})
            raise

        self.state.generation += 1
        generation = self.state.generation
        self.state.phase = SessionPhase.PROCESSING
        self.state.started_at = self.clock()
        self.state.pending_image = image
        self.state.last_error = None
        self.state.report = None
        if self._stale_result:
            await self._clear_stale_result()
            if generation != self.state.generation:
                return
        self.status_board.post(
            "New analysis started - ready for admin input", is_ready=True
        )
        self._processing_task = asyncio.create_task(
            self._finish_processing(generation)
        )

    async def reset(self) -> None:
        """Return to idle from any phase, cancelling all outstanding work."""
        self.state.generation += 1
        self._cancel_all()
        self.state = SessionState(generation=self.state.generation)
        try:
            await self.store.clear()
        except ResultStoreError:
            logger.warning("Failed to clear result store on reset", exc_info=True)
        else:
            self._stale_result = False
        self.status_board.post(READY_MESSAGE)
        logger.info("Session reset", extra={"generation": self.state.generation})

    async def close(self) -> None:
        """Cancel background work on shutdown and wait for it to unwind."""
        tasks = [self._processing_task]
        if self._poller is not None:
            tasks.append(self._poller.task)
        if self._fallback is not None:
            tasks.append(self._fallback.task)
        self.state.generation += 1
        self._cancel_all()
        await wait_cancelled(tasks)

    async def _finish_processing(self, generation: int) -> None:
        await asyncio.sleep(self.processing_seconds)
        if (
            generation != self.state.generation
            or self.state.phase is not SessionPhase.PROCESSING
        ):
            return
        self._processing_task = None
        self._await_result(generation)

    def _await_result(self, generation: int) -> None:
        self.state.phase = SessionPhase.AWAITING_RESULT

        async def on_result(record: ResultRecord) -> None:
            await self._on_polled_result(generation, record)

        async def on_timeout() -> None:
            await self._on_fallback_timeout(generation)

        self._poller = ResultPoller(
            store=self.store,
            on_result=on_result,
            interval_seconds=self.poll_interval_seconds,
        )
        self._fallback = SessionTimeoutFallback(
            on_timeout=on_timeout,
            timeout_seconds=self.fallback_timeout_seconds,
        )
        self._poller.start()
        self._fallback.start()

    async def _on_polled_result(self, generation: int, record: ResultRecord) -> None:
        if not self._is_awaiting(generation):
            return
        if self._poller is not None and not self._poller.cleared:
            self._stale_result = True
        self._complete(record, ResultSource.OPERATOR)

    async def _on_fallback_timeout(self, generation: int) -> None:
        if not self._is_awaiting(generation):
            return
        self._stop_handoff()
        logger.info("No operator result received, using fallback")
        try:
            await self.store.clear()
        except ResultStoreError:
            logger.warning("Failed to clear result store for fallback", exc_info=True)
        if not self._is_awaiting(generation):
            return
        self._complete(generate_fallback_record(self.rng), ResultSource.FALLBACK)

    async def _clear_stale_result(self) -> None:
        # A consumed record left behind must not reach the next poller.
        try:
            await self.store.clear()
        except ResultStoreError:
            logger.warning("Failed to clear stale result", exc_info=True)
        else:
            self._stale_result = False

    def _is_awaiting(self, generation: int) -> bool:
        return (
            generation == self.state.generation
            and self.state.phase is SessionPhase.AWAITING_RESULT
        )

    def _complete(self, record: ResultRecord, source: ResultSource) -> None:
        # The winner disables the other handoff path before touching state.
        self._stop_handoff()
        now = self.clock()
        started_at = self.state.started_at or now
        tier = derive_tier(record)
        report = AnalysisReport(
            record=record,
            tier=tier,
            recommendation=recommendation_for(tier),
            processing_time=now - started_at,
            source=source,
            generated_at=now,
        )
        self.state.phase = SessionPhase.COMPLETE
        self.state.report = report
        self.state.pending_image = None
        self.status_board.post("Analysis completed - waiting for new analysis")
        logger.info(
            "Analysis complete",
            extra={"source": source.value, "hair_count": record.hair_count},
        )
        if self.on_report is not None:
            self.on_report(report)

    def _stop_handoff(self) -> None:
        if self._poller is not None:
            self._poller.cancel()
        if self._fallback is not None:
            self._fallback.cancel()

    def _cancel_all(self) -> None:
        self._stop_handoff()
        cancel_task(self._processing_task)
        self._processing_task = None
        self._poller = None
        self._fallback = None
