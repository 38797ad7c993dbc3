"""Best-effort status messages for the operator console."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime

from hair_analysis.domain.status import PublisherStatus

READY_MESSAGE = "System ready - waiting for analysis"


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class StatusBoard:
    """Keeps the latest status message, nothing more."""

    clock: Callable[[], datetime] = _utc_now
    _latest: PublisherStatus | None = field(default=None, init=False, repr=False)

    def post(self, message: str, is_ready: bool = False) -> PublisherStatus:
        """Replace the current status."""
        self._latest = PublisherStatus(
            message=message, is_ready=is_ready, updated_at=self.clock()
        )
        return self._latest

    def latest(self) -> PublisherStatus:
        """Return the current status, defaulting to the idle message."""
        if self._latest is None:
            return self.post(READY_MESSAGE)
        return self._latest
