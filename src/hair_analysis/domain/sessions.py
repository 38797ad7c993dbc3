"""Domain models for analysis sessions."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import StrEnum

from hair_analysis.domain.recommendations import Recommendation
from hair_analysis.domain.results import ResultRecord, Tier

DISCLAIMER = (
    "This analysis is for educational purposes only. "
    "Consult a healthcare professional for medical advice."
)


class SessionPhase(StrEnum):
    """Lifecycle phase of one analysis attempt."""

    IDLE = "idle"
    CAPTURING = "capturing"
    PROCESSING = "processing"
    AWAITING_RESULT = "awaiting_result"
    COMPLETE = "complete"
    FAILED = "failed"


class ResultSource(StrEnum):
    """Where the applied result came from."""

    OPERATOR = "operator"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class CapturedImage:
    """Image handed over by the capture collaborator."""

    data_url: str
    mime_type: str
    size_bytes: int


@dataclass(frozen=True)
class AnalysisReport:
    """Finished report handed to the render collaborator."""

    record: ResultRecord
    tier: Tier
    recommendation: Recommendation
    processing_time: timedelta
    source: ResultSource
    generated_at: datetime
    disclaimer: str = DISCLAIMER

    @property
    def hair_density(self) -> int:
        """Approximate hairs per square centimetre."""
        return round(self.record.hair_count / 100)


@dataclass
class SessionState:
    """Mutable state owned by the session controller."""

    phase: SessionPhase = SessionPhase.IDLE
    generation: int = 0
    started_at: datetime | None = None
    pending_image: CapturedImage | None = None
    last_error: str | None = None
    report: AnalysisReport | None = None
