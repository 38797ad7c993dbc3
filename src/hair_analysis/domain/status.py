"""Operator status board models."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class PublisherStatus:
    """Latest status message shown on the operator console."""

    message: str
    is_ready: bool
    updated_at: datetime
