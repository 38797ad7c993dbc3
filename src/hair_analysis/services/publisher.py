"""Operator-side result publishing."""

import logging
import math
import re
from collections.abc import Mapping
from dataclasses import dataclass

from hair_analysis.domain.results import ResultRecord, Tier
from hair_analysis.services.results import ResultStore
from hair_analysis.services.status import StatusBoard

DEFAULT_HAIR_COUNT = 85000
DEFAULT_CONFIDENCE = 87
DEFAULT_IMAGE_QUALITY = "Good"
DEFAULT_CATEGORY = Tier.MEDIUM

MIN_HAIR_COUNT = 5000
MAX_HAIR_COUNT = 200000

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_CATEGORY_VALUES = frozenset(tier.value for tier in Tier)

logger = logging.getLogger(__name__)


@dataclass
class ResultPublisher:
    """Builds records from operator input and commits them to the store."""

    store: ResultStore
    status_board: StatusBoard

    async def publish(self, operator_input: Mapping[str, object]) -> ResultRecord:
        """Publish operator input, substituting defaults for bad fields."""
        record = build_operator_record(operator_input)
        await self.store.put(record.to_payload())
        logger.info(
            "Published operator result",
            extra={"hair_count": record.hair_count, "confidence": record.confidence},
        )
        self.status_board.post("Results sent to user successfully")
        return record


def build_operator_record(operator_input: Mapping[str, object]) -> ResultRecord:
    """Coerce loosely typed operator input into a well-formed record."""
    hair_count = _parse_int(operator_input.get("hairCount"))
    if hair_count is None or not MIN_HAIR_COUNT <= hair_count <= MAX_HAIR_COUNT:
        hair_count = DEFAULT_HAIR_COUNT
    confidence = _parse_int(operator_input.get("confidence"))
    if confidence is None or not 0 <= confidence <= 100:  # noqa: PLR2004
        confidence = DEFAULT_CONFIDENCE
    image_quality = operator_input.get("imageQuality")
    if not isinstance(image_quality, str) or not image_quality.strip():
        image_quality = DEFAULT_IMAGE_QUALITY
    category = operator_input.get("category")
    if not isinstance(category, str) or category not in _CATEGORY_VALUES:
        category = DEFAULT_CATEGORY
    return ResultRecord(
        hair_count=hair_count,
        confidence=confidence,
        category=Tier(category),
        image_quality=image_quality.strip(),
    )


def _parse_int(value: object) -> int | None:
    """Parse an integer the way a form field would, ignoring trailing text."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match:
            try:
                return int(match.group(1))
            except ValueError:
                # Beyond the interpreter's int string conversion limit.
                return None
    return None
