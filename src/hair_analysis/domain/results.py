"""Result records exchanged between the operator and a user session."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

LOW_THRESHOLD = 50000
MEDIUM_THRESHOLD = 100000


class Tier(StrEnum):
    """Qualitative hair density bucket."""

    LOW = "low"
    MEDIUM = "medium"
    GOOD = "good"


class ResultRecord(BaseModel):
    """A well-formed analysis outcome.

    Field names follow Python conventions; the wire format uses the camelCase
    aliases the browser clients send.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    hair_count: int = Field(alias="hairCount", gt=0)
    confidence: int = Field(ge=0, le=100)
    category: Tier | None = None
    image_quality: str = Field(default="Good", alias="imageQuality")

    @field_validator("category", mode="before")
    @classmethod
    def _drop_unknown_category(cls, value: object) -> object:
        if isinstance(value, Tier):
            return value
        if isinstance(value, str) and value in {tier.value for tier in Tier}:
            return value
        return None

    def to_payload(self) -> dict[str, object]:
        """Serialize to the camelCase JSON shape stored in the result slot."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


def parse_result_record(raw: object) -> ResultRecord | None:
    """Return a record when the raw payload is well-formed, otherwise None."""
    if not isinstance(raw, dict):
        return None
    try:
        return ResultRecord.model_validate(raw)
    except ValidationError:
        return None


def tier_for_count(hair_count: int) -> Tier:
    """Select a tier from the hair count alone."""
    if hair_count < LOW_THRESHOLD:
        return Tier.LOW
    if hair_count < MEDIUM_THRESHOLD:
        return Tier.MEDIUM
    return Tier.GOOD


def derive_tier(record: ResultRecord) -> Tier:
    """Use the explicit category when present, else fall back to thresholds."""
    if record.category is not None:
        return record.category
    return tier_for_count(record.hair_count)
