"""Pydantic models for request payloads."""

from pydantic import BaseModel, ConfigDict, Field


class ImageUploadPayload(BaseModel):
    """Captured image handed over as a base64 data URL."""

    model_config = ConfigDict(populate_by_name=True)

    data_url: str = Field(alias="dataUrl")


class CaptureErrorPayload(BaseModel):
    """Camera or environment failure reported by the capture UI."""

    reason: str = "Camera unavailable"
