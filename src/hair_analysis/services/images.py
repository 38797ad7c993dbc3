"""Validation of images handed over by the capture collaborator."""

import base64
import binascii
import re

from hair_analysis.domain.sessions import CapturedImage

MAX_IMAGE_BYTES = 10 * 1024 * 1024

_DATA_URL = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?P<params>(;[^,;]+)*),")


class ImageValidationError(ValueError):
    """Raised when a captured image fails type or size checks."""


def captured_image_from_data_url(data_url: str) -> CapturedImage:
    """Decode a base64 data URL into a captured image description."""
    match = _DATA_URL.match(data_url)
    if match is None or ";base64" not in (match.group("params") or ""):
        raise ImageValidationError("Failed to load image")
    payload = data_url[match.end() :]
    try:
        content = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ImageValidationError("Failed to load image") from exc
    return CapturedImage(
        data_url=data_url,
        mime_type=match.group("mime") or "",
        size_bytes=len(content),
    )


def validate_image(image: CapturedImage, max_bytes: int = MAX_IMAGE_BYTES) -> None:
    """Reject non-image MIME types, empty payloads and oversized files."""
    if not image.mime_type.startswith("image/"):
        raise ImageValidationError(
            "Please select a valid image file (JPG, PNG, WEBP)"
        )
    if image.size_bytes <= 0:
        raise ImageValidationError("Failed to load image")
    if image.size_bytes > max_bytes:
        limit_mb = max_bytes // (1024 * 1024)
        raise ImageValidationError(f"File size must be less than {limit_mb}MB")
