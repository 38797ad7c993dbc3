"""User-facing analysis session endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status

from hair_analysis.api.models import CaptureErrorPayload, ImageUploadPayload
from hair_analysis.domain.sessions import AnalysisReport, SessionPhase, SessionState
from hair_analysis.services.images import (
    ImageValidationError,
    captured_image_from_data_url,
)
from hair_analysis.services.sessions import SessionController, SessionStateError

if TYPE_CHECKING:
    from hair_analysis.containers import AppContainer

router = APIRouter(prefix="/api/session", tags=["session"])


def _controller(request: Request) -> SessionController:
    container: AppContainer = request.app.state.container
    return container.session_controller


@router.get("")
async def session_state(request: Request) -> dict[str, object]:
    """Return the current phase and, once complete, the report."""
    return serialize_state(_controller(request).state)


@router.post("/capture")
async def begin_capture(request: Request) -> dict[str, object]:
    """Enter the capturing phase."""
    controller = _controller(request)
    try:
        controller.begin_capture()
    except SessionStateError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail=str(exc)
        ) from exc
    return serialize_state(controller.state)


@router.post("/capture-error")
async def capture_error(
    payload: CaptureErrorPayload, request: Request
) -> dict[str, object]:
    """Record a camera permission or environment failure."""
    controller = _controller(request)
    try:
        controller.report_capture_failure(payload.reason)
    except SessionStateError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail=str(exc)
        ) from exc
    return serialize_state(controller.state)


@router.post("/image")
async def submit_image(
    payload: ImageUploadPayload, request: Request
) -> dict[str, object]:
    """Accept an uploaded or captured image and start processing."""
    controller = _controller(request)
    try:
        if controller.state.phase is SessionPhase.IDLE:
            controller.begin_capture()
        image = captured_image_from_data_url(payload.data_url)
        await controller.submit_image(image)
    except ImageValidationError as exc:
        controller.state.last_error = str(exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except SessionStateError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail=str(exc)
        ) from exc
    return serialize_state(controller.state)


@router.post("/reset")
async def reset_session(request: Request) -> dict[str, object]:
    """Abandon the current attempt and return to idle."""
    controller = _controller(request)
    await controller.reset()
    return serialize_state(controller.state)


@router.get("/image")
async def pending_image(request: Request) -> dict[str, object]:
    """Return the image under analysis for the operator view."""
    image = _controller(request).state.pending_image
    if image is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return {
        "dataUrl": image.data_url,
        "mimeType": image.mime_type,
        "sizeBytes": image.size_bytes,
    }


def serialize_state(state: SessionState) -> dict[str, object]:
    """Serialize session state for the browser client."""
    return {
        "phase": state.phase.value,
        "generation": state.generation,
        "startedAt": state.started_at.isoformat() if state.started_at else None,
        "lastError": state.last_error,
        "report": _serialize_report(state.report) if state.report else None,
    }


def _serialize_report(report: AnalysisReport) -> dict[str, object]:
    recommendation = report.recommendation
    return {
        **report.record.to_payload(),
        "tier": report.tier.value,
        "processingTimeMs": round(report.processing_time.total_seconds() * 1000),
        "hairDensity": report.hair_density,
        "generatedAt": report.generated_at.isoformat(),
        "recommendation": {
            "title": recommendation.title,
            "message": recommendation.message,
            "icon": recommendation.icon,
            "status": recommendation.status,
            "tips": list(recommendation.tips),
        },
        "disclaimer": report.disclaimer,
    }
