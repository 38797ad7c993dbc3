"""Raw single-slot store endpoints shared by both browser contexts."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Body, Request, status
from fastapi.responses import JSONResponse

from hair_analysis.services.results import ResultStoreError

if TYPE_CHECKING:
    from hair_analysis.containers import AppContainer

router = APIRouter(prefix="/api/data", tags=["data"])
logger = logging.getLogger(__name__)


@router.get("")
async def read_data(request: Request) -> JSONResponse:
    """Return the stored payload, or null when nothing has been written."""
    container: AppContainer = request.app.state.container
    try:
        payload = await container.result_store.get()
    except ResultStoreError:
        logger.exception("Failed to read result store")
        return _error("Failed to read data")
    return JSONResponse(payload)


@router.post("")
async def write_data(
    request: Request, payload: Any = Body(...)
) -> JSONResponse:
    """Overwrite the slot with the request body as-is, whatever its shape."""
    container: AppContainer = request.app.state.container
    try:
        await container.result_store.put(payload)
    except ResultStoreError:
        logger.exception("Failed to write result store")
        return _error("Failed to write data")
    return JSONResponse({"success": True})


@router.delete("")
async def clear_data(request: Request) -> JSONResponse:
    """Empty the slot."""
    container: AppContainer = request.app.state.container
    try:
        await container.result_store.clear()
    except ResultStoreError:
        logger.exception("Failed to clear result store")
        return _error("Failed to clear data")
    return JSONResponse({"success": True})


def _error(message: str) -> JSONResponse:
    return JSONResponse(
        {"error": message}, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
    )
