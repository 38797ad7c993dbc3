"""Operator endpoints for injecting analysis results."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import HTMLResponse

from hair_analysis.services.results import ResultStoreError

if TYPE_CHECKING:
    from hair_analysis.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])
logger = logging.getLogger(__name__)


@router.post("/results")
async def publish_results(
    payload: dict[str, object], request: Request
) -> dict[str, object]:
    """Publish operator input; missing or invalid fields fall back to defaults."""
    container: AppContainer = request.app.state.container
    try:
        record = await container.publisher.publish(payload)
    except ResultStoreError as exc:
        logger.exception("Failed to publish operator result")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to write data",
        ) from exc
    return {"success": True, "result": record.to_payload()}


@router.get("/status")
async def publisher_status(request: Request) -> dict[str, object]:
    """Return the latest operator status message."""
    container: AppContainer = request.app.state.container
    latest = container.status_board.latest()
    return {
        "message": latest.message,
        "isReady": latest.is_ready,
        "updatedAt": latest.updated_at.isoformat(),
    }


@router.get("/ui", response_class=HTMLResponse)
async def admin_ui() -> HTMLResponse:
    """Minimal operator console that consumes the admin API."""
    return HTMLResponse(_ADMIN_UI_HTML)


_ADMIN_UI_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Hair Diagnostic Calibrator</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem; }
      h1 { margin-bottom: 0.5rem; }
      .row { margin-bottom: 1rem; }
      input, select { padding: 0.4rem 0.6rem; width: 240px; }
      button { padding: 0.4rem 0.8rem; margin-right: 0.5rem; }
      img { max-width: 400px; max-height: 400px; display: block; }
      pre { background: #f6f6f6; padding: 1rem; overflow: auto; }
    </style>
  </head>
  <body>
    <h1>Hair Diagnostic Calibrator</h1>
    <div class="row" id="status">Loading status...</div>
    <div class="row"><img id="preview" alt="" /></div>
    <div class="row">
      <button onclick="preset(45000, 82)">Low</button>
      <button onclick="preset(85000, 87)">Medium</button>
      <button onclick="preset(120000, 91)">Good</button>
    </div>
    <div class="row">
      <label>Hair count</label><br />
      <input id="hairCount" type="number" min="5000" max="200000" />
    </div>
    <div class="row">
      <label>Confidence: <span id="confidenceValue">87</span>%</label><br />
      <input id="confidence" type="range" min="0" max="100" value="87"
        oninput="document.getElementById('confidenceValue').textContent = this.value" />
    </div>
    <div class="row">
      <label>Category</label><br />
      <select id="category">
        <option value="low">low</option>
        <option value="medium" selected>medium</option>
        <option value="good">good</option>
      </select>
    </div>
    <div class="row">
      <label>Image quality</label><br />
      <input id="imageQuality" value="Good" />
    </div>
    <div class="row"><button onclick="send()">Send results</button></div>
    <pre id="output">Ready.</pre>
    <script>
      function preset(count, confidence) {
        document.getElementById('hairCount').value = count;
        document.getElementById('confidence').value = confidence;
        document.getElementById('confidenceValue').textContent = confidence;
      }
      async function send() {
        const output = document.getElementById('output');
        output.textContent = 'Transmitting...';
        const body = {
          hairCount: document.getElementById('hairCount').value,
          confidence: document.getElementById('confidence').value,
          category: document.getElementById('category').value,
          imageQuality: document.getElementById('imageQuality').value
        };
        const res = await fetch('/admin/results', {
          method: 'POST',
          headers: { 'Content-Type': 'application/json' },
          body: JSON.stringify(body)
        });
        if (!res.ok) {
          output.textContent = 'Error: ' + res.status;
          return;
        }
        const data = await res.json();
        output.textContent = JSON.stringify(data, null, 2);
      }
      async function refresh() {
        const res = await fetch('/admin/status');
        if (res.ok) {
          const data = await res.json();
          document.getElementById('status').textContent =
            data.message + ' (' + data.updatedAt + ')';
        }
        const image = await fetch('/api/session/image');
        const preview = document.getElementById('preview');
        if (image.ok) {
          preview.src = (await image.json()).dataUrl;
        } else {
          preview.removeAttribute('src');
        }
      }
      refresh();
      setInterval(refresh, 5000);
    </script>
  </body>
</html>
"""
