"""
PDF Render Service - FastAPI adapter for container deployment.

Exposes the serverless handler over plain HTTP: each request is turned
into a platform event, dispatched, and the envelope is turned back into
an HTTP response. Also provides a /health endpoint for orchestration.
"""

import asyncio
import base64
import uuid
from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import Response
from pydantic import BaseModel

from .config import get_settings
from .handler import dispatch
from .logger import get_logger, setup_logging
from .session import RenderSession

settings = get_settings()
setup_logging(settings.log_level, settings.log_format)
logger = get_logger(__name__)

app = FastAPI(
    title="PDF Render Service",
    version="0.1.0",
    description="Render HTML or a URL to PDF using Playwright/Chromium"
)

# Semaphore for rate limiting
_render_semaphore = asyncio.Semaphore(settings.max_concurrent_renders)

# Browser readiness state
_browser_ready = False
_browser_error: Optional[str] = None


# ============================================================================
# Startup Event - Validate Chromium
# ============================================================================

@app.on_event("startup")
async def validate_browser_on_startup():
    """
    Launch Chromium once on startup and render a test PDF.

    The service won't report healthy if the browser can't produce PDFs.
    """
    global _browser_ready, _browser_error

    logger.info("PDF Render Service starting - validating Chromium...")

    try:
        async with RenderSession(settings) as handle:
            await handle.page.set_content("<html><body><h1>Test</h1></body></html>")
            test_pdf = await handle.page.pdf(format="A4")

        if len(test_pdf) > 0:
            _browser_ready = True
            _browser_error = None
            logger.info(f"Chromium validation successful - generated {len(test_pdf)} byte test PDF")
        else:
            _browser_error = "Test PDF generation returned empty result"
            logger.error(f"Chromium validation failed: {_browser_error}")

    except Exception as e:
        _browser_error = str(e)
        logger.error(f"Chromium validation failed: {_browser_error}")
        logger.error("PDF rendering will not work until this is resolved.")


# ============================================================================
# Response Models
# ============================================================================

class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "healthy"
    timestamp: datetime
    active_renders: int
    max_concurrent: int
    browser_ready: bool = True
    browser_error: Optional[str] = None


def _active_renders() -> int:
    return settings.max_concurrent_renders - _render_semaphore._value


# ============================================================================
# Event translation
# ============================================================================

async def build_event(request: Request) -> Dict[str, Any]:
    """Build an HTTP API (v2) style event from an incoming request."""
    raw_body = await request.body()
    try:
        body = raw_body.decode("utf-8")
        is_base64 = False
    except UnicodeDecodeError:
        body = base64.b64encode(raw_body).decode("ascii")
        is_base64 = True

    return {
        "requestContext": {
            "http": {"method": request.method, "path": request.url.path},
            "requestId": request.headers.get("x-request-id") or uuid.uuid4().hex,
        },
        "queryStringParameters": dict(request.query_params) or None,
        "body": body or None,
        "isBase64Encoded": is_base64,
    }


def envelope_to_response(envelope: Dict[str, Any]) -> Response:
    """Turn a dispatcher envelope into an HTTP response."""
    body = envelope.get("body", "")
    content = base64.b64decode(body) if envelope.get("isBase64Encoded") else body
    return Response(
        content=content,
        status_code=envelope["statusCode"],
        headers=envelope.get("headers") or {},
    )


# ============================================================================
# Endpoints
# ============================================================================

@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Health check endpoint for container orchestration.

    Returns HTTP 503 if the startup browser check failed.
    """
    if not _browser_ready:
        raise HTTPException(
            status_code=503,
            detail={
                "status": "unhealthy",
                "timestamp": datetime.utcnow().isoformat(),
                "active_renders": _active_renders(),
                "max_concurrent": settings.max_concurrent_renders,
                "browser_ready": False,
                "browser_error": _browser_error,
                "message": "PDF render service is unhealthy - Chromium not available"
            }
        )

    return HealthResponse(
        status="healthy",
        timestamp=datetime.utcnow(),
        active_renders=_active_renders(),
        max_concurrent=settings.max_concurrent_renders,
        browser_ready=True,
        browser_error=None
    )


@app.api_route("/", methods=["GET", "POST"])
async def render(request: Request) -> Response:
    """
    Render HTML or a URL to PDF.

    POST takes {pdfContent?, pdfUrl?, pdfConfig?, fileName?} as JSON;
    GET takes the same fields (content, url, config, fileName) as JSON in
    the `pdf` query parameter. Without either, a sample page is rendered.

    Raises:
        HTTPException: 503 when the concurrent render limit is reached
    """
    if _render_semaphore._value <= 0:
        logger.warning("PDF render service overloaded, rejecting request")
        raise HTTPException(
            status_code=503,
            detail="Service overloaded. Too many concurrent PDF operations."
        )

    async with _render_semaphore:
        event = await build_event(request)
        envelope = await dispatch(
            event,
            settings=settings,
            request_id=event["requestContext"]["requestId"],
        )

    return envelope_to_response(envelope)
