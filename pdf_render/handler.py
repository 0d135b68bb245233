"""
Request dispatcher - serverless entry point for PDF rendering.

Accepts an HTTP API event (function URL / API Gateway), classifies it as
a POST, GET or default trigger, renders the resolved target in a fresh
browser session and returns the response envelope as a dict.

Trigger shapes:
    POST  body  {pdfContent?, pdfUrl?, pdfConfig?, fileName?}
    GET   ?pdf= URL-encoded JSON {content?, url?, config?, fileName?}
    other       renders DEFAULT_HTML
"""

import asyncio
import base64
import json
from typing import Any, Dict, Mapping, Optional
from urllib.parse import unquote

from .config import RenderSettings, get_settings
from .logger import get_logger, setup_logging
from .models import (
    GET_KEYS,
    POST_KEYS,
    DefaultTrigger,
    GetTrigger,
    PostTrigger,
    RenderRequest,
    RenderTrigger,
    ResponseEnvelope,
)
from .renderer import PdfRenderer
from .resolver import has_render_fields, resolve_target
from .responses import (
    error_response,
    invalid_parameters_response,
    json_response,
    pdf_response,
)
from .session import RenderSession

DEFAULT_HTML = "<h1>Hello, PDF World!</h1>"

# Set once the Lambda container has installed its log handler
_logging_configured = False


def _lookup(data: Any, *keys: str) -> Any:
    """Walk nested mappings, returning None at the first missing level."""
    for key in keys:
        if not isinstance(data, Mapping):
            return None
        data = data.get(key)
    return data


def _request_method(event: Mapping[str, Any]) -> Optional[str]:
    # HTTP API v2 / function URL first, then REST API v1
    method = _lookup(event, "requestContext", "http", "method") or event.get("httpMethod")
    return method.upper() if isinstance(method, str) else None


def _parse_body(event: Mapping[str, Any]) -> Any:
    body = event.get("body")
    if not body:
        return {}
    if event.get("isBase64Encoded"):
        body = base64.b64decode(body).decode("utf-8")
    return json.loads(body)


def classify_trigger(event: Any) -> RenderTrigger:
    """
    Classify an inbound event.

    Raises:
        json.JSONDecodeError: malformed POST body or `pdf` query parameter
    """
    if not isinstance(event, Mapping):
        return DefaultTrigger()

    method = _request_method(event)
    if method == "POST":
        return PostTrigger(body=_parse_body(event))

    pdf_param = _lookup(event, "queryStringParameters", "pdf")
    if method == "GET" and pdf_param:
        return GetTrigger(payload=json.loads(unquote(pdf_param)))

    return DefaultTrigger()


async def _handle_trigger(
    trigger: RenderTrigger,
    page,
    renderer: PdfRenderer,
) -> ResponseEnvelope:
    # Echo/400 is decided on the raw payload; validation only applies to renders
    if isinstance(trigger, PostTrigger):
        if not has_render_fields(trigger.body, POST_KEYS):
            # Nothing to render: echo the body back unchanged
            return json_response(trigger.body)
        request = RenderRequest.from_payload(trigger.body, POST_KEYS)
    elif isinstance(trigger, GetTrigger):
        if not has_render_fields(trigger.payload, GET_KEYS):
            return invalid_parameters_response()
        request = RenderRequest.from_payload(trigger.payload, GET_KEYS)
    else:
        request = RenderRequest(html_content=DEFAULT_HTML)

    target = resolve_target(request)
    pdf_bytes = await renderer.render(page, target, request.pdf_options)
    return pdf_response(pdf_bytes, request.file_name)


async def dispatch(
    event: Any,
    settings: Optional[RenderSettings] = None,
    request_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Handle one render request end to end.

    A browser session is acquired up front and released on every exit
    path. Any exception becomes a 500 envelope; nothing escapes.

    Args:
        event: Platform event (dict); anything else takes the default path
        settings: Render settings (defaults to the cached environment settings)
        request_id: Platform request id for log correlation

    Returns:
        Response envelope dict (statusCode, headers, body, isBase64Encoded)
    """
    if request_id is None:
        event_request_id = _lookup(event, "requestContext", "requestId")
        request_id = event_request_id if isinstance(event_request_id, str) else None
    log = get_logger(__name__, request_id)

    session = None
    try:
        settings = settings or get_settings()
        session = RenderSession(settings)
        handle = await session.acquire()
        trigger = classify_trigger(event)
        log.info(f"Handling {trigger.kind} trigger")
        envelope = await _handle_trigger(trigger, handle.page, PdfRenderer(settings))
    except Exception as e:
        log.exception(f"Render request failed: {e}")
        envelope = error_response(e)
    finally:
        if session is not None:
            await session.release()

    log.info(f"Responding with status {envelope.status_code}")
    return envelope.to_event()


def _configure_logging() -> None:
    """Install the log handler once per container."""
    global _logging_configured

    if _logging_configured:
        return
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    _logging_configured = True


def handler(event: Any, context: Any = None) -> Dict[str, Any]:
    """Synchronous Lambda entry point."""
    _configure_logging()
    request_id = getattr(context, "aws_request_id", None)
    return asyncio.run(dispatch(event, request_id=request_id))
