"""
Response envelope builders.

PDF responses carry base64 bodies with the isBase64Encoded flag set;
everything else is compact JSON.
"""

import base64
import json
from typing import Any, Optional

from .models import ResponseEnvelope

DEFAULT_FILE_NAME = "output.pdf"
INVALID_PARAMETERS_MESSAGE = "Invalid query parameters"


def to_json(payload: Any) -> str:
    """Serialize compactly so echoed bodies match their canonical form."""
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


def pdf_response(pdf_bytes: bytes, file_name: Optional[str] = None) -> ResponseEnvelope:
    """
    Wrap rendered PDF bytes for inline display.

    Args:
        pdf_bytes: Raw PDF bytes from the renderer
        file_name: Filename for Content-Disposition (default output.pdf)
    """
    return ResponseEnvelope(
        status_code=200,
        headers={
            "Content-Type": "application/pdf",
            "Content-Disposition": f'inline; filename="{file_name or DEFAULT_FILE_NAME}"',
        },
        body=base64.b64encode(pdf_bytes).decode("ascii"),
        is_base64_encoded=True,
    )


def json_response(payload: Any, status_code: int = 200) -> ResponseEnvelope:
    return ResponseEnvelope(
        status_code=status_code,
        headers={"Content-Type": "application/json"},
        body=to_json(payload),
    )


def invalid_parameters_response() -> ResponseEnvelope:
    """400 for a GET payload with neither content nor url. No headers."""
    return ResponseEnvelope(
        status_code=400,
        body=to_json({"error": INVALID_PARAMETERS_MESSAGE}),
    )


def error_response(exc: BaseException) -> ResponseEnvelope:
    """500 carrying the exception's message."""
    message = str(exc) or type(exc).__name__
    return json_response({"error": message}, status_code=500)
