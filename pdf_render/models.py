"""
Pydantic models for the PDF render service.

These models define the normalized render request, the render target and
trigger variants, and the response envelope returned to the platform.
"""

from typing import Any, Dict, Literal, Mapping, NamedTuple, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PayloadKeys(NamedTuple):
    """Field names a trigger uses for each part of a render request."""

    content: str
    url: str
    config: str
    file_name: str


POST_KEYS = PayloadKeys("pdfContent", "pdfUrl", "pdfConfig", "fileName")
GET_KEYS = PayloadKeys("content", "url", "config", "fileName")


class RenderRequest(BaseModel):
    """Normalized input to a single render operation."""

    model_config = ConfigDict(frozen=True)

    html_content: Optional[str] = Field(None, description="Raw HTML to render")
    target_url: Optional[str] = Field(None, description="URL to navigate to and render")
    pdf_options: Dict[str, Any] = Field(
        default_factory=dict,
        description="Caller PDF options, overriding the baseline key by key"
    )
    file_name: Optional[str] = Field(None, description="Filename for Content-Disposition")

    @field_validator("pdf_options", mode="before")
    @classmethod
    def default_empty_options(cls, v: Any) -> Any:
        # pdfConfig: null is the same as no options
        return {} if v is None else v

    @classmethod
    def from_payload(cls, payload: Any, keys: PayloadKeys) -> "RenderRequest":
        """
        Build a request from a decoded transport payload.

        Non-mapping payloads (a JSON list or scalar) carry no render fields.
        """
        if not isinstance(payload, Mapping):
            payload = {}
        return cls(
            html_content=payload.get(keys.content),
            target_url=payload.get(keys.url),
            pdf_options=payload.get(keys.config),
            file_name=payload.get(keys.file_name),
        )


# ============================================================================
# Render targets
# ============================================================================

class HtmlTarget(BaseModel):
    """Render from an HTML string set directly as the page content."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["html"] = "html"
    html: str


class UrlTarget(BaseModel):
    """Render by navigating the page to a URL."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["url"] = "url"
    url: str


RenderTarget = Union[HtmlTarget, UrlTarget]


# ============================================================================
# Triggers
# ============================================================================

class PostTrigger(BaseModel):
    """POST request; body is the decoded JSON document."""

    kind: Literal["post"] = "post"
    body: Any = None


class GetTrigger(BaseModel):
    """GET request carrying a JSON document in the `pdf` query parameter."""

    kind: Literal["get"] = "get"
    payload: Any = None


class DefaultTrigger(BaseModel):
    """Anything else; renders the built-in sample document."""

    kind: Literal["default"] = "default"


RenderTrigger = Union[PostTrigger, GetTrigger, DefaultTrigger]


# ============================================================================
# Response envelope
# ============================================================================

class ResponseEnvelope(BaseModel):
    """
    Transport-level response returned to the invoking platform.

    Serialized with the platform's field names (statusCode, isBase64Encoded).
    Unset headers and the base64 flag are omitted from the serialized form.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    status_code: int = Field(..., alias="statusCode")
    headers: Optional[Dict[str, str]] = None
    body: str = ""
    is_base64_encoded: Optional[bool] = Field(None, alias="isBase64Encoded")

    def to_event(self) -> Dict[str, Any]:
        """Serialize to the dict shape the platform expects."""
        return self.model_dump(by_alias=True, exclude_none=True)
