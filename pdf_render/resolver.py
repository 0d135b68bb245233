"""
Render target resolution.

Picks what the page should render for a request: inline HTML or a URL.
"""

from typing import Any, Mapping, Optional

from .models import HtmlTarget, PayloadKeys, RenderRequest, RenderTarget, UrlTarget


def has_render_fields(payload: Any, keys: PayloadKeys) -> bool:
    """
    Check a raw decoded payload for a truthy content or url field.

    Runs before the payload is validated, so a payload with nothing to
    render is recognized even when its other fields are malformed.
    """
    if not isinstance(payload, Mapping):
        return False
    return bool(payload.get(keys.content) or payload.get(keys.url))


def resolve_target(request: RenderRequest) -> Optional[RenderTarget]:
    """
    Resolve the render target for a request.

    Non-empty HTML content takes priority over a URL when both are set.
    Neither the URL nor the HTML is validated here; the browser reports
    anything it cannot load.

    Args:
        request: Normalized render request

    Returns:
        HtmlTarget or UrlTarget, or None if the request has nothing to render
    """
    if request.html_content:
        return HtmlTarget(html=request.html_content)
    if request.target_url:
        return UrlTarget(url=request.target_url)
    return None
