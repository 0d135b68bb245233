"""
PDF renderer - drives a Playwright page to produce PDF bytes.

Caller options use Chromium's camelCase print-to-PDF names (printBackground,
preferCSSPageSize, ...). They are translated to Playwright's keyword
arguments and merged over the baseline one top-level key at a time.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from .config import RenderSettings
from .models import HtmlTarget, RenderTarget, UrlTarget

logger = logging.getLogger(__name__)


DEFAULT_PDF_OPTIONS = {
    "format": "A4",
    "printBackground": True,
}

# Chromium print option name -> Playwright page.pdf() keyword
PDF_OPTION_NAMES = {
    "format": "format",
    "printBackground": "print_background",
    "margin": "margin",
    "landscape": "landscape",
    "scale": "scale",
    "displayHeaderFooter": "display_header_footer",
    "headerTemplate": "header_template",
    "footerTemplate": "footer_template",
    "pageRanges": "page_ranges",
    "width": "width",
    "height": "height",
    "preferCSSPageSize": "prefer_css_page_size",
    "outline": "outline",
    "tagged": "tagged",
}

_PLAYWRIGHT_NAMES = set(PDF_OPTION_NAMES.values())


def _normalize_option_name(name: str) -> Optional[str]:
    if name in PDF_OPTION_NAMES:
        return PDF_OPTION_NAMES[name]
    if name in _PLAYWRIGHT_NAMES:
        return name
    return None


def normalize_pdf_options(options: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Translate PDF options to Playwright keyword arguments.

    Unsupported keys are dropped with a warning. `path` is one of them:
    the service returns bytes and never writes to its own filesystem.
    """
    normalized = {}
    for name, value in options.items():
        kwarg = _normalize_option_name(name)
        if kwarg is None:
            logger.warning(f"Ignoring unsupported PDF option: {name}")
            continue
        normalized[kwarg] = value
    return normalized


def merge_pdf_options(overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """
    Merge caller options over the baseline.

    Shallow merge: a caller `margin` replaces the baseline margin entirely,
    and baseline keys the caller does not mention are kept.

    Args:
        overrides: Caller-supplied PDF options (camelCase or snake_case)

    Returns:
        Keyword arguments for page.pdf()

    Example:
        >>> merge_pdf_options({"margin": {"top": "1in"}})
        {'format': 'A4', 'print_background': True, 'margin': {'top': '1in'}}
    """
    merged = normalize_pdf_options(DEFAULT_PDF_OPTIONS)
    merged.update(normalize_pdf_options(overrides or {}))
    return merged


class PdfRenderer:
    """Renders a target on an already-open page and exports it as PDF."""

    def __init__(self, settings: RenderSettings):
        self.settings = settings

    async def render(
        self,
        page,
        target: RenderTarget,
        pdf_options: Optional[Mapping[str, Any]] = None,
    ) -> bytes:
        """
        Load the target into the page and export it.

        URL targets wait for the configured stability condition (network
        idle by default). Engine errors propagate unchanged; nothing is
        retried.

        Args:
            page: Playwright page owned by the current render session
            target: HtmlTarget or UrlTarget
            pdf_options: Caller overrides for the baseline PDF options

        Returns:
            Raw PDF bytes
        """
        if isinstance(target, UrlTarget):
            logger.info(f"Navigating to {target.url} (wait_until={self.settings.wait_until})")
            await page.goto(target.url, wait_until=self.settings.wait_until)
        elif isinstance(target, HtmlTarget):
            logger.info(f"Setting page content ({len(target.html)} chars)")
            await page.set_content(target.html)
        else:
            raise TypeError(f"Unsupported render target: {target!r}")

        options = merge_pdf_options(pdf_options)
        pdf_bytes = await page.pdf(**options)

        logger.info(f"PDF export completed ({len(pdf_bytes)} bytes)")
        return pdf_bytes
