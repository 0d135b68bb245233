"""
Pytest fixtures for PDF render service tests.

Playwright is replaced by mocks so no browser is ever launched.
"""

import os

# Set environment BEFORE importing pdf_render so the cached settings
# never pick up a developer's local browser configuration.
os.environ["MAX_CONCURRENT_RENDERS"] = "2"
os.environ.pop("PUPPETEER_EXECUTABLE_PATH", None)
os.environ.pop("BROWSER_EXECUTABLE_PATH", None)

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from pdf_render.config import RenderSettings

FAKE_PDF = b"%PDF-1.4 fake pdf content"


@pytest.fixture
def settings():
    """Explicit settings, independent of the process environment."""
    return RenderSettings(browser_executable_path="/opt/chromium/chrome")


@pytest.fixture
def mock_page():
    """Playwright page with async navigation/export methods."""
    page = MagicMock()
    page.goto = AsyncMock(return_value=None)
    page.set_content = AsyncMock(return_value=None)
    page.pdf = AsyncMock(return_value=FAKE_PDF)
    return page


@pytest.fixture
def mock_playwright(mock_page):
    """
    Patch async_playwright in the session module.

    Yields a namespace with the patched factory, the driver, the browser
    and the page so tests can assert on launch arguments and teardown.
    """
    browser = MagicMock()
    browser.new_page = AsyncMock(return_value=mock_page)
    browser.close = AsyncMock(return_value=None)

    driver = MagicMock()
    driver.chromium.launch = AsyncMock(return_value=browser)
    driver.stop = AsyncMock(return_value=None)

    with patch("pdf_render.session.async_playwright") as factory:
        factory.return_value.start = AsyncMock(return_value=driver)
        yield SimpleNamespace(
            factory=factory,
            driver=driver,
            browser=browser,
            page=mock_page,
        )
