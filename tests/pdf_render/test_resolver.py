"""
Unit tests for render target resolution and request normalization.
"""

import pytest
from pydantic import ValidationError

from pdf_render.models import GET_KEYS, POST_KEYS, HtmlTarget, RenderRequest, UrlTarget
from pdf_render.resolver import has_render_fields, resolve_target


class TestRenderRequestFromPayload:

    def test_post_keys(self):
        request = RenderRequest.from_payload(
            {
                "pdfContent": "<p>Hi</p>",
                "pdfConfig": {"landscape": True},
                "fileName": "hi.pdf",
            },
            POST_KEYS,
        )
        assert request.html_content == "<p>Hi</p>"
        assert request.target_url is None
        assert request.pdf_options == {"landscape": True}
        assert request.file_name == "hi.pdf"

    def test_get_keys(self):
        request = RenderRequest.from_payload({"url": "https://example.com", "config": None}, GET_KEYS)
        assert request.target_url == "https://example.com"
        assert request.pdf_options == {}

    def test_keys_are_not_interchangeable(self):
        request = RenderRequest.from_payload({"content": "<p>Hi</p>"}, POST_KEYS)
        assert request.html_content is None

    def test_non_mapping_payload_is_empty(self):
        request = RenderRequest.from_payload(["pdfContent"], POST_KEYS)
        assert request.html_content is None
        assert request.target_url is None

    def test_rejects_non_mapping_options(self):
        with pytest.raises(ValidationError):
            RenderRequest.from_payload({"content": "<p/>", "config": "A4"}, GET_KEYS)

    def test_request_is_immutable(self):
        request = RenderRequest(html_content="<p/>")
        with pytest.raises(ValidationError):
            request.html_content = "<div/>"


class TestResolveTarget:

    def test_html_target(self):
        target = resolve_target(RenderRequest(html_content="<h1>Doc</h1>"))
        assert target == HtmlTarget(html="<h1>Doc</h1>")
        assert target.kind == "html"

    def test_url_target(self):
        target = resolve_target(RenderRequest(target_url="https://example.com"))
        assert target == UrlTarget(url="https://example.com")
        assert target.kind == "url"

    def test_html_takes_priority_over_url(self):
        target = resolve_target(
            RenderRequest(html_content="<h1>Doc</h1>", target_url="https://example.com")
        )
        assert isinstance(target, HtmlTarget)

    def test_empty_html_falls_back_to_url(self):
        target = resolve_target(RenderRequest(html_content="", target_url="https://example.com"))
        assert isinstance(target, UrlTarget)

    def test_nothing_to_render(self):
        assert resolve_target(RenderRequest()) is None
        assert resolve_target(RenderRequest(html_content="", target_url="")) is None

    def test_url_is_not_validated(self):
        target = resolve_target(RenderRequest(target_url="not a url"))
        assert target.url == "not a url"


class TestHasRenderFields:

    @pytest.mark.parametrize("payload", [
        {"pdfContent": "<p/>"},
        {"pdfUrl": "https://example.com"},
        {"pdfContent": "", "pdfUrl": "https://example.com"},
        {"pdfContent": 5},
    ])
    def test_truthy_content_or_url(self, payload):
        assert has_render_fields(payload, POST_KEYS) is True

    @pytest.mark.parametrize("payload", [
        {},
        {"pdfContent": "", "pdfUrl": None},
        {"pdfContent": False, "pdfConfig": "A3"},
        {"content": "<p/>"},
        [1, 2],
        None,
    ])
    def test_nothing_to_render(self, payload):
        assert has_render_fields(payload, POST_KEYS) is False

    def test_ignores_invalid_sibling_fields(self):
        assert has_render_fields({"config": "A3", "fileName": 5}, GET_KEYS) is False
