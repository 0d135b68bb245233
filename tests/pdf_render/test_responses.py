"""
Unit tests for response envelope builders.
"""

import base64
import json

from pdf_render.responses import (
    error_response,
    invalid_parameters_response,
    json_response,
    pdf_response,
    to_json,
)


class TestPdfResponse:

    def test_pdf_envelope(self):
        envelope = pdf_response(b"%PDF-1.7 bytes", "report.pdf").to_event()

        assert envelope["statusCode"] == 200
        assert envelope["headers"]["Content-Type"] == "application/pdf"
        assert envelope["headers"]["Content-Disposition"] == 'inline; filename="report.pdf"'
        assert envelope["isBase64Encoded"] is True
        assert base64.b64decode(envelope["body"]) == b"%PDF-1.7 bytes"

    def test_default_file_name(self):
        envelope = pdf_response(b"%PDF").to_event()
        assert envelope["headers"]["Content-Disposition"] == 'inline; filename="output.pdf"'

    def test_empty_file_name_uses_default(self):
        envelope = pdf_response(b"%PDF", "").to_event()
        assert 'filename="output.pdf"' in envelope["headers"]["Content-Disposition"]


class TestJsonResponses:

    def test_json_envelope_has_no_base64_flag(self):
        envelope = json_response({"a": 1}).to_event()

        assert envelope == {
            "statusCode": 200,
            "headers": {"Content-Type": "application/json"},
            "body": '{"a":1}',
        }

    def test_invalid_parameters(self):
        envelope = invalid_parameters_response().to_event()

        assert envelope == {
            "statusCode": 400,
            "body": '{"error":"Invalid query parameters"}',
        }

    def test_error_response_carries_message(self):
        envelope = error_response(RuntimeError("Navigation timeout of 30000 ms exceeded")).to_event()

        assert envelope["statusCode"] == 500
        assert json.loads(envelope["body"]) == {"error": "Navigation timeout of 30000 ms exceeded"}
        assert "isBase64Encoded" not in envelope

    def test_error_response_without_message_uses_type(self):
        envelope = error_response(TimeoutError()).to_event()
        assert json.loads(envelope["body"]) == {"error": "TimeoutError"}


class TestToJson:

    def test_compact_separators(self):
        assert to_json({"pdfConfig": {"format": "A3"}, "list": [1, 2]}) == (
            '{"pdfConfig":{"format":"A3"},"list":[1,2]}'
        )

    def test_non_ascii_is_not_escaped(self):
        assert to_json({"name": "café"}) == '{"name":"café"}'
